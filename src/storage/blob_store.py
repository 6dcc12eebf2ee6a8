"""이미지 파일 저장소 (Blob Store).

파일명이 유일한 주소 키인 평면(flat) 디렉토리다.
핸들러와 서비스는 BlobStore 인터페이스에만 의존하고,
기본 구현은 로컬 디스크(LocalBlobStore)다.
"""

import os
import shutil
import time
from abc import ABC, abstractmethod
from typing import BinaryIO


def generate_filename(original_name: str) -> str:
    """충돌 회피용 파일명: "<epoch ms>-<원본 파일명>"."""
    return f"{int(time.time() * 1000)}-{os.path.basename(original_name)}"


def is_safe_filename(filename: str) -> bool:
    """디렉토리 탈출이 불가능한 단일 파일명인지 확인한다."""
    return (
        bool(filename)
        and filename not in (".", "..")
        and os.path.basename(filename) == filename
        and "/" not in filename
        and "\\" not in filename
    )


class BlobStore(ABC):
    """파일명으로 주소 지정되는 바이트 저장소 계약."""

    @abstractmethod
    def path_for(self, filename: str) -> str:
        """파일명 → 실제 경로. 안전하지 않은 파일명이면 FileNotFoundError."""

    @abstractmethod
    def exists(self, filename: str) -> bool: ...

    @abstractmethod
    def save(self, filename: str, stream: BinaryIO) -> str:
        """스트림을 그대로 저장하고 저장 경로를 반환한다."""

    @abstractmethod
    def write_bytes(self, filename: str, data: bytes) -> str:
        """바이트를 저장(덮어쓰기)하고 저장 경로를 반환한다."""

    @abstractmethod
    def remove(self, filename: str) -> bool:
        """파일을 삭제한다. 원래 없었으면 False (에러 아님)."""

    @abstractmethod
    def list_filenames(self) -> list[str]: ...


class LocalBlobStore(BlobStore):
    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def ensure_root(self):
        os.makedirs(self.root, exist_ok=True)

    def path_for(self, filename: str) -> str:
        if not is_safe_filename(filename):
            raise FileNotFoundError(filename)
        return os.path.join(self.root, filename)

    def exists(self, filename: str) -> bool:
        try:
            return os.path.isfile(self.path_for(filename))
        except FileNotFoundError:
            return False

    def save(self, filename: str, stream: BinaryIO) -> str:
        self.ensure_root()
        path = self.path_for(filename)
        with open(path, "wb") as f:
            shutil.copyfileobj(stream, f)
        return path

    def write_bytes(self, filename: str, data: bytes) -> str:
        self.ensure_root()
        path = self.path_for(filename)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def remove(self, filename: str) -> bool:
        if not self.exists(filename):
            return False
        os.remove(self.path_for(filename))
        return True

    def list_filenames(self) -> list[str]:
        if not os.path.isdir(self.root):
            return []
        return sorted(
            name
            for name in os.listdir(self.root)
            if os.path.isfile(os.path.join(self.root, name))
        )
