import os
import re

from fastapi import UploadFile
from loguru import logger
from PIL import UnidentifiedImageError
from sqlmodel import Session, select

from core.config import settings
from core.exceptions import (
    ImageFileNotFound,
    ImageNotFound,
    ImageProcessingFailed,
    InvalidFileType,
    NoImageUploaded,
)
from model.image import ImageFormat, ImageRecord, ImageStatus
from processor import pipeline
from processor.runner import TransformRunner
from storage.blob_store import BlobStore, generate_filename
from utility.timer import timer

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png"}
ALLOWED_CONTENT_TYPE = re.compile(r"jpeg|jpg|png")


def _run_transform(runner: TransformRunner, func, *args, **kwargs) -> bytes:
    """워커 풀에서 변환을 실행하고, Pillow 오류는 ImageProcessingFailed로 바꾼다."""
    try:
        return runner.run(func, *args, **kwargs)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageProcessingFailed(f"이미지 처리에 실패했습니다: {e}") from e


def derived_filename(filename: str) -> str:
    """derived 접두사는 한 번만 붙는다. 이미 붙어 있으면 같은 파일에 덮어쓴다."""
    if filename.startswith(settings.DERIVED_PREFIX):
        return filename
    return f"{settings.DERIVED_PREFIX}{filename}"


def save_upload(file: UploadFile | None, store: BlobStore, session: Session) -> ImageRecord:
    """파일을 Blob Store에 먼저 저장하고 DB에 기록한다.

    확장자와 content type이 모두 JPEG/PNG여야 한다.
    레코드 저장이 실패해도 이미 쓴 파일은 지우지 않는다 (reconcile 작업이 정리).
    """
    if file is None or not file.filename:
        raise NoImageUploaded

    ext = os.path.splitext(file.filename)[1].lower()
    content_type = (file.content_type or "").lower()
    if ext not in ALLOWED_EXTENSIONS or not ALLOWED_CONTENT_TYPE.search(content_type):
        raise InvalidFileType

    saved_name = generate_filename(file.filename)
    store.save(saved_name, file.file)

    record = ImageRecord(
        filename=saved_name,
        format=ImageFormat.PNG if "png" in content_type else ImageFormat.JPEG,
        status=ImageStatus.UPLOADED,
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info(f"Uploaded image #{record.id} as {saved_name}")
    return record


def list_images(session: Session) -> list[ImageRecord]:
    """모든 이미지 레코드를 반환한다 (소유자 구분 없음)."""
    return list(session.exec(select(ImageRecord)).all())


def get_image_or_raise(image_id: int, session: Session) -> ImageRecord:
    record = session.get(ImageRecord, image_id)
    if not record:
        raise ImageNotFound
    return record


def update_image(
    image_id: int,
    store: BlobStore,
    runner: TransformRunner,
    session: Session,
    brightness: float | None = None,
    contrast: float | None = None,
    saturation: float | None = None,
    rotation: float | None = None,
    fmt: ImageFormat | None = None,
) -> dict:
    """현재 저장된 파일에 보정을 적용해 derived 파일로 저장하고 레코드를 갱신한다.

    병합 규칙: None은 "지정 안 함"으로, 저장된 값을 유지한다.
    0 같은 falsy 값도 지정된 값으로 취급해 그대로 적용/저장한다.

    Blob 쓰기와 레코드 갱신은 원자적이지 않다. 레코드 갱신이 실패하면
    derived 파일만 남는다.
    """
    record = get_image_or_raise(image_id, session)
    if not store.exists(record.filename):
        raise ImageFileNotFound

    source_path = store.path_for(record.filename)
    target_name = derived_filename(record.filename)
    target_format = ImageFormat(fmt) if fmt else ImageFormat(record.format)

    with timer(f"update image #{image_id}"):
        data = _run_transform(
            runner,
            pipeline.render_update,
            source_path,
            target_format.value,
            brightness=brightness,
            contrast=contrast,
            saturation=saturation,
            rotation=rotation,
            quality=settings.JPEG_QUALITY,
        )
    target_path = store.write_bytes(target_name, data)

    if brightness is not None:
        record.brightness = brightness
    if contrast is not None:
        record.contrast = contrast
    if saturation is not None:
        record.saturation = saturation
    if rotation is not None:
        record.rotation = rotation
    record.format = target_format
    record.filename = target_name
    record.status = ImageStatus.PROCESSED
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.info(f"Updated image #{record.id} → {target_name} ({target_format.value})")

    return {
        "message": "Image updated successfully",
        "filename": target_name,
        "path": target_path,
        "format": target_format.value,
    }


def render_download(
    image_id: int,
    store: BlobStore,
    runner: TransformRunner,
    session: Session,
    fmt: str | None = None,
    brightness: float = 100,
    contrast: float = 100,
    saturation: float = 100,
    rotation: float = 0,
) -> tuple[bytes, str]:
    """보정을 즉석에서 적용한 바이트와 포맷을 반환한다. DB와 Blob Store는 건드리지 않는다.

    fmt는 "png"일 때만 png, 그 외에는 모두 jpeg.
    """
    target_format = "png" if fmt == "png" else "jpeg"

    record = get_image_or_raise(image_id, session)
    if not store.exists(record.filename):
        raise ImageFileNotFound

    with timer(f"download image #{image_id}"):
        data = _run_transform(
            runner,
            pipeline.render_preview,
            store.path_for(record.filename),
            target_format,
            brightness=brightness,
            contrast=contrast,
            saturation=saturation,
            rotation=rotation,
            quality=settings.JPEG_QUALITY,
        )
    return data, target_format


def delete_image(image_id: int, store: BlobStore, session: Session) -> bool:
    """파일을 먼저 지우고 레코드를 삭제한다. 파일이 이미 없어도 에러가 아니다."""
    record = get_image_or_raise(image_id, session)

    removed = store.remove(record.filename)
    if not removed:
        logger.warning(f"Image #{record.id}: file {record.filename} already missing")

    session.delete(record)
    session.commit()
    logger.info(f"Deleted image #{image_id}")
    return True


def resolve_static_file(filename: str, store: BlobStore) -> str:
    """DB를 거치지 않고 파일명으로 Blob Store 경로를 찾는다."""
    if not store.exists(filename):
        raise ImageFileNotFound("Image not found")
    return store.path_for(filename)
