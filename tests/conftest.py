"""pytest 공용 fixture.

모든 API 테스트는 in-memory SQLite DB와 tmp_path Blob Store를 사용하여 격리된다.
- client: TestClient (인증 없음)
- auth_client: 회원가입 + 로그인하여 세션 쿠키를 가진 TestClient
- store: 테스트용 LocalBlobStore
"""

import io
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# src/ 디렉토리를 import path에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from core.dependencies import get_blob_store
from main import app
from model.database import get_session
from storage.blob_store import LocalBlobStore


@pytest.fixture()
def session():
    """테스트마다 새 in-memory SQLite DB를 생성한다.

    StaticPool을 사용해야 모든 커넥션이 같은 in-memory DB를 공유한다.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as s:
        yield s


@pytest.fixture()
def store(tmp_path):
    return LocalBlobStore(str(tmp_path / "uploads"))


@pytest.fixture()
def client(session, store):
    """get_session, get_blob_store를 테스트용으로 오버라이드한 TestClient."""

    def _override_session():
        yield session

    app.dependency_overrides[get_session] = _override_session
    app.dependency_overrides[get_blob_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def register_and_login(client: TestClient, username: str, email: str, password: str):
    """유저를 가입시키고 로그인한다. 세션 쿠키는 client의 쿠키 저장소에 남는다."""
    client.post(
        "/api/v1/register",
        json={"username": username, "email": email, "password": password},
    )
    resp = client.post("/api/v1/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp


@pytest.fixture()
def auth_client(client):
    """첫 번째 테스트 유저로 로그인된 TestClient."""
    register_and_login(client, "user1", "user1@test.com", "pass1234")
    return client


def make_image_bytes(
    fmt: str = "PNG", size: tuple[int, int] = (40, 20), color=(120, 60, 200)
) -> io.BytesIO:
    """테스트용 이미지를 메모리에서 생성한다."""
    mode = "RGBA" if len(color) == 4 else "RGB"
    buf = io.BytesIO()
    Image.new(mode, size, color=color).save(buf, format=fmt)
    buf.seek(0)
    return buf


def upload(client: TestClient, filename: str = "photo.png", content_type: str = "image/png"):
    fmt = "JPEG" if content_type == "image/jpeg" else "PNG"
    return client.post(
        "/api/v1/upload",
        files={"image": (filename, make_image_bytes(fmt), content_type)},
    )
