from datetime import UTC, datetime
from enum import Enum

from sqlmodel import Field, SQLModel


def _now() -> datetime:
    return datetime.now(UTC)


class ImageFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"


class ImageStatus(str, Enum):
    UPLOADED = "uploaded"
    PROCESSED = "processed"


class ImageRecord(SQLModel, table=True):
    """이미지 한 장의 메타데이터.

    brightness/contrast/saturation/rotation은 마지막으로 적용된 값이다 (누적 delta 아님).
    filename은 Blob Store의 키이며, in-place 업데이트 시 derived 파일명으로 바뀐다.
    """

    id: int | None = Field(default=None, primary_key=True)
    filename: str
    brightness: float = Field(default=1)
    contrast: float = Field(default=1)
    saturation: float = Field(default=1)
    rotation: float = Field(default=0)
    format: ImageFormat = Field(default=ImageFormat.JPEG)
    status: ImageStatus = Field(default=ImageStatus.UPLOADED)  # uploaded → processed
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(
        default_factory=_now, sa_column_kwargs={"onupdate": _now}
    )
