from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from fastapi.responses import FileResponse, Response
from pydantic import BaseModel, Field
from sqlmodel import Session

from core.config import settings
from core.dependencies import (
    get_blob_store,
    get_current_user,
    get_transform_runner,
    json_or_form,
)
from model.database import get_session
from model.image import ImageFormat
from model.user import User
from processor.runner import TransformRunner
from service import image_service
from storage.blob_store import BlobStore

router = APIRouter(prefix=settings.API_PREFIX, tags=["images"])


class UpdateImageRequest(BaseModel):
    """보정 값은 0~100 스케일 (100 = 원본). 생략하거나 null이면 저장된 값을 유지한다."""

    brightness: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    contrast: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    saturation: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    rotation: float | None = Field(default=None, allow_inf_nan=False)
    format: ImageFormat | None = None


class UpdateImageResponse(BaseModel):
    message: str
    filename: str
    path: str
    format: ImageFormat


class MessageResponse(BaseModel):
    message: str


# 라우트 등록 순서 주의: 고정 경로(/images, /image/{filename})가 /{image_id}보다 먼저 와야 한다.

@router.post("/upload", status_code=status.HTTP_201_CREATED)
def upload_image(
    image: UploadFile | None = File(default=None),
    current_user: User = Depends(get_current_user),
    store: BlobStore = Depends(get_blob_store),
    session: Session = Depends(get_session),
):
    return image_service.save_upload(image, store, session)


@router.get("/images")
def list_images(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return image_service.list_images(session)


@router.get("/image/{filename}")
def get_static_file(filename: str, store: BlobStore = Depends(get_blob_store)):
    """파일명으로 원본 파일을 바로 내려준다. (인증 없음, DB 조회 없음)"""
    return FileResponse(image_service.resolve_static_file(filename, store))


@router.put("/image/{image_id}", response_model=UpdateImageResponse)
def update_image(
    image_id: int,
    req: UpdateImageRequest = Depends(json_or_form(UpdateImageRequest)),
    current_user: User = Depends(get_current_user),
    store: BlobStore = Depends(get_blob_store),
    runner: TransformRunner = Depends(get_transform_runner),
    session: Session = Depends(get_session),
):
    return image_service.update_image(
        image_id,
        store,
        runner,
        session,
        brightness=req.brightness,
        contrast=req.contrast,
        saturation=req.saturation,
        rotation=req.rotation,
        fmt=req.format,
    )


@router.get("/{image_id}/download")
def download_image(
    image_id: int,
    format: str | None = Query(default=None),
    brightness: float = Query(default=100, ge=0, allow_inf_nan=False),
    contrast: float = Query(default=100, ge=0, allow_inf_nan=False),
    saturation: float = Query(default=100, ge=0, allow_inf_nan=False),
    rotation: float = Query(default=0, allow_inf_nan=False),
    current_user: User = Depends(get_current_user),
    store: BlobStore = Depends(get_blob_store),
    runner: TransformRunner = Depends(get_transform_runner),
    session: Session = Depends(get_session),
):
    """보정을 즉석에서 적용해 첨부파일로 내려준다. 저장된 레코드/파일은 바뀌지 않는다."""
    data, fmt = image_service.render_download(
        image_id,
        store,
        runner,
        session,
        fmt=format,
        brightness=brightness,
        contrast=contrast,
        saturation=saturation,
        rotation=rotation,
    )
    return Response(
        content=data,
        media_type=f"image/{fmt}",
        headers={"Content-Disposition": f'attachment; filename="processed-image.{fmt}"'},
    )


@router.get("/{image_id}")
def get_image(
    image_id: int,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return image_service.get_image_or_raise(image_id, session)


@router.delete("/{image_id}", response_model=MessageResponse)
def delete_image(
    image_id: int,
    current_user: User = Depends(get_current_user),
    store: BlobStore = Depends(get_blob_store),
    session: Session = Depends(get_session),
):
    image_service.delete_image(image_id, store, session)
    return MessageResponse(message="Image deleted successfully")
