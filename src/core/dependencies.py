from typing import TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import APIKeyCookie
from pydantic import BaseModel, ValidationError
from sqlmodel import Session

from core.config import settings
from core.exceptions import InvalidToken, NotAuthenticated, UserNotFound, ValidationFailed
from core.security import verify_token
from model.database import get_session
from model.user import User
from processor.runner import TransformRunner
from storage.blob_store import BlobStore, LocalBlobStore

# APIKeyCookie:
# - 요청 쿠키에서 "token" 값을 추출 (Swagger UI에도 쿠키 인증으로 표시)
# - auto_error=False: 쿠키가 없을 때 403 대신 직접 401 NOT_AUTHENTICATED를 던진다
cookie_scheme = APIKeyCookie(name=settings.COOKIE_NAME, auto_error=False)

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_current_user(
    token: str | None = Depends(cookie_scheme),
    session: Session = Depends(get_session),
) -> User:
    """세션 쿠키의 JWT에서 현재 사용자를 추출한다.

    흐름:
    1. 쿠키가 없으면 401 NOT_AUTHENTICATED
    2. verify_token으로 서명 검증 + 만료 확인, 실패 시 401 INVALID_TOKEN
    3. payload["sub"] (user id)로 DB에서 사용자 조회, 없으면 404 USER_NOT_FOUND
    """
    if not token:
        raise NotAuthenticated

    payload = verify_token(token)
    if not payload:
        raise InvalidToken

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise InvalidToken("토큰에 사용자 정보가 없습니다")

    user = session.get(User, user_id)
    if not user:
        raise UserNotFound
    return user


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def json_or_form(model: type[ModelT]):
    """요청 본문을 JSON 또는 form(urlencoded/multipart)으로 받아 model로 검증한다.

    form의 빈 문자열은 "값 없음"(None)으로 취급한다.
    검증 실패는 RequestValidationError로 올려 400 VALIDATION_ERROR가 된다.
    """

    async def _parse(request: Request) -> ModelT:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            data = {key: (value if value != "" else None) for key, value in form.items()}
        else:
            try:
                data = await request.json()
            except ValueError:
                raise ValidationFailed("요청 본문이 올바른 JSON 또는 form이 아닙니다")
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False))

    return _parse


def get_blob_store() -> BlobStore:
    return LocalBlobStore(settings.UPLOAD_DIR)


def get_transform_runner(request: Request) -> TransformRunner:
    """lifespan에서 만든 앱 전역 워커 풀."""
    return request.app.state.transform_runner
