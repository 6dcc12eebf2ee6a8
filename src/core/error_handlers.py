"""전역 예외 핸들러.

모든 에러를 {"error_code": "...", "message": "..."} 형식의 JSON 응답으로 변환한다.
main.py에서 app.add_exception_handler()로 등록한다.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from core.exceptions import AppException, ValidationFailed


def _error_response(status_code: int, error_code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message},
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return _error_response(exc.status_code, exc.error_code, exc.message)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """pydantic 검증 실패(기본 422)를 400 VALIDATION_ERROR로 바꾼다."""
    details = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ()) if loc != "body")
        details.append(f"{field or 'body'}: {err.get('msg', 'invalid value')}")
    return _error_response(
        ValidationFailed.status_code,
        ValidationFailed.error_code,
        "; ".join(details) or ValidationFailed.message,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # DB, 파일시스템 오류 등: 메시지를 그대로 전달
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(500, AppException.error_code, str(exc) or AppException.message)
