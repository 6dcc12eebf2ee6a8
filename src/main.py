import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from core.config import settings
from core.error_handlers import (
    app_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from core.exceptions import AppException
from core.lifespan import lifespan
from core.middleware import RequestLoggingMiddleware
from router.auth_router import router as auth_router
from router.image_router import router as image_router
from utility.logger import setup_logger
import model.user  # noqa: F401 — 테이블 등록
import model.image  # noqa: F401 — 테이블 등록

setup_logger(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="이미지 업로드/보정(밝기·대비·채도·회전·포맷 변환)/다운로드 백엔드",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
# 세션이 쿠키로 오가므로 allow_credentials=True
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get(f"{settings.API_PREFIX}/", response_class=PlainTextResponse)
async def liveness():
    return f"{settings.APP_NAME} is running"


app.include_router(auth_router)
app.include_router(image_router)

# Blob Store 루트를 공개 정적 경로로도 노출한다.
app.mount(
    settings.STATIC_URL_PATH,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        access_log=False,
    )
