from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from core.config import settings
from model.database import create_db_and_tables
from processor.runner import TransformRunner
from storage.blob_store import LocalBlobStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === 시작 ===
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

    create_db_and_tables()
    logger.info(f"Database ready ({settings.DATABASE_URL})")

    store = LocalBlobStore(settings.UPLOAD_DIR)
    store.ensure_root()
    logger.info(f"Blob store ready ({store.root})")

    runner = TransformRunner(settings.TRANSFORM_WORKERS, settings.TRANSFORM_QUEUE_LIMIT)
    logger.info(
        f"Transform pool: {runner.workers} workers, queue limit {runner.queue_limit}"
    )

    app.state.transform_runner = runner

    yield

    # === 종료 ===
    runner.shutdown()
    logger.info("Shutting down")
