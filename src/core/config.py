from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # 앱 설정
    APP_NAME: str = "imgedit"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, production

    # 서버 설정
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: str = "*"  # 콤마로 구분

    # DB 설정
    DATABASE_URL: str = "sqlite:///./imgedit.db"

    # 파일 저장 경로 (Blob Store 루트)
    UPLOAD_DIR: str = "./uploads"
    STATIC_URL_PATH: str = "/uploads"
    DERIVED_PREFIX: str = "updated_"
    JPEG_QUALITY: int = 80

    # JWT / 세션 쿠키
    JWT_SECRET_KEY: str = "dev-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    COOKIE_NAME: str = "token"
    REGISTER_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    LOGIN_TOKEN_EXPIRE_MINUTES: int = 10

    # 변환 워커 풀
    TRANSFORM_WORKERS: int = 4
    TRANSFORM_QUEUE_LIMIT: int = 16

    # 로깅
    LOG_LEVEL: str = "DEBUG"
    SLOW_REQUEST_MS: int = 500

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def cors_origin_list(self) -> list[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
