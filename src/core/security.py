from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Response
from pwdlib.hashers.bcrypt import BcryptHasher

from core.config import settings

# --- 패스워드 해싱 ---
# 평문 저장/비교 대신 bcrypt 해시로 저장한다.
pwd_hash = BcryptHasher()


def hash_password(plain: str) -> str:
    """평문 패스워드 → bcrypt 해시."""
    return pwd_hash.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """평문과 해시를 비교한다."""
    return pwd_hash.verify(plain, hashed)


# --- JWT 토큰 ---
# Payload: {"sub": "<user id>", "exp": ...}
# 토큰은 Authorization 헤더가 아니라 HTTP-only 쿠키로 전달된다.


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """JWT 액세스 토큰을 생성한다.

    Args:
        data: 토큰에 담을 데이터 (보통 {"sub": str(user.id)})
        expires_delta: 만료 시간. None이면 로그인 토큰 만료 시간 사용.
    """
    payload = data.copy()
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.LOGIN_TOKEN_EXPIRE_MINUTES)
    )
    payload["exp"] = expire
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> dict | None:
    """JWT 토큰을 검증하고 payload를 반환한다.

    유효하지 않거나 만료된 토큰이면 None을 반환.
    """
    try:
        return jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.PyJWTError:
        return None


# --- 세션 쿠키 ---


def set_session_cookie(
    response: Response,
    token: str,
    max_age_minutes: int,
    samesite: str | None = None,
) -> None:
    """세션 토큰을 HTTP-only 쿠키로 심는다.

    register는 samesite="strict", login은 SameSite 속성 없이 발급한다.
    """
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=max_age_minutes * 60,
        httponly=True,
        secure=settings.is_production,
        samesite=samesite,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
    )
