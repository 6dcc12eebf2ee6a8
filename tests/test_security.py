"""JWT 토큰 + bcrypt 패스워드 해싱 단위 테스트."""

from datetime import timedelta

from fastapi import Response

from core.security import (
    clear_session_cookie,
    create_access_token,
    hash_password,
    set_session_cookie,
    verify_password,
    verify_token,
)


def test_hash_and_verify_password():
    """bcrypt 해싱 후 원본 평문으로 검증할 수 있다."""
    plain = "mysecretpassword"
    hashed = hash_password(plain)

    assert hashed != plain
    assert verify_password(plain, hashed) is True
    assert verify_password("wrongpassword", hashed) is False


def test_create_and_verify_token():
    """JWT 생성 → 디코딩 → sub(user id) 값이 일치한다."""
    token = create_access_token({"sub": "42"})
    payload = verify_token(token)

    assert payload is not None
    assert payload["sub"] == "42"
    assert "exp" in payload


def test_expired_token():
    """만료된 토큰은 verify_token이 None을 반환한다."""
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-1))
    assert verify_token(token) is None


def test_tampered_token():
    header, payload, signature = create_access_token({"sub": "1"}).split(".")
    forged = create_access_token({"sub": "2"}).split(".")[1]
    assert verify_token(f"{header}.{forged}.{signature}") is None


def test_session_cookie_attributes():
    response = Response()
    set_session_cookie(response, "abc", 10, samesite="strict")
    cookie = response.headers["set-cookie"].lower()

    assert cookie.startswith("token=abc")
    assert "httponly" in cookie
    assert "max-age=600" in cookie
    assert "samesite=strict" in cookie
    assert "secure" not in cookie  # development 환경


def test_clear_session_cookie():
    response = Response()
    clear_session_cookie(response)
    cookie = response.headers["set-cookie"].lower()

    assert cookie.startswith('token=""') or cookie.startswith("token=;")
    assert "max-age=0" in cookie
