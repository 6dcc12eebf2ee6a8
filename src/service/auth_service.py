from datetime import timedelta

from loguru import logger
from sqlmodel import Session, or_, select

from core.config import settings
from core.exceptions import DuplicateEmail, DuplicateUsername, InvalidCredentials
from core.security import create_access_token, hash_password, verify_password
from model.user import User


def register(username: str, email: str, password: str, session: Session) -> User:
    """새 사용자를 등록한다.

    1. 이메일/사용자명 중복 확인 (충돌한 필드를 에러로 구분)
    2. 패스워드를 bcrypt로 해싱
    3. DB에 저장
    """
    existing = session.exec(
        select(User).where(or_(User.email == email, User.username == username))
    ).first()
    if existing:
        if existing.email == email:
            raise DuplicateEmail
        raise DuplicateUsername

    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"Registered user #{user.id} ({user.username})")
    return user


def login(email: str, password: str, session: Session) -> User:
    """이메일/패스워드를 확인한다. 실패 시 InvalidCredentials."""
    user = session.exec(select(User).where(User.email == email)).first()
    if not user:
        raise InvalidCredentials

    if not verify_password(password, user.hashed_password):
        raise InvalidCredentials

    logger.info(f"User #{user.id} logged in")
    return user


def issue_token(user: User, minutes: int) -> str:
    """sub에 user id를 담은 세션 토큰을 만든다."""
    return create_access_token({"sub": str(user.id)}, expires_delta=timedelta(minutes=minutes))


def issue_register_token(user: User) -> str:
    return issue_token(user, settings.REGISTER_TOKEN_EXPIRE_MINUTES)


def issue_login_token(user: User) -> str:
    return issue_token(user, settings.LOGIN_TOKEN_EXPIRE_MINUTES)
