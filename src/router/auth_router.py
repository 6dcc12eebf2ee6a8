from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field
from sqlmodel import Session

from core.config import settings
from core.dependencies import get_current_user, json_or_form
from core.security import clear_session_cookie, set_session_cookie
from model.database import get_session
from model.user import User
from service import auth_service

router = APIRouter(prefix=settings.API_PREFIX, tags=["auth"])


# --- 요청/응답 스키마 ---

class RegisterRequest(BaseModel):
    username: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# --- 엔드포인트 ---

@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    response: Response,
    req: RegisterRequest = Depends(json_or_form(RegisterRequest)),
    session: Session = Depends(get_session),
):
    """회원가입: 사용자 생성 후 1일짜리 세션 쿠키(SameSite=strict)를 발급한다."""
    user = auth_service.register(req.username, req.email, req.password, session)
    set_session_cookie(
        response,
        auth_service.issue_register_token(user),
        settings.REGISTER_TOKEN_EXPIRE_MINUTES,
        samesite="strict",
    )
    return MessageResponse(message="User registered successfully and authenticated.")


@router.post("/login", response_model=MessageResponse)
def login(
    response: Response,
    req: LoginRequest = Depends(json_or_form(LoginRequest)),
    session: Session = Depends(get_session),
):
    """로그인: 10분짜리 세션 쿠키를 발급한다. SameSite 속성은 붙이지 않는다."""
    user = auth_service.login(req.email, req.password, session)
    set_session_cookie(
        response,
        auth_service.issue_login_token(user),
        settings.LOGIN_TOKEN_EXPIRE_MINUTES,
    )
    return MessageResponse(message="Logged In Successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, current_user: User = Depends(get_current_user)):
    clear_session_cookie(response)
    return MessageResponse(message="Logged Out Successfully")
