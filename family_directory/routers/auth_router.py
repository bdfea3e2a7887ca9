from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from family_directory.auth import get_session_tokens, get_settings
from family_directory.config import Settings
from family_directory.core import accounts
from family_directory.database import get_db
from family_directory.schemas.auth_schema import (
    LoginOut,
    LoginRequest,
    RegisterRequest,
    UserOut,
)


router = APIRouter(prefix="/auth", tags=["Authentication"])


# ----------------- REGISTER ------------------

@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return accounts.register(
        db,
        settings,
        username=payload.username,
        password=payload.password,
        invite_code=payload.invite_code,
    )


# ------------------- LOGIN -------------------

@router.post("/login", response_model=LoginOut)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user, token = accounts.login(db, settings, payload.username, payload.password)

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )

    return {
        **UserOut.model_validate(user).model_dump(),
        "access_token": token,
        "token_type": "bearer",
    }


# ------------------- LOGOUT -------------------

@router.post("/logout")
def logout(
    response: Response,
    tokens: List[str] = Depends(get_session_tokens),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    accounts.logout(db, settings, *tokens)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}
