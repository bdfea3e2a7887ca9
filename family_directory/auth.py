import base64
import hashlib
import secrets
from datetime import timedelta
from functools import lru_cache
from typing import Optional

import bcrypt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from family_directory.config import Settings
from family_directory.database import get_db, utcnow
from family_directory.errors import ForbiddenError, UnauthorizedError
from family_directory.models.session import UserSession
from family_directory.models.user import User, ROLE_ADMIN


DEFAULT_BCRYPT_ROUNDS = 12

bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# PASSWORD HELPERS
# ============================================================

def _prehash(password: str) -> bytes:
    # bcrypt only reads 72 bytes; digest first so every byte counts
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Salted bcrypt hash. The returned string embeds its own salt."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_prehash(password), hashed.encode())
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    return hash_password(secrets.token_hex(16), rounds=rounds)


def burn_verify(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
    """Spend one verify for unknown usernames so timing matches a real miss."""
    verify_password(password, _dummy_hash(rounds))


# ============================================================
# SESSION TOKENS
# ============================================================

def create_session(db: Session, settings: Settings, user: User) -> str:
    """
    Store a session row and return the signed token that references it.
    The caller commits.
    """
    session_key = secrets.token_urlsafe(32)
    expires_at = utcnow() + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)

    db.add(
        UserSession(
            session_key=session_key,
            user_id=user.id,
            expires_at=expires_at,
        )
    )

    return jwt.encode(
        {"sub": str(user.id), "sid": session_key, "exp": expires_at},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def _decode(settings: Settings, token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    if not payload.get("sub") or not payload.get("sid"):
        return None
    return payload


def resolve_session(db: Session, settings: Settings, token: Optional[str]) -> Optional[User]:
    """Anonymous (None) for any missing, forged, expired or revoked token."""
    if not token:
        return None

    payload = _decode(settings, token)
    if payload is None:
        return None

    row = (
        db.query(UserSession)
        .filter(UserSession.session_key == payload["sid"])
        .first()
    )
    if not row or str(row.user_id) != str(payload["sub"]):
        return None

    if row.expires_at <= utcnow():
        return None

    return db.get(User, row.user_id)


def revoke_session(db: Session, settings: Settings, token: Optional[str]) -> bool:
    """Delete the session row behind a token. Safe to call repeatedly."""
    if not token:
        return False

    payload = _decode(settings, token)
    if payload is None:
        return False

    deleted = (
        db.query(UserSession)
        .filter(UserSession.session_key == payload["sid"])
        .delete(synchronize_session=False)
    )
    return deleted > 0


# ============================================================
# AUTHORIZATION
# ============================================================

def require_role(user: User, role: str) -> None:
    if user.role != role:
        raise ForbiddenError(f"Requires {role} role")


# ============================================================
# DEPENDENCIES
# ============================================================

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_tokens(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> list[str]:
    """Candidate tokens in the order they are tried: cookie, then bearer."""
    tokens = []
    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie:
        tokens.append(cookie)
    if credentials and credentials.credentials not in tokens:
        tokens.append(credentials.credentials)
    return tokens


def get_optional_user(
    tokens: list[str] = Depends(get_session_tokens),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[User]:
    # A stale cookie must not shadow a live bearer token
    for token in tokens:
        user = resolve_session(db, settings, token)
        if user is not None:
            return user
    return None


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise UnauthorizedError()
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    require_role(current_user, ROLE_ADMIN)
    return current_user
