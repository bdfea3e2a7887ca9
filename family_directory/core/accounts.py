from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from family_directory.auth import (
    burn_verify,
    create_session,
    hash_password,
    resolve_session,
    revoke_session,
    verify_password,
)
from family_directory.config import Settings
from family_directory.core.store import FamilyStore
from family_directory.database import unit_of_work
from family_directory.errors import InvalidInviteError, UnauthorizedError, ValidationError
from family_directory.models.user import User


LOGIN_FAILED = "Invalid username or password"


# ============================================================
# REGISTER
# ============================================================

def register(
    db: Session,
    settings: Settings,
    username: str,
    password: str,
    invite_code: str,
) -> User:
    """
    Create a member account from an unused invite.
    User, profile and invite consumption commit together or not at all.
    """
    store = FamilyStore(db)
    username = username.strip()

    if store.get_user_by_username(username) is not None:
        raise ValidationError("Username already exists", field="username")

    invite = store.get_invite_by_code(invite_code.strip())
    if invite is None or invite.is_used:
        raise InvalidInviteError()

    password_hash = hash_password(password, rounds=settings.BCRYPT_ROUNDS)

    try:
        with unit_of_work(db):
            user = store.add_user(username, password_hash)
            store.add_profile(user)
            store.mark_invite_used(invite)
    except IntegrityError:
        # Lost a race on the username unique index; anything else propagates
        if store.get_user_by_username(username) is not None:
            raise ValidationError("Username already exists", field="username")
        raise

    db.refresh(user)
    logger.info("Registered user {} with invite {}", user.id, invite.id)
    return user


# ============================================================
# LOGIN / LOGOUT
# ============================================================

def login(db: Session, settings: Settings, username: str, password: str) -> tuple[User, str]:
    """Returns the user and a fresh session token."""
    store = FamilyStore(db)
    user = store.get_user_by_username(username.strip())

    if user is None:
        burn_verify(password, rounds=settings.BCRYPT_ROUNDS)
        logger.info("Login failed")
        raise UnauthorizedError(LOGIN_FAILED)

    if not verify_password(password, user.password_hash):
        logger.info("Login failed")
        raise UnauthorizedError(LOGIN_FAILED)

    with unit_of_work(db):
        token = create_session(db, settings, user)

    logger.info("User {} logged in", user.id)
    return user, token


def logout(db: Session, settings: Settings, *tokens: Optional[str]) -> None:
    """Revoke every session the given tokens point at. Never fails."""
    with unit_of_work(db):
        revoked = sum(revoke_session(db, settings, token) for token in tokens)

    if revoked:
        logger.info("Revoked {} session(s)", revoked)


def current_user(db: Session, settings: Settings, token: Optional[str]) -> Optional[User]:
    return resolve_session(db, settings, token)
