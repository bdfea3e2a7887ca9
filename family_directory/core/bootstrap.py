from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session

from family_directory.auth import hash_password
from family_directory.config import Settings
from family_directory.core.store import FamilyStore
from family_directory.database import unit_of_work
from family_directory.models.invite import Invite
from family_directory.models.user import User, ROLE_ADMIN


def seed_admin(db: Session, settings: Settings) -> Optional[User]:
    """
    Create the configured admin and a first invite, once.
    Returns the new admin, or None when not configured or already present.
    """
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        return None

    store = FamilyStore(db)
    if store.get_user_by_username(settings.ADMIN_USERNAME) is not None:
        return None

    with unit_of_work(db):
        admin = store.add_user(
            settings.ADMIN_USERNAME,
            hash_password(settings.ADMIN_PASSWORD, rounds=settings.BCRYPT_ROUNDS),
            role=ROLE_ADMIN,
        )
        store.add_profile(admin)

    logger.info("Seeded admin user: {}", admin.username)

    if settings.ADMIN_INVITE_EMAIL:
        invite: Invite = store.create_invite(settings.ADMIN_INVITE_EMAIL, admin.id)
        logger.info("Seeded invite code: {}", invite.code)

    return admin
