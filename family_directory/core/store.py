import secrets
import string
from typing import Any, Optional

from loguru import logger
from sqlalchemy import or_
from sqlalchemy.orm import Session

from family_directory.core import audit
from family_directory.database import unit_of_work, utcnow
from family_directory.errors import InvalidInviteError, NotFoundError
from family_directory.models.audit_log import AUDIT_CREATE, AUDIT_DELETE, AUDIT_UPDATE, AuditLog
from family_directory.models.invite import Invite
from family_directory.models.media import Media
from family_directory.models.person import Person
from family_directory.models.profile import UserProfile
from family_directory.models.relationship import Relationship
from family_directory.models.user import User, ROLE_MEMBER


INVITE_CODE_LENGTH = 8
INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits


def default_display_name(username: str) -> str:
    # "ada@example.com" -> "ada"
    return username.split("@")[0] or username


def generate_invite_code() -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


class FamilyStore:
    """
    Relational CRUD for the family directory.

    Public create/update/delete operations are durable: each runs in its
    own unit of work and writes its audit row in the same transaction.
    Methods documented as "caller commits" only stage rows so they can be
    composed inside a larger unit of work (registration).

    Name search is case-insensitive. Lists come back in insertion order
    unless noted otherwise.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==========================================================
    # USERS
    # ==========================================================
    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found", field="user_id")
        return user

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def add_user(self, username: str, password_hash: str, role: str = ROLE_MEMBER) -> User:
        """Stage a user row and assign its id. Caller commits."""
        user = User(username=username, password_hash=password_hash, role=role)
        self.db.add(user)
        self.db.flush()
        return user

    # ==========================================================
    # PROFILES
    # ==========================================================
    def get_profile(self, user_id: int) -> Optional[UserProfile]:
        return (
            self.db.query(UserProfile)
            .filter(UserProfile.user_id == user_id)
            .first()
        )

    def add_profile(self, user: User, **fields: Any) -> UserProfile:
        """Stage the profile that goes with a new user. Caller commits."""
        fields.setdefault("display_name", default_display_name(user.username))
        profile = UserProfile(user_id=user.id, **fields)
        self.db.add(profile)
        self.db.flush()
        return profile

    def upsert_profile(self, user_id: int, changes: dict[str, Any]) -> UserProfile:
        user = self.get_user(user_id)

        with unit_of_work(self.db):
            profile = self.get_profile(user_id)
            if profile is None:
                profile = self.add_profile(user, **changes)
            else:
                for key, value in changes.items():
                    setattr(profile, key, value)

        self.db.refresh(profile)
        return profile

    # ==========================================================
    # INVITES
    # ==========================================================
    def get_invite_by_code(self, code: str) -> Optional[Invite]:
        return self.db.query(Invite).filter(Invite.code == code).first()

    def create_invite(self, email: str, admin_id: int) -> Invite:
        code = generate_invite_code()
        while self.get_invite_by_code(code) is not None:
            code = generate_invite_code()

        invite = Invite(email=email, code=code, created_by_admin_id=admin_id)

        with unit_of_work(self.db):
            self.db.add(invite)

        self.db.refresh(invite)
        logger.info("Invite {} created for {} by admin {}", invite.id, email, admin_id)
        return invite

    def list_invites(self) -> list[Invite]:
        # Newest first
        return (
            self.db.query(Invite)
            .order_by(Invite.created_at.desc(), Invite.id.desc())
            .all()
        )

    def mark_invite_used(self, invite: Invite) -> Invite:
        """
        Stage consumption of an invite. Caller commits.
        Only an unused row is updated, so a code can never be spent twice.
        """
        updated = (
            self.db.query(Invite)
            .filter(Invite.id == invite.id, Invite.used_at.is_(None))
            .update({Invite.used_at: utcnow()}, synchronize_session="fetch")
        )
        if updated != 1:
            raise InvalidInviteError()
        return invite

    # ==========================================================
    # PEOPLE
    # ==========================================================
    def _check_user_ref(self, user_id: Optional[int], field: str) -> None:
        if user_id is not None and self.db.get(User, user_id) is None:
            raise NotFoundError("Linked user not found", field=field)

    def get_person(self, person_id: int) -> Person:
        person = self.db.get(Person, person_id)
        if not person:
            raise NotFoundError("Person not found", field="person_id")
        return person

    def get_person_detail(self, person_id: int) -> dict[str, Any]:
        """The person plus its media and relationships in both directions."""
        person = self.get_person(person_id)
        rels = self.get_relationships_for_person(person_id)

        return {
            "person": person,
            "media": self.get_media_for_person(person_id),
            "relationships_from": rels["from"],
            "relationships_to": rels["to"],
        }

    def list_people(
        self,
        search: Optional[str] = None,
        living: Optional[bool] = None,
        tag: Optional[str] = None,
    ) -> list[Person]:
        query = self.db.query(Person)

        if living is not None:
            query = query.filter(Person.is_living == living)

        people = query.order_by(Person.id.asc()).all()

        # SQL lower() only folds ASCII and LIKE treats % and _ as wildcards
        if search:
            needle = search.casefold()
            people = [
                p for p in people
                if needle in (p.full_name or "").casefold()
                or needle in (p.maiden_name or "").casefold()
            ]

        # JSON arrays have no portable containment operator
        if tag:
            people = [p for p in people if tag in (p.tags or [])]

        return people

    def create_person(self, data: dict[str, Any], actor_id: Optional[int]) -> Person:
        self._check_user_ref(data.get("linked_user_id"), "linked_user_id")

        person = Person(created_by_user_id=actor_id, **data)

        with unit_of_work(self.db):
            self.db.add(person)
            self.db.flush()
            audit.record(self.db, "person", person.id, AUDIT_CREATE, actor_id, data)

        self.db.refresh(person)
        return person

    def update_person(
        self,
        person_id: int,
        changes: dict[str, Any],
        actor_id: Optional[int],
    ) -> Person:
        person = self.get_person(person_id)

        if "linked_user_id" in changes:
            self._check_user_ref(changes["linked_user_id"], "linked_user_id")

        with unit_of_work(self.db):
            for key, value in changes.items():
                setattr(person, key, value)
            person.updated_at = utcnow()
            audit.record(self.db, "person", person.id, AUDIT_UPDATE, actor_id, changes)

        self.db.refresh(person)
        return person

    def delete_person(self, person_id: int, actor_id: Optional[int]) -> bool:
        """
        Cascade: the person's media and every relationship touching it
        go in the same transaction. Returns False if nothing existed.
        """
        person = self.db.get(Person, person_id)
        if person is None:
            return False

        with unit_of_work(self.db):
            media_count = (
                self.db.query(Media)
                .filter(Media.person_id == person_id)
                .delete(synchronize_session=False)
            )
            rel_count = (
                self.db.query(Relationship)
                .filter(
                    or_(
                        Relationship.from_person_id == person_id,
                        Relationship.to_person_id == person_id,
                    )
                )
                .delete(synchronize_session=False)
            )
            self.db.delete(person)
            audit.record(
                self.db,
                "person",
                person_id,
                AUDIT_DELETE,
                actor_id,
                {
                    "full_name": person.full_name,
                    "media_deleted": media_count,
                    "relationships_deleted": rel_count,
                },
            )

        logger.info(
            "Person {} deleted with {} media and {} relationships",
            person_id,
            media_count,
            rel_count,
        )
        return True

    # ==========================================================
    # RELATIONSHIPS
    # ==========================================================
    def get_relationships_for_person(self, person_id: int) -> dict[str, list[Relationship]]:
        outgoing = (
            self.db.query(Relationship)
            .filter(Relationship.from_person_id == person_id)
            .order_by(Relationship.id.asc())
            .all()
        )
        incoming = (
            self.db.query(Relationship)
            .filter(Relationship.to_person_id == person_id)
            .order_by(Relationship.id.asc())
            .all()
        )
        return {"from": outgoing, "to": incoming}

    def create_relationship(self, data: dict[str, Any], actor_id: Optional[int]) -> Relationship:
        for field in ("from_person_id", "to_person_id"):
            if self.db.get(Person, data[field]) is None:
                raise NotFoundError("Person not found", field=field)

        rel = Relationship(created_by_user_id=actor_id, **data)

        with unit_of_work(self.db):
            self.db.add(rel)
            self.db.flush()
            audit.record(self.db, "relationship", rel.id, AUDIT_CREATE, actor_id, data)

        self.db.refresh(rel)
        return rel

    def delete_relationship(self, relationship_id: int, actor_id: Optional[int]) -> bool:
        rel = self.db.get(Relationship, relationship_id)
        if rel is None:
            return False

        details = {
            "from_person_id": rel.from_person_id,
            "to_person_id": rel.to_person_id,
            "type": rel.type,
        }

        with unit_of_work(self.db):
            self.db.delete(rel)
            audit.record(self.db, "relationship", relationship_id, AUDIT_DELETE, actor_id, details)

        return True

    # ==========================================================
    # MEDIA
    # ==========================================================
    def get_media_for_person(self, person_id: int) -> list[Media]:
        return (
            self.db.query(Media)
            .filter(Media.person_id == person_id)
            .order_by(Media.id.asc())
            .all()
        )

    def create_media(self, data: dict[str, Any], actor_id: Optional[int]) -> Media:
        if self.db.get(Person, data["person_id"]) is None:
            raise NotFoundError("Person not found", field="person_id")

        item = Media(uploader_user_id=actor_id, **data)

        with unit_of_work(self.db):
            self.db.add(item)
            self.db.flush()
            audit.record(self.db, "media", item.id, AUDIT_CREATE, actor_id, data)

        self.db.refresh(item)
        return item

    def delete_media(self, media_id: int, actor_id: Optional[int]) -> bool:
        item = self.db.get(Media, media_id)
        if item is None:
            return False

        details = {"person_id": item.person_id, "type": item.type, "url": item.url}

        with unit_of_work(self.db):
            self.db.delete(item)
            audit.record(self.db, "media", media_id, AUDIT_DELETE, actor_id, details)

        return True

    # ==========================================================
    # AUDIT
    # ==========================================================
    def list_audit_logs(
        self,
        entity_type: Optional[str] = None,
        entity_id: Optional[int] = None,
    ) -> list[AuditLog]:
        query = self.db.query(AuditLog)

        if entity_type:
            query = query.filter(AuditLog.entity_type == entity_type)
        if entity_id is not None:
            query = query.filter(AuditLog.entity_id == entity_id)

        return query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).all()
