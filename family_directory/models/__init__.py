# Import models so SQLAlchemy registers tables
from family_directory.models.user import User, ROLE_ADMIN, ROLE_MEMBER, ROLES
from family_directory.models.profile import UserProfile
from family_directory.models.invite import Invite
from family_directory.models.person import Person
from family_directory.models.relationship import Relationship, RELATIONSHIP_TYPES
from family_directory.models.media import Media, MEDIA_TYPES
from family_directory.models.message import MessageThread, ThreadParticipant, Message
from family_directory.models.session import UserSession
from family_directory.models.audit_log import AuditLog

__all__ = [
    "User",
    "ROLE_ADMIN",
    "ROLE_MEMBER",
    "ROLES",
    "UserProfile",
    "Invite",
    "Person",
    "Relationship",
    "RELATIONSHIP_TYPES",
    "Media",
    "MEDIA_TYPES",
    "MessageThread",
    "ThreadParticipant",
    "Message",
    "UserSession",
    "AuditLog",
]
