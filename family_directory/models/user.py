from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.orm import relationship

from family_directory.database import Base, utcnow


ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"
ROLES = (ROLE_ADMIN, ROLE_MEMBER)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    # admin | member
    role = Column(String, nullable=False, default=ROLE_MEMBER)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    profile = relationship(
        "UserProfile",
        back_populates="user",
        uselist=False,
        foreign_keys="UserProfile.user_id",
    )

    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'member')",
            name="ck_users_role",
        ),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
