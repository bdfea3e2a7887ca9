from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, Index

from family_directory.database import Base, utcnow


RELATIONSHIP_TYPES = ("PARENT", "CHILD", "SPOUSE", "PARTNER", "SIBLING")


class Relationship(Base):
    """
    A directed edge between two people: from_person is <type> of to_person.
    The inverse edge is never created implicitly.
    """

    __tablename__ = "relationships"

    id = Column(Integer, primary_key=True, index=True)

    from_person_id = Column(
        Integer,
        ForeignKey("people.id"),
        nullable=False,
    )
    to_person_id = Column(
        Integer,
        ForeignKey("people.id"),
        nullable=False,
    )

    # PARENT | CHILD | SPOUSE | PARTNER | SIBLING
    type = Column(String, nullable=False)

    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "type IN ('PARENT', 'CHILD', 'SPOUSE', 'PARTNER', 'SIBLING')",
            name="ck_relationships_type",
        ),
        Index("ix_relationships_from", "from_person_id"),
        Index("ix_relationships_to", "to_person_id"),
    )
