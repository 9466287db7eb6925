"""Discussion ORM model: the root value of one computation tree."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Discussion(Base):
    __tablename__ = "discussions"
    __table_args__ = (
        UniqueConstraint("starting_number", name="uq_discussions_starting_number"),
    )

    discussion_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    starting_number = Column(Float, nullable=False)
    author_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    author = relationship("User")
    # Oldest-first, ties broken by identity
    operations = relationship(
        "Operation",
        back_populates="discussion",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Operation.created_at, Operation.operation_id]",
    )
