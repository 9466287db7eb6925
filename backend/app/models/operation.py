"""Operation ORM model: one arithmetic node in a discussion's tree."""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.database import Base


class OperationType(str, enum.Enum):
    add = "ADD"
    subtract = "SUBTRACT"
    multiply = "MULTIPLY"
    divide = "DIVIDE"


class Operation(Base):
    __tablename__ = "operations"

    operation_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    discussion_id = Column(
        String(36),
        ForeignKey("discussions.discussion_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # NULL means the node applies directly to the discussion's starting number
    parent_id = Column(
        String(36),
        ForeignKey("operations.operation_id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    operation_type = Column(SAEnum(OperationType), nullable=False)
    operand = Column(Float, nullable=False)
    result = Column(Float, nullable=False)
    author_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    author = relationship("User")
    discussion = relationship("Discussion", back_populates="operations")
    parent = relationship("Operation", remote_side=[operation_id], back_populates="children")
    children = relationship(
        "Operation",
        back_populates="parent",
        passive_deletes=True,
        order_by="[Operation.created_at, Operation.operation_id]",
    )
