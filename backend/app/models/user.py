"""User ORM model: identity records for discussion and operation authors."""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Enum as SAEnum
from app.database import Base


class UserRole(str, enum.Enum):
    registered = "Registered"
    guest = "Guest"


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=True, unique=True)
    role = Column(SAEnum(UserRole), nullable=False, default=UserRole.registered)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
