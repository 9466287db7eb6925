"""Pydantic schemas for Users."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.models.user import UserRole


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    email: Optional[str] = None
    role: UserRole = UserRole.registered


class UserOut(BaseModel):
    user_id: str
    username: str
    email: Optional[str] = None
    role: UserRole
    created_at: datetime

    model_config = {"from_attributes": True}


class UserSummaryOut(BaseModel):
    user_id: str
    username: str

    model_config = {"from_attributes": True}
