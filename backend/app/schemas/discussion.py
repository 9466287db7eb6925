"""Pydantic schemas for Discussions."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.operation import OperationOut
from app.schemas.user import UserSummaryOut


class DiscussionCreate(BaseModel):
    starting_number: float = Field(allow_inf_nan=False)
    author_id: str


class DiscussionUpdate(BaseModel):
    starting_number: float = Field(allow_inf_nan=False)


class DiscussionOut(BaseModel):
    discussion_id: str
    starting_number: float
    author_id: str
    author: Optional[UserSummaryOut] = None
    created_at: datetime
    updated_at: datetime
    operations: list[OperationOut] = []

    model_config = {"from_attributes": True}
