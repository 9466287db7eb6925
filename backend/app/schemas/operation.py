"""Pydantic schemas for Operations."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.models.operation import OperationType
from app.schemas.user import UserSummaryOut


class OperationCreate(BaseModel):
    discussion_id: str
    parent_id: Optional[str] = None
    operation_type: str
    operand: float = Field(allow_inf_nan=False)
    author_id: str


class OperationOut(BaseModel):
    operation_id: str
    discussion_id: str
    parent_id: Optional[str] = None
    operation_type: OperationType
    operand: float
    result: float
    author_id: str
    author: Optional[UserSummaryOut] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class DiscussionSummaryOut(BaseModel):
    discussion_id: str
    starting_number: float
    author_id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class OperationDetailOut(OperationOut):
    parent: Optional[OperationOut] = None
    children: list[OperationOut] = []
    discussion: DiscussionSummaryOut


class ChainOut(BaseModel):
    discussion: DiscussionSummaryOut
    operations: list[OperationOut]
