"""Discussion API routes: delegates to discussion_service for invariant enforcement."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import NotFound
from app.schemas.discussion import DiscussionCreate, DiscussionUpdate, DiscussionOut
from app.schemas.operation import OperationOut
from app.services import discussion_service, operation_service
from app.services.identity import require_registered_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=DiscussionOut, status_code=status.HTTP_201_CREATED)
def create_discussion(payload: DiscussionCreate, db: Session = Depends(get_db)):
    """Start a new discussion from a unique starting number."""
    require_registered_user(db, payload.author_id)
    return discussion_service.create_discussion(
        db=db,
        starting_number=payload.starting_number,
        author_id=payload.author_id,
    )


@router.get("/", response_model=list[DiscussionOut])
def list_discussions(
    author_id: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """List discussions, newest first, each with its operations oldest first."""
    return discussion_service.list_discussions(db, skip=skip, limit=limit, author_id=author_id)


@router.get("/lookup", response_model=DiscussionOut)
def lookup_discussion(
    starting_number: float = Query(..., allow_inf_nan=False),
    db: Session = Depends(get_db),
):
    """Find the discussion that owns a starting number."""
    discussion = discussion_service.find_discussion_by_starting_number(db, starting_number)
    if discussion is None:
        raise NotFound("No discussion has this starting number")
    return discussion


@router.get("/{discussion_id}", response_model=DiscussionOut)
def get_discussion(discussion_id: str, db: Session = Depends(get_db)):
    """Fetch a single discussion with its operations."""
    discussion = discussion_service.get_discussion(db, discussion_id)
    if discussion is None:
        raise NotFound("Discussion not found")
    return discussion


@router.patch("/{discussion_id}", response_model=DiscussionOut)
def update_discussion(
    discussion_id: str,
    payload: DiscussionUpdate,
    requestor_id: str = Query(..., description="ID of the user performing the update"),
    db: Session = Depends(get_db),
):
    """Change the starting number (author only)."""
    require_registered_user(db, requestor_id)
    return discussion_service.update_discussion_starting_number(
        db=db,
        discussion_id=discussion_id,
        new_value=payload.starting_number,
        requestor_id=requestor_id,
    )


@router.get("/{discussion_id}/root-operations", response_model=list[OperationOut])
def list_root_operations(discussion_id: str, db: Session = Depends(get_db)):
    """Operations applied directly to the starting number."""
    return operation_service.list_root_operations(db, discussion_id)
