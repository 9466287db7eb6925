"""Discussion store: root values of the computation trees.

Responsibilities:
- Starting-number uniqueness, enforced by the ``uq_discussions_starting_number``
  constraint at write time. Violations are rolled back and raised as Conflict.
- Author-only updates of the starting number
- Cascading deletion of a discussion's operations
"""
import logging
from typing import Optional

from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import Session, selectinload

from app.errors import Conflict, Forbidden, NotFound
from app.models.discussion import Discussion

logger = logging.getLogger(__name__)


def _taken(db: Session, starting_number: float, message: str) -> Conflict:
    """Build the Conflict for a rejected write, with the holder as a hint."""
    existing = find_discussion_by_starting_number(db, starting_number)
    logger.warning("Starting number %s rejected: already held by %s", starting_number,
                   existing.discussion_id if existing else "?")
    return Conflict(message, existing=existing)


def create_discussion(db: Session, starting_number: float, author_id: str) -> Discussion:
    """Insert a new discussion. The unique constraint decides races."""
    discussion = Discussion(starting_number=starting_number, author_id=author_id)
    db.add(discussion)
    try:
        db.commit()
    except sa_exc.IntegrityError:
        db.rollback()
        conflict = _taken(db, starting_number, "This starting number is already taken")
        if conflict.existing is None:
            # Not a uniqueness violation (e.g. unknown author)
            raise
        raise conflict
    db.refresh(discussion)
    logger.info("Created discussion %s (starting_number=%s) by %s",
                discussion.discussion_id, starting_number, author_id)
    return discussion


def find_discussion_by_starting_number(db: Session, value: float) -> Optional[Discussion]:
    return db.query(Discussion).filter(Discussion.starting_number == value).first()


def get_discussion(db: Session, discussion_id: str) -> Optional[Discussion]:
    """Fetch a discussion with its operations loaded oldest-first."""
    return (
        db.query(Discussion)
        .options(selectinload(Discussion.operations))
        .filter(Discussion.discussion_id == discussion_id)
        .first()
    )


def list_discussions(
    db: Session,
    skip: int = 0,
    limit: Optional[int] = None,
    author_id: Optional[str] = None,
) -> list[Discussion]:
    """Newest discussions first; each carries its operations oldest-first."""
    query = db.query(Discussion).options(selectinload(Discussion.operations))
    if author_id:
        query = query.filter(Discussion.author_id == author_id)
    query = query.order_by(Discussion.created_at.desc(), Discussion.discussion_id.desc())
    if skip:
        query = query.offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def is_discussion_author(db: Session, discussion_id: str, user_id: str) -> bool:
    discussion = db.get(Discussion, discussion_id)
    return discussion is not None and discussion.author_id == user_id


def _get_owned(db: Session, discussion_id: str, requestor_id: str) -> Discussion:
    discussion = db.get(Discussion, discussion_id)
    if discussion is None:
        raise NotFound("Discussion not found")
    if discussion.author_id != requestor_id:
        logger.warning("User %s is not the author of discussion %s", requestor_id, discussion_id)
        raise Forbidden("Not authorized to modify this discussion")
    return discussion


def update_discussion_starting_number(
    db: Session,
    discussion_id: str,
    new_value: float,
    requestor_id: str,
) -> Discussion:
    """Change a discussion's root value (author only).

    Existing operation results are left untouched: they stay relative to
    the value their parent had when they were created.
    """
    discussion = _get_owned(db, discussion_id, requestor_id)

    if discussion.starting_number == new_value:
        return discussion

    previous = discussion.starting_number
    discussion.starting_number = new_value
    try:
        db.commit()
    except sa_exc.IntegrityError:
        db.rollback()
        conflict = _taken(db, new_value, "This starting number is already taken by another discussion")
        if conflict.existing is None:
            raise
        raise conflict
    db.refresh(discussion)
    logger.info("Updated discussion %s starting_number %s -> %s", discussion_id, previous, new_value)
    return discussion


def delete_discussion(db: Session, discussion_id: str, requestor_id: str) -> None:
    """Remove a discussion and, by cascade, every operation in its tree."""
    discussion = _get_owned(db, discussion_id, requestor_id)
    db.delete(discussion)
    db.commit()
    logger.info("Deleted discussion %s", discussion_id)
