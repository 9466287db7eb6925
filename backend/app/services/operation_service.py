"""Operation store: creation and lookup of computation-tree nodes.

An operation's result is computed exactly once, from the value its parent
holds at creation time, and written in the same transaction as the node.
Operations have no update or delete path.
"""
import logging
import math
from typing import Optional

from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import Session, selectinload

from app.errors import InvalidOperation, InvalidReference, NotFound
from app.models.discussion import Discussion
from app.models.operation import Operation, OperationType
from app.services.compute import compute_result

logger = logging.getLogger(__name__)

_OLDEST_FIRST = (Operation.created_at.asc(), Operation.operation_id.asc())


def _require_discussion(db: Session, discussion_id: str) -> Discussion:
    discussion = db.get(Discussion, discussion_id)
    if discussion is None:
        raise NotFound("Discussion not found")
    return discussion


def _previous_value(db: Session, discussion: Discussion, parent_id: Optional[str]) -> float:
    """Root value for a root operation, otherwise the parent's stored result."""
    if not parent_id:
        return discussion.starting_number

    parent = db.get(Operation, parent_id)
    if parent is None:
        raise NotFound("Parent operation not found")
    if parent.discussion_id != discussion.discussion_id:
        raise InvalidReference("Parent operation does not belong to this discussion")
    return parent.result


def create_operation(
    db: Session,
    discussion_id: str,
    parent_id: Optional[str],
    kind: OperationType,
    operand: float,
    author_id: str,
) -> Operation:
    """Validate references, compute the result and persist the node atomically."""
    discussion = _require_discussion(db, discussion_id)
    previous = _previous_value(db, discussion, parent_id)
    result = compute_result(previous, kind, operand)
    if not math.isfinite(result):
        # Not storable as a JSON number
        raise InvalidOperation("result is not a finite number")

    operation = Operation(
        discussion_id=discussion_id,
        parent_id=parent_id or None,
        operation_type=OperationType(kind),
        operand=operand,
        result=result,
        author_id=author_id,
    )
    db.add(operation)
    try:
        db.commit()
    except sa_exc.IntegrityError:
        # A referenced row disappeared between the checks and the insert
        db.rollback()
        logger.warning("Operation insert on discussion %s lost its references", discussion_id)
        raise NotFound("Discussion or parent operation no longer exists") from None
    db.refresh(operation)
    logger.info(
        "Created operation %s (%s %s) on discussion %s parent=%s result=%s",
        operation.operation_id, operation.operation_type.value, operand,
        discussion_id, operation.parent_id, result,
    )
    return operation


def get_operation(db: Session, operation_id: str) -> Optional[Operation]:
    """Fetch an operation with parent, children and discussion loaded."""
    return (
        db.query(Operation)
        .options(
            selectinload(Operation.parent),
            selectinload(Operation.children),
            selectinload(Operation.discussion),
        )
        .filter(Operation.operation_id == operation_id)
        .first()
    )


def list_operations_by_discussion(db: Session, discussion_id: str) -> list[Operation]:
    _require_discussion(db, discussion_id)
    return (
        db.query(Operation)
        .filter(Operation.discussion_id == discussion_id)
        .order_by(*_OLDEST_FIRST)
        .all()
    )


def list_children(db: Session, operation_id: str) -> list[Operation]:
    if db.get(Operation, operation_id) is None:
        raise NotFound("Operation not found")
    return (
        db.query(Operation)
        .filter(Operation.parent_id == operation_id)
        .order_by(*_OLDEST_FIRST)
        .all()
    )


def list_root_operations(db: Session, discussion_id: str) -> list[Operation]:
    _require_discussion(db, discussion_id)
    return (
        db.query(Operation)
        .filter(Operation.discussion_id == discussion_id, Operation.parent_id.is_(None))
        .order_by(*_OLDEST_FIRST)
        .all()
    )


def count_operations(db: Session, discussion_id: str) -> int:
    return db.query(Operation).filter(Operation.discussion_id == discussion_id).count()


def list_operations_by_author(db: Session, author_id: str) -> list[Operation]:
    """An author's operations, newest first."""
    return (
        db.query(Operation)
        .filter(Operation.author_id == author_id)
        .order_by(Operation.created_at.desc(), Operation.operation_id.desc())
        .all()
    )


def is_operation_author(db: Session, operation_id: str, user_id: str) -> bool:
    operation = db.get(Operation, operation_id)
    return operation is not None and operation.author_id == user_id
