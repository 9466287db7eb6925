"""Chain resolver: the path of operations from a discussion root to a node."""
import logging

from sqlalchemy.orm import Session

from app.errors import IntegrityError, NotFound
from app.models.operation import Operation
from app.services.operation_service import count_operations

logger = logging.getLogger(__name__)


def resolve_chain(db: Session, operation_id: str) -> list[Operation]:
    """Return ``[o1, o2, ..., operation]`` where o1 is a root operation.

    The discussion's starting number is not part of the chain. A walk
    longer than the discussion's operation count means the parent links
    are corrupt, as does a link to a missing or foreign parent.
    """
    operation = db.get(Operation, operation_id)
    if operation is None:
        raise NotFound("Operation not found")

    bound = count_operations(db, operation.discussion_id)
    chain = [operation]
    current = operation
    while current.parent_id is not None:
        if len(chain) >= bound:
            logger.error("Chain from operation %s exceeds %d nodes; parent links form a cycle",
                         operation_id, bound)
            raise IntegrityError(f"Chain from operation {operation_id} does not terminate")

        parent = db.get(Operation, current.parent_id)
        if parent is None or parent.discussion_id != operation.discussion_id:
            logger.error("Operation %s has an invalid parent link %s", current.operation_id, current.parent_id)
            raise IntegrityError(f"Operation {current.operation_id} has an invalid parent link")
        chain.append(parent)
        current = parent

    chain.reverse()
    return chain
