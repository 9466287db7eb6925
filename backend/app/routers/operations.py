"""Operation API routes: creation, lookup and chain reconstruction."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import NotFound
from app.schemas.operation import OperationCreate, OperationOut, OperationDetailOut, ChainOut
from app.services import chain_service, operation_service
from app.services.compute import parse_operation_type
from app.services.identity import require_registered_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=OperationOut, status_code=status.HTTP_201_CREATED)
def create_operation(payload: OperationCreate, db: Session = Depends(get_db)):
    """Apply an operation to the discussion root or to an existing operation."""
    kind = parse_operation_type(payload.operation_type)
    require_registered_user(db, payload.author_id)
    return operation_service.create_operation(
        db=db,
        discussion_id=payload.discussion_id,
        parent_id=payload.parent_id,
        kind=kind,
        operand=payload.operand,
        author_id=payload.author_id,
    )


@router.get("/discussion/{discussion_id}", response_model=list[OperationOut])
def list_operations_by_discussion(discussion_id: str, db: Session = Depends(get_db)):
    """All operations of a discussion, oldest first."""
    return operation_service.list_operations_by_discussion(db, discussion_id)


@router.get("/{operation_id}", response_model=OperationDetailOut)
def get_operation(operation_id: str, db: Session = Depends(get_db)):
    """Fetch an operation with its parent, children and discussion."""
    operation = operation_service.get_operation(db, operation_id)
    if operation is None:
        raise NotFound("Operation not found")
    return operation


@router.get("/{operation_id}/children", response_model=list[OperationOut])
def list_children(operation_id: str, db: Session = Depends(get_db)):
    """Direct replies to an operation, oldest first."""
    return operation_service.list_children(db, operation_id)


@router.get("/{operation_id}/chain", response_model=ChainOut)
def get_chain(operation_id: str, db: Session = Depends(get_db)):
    """Path from the discussion root to this operation."""
    chain = chain_service.resolve_chain(db, operation_id)
    return ChainOut.model_validate(
        {"discussion": chain[0].discussion, "operations": chain},
        from_attributes=True,
    )
