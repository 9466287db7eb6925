"""User API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserOut
from app.schemas.discussion import DiscussionOut
from app.schemas.operation import OperationOut
from app.services import discussion_service, operation_service

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a user record (registered or guest)."""
    existing = db.query(User).filter(User.username == payload.username).first()
    if existing:
        raise HTTPException(status_code=409, detail="Username is already taken")
    user = User(**payload.model_dump())
    db.add(user)
    try:
        db.commit()
    except sa_exc.IntegrityError:
        # Duplicate email, or a username registered concurrently
        db.rollback()
        logger.warning("Rejected registration of %s: username or email taken", payload.username)
        raise HTTPException(status_code=409, detail="Username or email is already taken") from None
    db.refresh(user)
    logger.info("Created user %s (%s, %s)", user.user_id, user.username, user.role.value)
    return user


@router.get("/", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    """List all users."""
    return db.query(User).all()


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Fetch a single user by ID."""
    return _get_user_or_404(db, user_id)


@router.get("/{user_id}/discussions", response_model=list[DiscussionOut])
def list_user_discussions(user_id: str, db: Session = Depends(get_db)):
    """Discussions started by a user, newest first."""
    _get_user_or_404(db, user_id)
    return discussion_service.list_discussions(db, author_id=user_id)


@router.get("/{user_id}/operations", response_model=list[OperationOut])
def list_user_operations(user_id: str, db: Session = Depends(get_db)):
    """Operations authored by a user, newest first."""
    _get_user_or_404(db, user_id)
    return operation_service.list_operations_by_author(db, user_id)
