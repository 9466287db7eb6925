"""Actor checks applied before any mutating call reaches the tree services."""
import logging

from sqlalchemy.orm import Session

from app.errors import Forbidden, NotFound
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


def require_registered_user(db: Session, user_id: str) -> User:
    """Return the acting user, rejecting unknown ids and guests."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    if user.role == UserRole.guest:
        logger.warning("Guest user %s attempted a write", user_id)
        raise Forbidden("Access denied. Only registered users can perform this action.")
    return user
