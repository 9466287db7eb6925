"""Domain exceptions raised by the tree services.

Routers never catch these; ``app.main`` maps each class to an HTTP status.
"""
from typing import Any, Optional


class TreeError(Exception):
    """Base class for computation-tree errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(TreeError):
    """Malformed or missing input."""


class NotFound(TreeError):
    """Referenced discussion, operation or user does not exist."""


class Forbidden(TreeError):
    """Actor is not allowed to perform the action."""


class Conflict(TreeError):
    """A starting number is already taken by another discussion."""

    def __init__(self, message: str, existing: Optional[Any] = None) -> None:
        super().__init__(message)
        self.existing = existing


class InvalidReference(TreeError):
    """Parent operation belongs to a different discussion."""


class InvalidOperation(TreeError):
    """The arithmetic cannot produce a storable result."""


class IntegrityError(TreeError):
    """Stored tree violates a structural guarantee. Not a client error."""
