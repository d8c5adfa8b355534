"""
Custom Exceptions - Car UX Review Platform
carux/core/exceptions.py

Exception hierarchy shared by repositories, stores and the lifecycle guard.
"""

from typing import Any, Dict, List, Optional


class ReviewPlatformException(Exception):
    """Base exception for all domain errors."""

    pass


class RepositoryException(ReviewPlatformException):
    """Persistence failure."""

    pass


class EntityNotFoundException(ReviewPlatformException):
    """Entity not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class ConflictException(ReviewPlatformException):
    """Requested change conflicts with the current state of a record."""

    def __init__(self, message: str = "Conflicting state"):
        self.message = message
        super().__init__(message)


class ReviewPublishedException(ConflictException):
    """Review is published; only unpublishing is allowed."""

    def __init__(self, review_id: Any):
        self.review_id = review_id
        super().__init__(
            f"Review with ID {review_id} is published and cannot be modified"
        )


class InvalidStatusTransitionException(ConflictException):
    """Review status may only move forward."""

    def __init__(self, review_id: Any, current: str, requested: str):
        self.review_id = review_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Review with ID {review_id} cannot move from '{current}' to '{requested}'"
        )


class InvalidInputException(ReviewPlatformException):
    """Payload failed validation."""

    def __init__(
        self,
        message: str = "Invalid input",
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message
        self.errors = errors or []
        super().__init__(message)
