"""
Core Package - Car UX Review Platform
carux/core/__init__.py

Core infrastructure: dependencies, exceptions, logging.
"""

from carux.core.exceptions import (
    ConflictException,
    EntityNotFoundException,
    InvalidInputException,
    InvalidStatusTransitionException,
    RepositoryException,
    ReviewPlatformException,
    ReviewPublishedException,
)

__all__ = [
    # Exceptions
    "ConflictException",
    "EntityNotFoundException",
    "InvalidInputException",
    "InvalidStatusTransitionException",
    "RepositoryException",
    "ReviewPlatformException",
    "ReviewPublishedException",
]
