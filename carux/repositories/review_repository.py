"""
Review Repository - Car UX Review Platform
carux/repositories/review_repository.py

Data access layer for Review records.
"""

import threading
from typing import Any, Dict, List, Optional
from uuid import UUID

from carux.core.exceptions import EntityNotFoundException
from carux.models.enumerations import ReviewStatus
from carux.models.review import Review
from carux.repositories.base import BaseRepository, InMemoryDatabase


class ReviewRepository(BaseRepository):
    """Repository for Review CRUD operations."""

    TABLE_NAME = "REVIEWS"

    def __init__(self, db: InMemoryDatabase):
        super().__init__(db)
        self._row_locks: Dict[UUID, threading.RLock] = {}
        self._row_locks_guard = threading.Lock()

    def lock(self, review_id: UUID) -> threading.RLock:
        """
        Per-review lock for check-then-write sequences.

        Locks are registered when a review is created. An unknown id gets
        a throwaway lock; the caller's lookup then raises not-found.
        """
        with self._row_locks_guard:
            lock = self._row_locks.get(review_id)
        return lock if lock is not None else threading.RLock()

    def create(self, review: Review) -> Review:
        with self._row_locks_guard:
            self._row_locks[review.id] = threading.RLock()
        self.put_row(review.id, review.model_dump())
        return review

    def exists_for_version(self, version_id: UUID) -> bool:
        """True when any review is bound to the taxonomy version."""
        return bool(self.find_rows(taxonomy_version_id=version_id))

    def get_by_id(self, review_id: UUID) -> Optional[Review]:
        """
        Retrieve a review by ID.

        Returns:
            Review or None if not found
        """
        row = self.get_row(review_id)
        return Review.model_validate(row) if row else None

    def get_all(
        self,
        reviewer_id: Optional[UUID] = None,
        status: Optional[ReviewStatus] = None,
    ) -> List[Review]:
        """
        Retrieve reviews with optional filters, newest first.

        Args:
            reviewer_id: Optional filter by reviewer
            status: Optional filter by status
        """
        filters: Dict[str, Any] = {}
        if reviewer_id:
            filters["reviewer_id"] = reviewer_id
        if status:
            filters["status"] = status

        reviews = [Review.model_validate(r) for r in self.find_rows(**filters)]
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    def update(self, review_id: UUID, changes: Dict[str, Any]) -> Review:
        """
        Write column changes and bump updated_at.

        Raises:
            EntityNotFoundException: unknown review_id
        """
        with self.transaction() as table:
            row = table.get(review_id)
            if row is None:
                raise EntityNotFoundException("Review", review_id)
            updated = Review.model_validate({**row, **changes, "updated_at": self.now()})
            table[review_id] = updated.model_dump()
        return updated
