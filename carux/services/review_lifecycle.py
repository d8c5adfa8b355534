"""
Review Lifecycle - Car UX Review Platform
carux/services/review_lifecycle.py

Two independent axes on a Review:

    status        pending → in_progress → completed   (forward only, explicit calls)
    is_published  False ⇄ True

A published review is frozen: the only accepted mutation is
is_published = False. The guard check and the write happen under the
review's lock, so a rejected call never leaves a partial change behind.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog

from carux.core.exceptions import (
    EntityNotFoundException,
    InvalidStatusTransitionException,
    ReviewPublishedException,
)
from carux.core.validation import parse_payload
from carux.models.enumerations import ReviewStatus
from carux.models.review import Review, ReviewCreate, ReviewUpdate
from carux.repositories.review_repository import ReviewRepository
from carux.repositories.version_repository import TaxonomyVersionRepository
from carux.services.cache import invalidate_report

logger = structlog.get_logger(__name__)


class ReviewLifecycleService:
    """Creates reviews and guards every change to them."""

    def __init__(self, reviews: ReviewRepository, versions: TaxonomyVersionRepository):
        self.reviews = reviews
        self.versions = versions

    def create_review(self, payload: Any, created_by: Optional[UUID] = None) -> Review:
        """
        Create a pending, unpublished review bound to the active taxonomy version.

        Raises:
            InvalidInputException: malformed payload or end_date < start_date.
            EntityNotFoundException: no taxonomy version exists yet.
        """
        data = parse_payload(ReviewCreate, payload)
        version = self.versions.get_active()
        if version is None:
            raise EntityNotFoundException("TaxonomyVersion", "active")

        review = self.reviews.create(
            Review(
                car_id=data.car_id,
                reviewer_id=data.reviewer_id,
                start_date=data.start_date,
                end_date=data.end_date,
                taxonomy_version_id=version.id,
                last_modified_by_id=created_by,
            )
        )
        logger.info(
            "review_created",
            review_id=str(review.id),
            car_id=str(review.car_id),
            reviewer_id=str(review.reviewer_id),
            taxonomy_version_id=str(version.id),
        )
        return review

    def get_review(self, review_id: UUID) -> Review:
        review = self.reviews.get_by_id(review_id)
        if review is None:
            raise EntityNotFoundException("Review", review_id)
        return review

    def list_reviews(
        self,
        reviewer_id: Optional[UUID] = None,
        status: Optional[ReviewStatus] = None,
    ) -> List[Review]:
        return self.reviews.get_all(reviewer_id=reviewer_id, status=status)

    def update_status(
        self, review_id: UUID, status: ReviewStatus, modified_by: Optional[UUID] = None
    ) -> Review:
        return self.update(review_id, ReviewUpdate(status=status), modified_by)

    def set_published(
        self, review_id: UUID, published: bool, modified_by: Optional[UUID] = None
    ) -> Review:
        return self.update(review_id, ReviewUpdate(is_published=published), modified_by)

    def update(self, review_id: UUID, payload: Any, modified_by: Optional[UUID] = None) -> Review:
        """
        Apply a partial ReviewUpdate.

        Raises:
            EntityNotFoundException: unknown review.
            ReviewPublishedException: the review is published and the
                                      update is anything other than
                                      is_published = False.
            InvalidStatusTransitionException: status would move backwards.
        """
        update = parse_payload(ReviewUpdate, payload)
        requested = update.model_dump(exclude_none=True)

        with self.reviews.lock(review_id):
            review = self.get_review(review_id)
            if not requested:
                return review

            if review.is_published and requested != {"is_published": False}:
                logger.warning(
                    "review_mutation_rejected",
                    review_id=str(review_id),
                    reason="published",
                    requested=sorted(requested),
                )
                raise ReviewPublishedException(review_id)

            changes: Dict[str, Any] = {}
            if "status" in requested and update.status is not review.status:
                if update.status.rank < review.status.rank:
                    logger.warning(
                        "review_mutation_rejected",
                        review_id=str(review_id),
                        reason="backwards_status",
                        current=review.status.value,
                        requested=update.status.value,
                    )
                    raise InvalidStatusTransitionException(
                        review_id, review.status.value, update.status.value
                    )
                changes["status"] = update.status
            if "is_published" in requested and update.is_published != review.is_published:
                changes["is_published"] = update.is_published

            if not changes:
                return review

            changes["last_modified_by_id"] = modified_by
            updated = self.reviews.update(review_id, changes)

        invalidate_report(review_id)
        logger.info(
            "review_updated",
            review_id=str(review_id),
            status=updated.status.value,
            is_published=updated.is_published,
            modified_by=str(modified_by) if modified_by else None,
        )
        return updated

    def require_editable(self, review_id: UUID) -> Review:
        """
        Return the review if its evaluation data may still change.

        Callers hold `self.reviews.lock(review_id)` across this check and
        their write.
        """
        review = self.get_review(review_id)
        if review.is_published:
            logger.warning(
                "review_mutation_rejected", review_id=str(review_id), reason="published"
            )
            raise ReviewPublishedException(review_id)
        return review
