"""
Evaluation Service - Car UX Review Platform
carux/services/evaluation_service.py

EvaluationStore: task and category evaluations of one review.

A write replaces the whole record for its (review, task) or
(review, category) key. Existence of a record is what "completed"
means; there is no separate completion flag.
"""

from decimal import Decimal
from typing import Any, List, Optional, Set
from uuid import UUID

import structlog

from carux.core.validation import parse_payload
from carux.models.enumerations import ReviewStatus
from carux.models.evaluation import (
    CategoryEvaluation,
    CategoryEvaluationInput,
    TaskEvaluation,
    TaskEvaluationInput,
)
from carux.models.review import CompletionStatus, Review
from carux.repositories.evaluation_repository import (
    CategoryEvaluationRepository,
    TaskEvaluationRepository,
)
from carux.scoring.utils import quantize
from carux.services.cache import invalidate_report
from carux.services.review_lifecycle import ReviewLifecycleService
from carux.services.taxonomy_service import TaxonomyService

logger = structlog.get_logger(__name__)


class EvaluationService:
    """Reads and writes evaluations against a review's bound taxonomy version."""

    def __init__(
        self,
        task_evaluations: TaskEvaluationRepository,
        category_evaluations: CategoryEvaluationRepository,
        lifecycle: ReviewLifecycleService,
        taxonomy: TaxonomyService,
    ):
        self.task_evaluations = task_evaluations
        self.category_evaluations = category_evaluations
        self.lifecycle = lifecycle
        self.taxonomy = taxonomy

    # ------------------------------------------------------------------
    # Task evaluations
    # ------------------------------------------------------------------

    def save_task_evaluation(self, review_id: UUID, task_id: UUID, payload: Any) -> TaskEvaluation:
        """
        Store the full evaluation of one task.

        Raises:
            InvalidInputException: scores outside 1-4 or unknown fields.
            EntityNotFoundException: unknown review, or task not in the
                                     review's taxonomy version.
            ReviewPublishedException: the review is published.
        """
        data = parse_payload(TaskEvaluationInput, payload)
        with self.lifecycle.reviews.lock(review_id):
            review = self.lifecycle.require_editable(review_id)
            self.taxonomy.resolve_task_chain(review.taxonomy_version_id, task_id)
            stored = self.task_evaluations.upsert(
                TaskEvaluation(review_id=review_id, task_id=task_id, **data.model_dump())
            )

        invalidate_report(review_id)
        logger.info(
            "task_evaluation_saved",
            review_id=str(review_id),
            task_id=str(task_id),
            doable=stored.doable,
            usability_score=stored.usability_score,
            visuals_score=stored.visuals_score,
        )
        return stored

    def get_task_evaluation(self, review_id: UUID, task_id: UUID) -> Optional[TaskEvaluation]:
        self.lifecycle.get_review(review_id)
        return self.task_evaluations.get(review_id, task_id)

    def list_task_evaluations(self, review_id: UUID) -> List[TaskEvaluation]:
        self.lifecycle.get_review(review_id)
        return self.task_evaluations.get_by_review(review_id)

    def get_completed_task_ids(self, review_id: UUID) -> Set[UUID]:
        self.lifecycle.get_review(review_id)
        return self.task_evaluations.get_completed_task_ids(review_id)

    # ------------------------------------------------------------------
    # Category evaluations
    # ------------------------------------------------------------------

    def save_category_evaluation(
        self, review_id: UUID, category_id: UUID, payload: Any
    ) -> CategoryEvaluation:
        """Store the full category-wide evaluation; same guards as tasks."""
        data = parse_payload(CategoryEvaluationInput, payload)
        with self.lifecycle.reviews.lock(review_id):
            review = self.lifecycle.require_editable(review_id)
            self.taxonomy.require_category_in_version(review.taxonomy_version_id, category_id)
            stored = self.category_evaluations.upsert(
                CategoryEvaluation(review_id=review_id, category_id=category_id, **data.model_dump())
            )

        invalidate_report(review_id)
        logger.info(
            "category_evaluation_saved",
            review_id=str(review_id),
            category_id=str(category_id),
            responsiveness_score=stored.responsiveness_score,
            writing_score=stored.writing_score,
            emotional_score=stored.emotional_score,
        )
        return stored

    def get_category_evaluation(
        self, review_id: UUID, category_id: UUID
    ) -> Optional[CategoryEvaluation]:
        self.lifecycle.get_review(review_id)
        return self.category_evaluations.get(review_id, category_id)

    def list_category_evaluations(self, review_id: UUID) -> List[CategoryEvaluation]:
        self.lifecycle.get_review(review_id)
        return self.category_evaluations.get_by_review(review_id)

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def completion_status(self, review_id: UUID) -> CompletionStatus:
        """
        Completed vs. total tasks and categories of the bound version.

        fraction = completed tasks / tasks in the version (0 when the
        version has no tasks). Reaching 1.0 never changes review status.
        """
        return self._completion_for(self.lifecycle.get_review(review_id))

    def batch_completion_status(
        self,
        reviewer_id: Optional[UUID] = None,
        status: Optional[ReviewStatus] = None,
    ) -> List[CompletionStatus]:
        """Completion status of every review, optionally for one reviewer."""
        return [
            self._completion_for(review)
            for review in self.lifecycle.list_reviews(reviewer_id=reviewer_id, status=status)
        ]

    def _completion_for(self, review: Review) -> CompletionStatus:
        version_id = review.taxonomy_version_id
        task_ids = {t.task.id for t in self.taxonomy.list_tasks(version_id)}
        category_ids = {c.id for c in self.taxonomy.list_categories(version_id)}

        completed_tasks = len(self.task_evaluations.get_completed_task_ids(review.id) & task_ids)
        completed_categories = len(
            self.category_evaluations.get_completed_category_ids(review.id) & category_ids
        )

        fraction = 0.0
        if task_ids:
            fraction = float(quantize(Decimal(completed_tasks) / Decimal(len(task_ids))))

        return CompletionStatus(
            review_id=review.id,
            completed_tasks=completed_tasks,
            total_tasks=len(task_ids),
            completed_categories=completed_categories,
            total_categories=len(category_ids),
            fraction=fraction,
        )
