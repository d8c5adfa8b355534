"""
Evaluation Repositories - Car UX Review Platform
carux/repositories/evaluation_repository.py

Task and category evaluations keyed by (review_id, task_id) and
(review_id, category_id). A write always replaces the whole record.
"""

from typing import List, Optional, Set, Tuple
from uuid import UUID

from carux.models.evaluation import CategoryEvaluation, TaskEvaluation
from carux.repositories.base import BaseRepository


class TaskEvaluationRepository(BaseRepository):
    """Repository for TaskEvaluation rows."""

    TABLE_NAME = "TASK_EVALUATIONS"

    @staticmethod
    def key(review_id: UUID, task_id: UUID) -> Tuple[UUID, UUID]:
        return (review_id, task_id)

    def upsert(self, evaluation: TaskEvaluation) -> TaskEvaluation:
        """
        Store `evaluation` as the full record for its key.

        created_at survives from the first write; every other column is
        taken from `evaluation`, including unset ones.
        """
        key = self.key(evaluation.review_id, evaluation.task_id)
        with self.transaction() as table:
            existing = table.get(key)
            now = self.now()
            stored = evaluation.model_copy(
                update={
                    "created_at": existing["created_at"] if existing else now,
                    "updated_at": now,
                }
            )
            table[key] = stored.model_dump()
        return stored

    def get(self, review_id: UUID, task_id: UUID) -> Optional[TaskEvaluation]:
        row = self.get_row(self.key(review_id, task_id))
        return TaskEvaluation.model_validate(row) if row else None

    def get_by_review(self, review_id: UUID) -> List[TaskEvaluation]:
        return [TaskEvaluation.model_validate(r) for r in self.find_rows(review_id=review_id)]

    def get_completed_task_ids(self, review_id: UUID) -> Set[UUID]:
        return {r["task_id"] for r in self.find_rows(review_id=review_id)}


class CategoryEvaluationRepository(BaseRepository):
    """Repository for CategoryEvaluation rows."""

    TABLE_NAME = "CATEGORY_EVALUATIONS"

    @staticmethod
    def key(review_id: UUID, category_id: UUID) -> Tuple[UUID, UUID]:
        return (review_id, category_id)

    def upsert(self, evaluation: CategoryEvaluation) -> CategoryEvaluation:
        key = self.key(evaluation.review_id, evaluation.category_id)
        with self.transaction() as table:
            existing = table.get(key)
            now = self.now()
            stored = evaluation.model_copy(
                update={
                    "created_at": existing["created_at"] if existing else now,
                    "updated_at": now,
                }
            )
            table[key] = stored.model_dump()
        return stored

    def get(self, review_id: UUID, category_id: UUID) -> Optional[CategoryEvaluation]:
        row = self.get_row(self.key(review_id, category_id))
        return CategoryEvaluation.model_validate(row) if row else None

    def get_by_review(self, review_id: UUID) -> List[CategoryEvaluation]:
        return [
            CategoryEvaluation.model_validate(r) for r in self.find_rows(review_id=review_id)
        ]

    def get_completed_category_ids(self, review_id: UUID) -> Set[UUID]:
        return {r["category_id"] for r in self.find_rows(review_id=review_id)}
