"""
Scoring Config Service - Car UX Review Platform
carux/services/scoring_config_service.py

ScoringConfigStore: the admin-mutable weight singleton.

Task-level and category-level weights are updated separately. Any change
invalidates every cached report, because all reports are scored with the
live weights.
"""

from typing import Any, Dict, Optional
from uuid import UUID

import structlog

from carux.core.validation import parse_payload
from carux.models.scoring_config import (
    CategoryWeightsUpdate,
    ScoringConfig,
    TaskWeightsUpdate,
)
from carux.repositories.scoring_config_repository import ScoringConfigRepository
from carux.services.cache import invalidate_all_reports

logger = structlog.get_logger(__name__)

# update-model field → ScoringConfig column
TASK_WEIGHT_COLUMNS: Dict[str, str] = {
    "doable_weight": "task_doable_weight",
    "usability_weight": "task_usability_weight",
    "visuals_weight": "task_visuals_weight",
}

CATEGORY_WEIGHT_COLUMNS: Dict[str, str] = {
    "tasks_weight": "category_tasks_weight",
    "responsiveness_weight": "category_responsiveness_weight",
    "writing_weight": "category_writing_weight",
    "emotional_weight": "category_emotional_weight",
}


class ScoringConfigService:
    """Read and update the live ScoringConfig."""

    def __init__(self, repository: ScoringConfigRepository):
        self.repository = repository

    def get_config(self) -> ScoringConfig:
        return self.repository.get()

    def update_task_weights(self, payload: Any, updated_by: Optional[UUID] = None) -> ScoringConfig:
        """
        Partially update doable / usability / visuals weights.

        Raises:
            InvalidInputException: unknown keys or values outside 0-100.
        """
        update = parse_payload(TaskWeightsUpdate, payload)
        return self._apply(update.model_dump(exclude_none=True), TASK_WEIGHT_COLUMNS, updated_by, "task")

    def update_category_weights(self, payload: Any, updated_by: Optional[UUID] = None) -> ScoringConfig:
        """
        Partially update tasks / responsiveness / writing / emotional weights.

        Raises:
            InvalidInputException: unknown keys or values outside 0-100.
        """
        update = parse_payload(CategoryWeightsUpdate, payload)
        return self._apply(
            update.model_dump(exclude_none=True), CATEGORY_WEIGHT_COLUMNS, updated_by, "category"
        )

    def _apply(
        self,
        values: Dict[str, float],
        columns: Dict[str, str],
        updated_by: Optional[UUID],
        level: str,
    ) -> ScoringConfig:
        changes = {columns[name]: value for name, value in values.items()}
        config = self.repository.update(changes, updated_by=updated_by)
        invalidate_all_reports()
        logger.info(
            "scoring_config_updated",
            level=level,
            changes=changes,
            updated_by=str(updated_by) if updated_by else None,
        )
        return config
