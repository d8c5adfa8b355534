"""
Scoring Config Repository - Car UX Review Platform
carux/repositories/scoring_config_repository.py

Single live ScoringConfig row. Read-modify-write happens under the table
lock so concurrent admin updates are applied one at a time.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from carux.core.validation import parse_payload
from carux.models.scoring_config import ScoringConfig
from carux.repositories.base import BaseRepository

_SINGLETON_KEY = "live"


class ScoringConfigRepository(BaseRepository):
    """Repository for the scoring weight singleton."""

    TABLE_NAME = "SCORING_CONFIG"

    def get(self) -> ScoringConfig:
        """Return the live config, seeding it from settings defaults on first use."""
        with self.transaction() as table:
            row = table.get(_SINGLETON_KEY)
            if row is None:
                config = ScoringConfig(updated_at=self.now())
                table[_SINGLETON_KEY] = config.model_dump()
                return config
            return ScoringConfig.model_validate(row)

    def update(self, changes: Dict[str, Any], updated_by: Optional[UUID] = None) -> ScoringConfig:
        """
        Apply column changes to the live config atomically.

        Args:
            changes: Mapping of ScoringConfig field → new value.
            updated_by: User making the change; kept as-is when None.

        Returns:
            The updated config.

        Raises:
            InvalidInputException: the merged config would leave a "No"
                                   answer or a category base unscorable.
                                   Nothing is written.
        """
        with self.transaction() as table:
            current = table.get(_SINGLETON_KEY) or ScoringConfig().model_dump()
            merged = {**current, **changes, "updated_at": self.now()}
            if updated_by is not None:
                merged["updated_by"] = updated_by
            config = parse_payload(ScoringConfig, merged)
            table[_SINGLETON_KEY] = config.model_dump()
        return config
