"""
Taxonomy Version Repository - Car UX Review Platform
carux/repositories/version_repository.py

Holds the "exactly one active version" invariant. Every write that
touches version state runs inside the table transaction, so concurrent
activations are serialized and never leave two versions active.
"""

from typing import List, Optional
from uuid import UUID

import structlog

from carux.core.exceptions import ConflictException, EntityNotFoundException
from carux.models.enumerations import VersionState
from carux.models.taxonomy import TaxonomyVersion, TaxonomyVersionCreate
from carux.repositories.base import BaseRepository

logger = structlog.get_logger(__name__)


class TaxonomyVersionRepository(BaseRepository):
    """Repository for taxonomy version snapshots."""

    TABLE_NAME = "CUJ_DATABASE_VERSIONS"

    def create(self, payload: TaxonomyVersionCreate, staged: bool = False) -> TaxonomyVersion:
        """
        Insert a new version.

        The first version ever created is always active. Any version
        created with `activate=True` becomes the only active one.
        A staged version is never active and never returned by
        get_active() until finish_staging() is called.
        """
        with self.transaction() as table:
            activate = not staged and (payload.activate or not self._has_visible(table))
            if activate:
                self._deactivate_all(table)
            if staged:
                state = VersionState.STAGED
            else:
                state = VersionState.ACTIVE if activate else VersionState.INACTIVE

            version = TaxonomyVersion(
                label=payload.label,
                source_type=payload.source_type,
                source_file_name=payload.source_file_name,
                created_by=payload.created_by,
                state=state,
                created_at=self.now(),
            )
            table[version.id] = version.model_dump()

        logger.info(
            "taxonomy_version_created",
            version_id=str(version.id),
            label=version.label,
            active=version.is_active,
        )
        return version

    def set_active(self, version_id: UUID) -> TaxonomyVersion:
        """
        Deactivate every version, then activate `version_id`.

        Raises:
            EntityNotFoundException: unknown version_id.
            ConflictException: the version is still being imported.
        """
        with self.transaction() as table:
            if version_id not in table:
                raise EntityNotFoundException("TaxonomyVersion", version_id)
            if table[version_id]["state"] is VersionState.STAGED:
                raise ConflictException(f"TaxonomyVersion with ID {version_id} is still being imported")
            self._deactivate_all(table)
            table[version_id]["state"] = VersionState.ACTIVE
            row = dict(table[version_id])

        logger.info("taxonomy_version_activated", version_id=str(version_id))
        return TaxonomyVersion.model_validate(row)

    def finish_staging(self, version_id: UUID, activate: bool) -> TaxonomyVersion:
        """
        Make a staged version visible.

        It becomes active when `activate` is set or when no other version
        is active yet; otherwise it is left inactive.
        """
        with self.transaction() as table:
            if version_id not in table:
                raise EntityNotFoundException("TaxonomyVersion", version_id)
            has_active = any(r["state"] is VersionState.ACTIVE for r in table.values())
            if activate or not has_active:
                self._deactivate_all(table)
                table[version_id]["state"] = VersionState.ACTIVE
            else:
                table[version_id]["state"] = VersionState.INACTIVE
            row = dict(table[version_id])

        logger.info("taxonomy_version_staged", version_id=str(version_id), active=row["state"].value)
        return TaxonomyVersion.model_validate(row)

    def get_active(self) -> Optional[TaxonomyVersion]:
        """
        Return the active version.

        If no row is flagged active, fall back to the most recently
        created version that is not staged. None when there is no such
        version.
        """
        with self.transaction() as table:
            rows = [r for r in table.values() if r["state"] is not VersionState.STAGED]
            if not rows:
                return None
            for row in rows:
                if row["state"] is VersionState.ACTIVE:
                    return TaxonomyVersion.model_validate(row)
            newest = max(rows, key=lambda r: r["created_at"])

        logger.warning("taxonomy_no_active_version_flagged", fallback_id=str(newest["id"]))
        return TaxonomyVersion.model_validate(newest)

    def get_by_id(self, version_id: UUID) -> Optional[TaxonomyVersion]:
        row = self.get_row(version_id)
        return TaxonomyVersion.model_validate(row) if row else None

    def get_all(self) -> List[TaxonomyVersion]:
        """All versions, newest first."""
        versions = [TaxonomyVersion.model_validate(r) for r in self.list_rows()]
        return sorted(versions, key=lambda v: v.created_at, reverse=True)

    @staticmethod
    def _has_visible(table) -> bool:
        return any(row["state"] is not VersionState.STAGED for row in table.values())

    @staticmethod
    def _deactivate_all(table) -> None:
        for row in table.values():
            if row["state"] is VersionState.ACTIVE:
                row["state"] = VersionState.INACTIVE
