"""
Taxonomy Service - Car UX Review Platform
carux/services/taxonomy_service.py

TaxonomyStore: versioned Category → Journey → Task reference data.

Reviews resolve tasks against the version they were bound to, so a new
import or an activation switch never changes an in-flight review. Once a
review is bound to a version, that version's tree is frozen.
"""

import threading
from datetime import datetime, timezone
from typing import Any, List, Optional
from uuid import UUID

import structlog

from carux.core.exceptions import ConflictException, EntityNotFoundException
from carux.core.validation import parse_payload
from carux.models.taxonomy import (
    Category,
    Journey,
    SyncStatus,
    Task,
    TaskWithCategory,
    TaxonomyImport,
    TaxonomyVersion,
    TaxonomyVersionCreate,
)
from carux.repositories.review_repository import ReviewRepository
from carux.repositories.taxonomy_repository import (
    CategoryRepository,
    JourneyRepository,
    TaskRepository,
)
from carux.repositories.version_repository import TaxonomyVersionRepository

logger = structlog.get_logger(__name__)


class TaxonomyService:
    """Versioned taxonomy store."""

    def __init__(
        self,
        versions: TaxonomyVersionRepository,
        categories: CategoryRepository,
        journeys: JourneyRepository,
        tasks: TaskRepository,
        reviews: ReviewRepository,
    ):
        self.versions = versions
        self.categories = categories
        self.journeys = journeys
        self.tasks = tasks
        self.reviews = reviews
        self._sync_lock = threading.Lock()
        self._sync_status = SyncStatus()

    # ------------------------------------------------------------------
    # Versions
    # ------------------------------------------------------------------

    def create_version(self, payload: Any) -> TaxonomyVersion:
        """Register a version; see TaxonomyVersionRepository.create for activation rules."""
        return self.versions.create(parse_payload(TaxonomyVersionCreate, payload))

    def set_active_version(self, version_id: UUID) -> TaxonomyVersion:
        return self.versions.set_active(version_id)

    def get_active_version(self) -> Optional[TaxonomyVersion]:
        return self.versions.get_active()

    def get_version(self, version_id: UUID) -> TaxonomyVersion:
        version = self.versions.get_by_id(version_id)
        if version is None:
            raise EntityNotFoundException("TaxonomyVersion", version_id)
        return version

    def list_versions(self) -> List[TaxonomyVersion]:
        return self.versions.get_all()

    # ------------------------------------------------------------------
    # Snapshot contents
    # ------------------------------------------------------------------

    def add_category(self, version_id: UUID, name: str, description: Optional[str] = None,
                     icon: str = "category") -> Category:
        self.require_unbound(version_id)
        return self.categories.create(
            Category(version_id=version_id, name=name, description=description, icon=icon)
        )

    def add_journey(self, category_id: UUID, name: str, description: Optional[str] = None) -> Journey:
        category = self.get_category(category_id)
        self.require_unbound(category.version_id)
        return self.journeys.create(
            Journey(
                version_id=category.version_id,
                category_id=category.id,
                name=name,
                description=description,
            )
        )

    def add_task(self, journey_id: UUID, name: str, expected_outcome: str,
                 prerequisites: Optional[str] = None) -> Task:
        journey = self.journeys.get_by_id(journey_id)
        if journey is None:
            raise EntityNotFoundException("Journey", journey_id)
        self.require_unbound(journey.version_id)
        return self.tasks.create(
            Task(
                version_id=journey.version_id,
                journey_id=journey.id,
                name=name,
                prerequisites=prerequisites,
                expected_outcome=expected_outcome,
            )
        )

    def require_unbound(self, version_id: UUID) -> TaxonomyVersion:
        """
        Return the version if its tree may still be edited.

        Raises:
            EntityNotFoundException: unknown version.
            ConflictException: a review is already bound to the version.
        """
        version = self.get_version(version_id)
        if self.reviews.exists_for_version(version_id):
            logger.warning("taxonomy_edit_rejected", version_id=str(version_id), reason="bound")
            raise ConflictException(
                f"TaxonomyVersion with ID {version_id} is in use by a review and cannot be edited"
            )
        return version

    def get_category(self, category_id: UUID) -> Category:
        category = self.categories.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundException("Category", category_id)
        return category

    def list_categories(self, version_id: UUID) -> List[Category]:
        self.get_version(version_id)
        return self.categories.get_by_version(version_id)

    def list_journeys(self, category_id: UUID) -> List[Journey]:
        self.get_category(category_id)
        return self.journeys.get_by_category(category_id)

    def list_tasks(self, version_id: UUID) -> List[TaskWithCategory]:
        """Every task in a version with its journey and category."""
        self.get_version(version_id)
        journeys = {j.id: j for j in self.journeys.get_by_version(version_id)}
        categories = {c.id: c for c in self.categories.get_by_version(version_id)}
        resolved = []
        for task in self.tasks.get_by_version(version_id):
            journey = journeys.get(task.journey_id)
            category = categories.get(journey.category_id) if journey else None
            if journey is None or category is None:
                logger.warning("taxonomy_orphan_task", task_id=str(task.id), version_id=str(version_id))
                continue
            resolved.append(TaskWithCategory(task=task, journey=journey, category=category))
        return sorted(
            resolved,
            key=lambda t: (t.category.name.lower(), t.journey.name.lower(), t.task.name.lower()),
        )

    def resolve_task_chain(self, version_id: UUID, task_id: UUID) -> TaskWithCategory:
        """
        Resolve Task → Journey → Category inside one version.

        Raises:
            EntityNotFoundException: the task is unknown or belongs to a
                                     different version.
        """
        task = self.tasks.get_by_id(task_id)
        if task is None or task.version_id != version_id:
            raise EntityNotFoundException("Task", task_id)
        journey = self.journeys.get_by_id(task.journey_id)
        if journey is None:
            raise EntityNotFoundException("Journey", task.journey_id)
        category = self.get_category(journey.category_id)
        return TaskWithCategory(task=task, journey=journey, category=category)

    def require_category_in_version(self, version_id: UUID, category_id: UUID) -> Category:
        category = self.categories.get_by_id(category_id)
        if category is None or category.version_id != version_id:
            raise EntityNotFoundException("Category", category_id)
        return category

    # ------------------------------------------------------------------
    # Import ("CUJ sync")
    # ------------------------------------------------------------------

    def import_taxonomy(self, payload: Any) -> TaxonomyVersion:
        """
        Create a new version populated with a full category tree.

        Imported versions become active unless the payload explicitly sets
        `activate` to False. The version stays staged while its tree is
        written, so get_active() and review creation never see it with a
        partial taxonomy, even when it is the first version.
        """
        data = parse_payload(TaxonomyImport, payload)
        activate = data.version.activate if "activate" in data.version.model_fields_set else True

        with self._sync_lock:
            version = self.versions.create(data.version, staged=True)
            task_count = 0
            for cat in data.categories:
                category = self.categories.create(
                    Category(version_id=version.id, name=cat.name,
                             description=cat.description, icon=cat.icon)
                )
                for jr in cat.journeys:
                    journey = self.journeys.create(
                        Journey(version_id=version.id, category_id=category.id,
                                name=jr.name, description=jr.description)
                    )
                    for tk in jr.tasks:
                        self.tasks.create(
                            Task(version_id=version.id, journey_id=journey.id,
                                 name=tk.name, prerequisites=tk.prerequisites,
                                 expected_outcome=tk.expected_outcome)
                        )
                        task_count += 1

            version = self.versions.finish_staging(version.id, activate)

            self._sync_status = SyncStatus(
                last_sync=datetime.now(timezone.utc),
                status="up_to_date",
                version_id=version.id,
            )

        logger.info(
            "taxonomy_imported",
            version_id=str(version.id),
            label=version.label,
            categories=len(data.categories),
            tasks=task_count,
            active=version.is_active,
        )
        return version

    def get_sync_status(self) -> SyncStatus:
        return self._sync_status.model_copy()
