"""
Taxonomy Repositories - Car UX Review Platform
carux/repositories/taxonomy_repository.py

Categories, journeys and tasks. Every row carries the id of the taxonomy
version it belongs to, so each version is a separate snapshot.
"""

from typing import List, Optional
from uuid import UUID

from carux.models.taxonomy import Category, Journey, Task
from carux.repositories.base import BaseRepository


class CategoryRepository(BaseRepository):
    """Repository for Category rows."""

    TABLE_NAME = "CUJ_CATEGORIES"

    def create(self, category: Category) -> Category:
        self.put_row(category.id, category.model_dump())
        return category

    def get_by_id(self, category_id: UUID) -> Optional[Category]:
        row = self.get_row(category_id)
        return Category.model_validate(row) if row else None

    def get_by_version(self, version_id: UUID) -> List[Category]:
        rows = self.find_rows(version_id=version_id)
        return sorted(
            (Category.model_validate(r) for r in rows), key=lambda c: c.name.lower()
        )


class JourneyRepository(BaseRepository):
    """Repository for Journey (CUJ) rows."""

    TABLE_NAME = "CUJS"

    def create(self, journey: Journey) -> Journey:
        self.put_row(journey.id, journey.model_dump())
        return journey

    def get_by_id(self, journey_id: UUID) -> Optional[Journey]:
        row = self.get_row(journey_id)
        return Journey.model_validate(row) if row else None

    def get_by_category(self, category_id: UUID) -> List[Journey]:
        rows = self.find_rows(category_id=category_id)
        return sorted(
            (Journey.model_validate(r) for r in rows), key=lambda j: j.name.lower()
        )

    def get_by_version(self, version_id: UUID) -> List[Journey]:
        return [Journey.model_validate(r) for r in self.find_rows(version_id=version_id)]


class TaskRepository(BaseRepository):
    """Repository for Task rows."""

    TABLE_NAME = "TASKS"

    def create(self, task: Task) -> Task:
        self.put_row(task.id, task.model_dump())
        return task

    def get_by_id(self, task_id: UUID) -> Optional[Task]:
        row = self.get_row(task_id)
        return Task.model_validate(row) if row else None

    def get_by_version(self, version_id: UUID) -> List[Task]:
        return [Task.model_validate(r) for r in self.find_rows(version_id=version_id)]
