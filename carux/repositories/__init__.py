"""
Repositories Package - Car UX Review Platform
carux/repositories/__init__.py

Data access layer over the in-process table store.
"""

from carux.repositories.base import BaseRepository, InMemoryDatabase
from carux.repositories.evaluation_repository import (
    CategoryEvaluationRepository,
    TaskEvaluationRepository,
)
from carux.repositories.report_repository import ReportRepository
from carux.repositories.review_repository import ReviewRepository
from carux.repositories.scoring_config_repository import ScoringConfigRepository
from carux.repositories.taxonomy_repository import (
    CategoryRepository,
    JourneyRepository,
    TaskRepository,
)
from carux.repositories.version_repository import TaxonomyVersionRepository

__all__ = [
    "BaseRepository",
    "InMemoryDatabase",
    "CategoryEvaluationRepository",
    "CategoryRepository",
    "JourneyRepository",
    "ReportRepository",
    "ReviewRepository",
    "ScoringConfigRepository",
    "TaskEvaluationRepository",
    "TaskRepository",
    "TaxonomyVersionRepository",
]
