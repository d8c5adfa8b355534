"""
Dependencies - Car UX Review Platform
carux/core/dependencies.py

Process-wide store instances for FastAPI dependency injection.
Every getter is cached, so all routers share one database and one set
of services.
"""

from functools import lru_cache

from carux.repositories.base import InMemoryDatabase
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
from carux.services.evaluation_service import EvaluationService
from carux.services.report_assembler import ReportAssembler
from carux.services.review_lifecycle import ReviewLifecycleService
from carux.services.scoring_config_service import ScoringConfigService
from carux.services.taxonomy_service import TaxonomyService


@lru_cache()
def get_database() -> InMemoryDatabase:
    """Get cached InMemoryDatabase instance."""
    return InMemoryDatabase()


@lru_cache()
def get_version_repository() -> TaxonomyVersionRepository:
    return TaxonomyVersionRepository(get_database())


@lru_cache()
def get_review_repository() -> ReviewRepository:
    return ReviewRepository(get_database())


@lru_cache()
def get_taxonomy_service() -> TaxonomyService:
    """Get cached TaxonomyService instance."""
    db = get_database()
    return TaxonomyService(
        versions=get_version_repository(),
        categories=CategoryRepository(db),
        journeys=JourneyRepository(db),
        tasks=TaskRepository(db),
        reviews=get_review_repository(),
    )


@lru_cache()
def get_scoring_config_service() -> ScoringConfigService:
    """Get cached ScoringConfigService instance."""
    return ScoringConfigService(ScoringConfigRepository(get_database()))


@lru_cache()
def get_review_lifecycle() -> ReviewLifecycleService:
    """Get cached ReviewLifecycleService instance."""
    return ReviewLifecycleService(get_review_repository(), get_version_repository())


@lru_cache()
def get_evaluation_service() -> EvaluationService:
    """Get cached EvaluationService instance."""
    db = get_database()
    return EvaluationService(
        task_evaluations=TaskEvaluationRepository(db),
        category_evaluations=CategoryEvaluationRepository(db),
        lifecycle=get_review_lifecycle(),
        taxonomy=get_taxonomy_service(),
    )


@lru_cache()
def get_report_assembler() -> ReportAssembler:
    """Get cached ReportAssembler instance."""
    return ReportAssembler(
        lifecycle=get_review_lifecycle(),
        taxonomy=get_taxonomy_service(),
        evaluations=get_evaluation_service(),
        scoring_config=get_scoring_config_service(),
        reports=ReportRepository(get_database()),
    )


def reset_dependencies() -> None:
    """
    Drop every cached instance, starting over with an empty database.

    Useful for testing.
    """
    for getter in (
        get_database,
        get_version_repository,
        get_review_repository,
        get_taxonomy_service,
        get_scoring_config_service,
        get_review_lifecycle,
        get_evaluation_service,
        get_report_assembler,
    ):
        getter.cache_clear()
