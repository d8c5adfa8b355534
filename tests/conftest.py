# tests/conftest.py

"""
Pytest Fixtures - Shared stores, seed taxonomy and API client

Every test starts from an empty in-memory database with the report cache
disabled. Seed taxonomy:

- Media:      Playback → "Play a song", "Skip track"
- Navigation: Route planning → "Set destination", "Add a stop"
              Search → "Find charging station"
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from carux.config import settings
from carux.core.dependencies import (
    get_evaluation_service,
    get_report_assembler,
    get_review_lifecycle,
    get_scoring_config_service,
    get_taxonomy_service,
    reset_dependencies,
)
from carux.services.cache import reset_cache


# =============================================================================
# ISOLATION
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_state(monkeypatch):
    """Fresh stores per test; Redis never contacted unless a test opts in."""
    monkeypatch.setattr(settings, "CACHE_ENABLED", False)
    reset_cache()
    reset_dependencies()
    yield
    reset_cache()
    reset_dependencies()


# =============================================================================
# STORE FIXTURES
# =============================================================================

@pytest.fixture
def taxonomy():
    return get_taxonomy_service()


@pytest.fixture
def lifecycle():
    return get_review_lifecycle()


@pytest.fixture
def evaluations():
    return get_evaluation_service()


@pytest.fixture
def scoring_config():
    return get_scoring_config_service()


@pytest.fixture
def assembler():
    return get_report_assembler()


# =============================================================================
# SEED DATA
# =============================================================================

def taxonomy_payload(label="v1.0", **version):
    return {
        "version": {"label": label, "source_type": "json", **version},
        "categories": [
            {
                "name": "Navigation",
                "icon": "map",
                "journeys": [
                    {
                        "name": "Route planning",
                        "tasks": [
                            {"name": "Set destination", "expected_outcome": "Route is shown"},
                            {"name": "Add a stop", "expected_outcome": "Stop is added to the route"},
                        ],
                    },
                    {
                        "name": "Search",
                        "tasks": [
                            {
                                "name": "Find charging station",
                                "prerequisites": "EV model",
                                "expected_outcome": "Nearby stations are listed",
                            },
                        ],
                    },
                ],
            },
            {
                "name": "Media",
                "icon": "music_note",
                "journeys": [
                    {
                        "name": "Playback",
                        "tasks": [
                            {"name": "Play a song", "expected_outcome": "Song starts playing"},
                            {"name": "Skip track", "expected_outcome": "Next track plays"},
                        ],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def make_taxonomy_payload():
    """Factory for import payloads with a custom version label."""
    return taxonomy_payload


class SeededTaxonomy:
    """Imported version plus name → entity lookups."""

    def __init__(self, store, version):
        self.version = version
        self.categories = {c.name: c for c in store.list_categories(version.id)}
        self.tasks = {t.task.name: t.task for t in store.list_tasks(version.id)}


@pytest.fixture
def seeded(taxonomy):
    version = taxonomy.import_taxonomy(taxonomy_payload())
    return SeededTaxonomy(taxonomy, version)


@pytest.fixture
def review_payload():
    start = datetime(2026, 3, 1, tzinfo=timezone.utc)
    return {
        "car_id": str(uuid4()),
        "reviewer_id": str(uuid4()),
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=14)).isoformat(),
    }


@pytest.fixture
def review(seeded, lifecycle, review_payload):
    return lifecycle.create_review(review_payload)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client():
    """Create a TestClient for FastAPI application."""
    from carux.main import app

    with TestClient(app) as test_client:
        yield test_client
