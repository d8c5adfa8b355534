# tests/test_concurrency.py
"""
Concurrency Tests

Real threads against the shared stores:
  - concurrent activations leave exactly one active version
  - concurrent writes to one (review, task) key never interleave
  - publishing while writes are in flight never lets a write land afterwards
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from carux.core.exceptions import ReviewPublishedException
from carux.models.taxonomy import TaxonomyVersionCreate
from carux.repositories.base import InMemoryDatabase
from carux.repositories.version_repository import TaxonomyVersionRepository

THREADS = 32


def run_together(count, fn):
    """Run fn(i) on `count` threads released at the same moment; return results or exceptions."""
    barrier = threading.Barrier(count)

    def call(i):
        barrier.wait()
        try:
            return fn(i)
        except Exception as e:  # collected for assertions
            return e

    with ThreadPoolExecutor(max_workers=count) as pool:
        return list(pool.map(call, range(count)))


class TestConcurrentActivation:
    """Exactly one active version under concurrent writers."""

    def test_concurrent_set_active(self):
        repo = TaxonomyVersionRepository(InMemoryDatabase())
        ids = [repo.create(TaxonomyVersionCreate(label=f"v{i}")).id for i in range(8)]

        results = run_together(THREADS * 4, lambda i: repo.set_active(ids[i % len(ids)]))

        assert not [r for r in results if isinstance(r, Exception)]
        active = [v for v in repo.get_all() if v.is_active]
        assert len(active) == 1
        assert repo.get_active().id == active[0].id

    def test_concurrent_create_with_activate(self):
        repo = TaxonomyVersionRepository(InMemoryDatabase())

        run_together(
            THREADS,
            lambda i: repo.create(TaxonomyVersionCreate(label=f"v{i}", activate=i % 2 == 0)),
        )

        assert len(repo.get_all()) == THREADS
        assert len([v for v in repo.get_all() if v.is_active]) == 1

    def test_concurrent_imports(self, taxonomy, make_taxonomy_payload):
        run_together(8, lambda i: taxonomy.import_taxonomy(make_taxonomy_payload(f"v{i}")))

        versions = taxonomy.list_versions()
        assert len(versions) == 8
        assert len([v for v in versions if v.is_active]) == 1
        for version in versions:
            assert len(taxonomy.list_tasks(version.id)) == 5


class TestConcurrentEvaluationWrites:
    """Same-key upserts are applied one at a time, each as a whole record."""

    def test_same_key_writes_are_whole_records(self, evaluations, review, seeded):
        task_id = seeded.tasks["Play a song"].id

        def write(i):
            rating = i % 4 + 1
            return evaluations.save_task_evaluation(
                review.id,
                task_id,
                {
                    "doable": True,
                    "usability_score": rating,
                    "visuals_score": rating,
                    "usability_feedback": f"writer {i}",
                },
            )

        results = run_together(THREADS, write)

        assert not [r for r in results if isinstance(r, Exception)]
        stored = evaluations.list_task_evaluations(review.id)
        assert len(stored) == 1
        final = stored[0]
        writer = int(final.usability_feedback.split()[1])
        assert final.usability_score == final.visuals_score == writer % 4 + 1

    def test_publish_during_writes(self, evaluations, lifecycle, review, seeded):
        task_ids = [t.id for t in seeded.tasks.values()]

        def act(i):
            if i == THREADS // 2:
                return lifecycle.set_published(review.id, True)
            return evaluations.save_task_evaluation(
                review.id, task_ids[i % len(task_ids)], {"doable": True}
            )

        results = run_together(THREADS, act)
        published_at = lifecycle.get_review(review.id).updated_at

        for result in results:
            if isinstance(result, Exception):
                assert isinstance(result, ReviewPublishedException)
        for stored in evaluations.list_task_evaluations(review.id):
            assert stored.updated_at <= published_at

        with pytest.raises(ReviewPublishedException):
            evaluations.save_task_evaluation(review.id, task_ids[0], {"doable": False})
