"""
Review Lifecycle Tests
tests/test_review_lifecycle.py
"""

from uuid import uuid4

import pytest

from carux.core.exceptions import (
    EntityNotFoundException,
    InvalidInputException,
    InvalidStatusTransitionException,
    ReviewPublishedException,
)
from carux.models.enumerations import ReviewStatus


class TestCreateReview:
    """Reviews are bound to the version active at creation."""

    def test_created_pending_and_unpublished(self, review, seeded):
        assert review.status is ReviewStatus.PENDING
        assert review.is_published is False
        assert review.taxonomy_version_id == seeded.version.id

    def test_binding_survives_activation_switch(
        self, lifecycle, review, taxonomy, make_taxonomy_payload
    ):
        taxonomy.import_taxonomy(make_taxonomy_payload("v2.0"))
        assert lifecycle.get_review(review.id).taxonomy_version_id == review.taxonomy_version_id

    def test_requires_a_taxonomy_version(self, lifecycle, review_payload):
        with pytest.raises(EntityNotFoundException):
            lifecycle.create_review(review_payload)

    def test_end_before_start_rejected(self, lifecycle, seeded, review_payload):
        payload = {**review_payload, "end_date": "2026-02-01T00:00:00+00:00"}
        with pytest.raises(InvalidInputException):
            lifecycle.create_review(payload)

    def test_taxonomy_version_cannot_be_supplied(self, lifecycle, seeded, review_payload):
        with pytest.raises(InvalidInputException):
            lifecycle.create_review({**review_payload, "taxonomy_version_id": str(uuid4())})

    def test_list_filters(self, lifecycle, review, review_payload):
        lifecycle.create_review({**review_payload, "reviewer_id": str(uuid4())})
        lifecycle.update_status(review.id, ReviewStatus.IN_PROGRESS)
        assert [r.id for r in lifecycle.list_reviews(reviewer_id=review.reviewer_id)] == [review.id]
        assert [r.id for r in lifecycle.list_reviews(status=ReviewStatus.IN_PROGRESS)] == [review.id]
        assert len(lifecycle.list_reviews()) == 2


class TestStatus:
    """pending → in_progress → completed, forward only."""

    def test_forward_moves(self, lifecycle, review):
        editor = uuid4()
        updated = lifecycle.update_status(review.id, ReviewStatus.IN_PROGRESS, modified_by=editor)
        assert updated.status is ReviewStatus.IN_PROGRESS
        assert updated.last_modified_by_id == editor
        assert updated.updated_at >= review.updated_at
        assert lifecycle.update_status(review.id, ReviewStatus.COMPLETED).status is ReviewStatus.COMPLETED

    def test_skip_ahead_allowed(self, lifecycle, review):
        assert lifecycle.update_status(review.id, ReviewStatus.COMPLETED).status is ReviewStatus.COMPLETED

    def test_backwards_rejected(self, lifecycle, review):
        lifecycle.update_status(review.id, ReviewStatus.COMPLETED)
        with pytest.raises(InvalidStatusTransitionException):
            lifecycle.update_status(review.id, ReviewStatus.IN_PROGRESS)
        assert lifecycle.get_review(review.id).status is ReviewStatus.COMPLETED

    def test_same_status_is_noop(self, lifecycle, review):
        unchanged = lifecycle.update_status(review.id, ReviewStatus.PENDING, modified_by=uuid4())
        assert unchanged == review

    def test_unknown_review(self, lifecycle):
        with pytest.raises(EntityNotFoundException):
            lifecycle.update_status(uuid4(), ReviewStatus.IN_PROGRESS)

    def test_unknown_ids_do_not_register_locks(self, lifecycle, review):
        for _ in range(10):
            with pytest.raises(EntityNotFoundException):
                lifecycle.update_status(uuid4(), ReviewStatus.IN_PROGRESS)
        assert list(lifecycle.reviews._row_locks) == [review.id]
        assert lifecycle.reviews.lock(review.id) is lifecycle.reviews.lock(review.id)


class TestPublishGuard:
    """Published reviews are frozen except for unpublishing."""

    def test_status_update_after_publish_rejected_and_record_unchanged(self, lifecycle, review):
        """The rejected update leaves the stored record unchanged."""
        published = lifecycle.set_published(review.id, True)
        before = lifecycle.reviews.get_row(review.id)

        with pytest.raises(ReviewPublishedException):
            lifecycle.update_status(review.id, ReviewStatus.COMPLETED)

        assert lifecycle.reviews.get_row(review.id) == before
        assert lifecycle.get_review(review.id) == published

    def test_combined_update_rejected(self, lifecycle, review):
        lifecycle.set_published(review.id, True)
        with pytest.raises(ReviewPublishedException):
            lifecycle.update(review.id, {"status": "completed", "is_published": False})
        assert lifecycle.get_review(review.id).is_published is True

    def test_republish_rejected(self, lifecycle, review):
        lifecycle.set_published(review.id, True)
        with pytest.raises(ReviewPublishedException):
            lifecycle.set_published(review.id, True)

    def test_unpublish_always_succeeds(self, lifecycle, review):
        lifecycle.update_status(review.id, ReviewStatus.COMPLETED)
        lifecycle.set_published(review.id, True)
        unpublished = lifecycle.set_published(review.id, False)
        assert unpublished.is_published is False
        assert unpublished.status is ReviewStatus.COMPLETED

    def test_edits_allowed_after_unpublish(self, lifecycle, review):
        lifecycle.set_published(review.id, True)
        lifecycle.set_published(review.id, False)
        assert lifecycle.update_status(review.id, ReviewStatus.IN_PROGRESS).status is ReviewStatus.IN_PROGRESS

    def test_unknown_update_field_rejected(self, lifecycle, review):
        with pytest.raises(InvalidInputException):
            lifecycle.update(review.id, {"reviewer_id": str(uuid4())})
