"""
Review Router - Car UX Review Platform
carux/routers/reviews.py

Review creation, listing, lifecycle updates and completion status.
Acting-user identity comes from the optional X-User-Id header; role
enforcement happens upstream.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Header, Query, status

from carux.config import settings
from carux.core.dependencies import (
    get_evaluation_service,
    get_review_lifecycle,
    get_taxonomy_service,
)
from carux.models.enumerations import ReviewStatus
from carux.models.report import ErrorResponse
from carux.models.review import CompletionStatus, Review, ReviewCreate, ReviewList, ReviewUpdate
from carux.models.taxonomy import TaskWithCategory
from carux.services.evaluation_service import EvaluationService
from carux.services.review_lifecycle import ReviewLifecycleService
from carux.services.taxonomy_service import TaxonomyService

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Reviews"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Review not found"}}


@router.post(
    "/reviews",
    response_model=Review,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse, "description": "No taxonomy version exists"}},
    summary="Create a review bound to the active taxonomy version",
)
def create_review(
    payload: ReviewCreate = Body(...),
    x_user_id: Optional[UUID] = Header(default=None),
    lifecycle: ReviewLifecycleService = Depends(get_review_lifecycle),
):
    return lifecycle.create_review(payload, created_by=x_user_id)


@router.get("/reviews", response_model=ReviewList, summary="List reviews")
def list_reviews(
    reviewer_id: Optional[UUID] = Query(default=None),
    status_filter: Optional[ReviewStatus] = Query(default=None, alias="status"),
    lifecycle: ReviewLifecycleService = Depends(get_review_lifecycle),
):
    items = lifecycle.list_reviews(reviewer_id=reviewer_id, status=status_filter)
    return ReviewList(items=items, total=len(items))


@router.get("/reviews/{review_id}", response_model=Review, responses=NOT_FOUND, summary="Get a review")
def get_review(review_id: UUID, lifecycle: ReviewLifecycleService = Depends(get_review_lifecycle)):
    return lifecycle.get_review(review_id)


@router.patch(
    "/reviews/{review_id}",
    response_model=Review,
    responses={
        **NOT_FOUND,
        409: {"model": ErrorResponse, "description": "Published review or backwards status"},
    },
    summary="Update review status and/or publication",
)
def update_review(
    review_id: UUID,
    payload: ReviewUpdate = Body(...),
    x_user_id: Optional[UUID] = Header(default=None),
    lifecycle: ReviewLifecycleService = Depends(get_review_lifecycle),
):
    return lifecycle.update(review_id, payload, modified_by=x_user_id)


@router.get(
    "/reviews/{review_id}/tasks",
    response_model=List[TaskWithCategory],
    responses=NOT_FOUND,
    summary="Tasks of the review's taxonomy version",
)
def list_review_tasks(
    review_id: UUID,
    lifecycle: ReviewLifecycleService = Depends(get_review_lifecycle),
    taxonomy: TaxonomyService = Depends(get_taxonomy_service),
):
    review = lifecycle.get_review(review_id)
    return taxonomy.list_tasks(review.taxonomy_version_id)


@router.get(
    "/reviews/{review_id}/completion-status",
    response_model=CompletionStatus,
    responses=NOT_FOUND,
    summary="Completion status of one review",
)
def get_completion_status(
    review_id: UUID, evaluations: EvaluationService = Depends(get_evaluation_service)
):
    return evaluations.completion_status(review_id)


@router.get(
    "/reviews-completion-status",
    response_model=List[CompletionStatus],
    summary="Completion status of many reviews",
)
def get_batch_completion_status(
    reviewer_id: Optional[UUID] = Query(default=None),
    evaluations: EvaluationService = Depends(get_evaluation_service),
):
    return evaluations.batch_completion_status(reviewer_id=reviewer_id)
