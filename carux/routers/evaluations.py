"""
Evaluation Router - Car UX Review Platform
carux/routers/evaluations.py

Task and category evaluations of a review. PUT replaces the whole
evaluation; omitted fields are stored as unset.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Body, Depends

from carux.config import settings
from carux.core.dependencies import get_evaluation_service
from carux.core.exceptions import EntityNotFoundException
from carux.models.evaluation import (
    CategoryEvaluation,
    CategoryEvaluationInput,
    TaskEvaluation,
    TaskEvaluationInput,
)
from carux.models.report import ErrorResponse
from carux.services.evaluation_service import EvaluationService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/reviews", tags=["Evaluations"])

WRITE_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Review, task or category not found"},
    409: {"model": ErrorResponse, "description": "Review is published"},
    422: {"model": ErrorResponse, "description": "Score outside 1-4"},
}


@router.put(
    "/{review_id}/tasks/{task_id}/evaluation",
    response_model=TaskEvaluation,
    responses=WRITE_RESPONSES,
    summary="Save a task evaluation",
)
def save_task_evaluation(
    review_id: UUID,
    task_id: UUID,
    payload: TaskEvaluationInput = Body(...),
    store: EvaluationService = Depends(get_evaluation_service),
):
    return store.save_task_evaluation(review_id, task_id, payload)


@router.get(
    "/{review_id}/tasks/{task_id}/evaluation",
    response_model=TaskEvaluation,
    responses={404: {"model": ErrorResponse}},
    summary="Get a task evaluation",
)
def get_task_evaluation(
    review_id: UUID, task_id: UUID, store: EvaluationService = Depends(get_evaluation_service)
):
    evaluation = store.get_task_evaluation(review_id, task_id)
    if evaluation is None:
        raise EntityNotFoundException("TaskEvaluation", task_id)
    return evaluation


@router.get(
    "/{review_id}/task-evaluations",
    response_model=List[TaskEvaluation],
    summary="List task evaluations of a review",
)
def list_task_evaluations(review_id: UUID, store: EvaluationService = Depends(get_evaluation_service)):
    return store.list_task_evaluations(review_id)


@router.put(
    "/{review_id}/categories/{category_id}/evaluation",
    response_model=CategoryEvaluation,
    responses=WRITE_RESPONSES,
    summary="Save a category evaluation",
)
def save_category_evaluation(
    review_id: UUID,
    category_id: UUID,
    payload: CategoryEvaluationInput = Body(...),
    store: EvaluationService = Depends(get_evaluation_service),
):
    return store.save_category_evaluation(review_id, category_id, payload)


@router.get(
    "/{review_id}/categories/{category_id}/evaluation",
    response_model=CategoryEvaluation,
    responses={404: {"model": ErrorResponse}},
    summary="Get a category evaluation",
)
def get_category_evaluation(
    review_id: UUID, category_id: UUID, store: EvaluationService = Depends(get_evaluation_service)
):
    evaluation = store.get_category_evaluation(review_id, category_id)
    if evaluation is None:
        raise EntityNotFoundException("CategoryEvaluation", category_id)
    return evaluation


@router.get(
    "/{review_id}/category-evaluations",
    response_model=List[CategoryEvaluation],
    summary="List category evaluations of a review",
)
def list_category_evaluations(
    review_id: UUID, store: EvaluationService = Depends(get_evaluation_service)
):
    return store.list_category_evaluations(review_id)
