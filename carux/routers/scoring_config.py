"""
Scoring Config Router - Car UX Review Platform
carux/routers/scoring_config.py

Read and partially update the live scoring weights.
"""

from typing import Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Header

from carux.config import settings
from carux.core.dependencies import get_scoring_config_service
from carux.models.enumerations import Criterion
from carux.models.report import ErrorResponse
from carux.models.scoring_config import CategoryWeightsUpdate, ScoringConfig, TaskWeightsUpdate
from carux.scoring.scale import SCALE_DESCRIPTIONS
from carux.services.scoring_config_service import ScoringConfigService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/scoring-config", tags=["Scoring Config"])

INVALID = {422: {"model": ErrorResponse, "description": "Unknown key or weight outside 0-100"}}


@router.get("", response_model=ScoringConfig, summary="Get the live scoring weights")
def get_scoring_config(store: ScoringConfigService = Depends(get_scoring_config_service)):
    return store.get_config()


@router.get(
    "/scales",
    response_model=Dict[Criterion, Dict[int, Dict[str, str]]],
    summary="Label and description of each 1-4 rating, per criterion",
)
def get_rating_scales():
    return SCALE_DESCRIPTIONS


@router.patch("/task", response_model=ScoringConfig, responses=INVALID, summary="Update task weights")
def update_task_weights(
    payload: TaskWeightsUpdate = Body(...),
    x_user_id: Optional[UUID] = Header(default=None),
    store: ScoringConfigService = Depends(get_scoring_config_service),
):
    return store.update_task_weights(payload, updated_by=x_user_id)


@router.patch(
    "/category", response_model=ScoringConfig, responses=INVALID, summary="Update category weights"
)
def update_category_weights(
    payload: CategoryWeightsUpdate = Body(...),
    x_user_id: Optional[UUID] = Header(default=None),
    store: ScoringConfigService = Depends(get_scoring_config_service),
):
    return store.update_category_weights(payload, updated_by=x_user_id)
