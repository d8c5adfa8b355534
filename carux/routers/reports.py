"""
Report Router - Car UX Review Platform
carux/routers/reports.py

Review reports. Scores are computed on the 0-4 scale and converted to
the requested scale here.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from carux.config import settings
from carux.core.dependencies import get_report_assembler
from carux.models.enumerations import ScoreScale
from carux.models.report import ErrorResponse, Report
from carux.services.report_assembler import ReportAssembler

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/reports", tags=["Reports"])


@router.get(
    "/{review_id}",
    response_model=Report,
    responses={404: {"model": ErrorResponse, "description": "Review not found"}},
    summary="Assemble the report of a review",
)
def get_report(
    review_id: UUID,
    scale: ScoreScale = Query(default=ScoreScale.FOUR_POINT),
    assembler: ReportAssembler = Depends(get_report_assembler),
):
    return assembler.assemble_report(review_id).rescaled(scale)


@router.get(
    "/{review_id}/stored",
    response_model=Report,
    responses={404: {"model": ErrorResponse, "description": "Review or stored report not found"}},
    summary="Last stored report of a review, without recomputing",
)
def get_stored_report(
    review_id: UUID,
    scale: ScoreScale = Query(default=ScoreScale.FOUR_POINT),
    assembler: ReportAssembler = Depends(get_report_assembler),
):
    return assembler.get_stored_report(review_id).rescaled(scale)
