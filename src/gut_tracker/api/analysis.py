"""Correlation analysis endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from gut_tracker.api.schemas import AnalysisReport, AnalysisStatus, CorrelationPointOut
from gut_tracker.services.analysis import MIN_DAYS_REQUIRED

if TYPE_CHECKING:
    from gut_tracker.containers import AppContainer

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.get("")
async def analysis_status(request: Request) -> AnalysisStatus:
    """Return whether enough data exists and the state of the last run."""
    service = _service(request)
    days = service.days_available()
    return AnalysisStatus(
        can_analyze=days >= MIN_DAYS_REQUIRED,
        days_available=days,
        min_days_required=MIN_DAYS_REQUIRED,
        analyzing=service.analyzing,
        error=service.error,
    )


@router.get("/correlations")
async def correlations(request: Request) -> list[CorrelationPointOut]:
    """Return every food followed by a symptom within six hours."""
    points = _service(request).compute_correlations()
    return [CorrelationPointOut.from_point(point) for point in points]


@router.post("")
async def run_analysis(request: Request) -> AnalysisReport:
    """Request the AI report over the last 30 days of data."""
    service = _service(request)
    if not service.can_analyze():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=(
                f"At least {MIN_DAYS_REQUIRED} days of data are required, "
                f"{service.days_available()} available"
            ),
        )
    result = await service.analyze()
    return AnalysisReport(report=result.report, generated_at=result.generated_at)


def _service(request: Request):
    container: AppContainer = request.app.state.container
    return container.analysis_service
