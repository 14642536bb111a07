"""
Muscle balance analysis API endpoints.
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.api.deps import get_stats_calculator
from app.core.logging import get_logger
from app.services.analytics import (
    AnalysisError,
    InsufficientDataError,
    StatsCalculator,
)

logger = get_logger(__name__)
router = APIRouter()

EMPTY_STATE_MESSAGE = "Log a few workouts to see your muscle balance analysis."


# ========================================
# Request/Response Schemas
# ========================================

class AnalyzeRequest(BaseModel):
    """Request to analyze a user's workouts."""
    records: list[dict[str, Any]] = Field(..., description="Workout rows, pre-filtered to the date range")
    source: str = Field("supabase", description="Row format (supabase, manual)")
    windowDays: Optional[int] = Field(None, ge=1, description="Lookback window used for normalization")


class AnalyzeResponse(BaseModel):
    """Analysis result, or an empty state when there is nothing to analyze."""
    status: str
    report: Optional[dict[str, Any]] = None
    message: Optional[str] = None


# ========================================
# API Endpoints
# ========================================

@router.post("", response_model=AnalyzeResponse)
async def analyze_workouts(
    request: AnalyzeRequest,
    calculator: StatsCalculator = Depends(get_stats_calculator),
):
    """
    Analyze workouts for muscle imbalances.

    With no usable workouts the response is an empty state rather than an
    error, so the client can show onboarding instead.
    """
    logger.info(
        "Analyzing workouts",
        row_count=len(request.records),
        source=request.source,
        window_days=request.windowDays,
    )

    try:
        report = calculator.analyze_rows(
            request.records,
            source=request.source,
            window_days=request.windowDays,
        )
    except InsufficientDataError:
        logger.info("No workouts to analyze, returning empty state")
        return AnalyzeResponse(status="empty", message=EMPTY_STATE_MESSAGE)
    except AnalysisError as e:
        logger.error("Analysis error", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return AnalyzeResponse(status="ok", report=report.to_dict())
