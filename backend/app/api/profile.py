"""
Profile statistics and progression API endpoints.
"""
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.api.deps import get_stats_calculator
from app.core.logging import get_logger
from app.services.analytics import StatsCalculator

logger = get_logger(__name__)
router = APIRouter()


class ProfileStatsRequest(BaseModel):
    """Request for a user's profile statistics."""
    records: list[dict[str, Any]] = Field(..., description="All of the user's workout rows")
    source: str = Field("supabase", description="Row format (supabase, manual)")


@router.post("/stats")
async def profile_stats(
    request: ProfileStatsRequest,
    calculator: StatsCalculator = Depends(get_stats_calculator),
):
    """Totals, streak, personal records, milestones and 14-day progress."""
    logger.info("Computing profile stats", row_count=len(request.records))

    stats = calculator.profile_rows(request.records, source=request.source)
    return stats.to_dict()


@router.post("/progression")
async def profile_progression(
    request: ProfileStatsRequest,
    calculator: StatsCalculator = Depends(get_stats_calculator),
):
    """Per-exercise max weight and best set for recent weeks, newest first."""
    logger.info("Computing progression", row_count=len(request.records))

    weeks = calculator.progression_rows(request.records, source=request.source)
    return {"weeks": [week.to_dict() for week in weeks]}
