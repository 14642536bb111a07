"""
Shared API dependencies.
"""
from functools import lru_cache

from app.core.config import settings
from app.services.analytics import StatsCalculator


@lru_cache
def get_stats_calculator() -> StatsCalculator:
    """Calculator built once from settings; override in tests."""
    return StatsCalculator.from_settings(settings)
