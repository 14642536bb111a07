"""
Analytics module - Workout analysis and profile statistics.

This module provides:
- Data adapters for normalizing raw workout rows
- The muscle balance analyzer and its scoring helpers
- Profile statistics (streaks, personal records, milestones)
- Weekly exercise progression
- The calculator that ties them together
"""
from app.services.analytics.adapter import (
    RawDataAdapter,
    SupabaseAdapter,
    ManualAdapter,
    get_adapter,
)
from app.services.analytics.analyzer import (
    AnalysisError,
    InsufficientDataError,
    WorkoutAnalyzer,
)
from app.services.analytics.calculator import StatsCalculator
from app.services.analytics.profile import ProfileStatsCalculator
from app.services.analytics.progression import ProgressionCalculator
from app.services.analytics.regions import (
    DEFAULT_CATEGORY_TABLE,
    KNOWN_REGIONS,
    CategoryTable,
    Region,
)
from app.services.analytics.scoring import AnalyzerTunables

__all__ = [
    # Adapters
    "RawDataAdapter",
    "SupabaseAdapter",
    "ManualAdapter",
    "get_adapter",
    # Analysis
    "AnalysisError",
    "InsufficientDataError",
    "WorkoutAnalyzer",
    "AnalyzerTunables",
    # Regions
    "Region",
    "KNOWN_REGIONS",
    "CategoryTable",
    "DEFAULT_CATEGORY_TABLE",
    # Profile
    "ProfileStatsCalculator",
    "ProgressionCalculator",
    # Calculator
    "StatsCalculator",
]
