"""
Stats Calculator - Entry point for computing analytics from raw rows.

Orchestrates:
- Data adaptation from the row source
- Muscle balance analysis
- Profile statistics
- Weekly exercise progression
"""
from typing import Any, Dict, Iterable, List, Optional

from app.core.config import Settings, settings as default_settings
from app.core.clock import Clock, utc_now
from app.core.logging import get_logger
from app.models.analysis import AnalysisReport, WorkoutRecord
from app.models.profile import ProfileStats, WeeklyProgression
from app.services.analytics.adapter import get_adapter
from app.services.analytics.analyzer import WorkoutAnalyzer
from app.services.analytics.profile import ProfileStatsCalculator
from app.services.analytics.progression import ProgressionCalculator
from app.services.analytics.regions import DEFAULT_CATEGORY_TABLE, CategoryTable
from app.services.analytics.scoring import AnalyzerTunables

logger = get_logger(__name__)


class StatsCalculator:
    """
    Main statistics calculation engine.

    Usage:
        calculator = StatsCalculator.from_settings(settings)
        report = calculator.analyze_rows(rows, source="supabase")
    """

    def __init__(
        self,
        analyzer: WorkoutAnalyzer,
        profile_calculator: ProfileStatsCalculator,
        default_window_days: int = 30,
        progression_calculator: Optional[ProgressionCalculator] = None,
    ):
        self.analyzer = analyzer
        self.profile_calculator = profile_calculator
        self.progression_calculator = progression_calculator or ProgressionCalculator(
            clock=profile_calculator.clock,
        )
        self.default_window_days = default_window_days

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        clock: Clock = utc_now,
        category_table: Optional[CategoryTable] = None,
    ) -> "StatsCalculator":
        """Build a calculator from application settings."""
        settings = settings or default_settings

        if category_table is None:
            if settings.EXERCISE_REGIONS_FILE:
                category_table = CategoryTable.from_json_file(settings.EXERCISE_REGIONS_FILE)
            else:
                category_table = DEFAULT_CATEGORY_TABLE

        analyzer = WorkoutAnalyzer(
            category_table=category_table,
            clock=clock,
            tunables=AnalyzerTunables.from_settings(settings),
        )
        profile_calculator = ProfileStatsCalculator(
            clock=clock,
            weekly_goal=settings.WEEKLY_GOAL,
            progress_days=settings.PROGRESS_DAYS,
        )
        return cls(
            analyzer=analyzer,
            profile_calculator=profile_calculator,
            default_window_days=settings.ANALYSIS_WINDOW_DAYS,
            progression_calculator=ProgressionCalculator(
                clock=clock,
                week_lookback=settings.PROGRESSION_WEEKS,
            ),
        )

    def normalize(
        self,
        rows: Iterable[Dict[str, Any]],
        source: str = "supabase",
    ) -> List[WorkoutRecord]:
        """Normalize raw rows using the adapter for the source."""
        return get_adapter(source).normalize_many(rows)

    def analyze_rows(
        self,
        rows: Iterable[Dict[str, Any]],
        source: str = "supabase",
        window_days: Optional[int] = None,
    ) -> AnalysisReport:
        """
        Normalize rows and run the muscle balance analysis.

        Raises:
            InsufficientDataError: If no usable rows remain
        """
        records = self.normalize(rows, source)
        return self.analyzer.analyze(records, window_days or self.default_window_days)

    def profile_rows(
        self,
        rows: Iterable[Dict[str, Any]],
        source: str = "supabase",
    ) -> ProfileStats:
        """Normalize rows and compute profile statistics."""
        records = self.normalize(rows, source)
        return self.profile_calculator.compute(records)

    def progression_rows(
        self,
        rows: Iterable[Dict[str, Any]],
        source: str = "supabase",
    ) -> List[WeeklyProgression]:
        """Normalize rows and compute weekly exercise progression."""
        records = self.normalize(rows, source)
        return self.progression_calculator.compute(records)
