"""
Muscle Balance Analyzer - Detects training imbalances from workout history.

Produces per-region training status, a push/pull ratio, and paired
warnings/recommendations. The caller is responsible for filtering records
to the date range of interest; window_days only normalizes volume and sets
the overtraining threshold.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from app.core.clock import Clock, as_utc, utc_now
from app.core.logging import AnalysisRunLogger, get_logger
from app.models.analysis import (
    AnalysisReport,
    Insight,
    InsightKind,
    PushPullBalance,
    RegionStatus,
    WorkoutRecord,
)
from app.services.analytics.regions import (
    DEFAULT_CATEGORY_TABLE,
    KNOWN_REGIONS,
    CategoryTable,
)
from app.services.analytics.scoring import (
    AnalyzerTunables,
    is_pull,
    is_push,
    push_pull_ratio,
    strength_score,
)

logger = get_logger(__name__)

DEFAULT_WINDOW_DAYS = 30


class AnalysisError(Exception):
    """Base error for workout analysis."""


class InsufficientDataError(AnalysisError):
    """Raised when there are no workouts to analyze."""

    def __init__(self, message: str = "No workouts to analyze"):
        super().__init__(message)


@dataclass
class _RegionAccumulator:
    count: int = 0
    last_trained_at: Optional[datetime] = None
    total_volume: float = 0.0
    dates: List[datetime] = field(default_factory=list)

    def add(self, record: WorkoutRecord) -> None:
        self.count += 1
        self.total_volume += record.volume
        self.dates.append(record.occurred_at)
        if self.last_trained_at is None or record.occurred_at > self.last_trained_at:
            self.last_trained_at = record.occurred_at


class WorkoutAnalyzer:
    """
    Analyzes workout history for muscle imbalances.

    Usage:
        analyzer = WorkoutAnalyzer()
        report = analyzer.analyze(records, window_days=30)

    Holds only immutable configuration, so one instance can be shared.
    """

    def __init__(
        self,
        category_table: CategoryTable = DEFAULT_CATEGORY_TABLE,
        clock: Clock = utc_now,
        tunables: Optional[AnalyzerTunables] = None,
        run_logger: Optional[AnalysisRunLogger] = None,
    ):
        self.category_table = category_table
        self.clock = clock
        self.tunables = tunables or AnalyzerTunables()
        self._run_logger = run_logger or AnalysisRunLogger(logger)

    def analyze(
        self,
        records: Sequence[WorkoutRecord],
        window_days: int = DEFAULT_WINDOW_DAYS,
    ) -> AnalysisReport:
        """
        Analyze workout records.

        Args:
            records: Workout records, already filtered to the desired range
            window_days: Lookback window used for normalization

        Returns:
            AnalysisReport with an entry for every known region

        Raises:
            InsufficientDataError: If records is empty
            ValueError: If window_days is less than 1
        """
        with self._run_logger.track_run("muscle_balance", len(records)) as run:
            if not records:
                raise InsufficientDataError()
            if window_days < 1:
                raise ValueError(f"window_days must be at least 1, got {window_days}")

            now = as_utc(self.clock())

            # Step 1: Region frequencies
            regions = self._accumulate_regions(records)

            # Step 2: Push/pull balance
            push_count, pull_count = self._count_push_pull(records)
            ratio = push_pull_ratio(push_count, pull_count)

            # Step 3: Strength scores
            region_status: Dict[str, RegionStatus] = {}
            for region in KNOWN_REGIONS:
                acc = regions[region]
                score = strength_score(
                    acc.count, acc.total_volume, acc.dates, window_days, self.tunables
                )
                region_status[region] = RegionStatus(
                    training_count=acc.count,
                    last_trained_at=acc.last_trained_at,
                    score=score,
                )
                run.detail(
                    "Region scored",
                    region=region,
                    training_count=acc.count,
                    total_volume=acc.total_volume,
                    **score.to_dict(),
                )

            # Step 4: Warnings and recommendations
            insights = self._generate_insights(region_status, ratio, window_days, now)

            report = AnalysisReport(
                region_status=region_status,
                push_pull_ratio=ratio,
                push_count=push_count,
                pull_count=pull_count,
                push_pull_balance=self._classify_balance(ratio, pull_count),
                insights=insights,
                analyzed_at=now,
                window_days=window_days,
            )

            run.set_result(
                push_pull_ratio=round(ratio, 3),
                warnings_count=len(insights),
            )

        return report

    # ========================================
    # Private helpers
    # ========================================

    def _accumulate_regions(
        self,
        records: Sequence[WorkoutRecord],
    ) -> Dict[str, _RegionAccumulator]:
        """Count records and collect volume/dates per region."""
        regions = {region: _RegionAccumulator() for region in KNOWN_REGIONS}
        unclassified = set()

        for record in records:
            tags = self.category_table.regions_for(record.category)
            if not tags:
                unclassified.add(record.category)
                continue
            for region in tags:
                regions[region].add(record)

        if unclassified:
            logger.debug("Skipping unclassified exercises", exercises=sorted(unclassified))

        return regions

    def _count_push_pull(self, records: Sequence[WorkoutRecord]) -> Tuple[int, int]:
        push_count = 0
        pull_count = 0

        for record in records:
            tags = self.category_table.regions_for(record.category)
            if not tags:
                continue
            # A record may count as both
            if is_push(tags):
                push_count += 1
            if is_pull(tags):
                pull_count += 1

        return push_count, pull_count

    def _classify_balance(self, ratio: float, pull_count: int) -> PushPullBalance:
        if pull_count == 0:
            return PushPullBalance.UNDEFINED
        if ratio > self.tunables.push_dominant_ratio:
            return PushPullBalance.PUSH_DOMINANT
        if ratio < self.tunables.pull_dominant_ratio:
            return PushPullBalance.PULL_DOMINANT
        return PushPullBalance.BALANCED

    def _generate_insights(
        self,
        region_status: Dict[str, RegionStatus],
        ratio: float,
        window_days: int,
        now: datetime,
    ) -> List[Insight]:
        """Build warning/recommendation pairs in a fixed order."""
        insights: List[Insight] = []

        # Push/pull balance
        if ratio > self.tunables.push_dominant_ratio:
            insights.append(Insight(
                kind=InsightKind.PUSH_DOMINANT,
                warning="Your training favors push exercises significantly over pull exercises",
                recommendation="Include more pulling movements (rows, pull-ups) in your routine",
            ))
        elif ratio < self.tunables.pull_dominant_ratio:
            insights.append(Insight(
                kind=InsightKind.PULL_DOMINANT,
                warning="Your training favors pull exercises significantly over push exercises",
                recommendation="Include more pushing movements (bench press, shoulder press) in your routine",
            ))

        # Neglected or stale regions
        stale_after = timedelta(days=self.tunables.stale_after_days)
        for region in KNOWN_REGIONS:
            status = region_status[region]
            if status.training_count == 0:
                insights.append(Insight(
                    kind=InsightKind.NEGLECTED,
                    region=region,
                    warning=f"{region.capitalize()} appears to be completely neglected",
                    recommendation=f"Add {region} exercises to your routine",
                ))
            elif status.last_trained_at is not None and now - status.last_trained_at > stale_after:
                insights.append(Insight(
                    kind=InsightKind.STALE,
                    region=region,
                    warning=(
                        f"{region.capitalize()} hasn't been trained in over "
                        f"{self.tunables.stale_after_days} days"
                    ),
                    recommendation=f"Schedule a {region} workout soon",
                ))

        # Overtraining: more sessions than every other day on average
        overtraining_threshold = window_days // 2
        for region in KNOWN_REGIONS:
            if region_status[region].training_count > overtraining_threshold:
                insights.append(Insight(
                    kind=InsightKind.OVERTRAINING,
                    region=region,
                    warning=f"Possible overtraining of {region}",
                    recommendation=f"Consider reducing {region} training frequency",
                ))

        return insights
