"""
Profile Statistics - Totals, streaks, personal records and milestones.
"""
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from app.core.clock import Clock, as_utc, start_of_day, utc_now
from app.core.logging import AnalysisRunLogger, get_logger
from app.models.analysis import WorkoutRecord
from app.models.profile import Milestone, ProfileStats, ProgressPoint

logger = get_logger(__name__)

HEAVY_LIFT_THRESHOLD = 225  # lbs
STREAK_MILESTONE_DAYS = 7
DIVERSE_EXERCISE_COUNT = 3


class ProfileStatsCalculator:
    """
    Aggregates a user's workout history for the profile screen.

    Usage:
        calculator = ProfileStatsCalculator()
        stats = calculator.compute(records)
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        weekly_goal: int = 3,
        progress_days: int = 14,
        run_logger: Optional[AnalysisRunLogger] = None,
    ):
        self.clock = clock
        self.weekly_goal = weekly_goal
        self.progress_days = progress_days
        self._run_logger = run_logger or AnalysisRunLogger(logger)

    def compute(self, records: Sequence[WorkoutRecord]) -> ProfileStats:
        """
        Compute profile statistics. Empty input yields zeroed stats.
        """
        with self._run_logger.track_run("profile_stats", len(records)) as run:
            today = start_of_day(self.clock())

            streak = self.current_streak(records, today)
            maxes = self.exercise_maxes(records)

            stats = ProfileStats(
                total_workouts=len(records),
                workouts_this_week=self.workouts_since(records, today - timedelta(days=7)),
                weekly_goal=self.weekly_goal,
                current_streak=streak,
                exercise_maxes=maxes,
                milestones=self.milestones(records, streak),
                progress=self.progress(records, today),
            )

            run.set_result(
                current_streak=streak,
                personal_records=stats.personal_records,
                milestones=len(stats.milestones),
            )

        return stats

    @staticmethod
    def workouts_since(records: Sequence[WorkoutRecord], since: datetime) -> int:
        return sum(1 for record in records if record.occurred_at >= since)

    @staticmethod
    def current_streak(records: Sequence[WorkoutRecord], today: datetime) -> int:
        """Consecutive days, ending today, with at least one workout."""
        trained_days = {start_of_day(record.occurred_at) for record in records}

        streak = 0
        day = start_of_day(today)
        while day in trained_days:
            streak += 1
            day -= timedelta(days=1)
        return streak

    @staticmethod
    def exercise_maxes(records: Sequence[WorkoutRecord]) -> Dict[str, float]:
        """Heaviest load per exercise, ignoring unweighted entries."""
        maxes: Dict[str, float] = {}
        for record in records:
            if record.load <= 0:
                continue
            if record.load > maxes.get(record.category, 0):
                maxes[record.category] = record.load
        return maxes

    @staticmethod
    def milestones(records: Sequence[WorkoutRecord], streak: int) -> List[Milestone]:
        earned: List[Milestone] = []

        if len(records) >= 10:
            earned.append(Milestone(id=1, title="10 Workouts"))
        if len(records) >= 20:
            earned.append(Milestone(id=5, title="Iron Warrior"))
        if streak >= STREAK_MILESTONE_DAYS:
            earned.append(Milestone(id=2, title="1 Week Streak"))
        if any(record.load >= HEAVY_LIFT_THRESHOLD for record in records):
            earned.append(Milestone(id=3, title="225lb Club"))
        if len({record.category for record in records}) >= DIVERSE_EXERCISE_COUNT:
            earned.append(Milestone(id=4, title="Diverse Training"))

        return earned

    def progress(self, records: Sequence[WorkoutRecord], today: datetime) -> List[ProgressPoint]:
        """
        Daily volume from progress_days ago through today.

        Each point's value is a percentage of the busiest day in the range.
        """
        start = start_of_day(today) - timedelta(days=self.progress_days)
        end = start_of_day(today)

        daily_volume: Dict[datetime, float] = defaultdict(float)
        for record in records:
            day = start_of_day(record.occurred_at)
            if start <= day <= end:
                daily_volume[day] += record.volume

        max_volume = max(daily_volume.values(), default=0.0)
        if max_volume <= 0:
            max_volume = 1.0

        points: List[ProgressPoint] = []
        day = start
        while day <= end:
            volume = daily_volume.get(day, 0.0)
            points.append(ProgressPoint(
                date=as_utc(day),
                value=volume / max_volume * 100,
                actual_volume=volume,
            ))
            day += timedelta(days=1)

        return points
