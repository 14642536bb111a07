"""
Weekly Progression - Per-exercise bests week by week.

Weeks start on Monday. The current week comes first, followed by
week_lookback - 1 earlier weeks. Each exercise is compared with the same
exercise in the week before it.
"""
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from app.core.clock import Clock, start_of_day, utc_now
from app.core.logging import AnalysisRunLogger, get_logger
from app.models.analysis import WorkoutRecord
from app.models.profile import BestSet, ExerciseProgress, WeeklyProgression

logger = get_logger(__name__)

DEFAULT_WEEK_LOOKBACK = 6


class ProgressionCalculator:
    """
    Builds weekly exercise progression from workout history.

    Usage:
        calculator = ProgressionCalculator()
        weeks = calculator.compute(records)
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        week_lookback: int = DEFAULT_WEEK_LOOKBACK,
        run_logger: Optional[AnalysisRunLogger] = None,
    ):
        if week_lookback < 1:
            raise ValueError(f"week_lookback must be at least 1, got {week_lookback}")
        self.clock = clock
        self.week_lookback = week_lookback
        self._run_logger = run_logger or AnalysisRunLogger(logger)

    def compute(self, records: Sequence[WorkoutRecord]) -> List[WeeklyProgression]:
        """
        Compute progression for every week in the lookback, most recent first.

        Weeks without workouts are included with no exercises.
        """
        with self._run_logger.track_run("progression", len(records)) as run:
            current_start = self.week_start(self.clock())

            weeks: List[WeeklyProgression] = []
            for offset in range(self.week_lookback):
                week_start = current_start - timedelta(weeks=offset)
                week_end = week_start + timedelta(days=6)
                in_week = [
                    record for record in records
                    if week_start <= start_of_day(record.occurred_at) <= week_end
                ]
                weeks.append(WeeklyProgression(
                    week_start=week_start,
                    week_end=week_end,
                    exercises=self.exercise_progress(in_week),
                ))

            self.mark_improvements(weeks)

            run.set_result(
                weeks=len(weeks),
                improvements=sum(
                    1 for week in weeks for e in week.exercises if e.is_improvement
                ),
            )

        return weeks

    @staticmethod
    def week_start(moment: datetime) -> datetime:
        """Midnight UTC on the Monday of the moment's week."""
        day = start_of_day(moment)
        return day - timedelta(days=day.weekday())

    @staticmethod
    def exercise_progress(records: Sequence[WorkoutRecord]) -> List[ExerciseProgress]:
        """Max weight and best set per exercise, sorted by exercise name."""
        grouped: Dict[str, List[WorkoutRecord]] = defaultdict(list)
        for record in records:
            grouped[record.category].append(record)

        progress: List[ExerciseProgress] = []
        for name in sorted(grouped):
            weighted = [r for r in grouped[name] if r.load > 0]

            max_weight = max((r.load for r in weighted), default=None)

            best_set = None
            candidates = [r for r in weighted if r.rep_count > 0]
            if candidates:
                best = max(candidates, key=lambda r: r.load * r.rep_count)
                best_set = BestSet(
                    weight=best.load,
                    reps=best.rep_count,
                    sets=best.set_count or None,
                )

            progress.append(ExerciseProgress(
                exercise_name=name,
                max_weight=max_weight,
                best_set=best_set,
            ))
        return progress

    @staticmethod
    def mark_improvements(weeks: List[WeeklyProgression]) -> None:
        """
        Flag exercises whose max weight beat the previous week's.

        improvement_percentage = (current - previous) / previous * 100
        """
        for current, previous in zip(weeks, weeks[1:]):
            for exercise in current.exercises:
                before = previous.exercise(exercise.exercise_name)
                if before is None:
                    continue
                if exercise.max_weight is None or before.max_weight is None:
                    continue
                if exercise.max_weight > before.max_weight:
                    exercise.is_improvement = True
                    exercise.improvement_percentage = (
                        (exercise.max_weight - before.max_weight) / before.max_weight * 100
                    )
