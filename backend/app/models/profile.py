"""
Profile statistics models.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Milestone:
    """An achievement shown on the profile screen."""
    id: int
    title: str

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title}


@dataclass(frozen=True)
class ProgressPoint:
    """Daily training volume for the progress chart."""
    date: datetime
    value: float  # percentage of the busiest day in the range
    actual_volume: float

    def to_dict(self) -> dict:
        return {
            "date": self.date.date().isoformat(),
            "value": round(self.value, 2),
            "actualVolume": round(self.actual_volume, 2),
        }


@dataclass
class ProfileStats:
    """Aggregated workout statistics for a user's profile."""
    total_workouts: int = 0
    workouts_this_week: int = 0
    weekly_goal: int = 3
    current_streak: int = 0
    exercise_maxes: Dict[str, float] = field(default_factory=dict)
    milestones: List[Milestone] = field(default_factory=list)
    progress: List[ProgressPoint] = field(default_factory=list)

    @property
    def personal_records(self) -> int:
        return len(self.exercise_maxes)

    @property
    def weekly_goal_met(self) -> bool:
        return self.workouts_this_week >= self.weekly_goal

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "totalWorkouts": self.total_workouts,
            "workoutsThisWeek": self.workouts_this_week,
            "weeklyGoal": self.weekly_goal,
            "weeklyGoalMet": self.weekly_goal_met,
            "currentStreak": self.current_streak,
            "personalRecords": self.personal_records,
            "exerciseMaxes": dict(self.exercise_maxes),
            "milestones": [m.to_dict() for m in self.milestones],
            "progress": [p.to_dict() for p in self.progress],
        }


@dataclass(frozen=True)
class BestSet:
    """The heaviest single set by weight x reps."""
    weight: float
    reps: int
    sets: Optional[int] = None

    @property
    def value(self) -> float:
        return self.weight * self.reps

    def to_dict(self) -> dict:
        return {"weight": self.weight, "reps": self.reps, "sets": self.sets}


@dataclass
class ExerciseProgress:
    """One exercise's best numbers within a week."""
    exercise_name: str
    max_weight: Optional[float] = None
    best_set: Optional[BestSet] = None
    is_improvement: bool = False
    improvement_percentage: float = 0.0

    def to_dict(self) -> dict:
        return {
            "exerciseName": self.exercise_name,
            "maxWeight": self.max_weight,
            "bestSet": self.best_set.to_dict() if self.best_set else None,
            "isImprovement": self.is_improvement,
            "improvementPercentage": round(self.improvement_percentage, 2),
        }


@dataclass
class WeeklyProgression:
    """Per-exercise progress for one calendar week (start and end inclusive)."""
    week_start: datetime
    week_end: datetime
    exercises: List[ExerciseProgress] = field(default_factory=list)

    @property
    def week_label(self) -> str:
        return (
            f"{self.week_start:%b} {self.week_start.day} - "
            f"{self.week_end:%b} {self.week_end.day}"
        )

    def exercise(self, name: str) -> Optional[ExerciseProgress]:
        for progress in self.exercises:
            if progress.exercise_name == name:
                return progress
        return None

    def to_dict(self) -> dict:
        return {
            "weekStart": self.week_start.date().isoformat(),
            "weekEnd": self.week_end.date().isoformat(),
            "weekLabel": self.week_label,
            "exercises": [e.to_dict() for e in self.exercises],
        }
