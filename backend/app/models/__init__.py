from app.models.analysis import (
    AnalysisReport,
    Insight,
    InsightKind,
    PushPullBalance,
    RegionStatus,
    StrengthScore,
    WorkoutRecord,
)
from app.models.profile import (
    BestSet,
    ExerciseProgress,
    Milestone,
    ProfileStats,
    ProgressPoint,
    WeeklyProgression,
)

__all__ = [
    "AnalysisReport",
    "Insight",
    "InsightKind",
    "PushPullBalance",
    "RegionStatus",
    "StrengthScore",
    "WorkoutRecord",
    "Milestone",
    "ProfileStats",
    "ProgressPoint",
    "BestSet",
    "ExerciseProgress",
    "WeeklyProgression",
]
