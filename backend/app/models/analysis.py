"""
Muscle balance analysis models.

Plain dataclasses: a report is recomputed on every request and never stored.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from app.core.clock import as_utc


def _millis(value: Optional[datetime]) -> Optional[int]:
    if value is None:
        return None
    return int(value.timestamp() * 1000)


@dataclass(frozen=True)
class WorkoutRecord:
    """One logged exercise entry. Immutable once built."""
    category: str  # exercise name, e.g. "Bench Press"
    occurred_at: Union[date, datetime]
    load: float = 0.0
    set_count: int = 0
    rep_count: int = 0

    def __post_init__(self):
        object.__setattr__(self, "occurred_at", as_utc(self.occurred_at))

    @property
    def volume(self) -> float:
        """Load x sets x reps."""
        return self.load * self.set_count * self.rep_count


@dataclass(frozen=True)
class StrengthScore:
    """Sub-scores that make up a region's strength score."""
    frequency: float = 0.0
    volume: float = 0.0
    consistency: float = 0.0
    cap: float = 100.0

    @property
    def total(self) -> float:
        return min(self.frequency + self.volume + self.consistency, self.cap)

    def to_dict(self) -> dict:
        return {
            "frequency": round(self.frequency, 2),
            "volume": round(self.volume, 2),
            "consistency": round(self.consistency, 2),
            "total": round(self.total, 2),
        }


@dataclass(frozen=True)
class RegionStatus:
    """Training status of one body region."""
    training_count: int = 0
    last_trained_at: Optional[datetime] = None
    score: StrengthScore = field(default_factory=StrengthScore)

    @property
    def strength_score(self) -> float:
        """Composite 0-100 score."""
        return self.score.total

    def to_dict(self) -> dict:
        return {
            "trainingCount": self.training_count,
            "lastTrainedAt": _millis(self.last_trained_at),
            "strengthScore": round(self.strength_score, 2),
            "scoreBreakdown": self.score.to_dict(),
        }


class PushPullBalance(str, Enum):
    """Interpretation of the push/pull ratio."""
    BALANCED = "balanced"
    PUSH_DOMINANT = "push_dominant"
    PULL_DOMINANT = "pull_dominant"
    UNDEFINED = "undefined"  # no pull-classified records


class InsightKind(str, Enum):
    """Types of warning/recommendation pairs."""
    PUSH_DOMINANT = "push_dominant"
    PULL_DOMINANT = "pull_dominant"
    NEGLECTED = "neglected"
    STALE = "stale"
    OVERTRAINING = "overtraining"


@dataclass(frozen=True)
class Insight:
    """A warning together with its paired recommendation."""
    kind: InsightKind
    warning: str
    recommendation: str
    region: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "region": self.region,
            "warning": self.warning,
            "recommendation": self.recommendation,
        }


@dataclass
class AnalysisReport:
    """Result of one muscle balance analysis run."""
    region_status: Dict[str, RegionStatus]
    push_pull_ratio: float
    push_count: int
    pull_count: int
    push_pull_balance: PushPullBalance
    insights: List[Insight]
    analyzed_at: datetime
    window_days: int

    # Ratio range shown as "balanced" in the app
    BALANCED_RANGE = (0.8, 1.2)
    ATTENTION_AFTER = timedelta(days=7)

    @property
    def warnings(self) -> List[str]:
        return [insight.warning for insight in self.insights]

    @property
    def recommendations(self) -> List[str]:
        return [insight.recommendation for insight in self.insights]

    @property
    def has_warnings(self) -> bool:
        return bool(self.insights)

    @property
    def has_recommendations(self) -> bool:
        return bool(self.insights)

    @property
    def is_push_pull_balanced(self) -> bool:
        low, high = self.BALANCED_RANGE
        return low <= self.push_pull_ratio <= high

    def status_for(self, region: str) -> RegionStatus:
        """Status for a region, empty status if the region is unknown."""
        return self.region_status.get(region) or RegionStatus()

    def needs_attention(self, region: str, now: Union[date, datetime]) -> bool:
        """True if the region was never trained or not trained in the last week."""
        status = self.region_status.get(region)
        if status is None or status.last_trained_at is None:
            return True
        return as_utc(now) - status.last_trained_at > self.ATTENTION_AFTER

    def insights_of(self, kind: InsightKind) -> List[Insight]:
        return [insight for insight in self.insights if insight.kind == kind]

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "regionStatus": {
                region: status.to_dict()
                for region, status in self.region_status.items()
            },
            "pushPullRatio": round(self.push_pull_ratio, 3),
            "pushCount": self.push_count,
            "pullCount": self.pull_count,
            "pushPullBalance": self.push_pull_balance.value,
            "isPushPullBalanced": self.is_push_pull_balanced,
            "warnings": self.warnings,
            "recommendations": self.recommendations,
            "insights": [insight.to_dict() for insight in self.insights],
            "analyzedAt": _millis(self.analyzed_at),
            "windowDays": self.window_days,
        }
