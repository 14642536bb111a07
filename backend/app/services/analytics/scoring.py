"""
Scoring helpers for the muscle balance analysis.

Strength score = frequency + volume + consistency, capped at 100:
- Frequency: points per session, capped
- Volume: load x sets x reps per window day, scaled down and capped
- Consistency: triangular score peaking at the optimal gap between sessions
"""
from dataclasses import dataclass
from datetime import datetime
from typing import AbstractSet, List, Sequence

from app.core.config import Settings
from app.models.analysis import StrengthScore
from app.services.analytics.regions import Region

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class AnalyzerTunables:
    """
    Calibration constants for the analysis.

    These are scale choices picked for the app, not physiological laws.
    """
    frequency_points_per_session: float = 10.0
    frequency_cap: float = 40.0
    volume_divisor: float = 1000.0
    volume_cap: float = 40.0
    consistency_cap: float = 20.0
    optimal_gap_days: float = 3.5
    gap_tolerance_days: float = 7.0
    push_dominant_ratio: float = 1.5
    pull_dominant_ratio: float = 0.67
    stale_after_days: int = 7
    max_score: float = 100.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalyzerTunables":
        return cls(
            frequency_points_per_session=settings.FREQUENCY_POINTS_PER_SESSION,
            frequency_cap=settings.FREQUENCY_SCORE_CAP,
            volume_divisor=settings.VOLUME_DIVISOR,
            volume_cap=settings.VOLUME_SCORE_CAP,
            consistency_cap=settings.CONSISTENCY_SCORE_CAP,
            optimal_gap_days=settings.OPTIMAL_GAP_DAYS,
            gap_tolerance_days=settings.GAP_TOLERANCE_DAYS,
            push_dominant_ratio=settings.PUSH_DOMINANT_RATIO,
            pull_dominant_ratio=settings.PULL_DOMINANT_RATIO,
            stale_after_days=settings.STALE_AFTER_DAYS,
        )


def is_push(regions: AbstractSet[str]) -> bool:
    """Chest work, or shoulder/triceps work that doesn't involve the back."""
    if Region.CHEST in regions:
        return True
    if Region.BACK in regions:
        return False
    return Region.SHOULDERS in regions or Region.TRICEPS in regions


def is_pull(regions: AbstractSet[str]) -> bool:
    return Region.BACK in regions or Region.BICEPS in regions


def push_pull_ratio(push_count: int, pull_count: int) -> float:
    """Push/pull ratio, 0 when there is no pull work."""
    if pull_count <= 0:
        return 0.0
    return push_count / pull_count


def frequency_score(training_count: int, tunables: AnalyzerTunables) -> float:
    return min(training_count * tunables.frequency_points_per_session, tunables.frequency_cap)


def volume_score(total_volume: float, window_days: int, tunables: AnalyzerTunables) -> float:
    score = total_volume / window_days / tunables.volume_divisor
    return max(0.0, min(score, tunables.volume_cap))


def mean_gap_days(dates: Sequence[datetime]) -> float:
    """Average gap in days between consecutive dates (sorted first)."""
    ordered: List[datetime] = sorted(dates)
    total_seconds = sum(
        (later - earlier).total_seconds()
        for earlier, later in zip(ordered, ordered[1:])
    )
    return total_seconds / (len(ordered) - 1) / SECONDS_PER_DAY


def consistency_score(dates: Sequence[datetime], tunables: AnalyzerTunables) -> float:
    """
    Score session spacing.

    Full points at the optimal average gap, falling linearly to zero once
    the average gap is off by the tolerance in either direction.
    """
    if len(dates) < 2:
        return 0.0

    deviation = abs(tunables.optimal_gap_days - mean_gap_days(dates))
    return tunables.consistency_cap * (1 - min(deviation / tunables.gap_tolerance_days, 1))


def strength_score(
    training_count: int,
    total_volume: float,
    dates: Sequence[datetime],
    window_days: int,
    tunables: AnalyzerTunables,
) -> StrengthScore:
    """Combine the three sub-scores for one region."""
    return StrengthScore(
        frequency=frequency_score(training_count, tunables),
        volume=volume_score(total_volume, window_days, tunables),
        consistency=consistency_score(dates, tunables),
        cap=tunables.max_score,
    )
