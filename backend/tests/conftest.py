"""Shared fixtures for the analytics tests."""

from datetime import datetime, timedelta, timezone

import pytest

from app.models.analysis import WorkoutRecord
from app.services.analytics import WorkoutAnalyzer


NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.replace(hour=0)


def make_record(category, days_ago=0, load=0.0, sets=3, reps=10):
    """Build a record dated at midnight, days_ago days before TODAY."""
    return WorkoutRecord(
        category=category,
        occurred_at=TODAY - timedelta(days=days_ago),
        load=load,
        set_count=sets,
        rep_count=reps,
    )


@pytest.fixture
def fixed_clock():
    """Clock frozen at NOW."""
    return lambda: NOW


@pytest.fixture
def analyzer(fixed_clock):
    """Analyzer with the default table and a frozen clock."""
    return WorkoutAnalyzer(clock=fixed_clock)


@pytest.fixture
def balanced_records():
    """One bench press and one pull-up session on the same day."""
    return [
        make_record("Bench Press", load=185, sets=3, reps=8),
        make_record("Pull-ups", load=0, sets=3, reps=12),
    ]
