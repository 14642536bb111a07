"""Tests for weekly exercise progression."""

from datetime import datetime, timedelta, timezone

import pytest

from app.models.profile import BestSet
from app.services.analytics import ProgressionCalculator
from conftest import TODAY, make_record

# TODAY is Sunday 2024-06-30, so the current week starts Monday 2024-06-24.
WEEK_START = TODAY - timedelta(days=6)


@pytest.fixture
def calculator(fixed_clock):
    return ProgressionCalculator(clock=fixed_clock)


class TestWeeks:
    """Tests for the week ranges."""

    def test_six_weeks_newest_first(self, calculator):
        weeks = calculator.compute([])
        assert len(weeks) == 6
        assert weeks[0].week_start == WEEK_START
        assert weeks[0].week_end == TODAY
        assert weeks[1].week_start == WEEK_START - timedelta(weeks=1)
        assert all(week.exercises == [] for week in weeks)

    def test_week_start_is_monday(self):
        wednesday = datetime(2024, 6, 26, 15, 30, tzinfo=timezone.utc)
        assert ProgressionCalculator.week_start(wednesday) == WEEK_START

    def test_records_bucketed_by_week(self, calculator):
        records = [
            make_record("Squats", days_ago=6, load=100),
            make_record("Squats", days_ago=7, load=90),
            make_record("Squats", days_ago=60, load=80),
        ]
        weeks = calculator.compute(records)
        assert weeks[0].exercise("Squats").max_weight == 100
        assert weeks[1].exercise("Squats").max_weight == 90
        assert all(week.exercise("Squats") is None for week in weeks[2:])

    def test_custom_lookback(self, fixed_clock):
        assert len(ProgressionCalculator(clock=fixed_clock, week_lookback=2).compute([])) == 2

    def test_invalid_lookback(self):
        with pytest.raises(ValueError):
            ProgressionCalculator(week_lookback=0)

    def test_week_label(self, calculator):
        assert calculator.compute([])[0].week_label == "Jun 24 - Jun 30"


class TestExerciseProgress:
    """Tests for per-exercise bests within a week."""

    def test_max_weight_and_best_set(self, calculator):
        records = [
            make_record("Bench Press", load=185, sets=3, reps=3),
            make_record("Bench Press", days_ago=1, load=155, sets=4, reps=8),
        ]
        bench = calculator.compute(records)[0].exercise("Bench Press")
        assert bench.max_weight == 185
        assert bench.best_set == BestSet(weight=155, reps=8, sets=4)

    def test_unweighted_exercise_has_no_bests(self, calculator):
        pull_ups = calculator.compute([make_record("Pull-ups", load=0)])[0].exercise("Pull-ups")
        assert pull_ups.max_weight is None
        assert pull_ups.best_set is None

    def test_sorted_by_name(self, calculator):
        records = [make_record("Squats", load=100), make_record("Bench Press", load=100)]
        names = [e.exercise_name for e in calculator.compute(records)[0].exercises]
        assert names == ["Bench Press", "Squats"]


class TestImprovements:
    """Tests for week-over-week comparison."""

    def test_improvement_percentage(self, calculator):
        records = [
            make_record("Deadlift", days_ago=0, load=250),
            make_record("Deadlift", days_ago=8, load=200),
        ]
        weeks = calculator.compute(records)
        current = weeks[0].exercise("Deadlift")
        assert current.is_improvement
        assert current.improvement_percentage == pytest.approx(25.0)
        assert not weeks[1].exercise("Deadlift").is_improvement

    def test_no_previous_week(self, calculator):
        deadlift = calculator.compute([make_record("Deadlift", load=250)])[0].exercise("Deadlift")
        assert not deadlift.is_improvement
        assert deadlift.improvement_percentage == 0

    def test_regression_is_not_improvement(self, calculator):
        records = [
            make_record("Deadlift", days_ago=0, load=180),
            make_record("Deadlift", days_ago=8, load=200),
        ]
        deadlift = calculator.compute(records)[0].exercise("Deadlift")
        assert not deadlift.is_improvement
        assert deadlift.improvement_percentage == 0

    def test_only_compares_adjacent_weeks(self, calculator):
        records = [
            make_record("Deadlift", days_ago=0, load=250),
            make_record("Deadlift", days_ago=15, load=200),
        ]
        assert not calculator.compute(records)[0].exercise("Deadlift").is_improvement

    def test_to_dict(self, calculator):
        records = [
            make_record("Deadlift", days_ago=0, load=250, sets=1, reps=3),
            make_record("Deadlift", days_ago=8, load=200),
        ]
        data = calculator.compute(records)[0].to_dict()
        assert data["weekStart"] == "2024-06-24"
        assert data["weekEnd"] == "2024-06-30"
        assert data["exercises"] == [{
            "exerciseName": "Deadlift",
            "maxWeight": 250,
            "bestSet": {"weight": 250, "reps": 3, "sets": 1},
            "isImprovement": True,
            "improvementPercentage": 25.0,
        }]
