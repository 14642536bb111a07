"""Tests for raw row normalization."""

from datetime import datetime, timezone

import pytest

from app.services.analytics.adapter import (
    ManualAdapter,
    SupabaseAdapter,
    get_adapter,
)


class TestSupabaseAdapter:
    """Tests for rows from the workouts table."""

    def test_full_row(self):
        record = SupabaseAdapter().normalize({
            "id": "b1",
            "user_id": "u1",
            "exercise": "Bench Press",
            "weight": 185,
            "sets": 3,
            "reps": 8,
            "date": "2024-06-01",
        })
        assert record.category == "Bench Press"
        assert record.load == 185.0
        assert record.set_count == 3
        assert record.rep_count == 8
        assert record.occurred_at == datetime(2024, 6, 1, tzinfo=timezone.utc)

    def test_nullable_numbers_become_zero(self):
        record = SupabaseAdapter().normalize({
            "exercise": "Pull-ups",
            "weight": None,
            "sets": 3,
            "reps": None,
            "date": "2024-06-01",
        })
        assert record.load == 0
        assert record.rep_count == 0

    def test_datetime_truncated_to_day(self):
        record = SupabaseAdapter().normalize({
            "exercise": "Squats",
            "date": "2024-06-01T18:30:00Z",
        })
        assert record.occurred_at == datetime(2024, 6, 1, tzinfo=timezone.utc)

    def test_unusable_rows_dropped(self):
        rows = [
            {"exercise": "Squats", "date": "2024-06-01"},
            {"exercise": "", "date": "2024-06-01"},
            {"exercise": "Squats"},
            {"exercise": "Squats", "date": "not a date"},
        ]
        records = SupabaseAdapter().normalize_many(rows)
        assert len(records) == 1

    def test_numeric_strings(self):
        record = SupabaseAdapter().normalize({
            "exercise": "Deadlift",
            "weight": "225.5",
            "sets": "5",
            "reps": "5",
            "date": "2024-06-01",
        })
        assert record.load == 225.5
        assert record.set_count == 5

    @pytest.mark.parametrize("value", ["inf", "-inf", "nan", 1e400, float("nan")])
    def test_non_finite_numbers_become_zero(self, value):
        record = SupabaseAdapter().normalize({
            "exercise": "Bench Press",
            "weight": value,
            "sets": value,
            "reps": 5,
            "date": "2024-06-01",
        })
        assert record.load == 0
        assert record.set_count == 0
        assert record.rep_count == 5

    def test_non_finite_sets_keep_the_row(self):
        rows = [{"exercise": "Bench Press", "weight": 100, "sets": "inf", "reps": 5, "date": "2024-06-01"}]
        records = SupabaseAdapter().normalize_many(rows)
        assert len(records) == 1
        assert records[0].load == 100

    def test_huge_integer_becomes_zero(self):
        record = SupabaseAdapter().normalize({
            "exercise": "Squats",
            "reps": 10 ** 400,
            "date": "2024-06-01",
        })
        assert record.rep_count == 0


class TestManualAdapter:
    """Tests for rows using the analyzer's field names."""

    def test_manual_row(self):
        record = ManualAdapter().normalize({
            "category": "Squats",
            "load": 100,
            "setCount": 5,
            "repCount": 5,
            "occurredAt": "2024-06-02",
        })
        assert record.category == "Squats"
        assert record.volume == 2500


class TestGetAdapter:
    """Tests for adapter lookup."""

    def test_known_sources(self):
        assert isinstance(get_adapter("supabase"), SupabaseAdapter)
        assert isinstance(get_adapter("MANUAL"), ManualAdapter)

    def test_unknown_source_falls_back(self):
        assert isinstance(get_adapter("strava"), SupabaseAdapter)
