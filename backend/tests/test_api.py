"""Tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_stats_calculator
from app.core.config import Settings
from app.main import app
from app.services.analytics import StatsCalculator
from conftest import NOW


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def client():
    """Test client with a frozen clock."""
    calculator = StatsCalculator.from_settings(Settings(), clock=lambda: NOW)
    app.dependency_overrides[get_stats_calculator] = lambda: calculator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def rows():
    return [
        {"exercise": "Bench Press", "weight": 185, "sets": 3, "reps": 8, "date": "2024-06-30"},
        {"exercise": "Pull-ups", "weight": None, "sets": 3, "reps": 12, "date": "2024-06-30"},
    ]


# ============================================================================
# Tests
# ============================================================================

class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAnalysisEndpoint:
    """Tests for POST /api/analysis."""

    def test_analyze(self, client, rows):
        response = client.post("/api/analysis", json={"records": rows, "windowDays": 30})
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        report = body["report"]
        assert report["pushPullRatio"] == 1.0
        assert report["regionStatus"]["legs"]["trainingCount"] == 0
        assert "Legs appears to be completely neglected" in report["warnings"]

    def test_default_window_from_settings(self, client, rows):
        body = client.post("/api/analysis", json={"records": rows}).json()
        assert body["report"]["windowDays"] == 30

    def test_empty_records_return_empty_state(self, client):
        response = client.post("/api/analysis", json={"records": []})
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "empty"
        assert body["report"] is None
        assert body["message"]

    def test_only_unusable_rows_return_empty_state(self, client):
        response = client.post("/api/analysis", json={"records": [{"exercise": "Squats"}]})
        assert response.json()["status"] == "empty"

    def test_invalid_window_rejected(self, client, rows):
        response = client.post("/api/analysis", json={"records": rows, "windowDays": 0})
        assert response.status_code == 422

    def test_manual_source(self, client):
        records = [{"category": "Squats", "load": 100, "setCount": 5, "repCount": 5, "occurredAt": "2024-06-29"}]
        body = client.post("/api/analysis", json={"records": records, "source": "manual"}).json()
        assert body["report"]["regionStatus"]["legs"]["trainingCount"] == 1


class TestProfileEndpoint:
    """Tests for POST /api/profile/stats."""

    def test_profile_stats(self, client, rows):
        response = client.post("/api/profile/stats", json={"records": rows})
        assert response.status_code == 200
        body = response.json()
        assert body["totalWorkouts"] == 2
        assert body["currentStreak"] == 1
        assert body["personalRecords"] == 1
        assert len(body["progress"]) == 15

    def test_empty_profile(self, client):
        body = client.post("/api/profile/stats", json={"records": []}).json()
        assert body["totalWorkouts"] == 0
        assert body["milestones"] == []

    def test_non_finite_weight_is_ignored(self, client):
        rows = [{"exercise": "Bench Press", "weight": "inf", "sets": 3, "reps": 5, "date": "2024-06-30"}]
        response = client.post("/api/profile/stats", json={"records": rows})
        assert response.status_code == 200
        body = response.json()
        assert body["exerciseMaxes"] == {}
        assert body["progress"][-1]["value"] == 0


class TestAnalysisRobustness:
    """Tests for malformed numbers in analysis rows."""

    def test_non_finite_sets_do_not_fail(self, client):
        rows = [{"exercise": "Bench Press", "weight": 100, "sets": "inf", "reps": 5, "date": "2024-06-01"}]
        response = client.post("/api/analysis", json={"records": rows})
        assert response.status_code == 200
        assert response.json()["report"]["regionStatus"]["chest"]["trainingCount"] == 1


class TestProgressionEndpoint:
    """Tests for POST /api/profile/progression."""

    def test_progression(self, client):
        rows = [
            {"exercise": "Squats", "weight": 220, "sets": 5, "reps": 5, "date": "2024-06-28"},
            {"exercise": "Squats", "weight": 200, "sets": 5, "reps": 5, "date": "2024-06-20"},
        ]
        response = client.post("/api/profile/progression", json={"records": rows})
        assert response.status_code == 200
        weeks = response.json()["weeks"]
        assert len(weeks) == 6
        assert weeks[0]["weekStart"] == "2024-06-24"
        squats = weeks[0]["exercises"][0]
        assert squats["exerciseName"] == "Squats"
        assert squats["isImprovement"] is True
        assert squats["improvementPercentage"] == 10.0

    def test_empty_progression(self, client):
        weeks = client.post("/api/profile/progression", json={"records": []}).json()["weeks"]
        assert len(weeks) == 6
        assert all(week["exercises"] == [] for week in weeks)
