"""
Services module - Application business logic layer.

Modules:
- analytics: Muscle balance analysis and profile statistics
"""
from app.services.analytics import StatsCalculator, WorkoutAnalyzer

__all__ = [
    "StatsCalculator",
    "WorkoutAnalyzer",
]
