"""
Application configuration.
All values loaded from environment variables or a local .env file.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Per-region detail logging for every analysis run
    ANALYSIS_DEBUG_LOG: bool = False

    # Muscle balance analysis
    ANALYSIS_WINDOW_DAYS: int = 30
    EXERCISE_REGIONS_FILE: Optional[str] = None  # JSON {"Exercise": ["region", ...]}

    # Strength score tunables (scale choices, not physical units)
    FREQUENCY_POINTS_PER_SESSION: float = 10.0
    FREQUENCY_SCORE_CAP: float = 40.0
    VOLUME_DIVISOR: float = 1000.0
    VOLUME_SCORE_CAP: float = 40.0
    CONSISTENCY_SCORE_CAP: float = 20.0
    OPTIMAL_GAP_DAYS: float = 3.5
    GAP_TOLERANCE_DAYS: float = 7.0

    # Warning thresholds
    PUSH_DOMINANT_RATIO: float = 1.5
    PULL_DOMINANT_RATIO: float = 0.67
    STALE_AFTER_DAYS: int = 7

    # Profile statistics
    WEEKLY_GOAL: int = 3
    PROGRESS_DAYS: int = 14
    PROGRESSION_WEEKS: int = 6

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
