"""
Structured logging configuration.
"""
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional

import structlog
from structlog.types import Processor

from app.core.config import settings


def setup_logging() -> None:
    """Configure structured logging for the application."""

    # Common processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        # JSON format for production
        renderer = structlog.processors.JSONRenderer()
    else:
        # Console format for development
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure root logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


# ========================================
# Analysis Run Logging
# ========================================

@dataclass
class AnalysisRunLog:
    """Summary of a single analysis run."""
    run_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    kind: str = ""
    record_count: int = 0

    start_time: float = 0.0
    end_time: float = 0.0
    duration_ms: float = 0.0

    success: bool = True
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    # Filled in by the caller once results are known
    result: Dict[str, Any] = field(default_factory=dict)


class AnalysisRunTracker:
    """Tracker for a single analysis run."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        detail_enabled: bool,
        kind: str,
        record_count: int,
    ):
        self.logger = logger
        self.detail_enabled = detail_enabled
        self.log = AnalysisRunLog(kind=kind, record_count=record_count)

    def start(self) -> None:
        self.log.start_time = time.time()
        self.logger.debug(
            "Analysis run started",
            run_id=self.log.run_id,
            kind=self.log.kind,
            record_count=self.log.record_count,
        )

    def detail(self, event: str, **context: Any) -> None:
        """Log a detail line, only when detail logging is enabled."""
        if self.detail_enabled:
            self.logger.debug(event, run_id=self.log.run_id, **context)

    def set_result(self, **result: Any) -> None:
        self.log.result.update(result)

    def set_error(self, error_type: str, error_message: str) -> None:
        self.log.success = False
        self.log.error_type = error_type
        self.log.error_message = error_message

    def finish(self) -> None:
        """Mark the end of the run and log summary."""
        self.log.end_time = time.time()
        self.log.duration_ms = (self.log.end_time - self.log.start_time) * 1000

        if self.log.success:
            self.logger.info(
                "Analysis run completed",
                run_id=self.log.run_id,
                kind=self.log.kind,
                record_count=self.log.record_count,
                duration_ms=round(self.log.duration_ms, 2),
                **self.log.result,
            )
        else:
            self.logger.warning(
                "Analysis run failed",
                run_id=self.log.run_id,
                kind=self.log.kind,
                record_count=self.log.record_count,
                duration_ms=round(self.log.duration_ms, 2),
                error_type=self.log.error_type,
                error_message=self.log.error_message,
            )


class AnalysisRunLogger:
    """
    Logs a summary line for every analysis run.

    Usage:
        run_logger = AnalysisRunLogger(logger)
        with run_logger.track_run("muscle_balance", len(records)) as run:
            run.detail("Region scored", region="chest", score=42.0)
            run.set_result(warnings=3)
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        detail_enabled: Optional[bool] = None,
    ):
        self.logger = logger
        if detail_enabled is None:
            detail_enabled = settings.ANALYSIS_DEBUG_LOG
        self.detail_enabled = detail_enabled

    @contextmanager
    def track_run(
        self,
        kind: str,
        record_count: int,
    ) -> Generator[AnalysisRunTracker, None, None]:
        """Context manager for tracking an analysis run."""
        tracker = AnalysisRunTracker(
            logger=self.logger,
            detail_enabled=self.detail_enabled,
            kind=kind,
            record_count=record_count,
        )
        tracker.start()
        try:
            yield tracker
        except Exception as e:
            tracker.set_error(type(e).__name__, str(e))
            raise
        finally:
            tracker.finish()
