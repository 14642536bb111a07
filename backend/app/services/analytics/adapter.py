"""
Data Source Adapters - Normalize raw workout rows into WorkoutRecords.

Supported sources:
- Supabase `workouts` table rows (exercise, weight, sets, reps, date)
- Manual input using the analyzer's own field names
"""
import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from app.core.clock import start_of_day
from app.core.logging import get_logger
from app.models.analysis import WorkoutRecord

logger = get_logger(__name__)


class RawDataAdapter(ABC):
    """Abstract base class for data source adapters."""

    source_name: str = "unknown"

    # Field names, overridden per source
    exercise_field: str = "exercise"
    load_field: str = "weight"
    sets_field: str = "sets"
    reps_field: str = "reps"
    date_field: str = "date"

    @abstractmethod
    def normalize(self, raw_data: Dict[str, Any]) -> WorkoutRecord:
        """
        Normalize one raw row.

        Args:
            raw_data: Raw row from the source

        Returns:
            WorkoutRecord

        Raises:
            ValueError: If the row has no exercise name or no usable date
        """
        pass

    def normalize_many(self, rows: Iterable[Dict[str, Any]]) -> List[WorkoutRecord]:
        """Normalize rows, dropping the ones that can't be used."""
        records: List[WorkoutRecord] = []
        dropped = 0

        for idx, row in enumerate(rows):
            try:
                records.append(self.normalize(row))
            except ValueError as e:
                dropped += 1
                logger.warning(
                    "Dropping unusable workout row",
                    source=self.source_name,
                    row_index=idx,
                    reason=str(e),
                )

        logger.debug(
            "Normalized workout rows",
            source=self.source_name,
            records=len(records),
            dropped=dropped,
        )
        return records

    def _build_record(self, raw_data: Dict[str, Any]) -> WorkoutRecord:
        exercise = raw_data.get(self.exercise_field)
        if exercise is None or not str(exercise).strip():
            raise ValueError(f"missing '{self.exercise_field}'")

        occurred_at = self._parse_date(raw_data.get(self.date_field))
        if occurred_at is None:
            raise ValueError(f"missing or invalid '{self.date_field}'")

        return WorkoutRecord(
            category=str(exercise).strip(),
            occurred_at=start_of_day(occurred_at),
            load=self._to_float(raw_data.get(self.load_field)),
            set_count=self._to_int(raw_data.get(self.sets_field)),
            rep_count=self._to_int(raw_data.get(self.reps_field)),
        )

    @staticmethod
    def _parse_date(value: Any) -> Optional[date]:
        """Accept date/datetime objects, yyyy-MM-dd strings and ISO datetimes."""
        if value is None:
            return None
        if isinstance(value, (date, datetime)):
            return value
        text = str(value).strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None

    @staticmethod
    def _to_float(value: Any) -> float:
        """Numeric value or 0 for missing, unparseable and non-finite input."""
        if value is None or value == "":
            return 0.0
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0
        return number if math.isfinite(number) else 0.0

    @classmethod
    def _to_int(cls, value: Any) -> int:
        return int(cls._to_float(value))


class SupabaseAdapter(RawDataAdapter):
    """
    Adapter for rows of the app's `workouts` table.

    Weight, sets and reps are nullable there; missing values count as 0.
    """

    source_name = "supabase"

    def normalize(self, raw_data: Dict[str, Any]) -> WorkoutRecord:
        return self._build_record(raw_data)


class ManualAdapter(RawDataAdapter):
    """Adapter for rows that already use the analyzer's field names."""

    source_name = "manual"

    exercise_field = "category"
    load_field = "load"
    sets_field = "setCount"
    reps_field = "repCount"
    date_field = "occurredAt"

    def normalize(self, raw_data: Dict[str, Any]) -> WorkoutRecord:
        return self._build_record(raw_data)


# Adapter registry
_ADAPTERS = {
    "supabase": SupabaseAdapter,
    "manual": ManualAdapter,
}


def get_adapter(source: str) -> RawDataAdapter:
    """
    Get the appropriate adapter for a data source.

    Unknown sources fall back to the Supabase row format.
    """
    adapter_class = _ADAPTERS.get(source.lower())

    if not adapter_class:
        logger.warning(f"Unknown data source: {source}, falling back to supabase")
        adapter_class = SupabaseAdapter

    return adapter_class()
