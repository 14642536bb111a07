"""
Body regions and the exercise -> region membership table.
"""
import json
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Union

from app.core.logging import get_logger

logger = get_logger(__name__)


class Region:
    """Known body regions."""
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    LEGS = "legs"
    CORE = "core"


# Fixed enumeration order used for reports and warnings
KNOWN_REGIONS = (
    Region.CHEST,
    Region.BACK,
    Region.SHOULDERS,
    Region.BICEPS,
    Region.TRICEPS,
    Region.LEGS,
    Region.CORE,
)

DEFAULT_EXERCISE_REGIONS: Dict[str, tuple] = {
    # Push
    "Bench Press": (Region.CHEST, Region.SHOULDERS, Region.TRICEPS),
    "Shoulder Press": (Region.SHOULDERS, Region.TRICEPS),
    "Push-ups": (Region.CHEST, Region.SHOULDERS, Region.TRICEPS),
    # Pull
    "Pull-ups": (Region.BACK, Region.BICEPS),
    "Lat Pulldown": (Region.BACK, Region.BICEPS),
    "Cable Rows": (Region.BACK, Region.BICEPS),
    "Barbell Rows": (Region.BACK, Region.BICEPS),
    "Face Pulls": (Region.SHOULDERS, Region.BACK),
    # Legs
    "Squats": (Region.LEGS,),
    "Deadlift": (Region.LEGS, Region.BACK),
    # Core
    "Chin-ups": (Region.BACK, Region.BICEPS, Region.CORE),
}


class CategoryTable(Mapping[str, FrozenSet[str]]):
    """
    Read-only mapping from exercise name to the regions it trains.

    Lookup is an exact match on the exercise name. Unknown exercises map
    to no regions.
    """

    def __init__(self, mapping: Mapping[str, Iterable[str]]):
        table: Dict[str, FrozenSet[str]] = {}
        for exercise, regions in mapping.items():
            if isinstance(regions, str):
                raise ValueError(
                    f"Regions for '{exercise}' must be a list, got a string"
                )
            tags = frozenset(regions)
            unknown = tags.difference(KNOWN_REGIONS)
            if unknown:
                raise ValueError(
                    f"Unknown region(s) {sorted(unknown)} for '{exercise}'; "
                    f"expected any of {list(KNOWN_REGIONS)}"
                )
            table[exercise] = tags
        self._table = table

    def __getitem__(self, exercise: str) -> FrozenSet[str]:
        return self._table[exercise]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def regions_for(self, exercise: str) -> FrozenSet[str]:
        """Regions trained by an exercise, empty if unclassifiable."""
        return self._table.get(exercise, frozenset())

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "CategoryTable":
        """Load a table from a JSON object of exercise -> list of regions."""
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Exercise region file {path} must contain a JSON object")
        table = cls(data)
        logger.info("Loaded exercise region table", path=str(path), exercises=len(table))
        return table


DEFAULT_CATEGORY_TABLE = CategoryTable(DEFAULT_EXERCISE_REGIONS)
