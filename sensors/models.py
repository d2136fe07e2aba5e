"""Value types passed between the DHT22 decode stages."""

import math
from dataclasses import dataclass, asdict
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

SOURCE_FRESH = "fresh"
SOURCE_CACHED = "cached"
SOURCE_NONE = "none"


class Level(IntEnum):
    LOW = 0
    HIGH = 1


@dataclass(frozen=True)
class TransitionSample:
    """One line-state run: the level seen after it ended and how long it lasted."""
    state_after: Level
    duration_ticks: int
    saturated: bool = False


@dataclass(frozen=True)
class RawFrame:
    """Five 8-bit fields: humidity hi/lo, temperature hi/lo, checksum."""
    data: Tuple[int, int, int, int, int]
    bits_read: int
    timed_out: bool = False

    def __getitem__(self, index: int) -> int:
        return self.data[index]


@dataclass(frozen=True)
class Reading:
    humidity: float     # percent
    temperature: float  # Celsius


class _Unset:
    """Marker for an empty reading cache."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass(frozen=True)
class DerivedMetrics:
    heat_index_f: float
    dew_point_f: float


@dataclass(frozen=True)
class ReadingRecord:
    """Output of one orchestrated read.

    source is "fresh", "cached" or "none". The "none" record carries no
    values at all.
    """
    source: str
    temperature_c: Optional[float] = None
    temperature_f: Optional[float] = None
    humidity: Optional[float] = None
    heat_index_f: Optional[float] = None
    dew_point_f: Optional[float] = None

    @classmethod
    def none(cls) -> "ReadingRecord":
        return cls(source=SOURCE_NONE)

    @property
    def has_data(self) -> bool:
        return self.source != SOURCE_NONE

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe dict; NaN or infinite metrics (dew point of dry air) become None."""
        if not self.has_data:
            return {"source": SOURCE_NONE}
        return {
            key: None if isinstance(value, float) and not math.isfinite(value) else value
            for key, value in asdict(self).items()
        }
