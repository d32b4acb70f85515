from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ForecastPoint:
    """Normalized forecast point representation.

    Values are stored in SI-like units to make providers interchangeable:
    - temperature in Celsius
    - wind speed in metres per second (m/s)
    - precipitation in millimetres (mm)

    Exactly one of ``symbol_code`` (categorical providers) and
    ``condition_id`` (numeric providers) is normally set.
    """

    timestamp: datetime
    temperature_c: float
    wind_speed_ms: float
    symbol_code: Optional[str] = None
    condition_id: Optional[int] = None
    precipitation_mm: Optional[float] = None


@dataclass(frozen=True)
class Forecast:
    points: Tuple[ForecastPoint, ...]
    source: str
    updated_at: Optional[datetime] = None


class Slot(Enum):
    MORNING = "morning"
    NOON = "noon"
    AFTERNOON = "afternoon"


SLOT_ORDER: Tuple[Slot, Slot, Slot] = (Slot.MORNING, Slot.NOON, Slot.AFTERNOON)


@dataclass(frozen=True)
class SelectedForecast:
    """Representative points of the target day keyed by the slot they fill."""

    target_day: date
    points: Mapping[Slot, ForecastPoint]

    def ordered(self) -> Tuple[ForecastPoint, ...]:
        return tuple(self.points[slot] for slot in SLOT_ORDER)

    @property
    def temperatures(self) -> Tuple[float, float, float]:
        morning, noon, afternoon = (point.temperature_c for point in self.ordered())
        return morning, noon, afternoon


@dataclass(frozen=True)
class RainScale:
    """Discrete precipitation scale of a provider.

    ``wet_from`` is the first level that counts as rain, ``labels`` has one
    entry per level and the last level is the most severe one.
    """

    name: str
    labels: Tuple[str, ...]
    wet_from: int

    @property
    def max_level(self) -> int:
        return len(self.labels) - 1

    def label(self, level: int) -> str:
        return self.labels[level]


FOUR_LEVEL = RainScale(name="symbol", labels=("sunny", "cloudy", "light rain", "heavy rain"), wet_from=2)
THREE_LEVEL = RainScale(name="condition-id", labels=("no rain", "drizzle", "rain"), wet_from=1)


class WindLevel(IntEnum):
    CALM = 0
    MODERATE = 1
    STRONG = 2


@dataclass(frozen=True)
class WeatherSummary:
    temperatures: Tuple[float, float, float]  # morning, noon, afternoon
    wind_speed_ms: float
    wind_index: int
    rain_index: int
    rain_scale: RainScale = FOUR_LEVEL

    @property
    def min_temp(self) -> float:
        return min(self.temperatures)

    @property
    def max_temp(self) -> float:
        return max(self.temperatures)

    @property
    def is_wet(self) -> bool:
        return self.rain_index >= self.rain_scale.wet_from

    @property
    def is_heavy_rain(self) -> bool:
        return self.rain_index == self.rain_scale.max_level


class JacketLevel(IntEnum):
    NONE = 0
    LIGHT = 1
    INSULATED = 2


class TrouserWeight(IntEnum):
    SHORTS = 0
    REGULAR = 1
    INSULATED = 2


@dataclass(frozen=True)
class ClothingPolicy:
    """Provider specific thresholds used by the clothing decision."""

    jacket_light_below: float = 15.0


@dataclass(frozen=True)
class ClothingSummary:
    hoodie: bool
    jacket: int
    trousers: int


__all__ = [
    "ForecastPoint",
    "Forecast",
    "Slot",
    "SLOT_ORDER",
    "SelectedForecast",
    "RainScale",
    "FOUR_LEVEL",
    "THREE_LEVEL",
    "WindLevel",
    "WeatherSummary",
    "JacketLevel",
    "TrouserWeight",
    "ClothingPolicy",
    "ClothingSummary",
]
