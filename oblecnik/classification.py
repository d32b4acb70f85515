"""Wind and precipitation classification.

Wind uses fixed m/s breakpoints.  Precipitation depends on what the provider
reports, so it is a strategy chosen by the provider:

* ``SymbolCodeRainClassifier`` maps MET Norway symbol codes onto the
  four-level scale and only ever escalates.
* ``ConditionIdRainClassifier`` maps OpenWeatherMap condition IDs onto the
  three-level scale and re-evaluates every point, so a later dry point resets
  the level.
"""
from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence, Tuple

from .entities import FOUR_LEVEL, THREE_LEVEL, ForecastPoint, RainScale, WindLevel


logger = logging.getLogger(__name__)

MODERATE_WIND_ABOVE = 8.0
STRONG_WIND_ABOVE = 12.0


def classify_wind(speed: float) -> int:
    if speed > STRONG_WIND_ABOVE:
        return WindLevel.STRONG
    if speed > MODERATE_WIND_ABOVE:
        return WindLevel.MODERATE
    return WindLevel.CALM


def scan_wind(speeds: Iterable[float]) -> Tuple[float, int]:
    """Return the peak speed and the wind level, escalated across the scan."""

    peak = 0.0
    level = int(WindLevel.CALM)
    for speed in speeds:
        level = max(level, classify_wind(speed))
        if speed > peak:
            peak = speed
    return peak, level


CLOUDY_CODES = frozenset(
    {
        "partlycloudy_day",
        "partlycloudy_night",
        "partlycloudy_polartwilight",
        "cloudy",
    }
)

# Codes met.no publishes that the first releases did not list.  Each one joins
# the tier of its siblings: the light ones drizzle, the rest rain.
EXTRA_DRIZZLE_CODES = frozenset(
    {
        "lightrainandthunder",
        "lightsnow",
        "lightssnowshowersandthunder_day",
        "lightssnowshowersandthunder_night",
        "lightssnowshowersandthunder_polartwilight",
    }
)

EXTRA_RAIN_CODES = frozenset(
    {
        "sleetshowers_day",
        "sleetshowers_night",
        "sleetshowers_polartwilight",
        "heavysleet",
    }
)

DRIZZLE_CODES = EXTRA_DRIZZLE_CODES | frozenset(
    {
        "fog",
        "lightrain",
        "lightrainshowers_day",
        "lightrainshowers_night",
        "lightrainshowers_polartwilight",
        "lightrainshowersandthunder_day",
        "lightrainshowersandthunder_night",
        "lightrainshowersandthunder_polartwilight",
        "lightsleet",
        "lightsleetandthunder",
        "lightsleetshowers_day",
        "lightsleetshowers_night",
        "lightsleetshowers_polartwilight",
        # met.no spells these with a double "s"
        "lightssleetshowersandthunder_day",
        "lightssleetshowersandthunder_night",
        "lightssleetshowersandthunder_polartwilight",
        "lightsnowandthunder",
        "lightsnowshowers_day",
        "lightsnowshowers_night",
        "lightsnowshowers_polartwilight",
    }
)

RAIN_CODES = EXTRA_RAIN_CODES | frozenset(
    {
        "rain",
        "rainandthunder",
        "rainshowers_day",
        "rainshowers_night",
        "rainshowers_polartwilight",
        "rainshowersandthunder_day",
        "rainshowersandthunder_night",
        "rainshowersandthunder_polartwilight",
        "heavyrain",
        "heavyrainandthunder",
        "heavyrainshowers_day",
        "heavyrainshowers_night",
        "heavyrainshowers_polartwilight",
        "heavyrainshowersandthunder_day",
        "heavyrainshowersandthunder_night",
        "heavyrainshowersandthunder_polartwilight",
        "sleet",
        "sleetandthunder",
        "sleetshowersandthunder_day",
        "sleetshowersandthunder_night",
        "sleetshowersandthunder_polartwilight",
        "heavysleetandthunder",
        "heavysleetshowers_day",
        "heavysleetshowers_night",
        "heavysleetshowers_polartwilight",
        "heavysleetshowersandthunder_day",
        "heavysleetshowersandthunder_night",
        "heavysleetshowersandthunder_polartwilight",
        "snow",
        "snowandthunder",
        "snowshowers_day",
        "snowshowers_night",
        "snowshowers_polartwilight",
        "snowshowersandthunder_day",
        "snowshowersandthunder_night",
        "snowshowersandthunder_polartwilight",
        "heavysnow",
        "heavysnowandthunder",
        "heavysnowshowers_day",
        "heavysnowshowers_night",
        "heavysnowshowers_polartwilight",
        "heavysnowshowersandthunder_day",
        "heavysnowshowersandthunder_night",
        "heavysnowshowersandthunder_polartwilight",
    }
)

# OpenWeatherMap condition codes, see https://openweathermap.org/weather-conditions
DRIZZLE_IDS = frozenset(
    {300, 301, 302, 310, 311, 312, 313, 314, 321, 500, 520, 600, 612, 615, 620, 701, 741}
)

RAIN_IDS = frozenset(
    {
        200, 201, 202, 210, 211, 212, 221, 230, 231, 232,
        501, 502, 503, 504, 511, 521, 522, 531,
        601, 602, 611, 613, 616, 621, 622,
    }
)


class RainClassifier(Protocol):
    """Strategy turning the representative points into a rain level."""

    scale: RainScale

    def classify(self, points: Sequence[ForecastPoint]) -> int:
        """Return the rain level for points ordered morning, noon, afternoon."""
        ...


class SymbolCodeRainClassifier:
    """Four-level scale from the morning point's next-hours symbol code.

    Drizzle is checked first, then rain, then clouds; a rain match is never
    overridden and clouds only apply at the baseline.
    """

    scale = FOUR_LEVEL

    SUNNY = 0
    CLOUDY = 1
    DRIZZLE = 2
    HEAVY_RAIN = 3

    def classify(self, points: Sequence[ForecastPoint]) -> int:
        level = self.SUNNY
        if not points:
            return level
        code = points[0].symbol_code
        if code is None:
            logger.debug("First point %s has no symbol code", points[0].timestamp)
            return level
        if code in DRIZZLE_CODES and level != self.HEAVY_RAIN:
            level = self.DRIZZLE
        elif code in RAIN_CODES:
            level = self.HEAVY_RAIN
        elif code in CLOUDY_CODES and level == self.SUNNY:
            level = self.CLOUDY
        return level


class ConditionIdRainClassifier:
    """Three-level scale re-evaluated for every point.

    A rain ID sets the top level, a drizzle ID sets drizzle only from the
    baseline, anything else (including a drizzle ID while the level is already
    raised) resets to the baseline.
    """

    scale = THREE_LEVEL

    NONE = 0
    DRIZZLE = 1
    RAIN = 2

    def classify(self, points: Sequence[ForecastPoint]) -> int:
        level = self.NONE
        for point in points:
            condition = point.condition_id
            if condition in RAIN_IDS:
                level = self.RAIN
            elif level == self.NONE and condition in DRIZZLE_IDS:
                level = self.DRIZZLE
            else:
                level = self.NONE
        return level


__all__ = [
    "classify_wind",
    "scan_wind",
    "CLOUDY_CODES",
    "DRIZZLE_CODES",
    "RAIN_CODES",
    "EXTRA_DRIZZLE_CODES",
    "EXTRA_RAIN_CODES",
    "DRIZZLE_IDS",
    "RAIN_IDS",
    "RainClassifier",
    "SymbolCodeRainClassifier",
    "ConditionIdRainClassifier",
]
