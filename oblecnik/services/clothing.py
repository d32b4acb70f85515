"""Clothing decision rules.

Temperatures are the three representative samples; all comparisons are
strict.  Rules run in order and the wind rule may override the jacket chosen
from temperature alone.
"""
from __future__ import annotations

from ..entities import ClothingPolicy, ClothingSummary, JacketLevel, TrouserWeight, WeatherSummary, WindLevel

HOODIE_BELOW = 21.0
HOODIE_WET_BELOW = 26.0
INSULATED_JACKET_BELOW = 10.0
MILD_MIN_TEMP = 10.0
SHORTS_ABOVE = 25.0
REGULAR_TROUSERS_ABOVE = 5.0


def decide_clothing(summary: WeatherSummary, policy: ClothingPolicy = ClothingPolicy()) -> ClothingSummary:
    max_temp = summary.max_temp
    min_temp = summary.min_temp

    hoodie = max_temp < HOODIE_BELOW or (max_temp < HOODIE_WET_BELOW and summary.is_wet)

    if max_temp < INSULATED_JACKET_BELOW:
        jacket = JacketLevel.INSULATED
    elif max_temp < policy.jacket_light_below or (summary.is_heavy_rain and min_temp >= MILD_MIN_TEMP):
        jacket = JacketLevel.LIGHT
    else:
        jacket = JacketLevel.NONE

    # windy but mild: a light jacket regardless of temperature
    if summary.wind_index >= WindLevel.MODERATE and min_temp >= MILD_MIN_TEMP:
        jacket = JacketLevel.LIGHT

    if max_temp > SHORTS_ABOVE:
        trousers = TrouserWeight.SHORTS
    elif max_temp > REGULAR_TROUSERS_ABOVE:
        trousers = TrouserWeight.REGULAR
    else:
        trousers = TrouserWeight.INSULATED

    return ClothingSummary(hoodie=hoodie, jacket=int(jacket), trousers=int(trousers))


__all__ = ["decide_clothing"]
