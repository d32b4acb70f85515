from __future__ import annotations

import logging

from ..classification import RainClassifier, scan_wind
from ..entities import SelectedForecast, WeatherSummary


logger = logging.getLogger(__name__)


def summarise(selection: SelectedForecast, rain_classifier: RainClassifier) -> WeatherSummary:
    """Build the weather summary from the three representative points.

    Wind and rain look at the same points the temperatures come from, in
    morning, noon, afternoon order.
    """

    points = selection.ordered()
    wind_speed, wind_index = scan_wind(point.wind_speed_ms for point in points)
    rain_index = rain_classifier.classify(points)
    summary = WeatherSummary(
        temperatures=selection.temperatures,
        wind_speed_ms=wind_speed,
        wind_index=wind_index,
        rain_index=rain_index,
        rain_scale=rain_classifier.scale,
    )
    logger.debug("Summary for %s: %s", selection.target_day, summary)
    return summary


__all__ = ["summarise"]
