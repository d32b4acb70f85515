from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .clothing import decide_clothing
from .selector import select_representative_points
from .summary import summarise
from ..config import LocationConfig
from ..entities import ClothingSummary, SelectedForecast, WeatherSummary
from ..providers.base import ForecastProvider


logger = logging.getLogger(__name__)

LOCALTIME_FILE = Path("/etc/localtime")


def local_zone() -> tzinfo:
    """The system time zone including its daylight saving rules.

    ``TZ`` wins when it names an IANA zone, otherwise the zone file behind
    /etc/localtime is used.  Anything else gets the current fixed UTC offset.
    """

    name = os.environ.get("TZ", "").lstrip(":")
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug("TZ=%s is not a known zone name", name)
    elif LOCALTIME_FILE.is_file():
        with LOCALTIME_FILE.open("rb") as zone_file:
            try:
                return ZoneInfo.from_file(zone_file, key="localtime")
            except ValueError as exc:
                logger.debug("Cannot read %s: %s", LOCALTIME_FILE, exc)
    logger.debug("No zone database entry for local time, using a fixed offset")
    return datetime.now().astimezone().tzinfo


def local_now() -> datetime:
    return datetime.now(local_zone())


@dataclass(frozen=True)
class Recommendation:
    target_day: date
    source: str
    selection: SelectedForecast
    weather: WeatherSummary
    clothing: ClothingSummary


class RecommendationService:
    """Run the forecast -> selection -> summary -> clothing pipeline once."""

    def __init__(
        self,
        provider: ForecastProvider,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.clock = clock or local_now
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def recommend(self, location: LocationConfig) -> Recommendation:
        forecast = self.provider.forecast(location)
        now = self.clock()
        self._log.debug("Selecting from %d points of %s at %s", len(forecast.points), forecast.source, now)

        selection = select_representative_points(
            forecast.points,
            now,
            target_hours=self.provider.target_hours,
            cutoff_hour=self.provider.cutoff_hour,
            resolution_hours=self.provider.resolution_hours,
        )
        weather = summarise(selection, self.provider.rain_classifier)
        clothing = decide_clothing(weather, self.provider.clothing_policy)
        self._log.info("Recommendation for %s: %s", selection.target_day, clothing)
        return Recommendation(
            target_day=selection.target_day,
            source=forecast.source,
            selection=selection,
            weather=weather,
            clothing=clothing,
        )


__all__ = ["Recommendation", "RecommendationService", "local_now", "local_zone"]
