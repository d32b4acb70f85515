"""OpenWeather 5 day / 3 hour forecast provider."""
from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .base import ClothingPolicy, ForecastProvider, require_points
from ..classification import ConditionIdRainClassifier
from ..config import LocationConfig
from ..entities import Forecast, ForecastPoint
from ..exceptions import ConfigError


class _Main(BaseModel):
    temp: float


class _Wind(BaseModel):
    speed: float


class _Condition(BaseModel):
    id: int
    main: Optional[str] = None
    description: Optional[str] = None


class _Entry(BaseModel):
    dt: int
    main: _Main
    wind: _Wind
    weather: List[_Condition] = Field(..., min_length=1)
    rain: Optional[Dict[str, float]] = None
    snow: Optional[Dict[str, float]] = None


class OpenWeatherDocument(BaseModel):
    list: List[_Entry]


class OpenWeatherProvider(ForecastProvider):
    """Integration with the OpenWeather forecast endpoint."""

    name = "openweather"
    base_url = "https://api.openweathermap.org/data/2.5/forecast"
    target_hours = (7, 12, 15)
    cutoff_hour = 6
    resolution_hours = 3
    clothing_policy = ClothingPolicy(jacket_light_below=19.0)
    rain_classifier = ConditionIdRainClassifier()

    def __init__(self, *, api_key: Optional[str], base_url: Optional[str] = None, **kwargs) -> None:
        if not api_key:
            raise ConfigError("the openweather provider needs an api_key (config file or OBLECNIK_API_KEY)")
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    def forecast(self, location: LocationConfig) -> Forecast:
        if location.altitude is not None:
            self._log.debug("Altitude %s is not supported by OpenWeather, ignoring", location.altitude)
        params = {
            "lat": location.latitude,
            "lon": location.longitude,
            "appid": self.api_key,
            "units": "metric",
        }
        response = self._request("GET", self.base_url, params=params)
        document = self._validate(OpenWeatherDocument, self._json(response))

        require_points(self.name, document.list)
        points = tuple(self._build_point(entry) for entry in document.list)
        return Forecast(points=points, source=self.name)

    def _build_point(self, entry: _Entry) -> ForecastPoint:
        return ForecastPoint(
            timestamp=datetime.fromtimestamp(entry.dt, tz=timezone.utc),
            temperature_c=entry.main.temp,
            wind_speed_ms=entry.wind.speed,
            condition_id=entry.weather[0].id,
            precipitation_mm=_precipitation(entry),
        )


def _precipitation(entry: _Entry) -> Optional[float]:
    total = 0.0
    seen = False
    for bucket in (entry.rain, entry.snow):
        if bucket and "3h" in bucket:
            total += bucket["3h"]
            seen = True
    return total if seen else None


__all__ = ["OpenWeatherProvider", "OpenWeatherDocument"]
