"""MET Norway Locationforecast 2.0 provider."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from .base import ClothingPolicy, ForecastProvider, require_points
from ..classification import SymbolCodeRainClassifier
from ..config import LocationConfig
from ..entities import Forecast, ForecastPoint


class _Summary(BaseModel):
    symbol_code: str


class _PeriodDetails(BaseModel):
    precipitation_amount: Optional[float] = None


class _Period(BaseModel):
    summary: Optional[_Summary] = None
    details: Optional[_PeriodDetails] = None


class _InstantDetails(BaseModel):
    air_temperature: float
    wind_speed: float


class _Instant(BaseModel):
    details: _InstantDetails


class _StepData(BaseModel):
    instant: _Instant
    next_1_hours: Optional[_Period] = None
    next_6_hours: Optional[_Period] = None
    next_12_hours: Optional[_Period] = None


class _Timestep(BaseModel):
    time: datetime
    data: _StepData

    @field_validator("time")
    @classmethod
    def _require_offset(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("timestamp must carry a UTC offset")
        return v


class _Meta(BaseModel):
    updated_at: Optional[datetime] = None


class _Properties(BaseModel):
    meta: Optional[_Meta] = None
    timeseries: List[_Timestep]


class MetNoDocument(BaseModel):
    """Subset of the GeoJSON document returned by ``/compact``."""

    type: Optional[str] = None
    properties: _Properties


class MetNoProvider(ForecastProvider):
    """Hourly forecast with symbolic weather codes, no API key required."""

    name = "met.no"
    base_url = "https://api.met.no/weatherapi/locationforecast/2.0/compact"
    target_hours = (7, 12, 15)
    cutoff_hour = 7
    resolution_hours = 1
    clothing_policy = ClothingPolicy(jacket_light_below=15.0)
    rain_classifier = SymbolCodeRainClassifier()

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    def forecast(self, location: LocationConfig) -> Forecast:
        # The API terms ask for at most four decimals.
        params = {
            "lat": round(location.latitude, 4),
            "lon": round(location.longitude, 4),
        }
        if location.altitude is not None:
            params["altitude"] = location.altitude
        response = self._request("GET", self.base_url, params=params)
        document = self._validate(MetNoDocument, self._json(response))

        steps = document.properties.timeseries
        require_points(self.name, steps)
        points = tuple(self._build_point(step) for step in steps)
        meta = document.properties.meta
        self._log.debug("Received %d timesteps", len(points))
        return Forecast(points=points, source=self.name, updated_at=meta.updated_at if meta else None)

    def _build_point(self, step: _Timestep) -> ForecastPoint:
        details = step.data.instant.details
        return ForecastPoint(
            timestamp=step.time,
            temperature_c=details.air_temperature,
            wind_speed_ms=details.wind_speed,
            symbol_code=_symbol_code(step.data),
            precipitation_mm=_precipitation(step.data),
        )


def _symbol_code(data: _StepData) -> Optional[str]:
    for period in (data.next_12_hours, data.next_6_hours, data.next_1_hours):
        if period is not None and period.summary is not None:
            return period.summary.symbol_code
    return None


def _precipitation(data: _StepData) -> Optional[float]:
    for period in (data.next_1_hours, data.next_6_hours):
        if period is not None and period.details is not None:
            return period.details.precipitation_amount
    return None


__all__ = ["MetNoProvider", "MetNoDocument"]
