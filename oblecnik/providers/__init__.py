"""Forecast providers keyed by the ``provider`` setting."""
from __future__ import annotations

from typing import Optional

import requests

from .base import ClothingPolicy, ForecastProvider, RequestConfig
from .metno import MetNoProvider
from .openweather import OpenWeatherProvider
from ..config import LocationConfig
from ..exceptions import ConfigError

PROVIDER_KINDS = ("metno", "openweather")


def get_provider(config: LocationConfig, session: Optional[requests.Session] = None) -> ForecastProvider:
    request_config = RequestConfig(timeout=config.timeout)
    if config.provider == "metno":
        return MetNoProvider(session=session, request_config=request_config)
    if config.provider == "openweather":
        return OpenWeatherProvider(api_key=config.api_key, session=session, request_config=request_config)
    raise ConfigError(f"unknown provider {config.provider!r}, expected one of: {', '.join(PROVIDER_KINDS)}")


__all__ = [
    "PROVIDER_KINDS",
    "ClothingPolicy",
    "ForecastProvider",
    "RequestConfig",
    "MetNoProvider",
    "OpenWeatherProvider",
    "get_provider",
]
