"""Error taxonomy shared by the configuration store, providers and pipeline.

Every error is fatal for the single-shot CLI.  The ``category`` is printed in
front of the message and ``exit_code`` becomes the process exit status.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional


class OblecnikError(RuntimeError):
    """Base class for all expected failures."""

    category = "Error"
    exit_code = 1


class ConfigError(OblecnikError):
    """Missing, unreadable or invalid location configuration."""

    category = "Configuration error"
    exit_code = 2


class NetworkError(OblecnikError):
    """The forecast request could not be built, sent or completed."""

    category = "Network error"
    exit_code = 3


class RequestTimeout(NetworkError):
    """The provider did not answer within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"request timed out after {timeout:g} s")
        self.timeout = timeout


class HTTPStatusError(NetworkError):
    """The provider answered with a non-success status code."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        message = f"HTTP {status_code}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.status_code = status_code


class ForecastParseError(OblecnikError):
    """The response body is not valid JSON or does not match the schema."""

    category = "Parse error"
    exit_code = 4


class InsufficientForecastData(OblecnikError):
    """The forecast does not cover all three target hours of the target day."""

    category = "Insufficient data"
    exit_code = 5

    def __init__(self, target_day: date, missing: Iterable[str], message: Optional[str] = None) -> None:
        self.target_day = target_day
        self.missing = tuple(missing)
        if message is None:
            message = (
                f"insufficient forecast data for {target_day.isoformat()}: "
                f"no point for {', '.join(self.missing)}"
            )
        super().__init__(message)


__all__ = [
    "OblecnikError",
    "ConfigError",
    "NetworkError",
    "RequestTimeout",
    "HTTPStatusError",
    "ForecastParseError",
    "InsufficientForecastData",
]
