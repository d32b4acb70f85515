from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError
from requests import Response

from .. import __version__
from ..classification import RainClassifier
from ..config import LocationConfig
from ..entities import ClothingPolicy, Forecast
from ..exceptions import ForecastParseError, HTTPStatusError, NetworkError, RequestTimeout


logger = logging.getLogger(__name__)

USER_AGENT = f"Oblecnik/{__version__}"

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class RequestConfig:
    timeout: float = 10.0
    user_agent: str = USER_AGENT


class ForecastProvider:
    """Base class that adds timeouts and error mapping for HTTP providers.

    Subclasses describe how their feed should be read: which local hours are
    representative, when the target day rolls over to tomorrow, how many hours
    one point covers and how precipitation is classified.
    """

    name = "provider"
    target_hours: Tuple[int, int, int] = (7, 12, 15)
    cutoff_hour = 7
    resolution_hours = 1
    clothing_policy = ClothingPolicy()
    rain_classifier: RainClassifier

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or self._build_session(self.request_config)
        self._log = logging.getLogger(self.__class__.__name__)

    def forecast(self, location: LocationConfig) -> Forecast:
        raise NotImplementedError

    def _build_session(self, config: RequestConfig) -> requests.Session:
        session = requests.Session()
        session.headers["User-Agent"] = config.user_agent
        return session

    def _handle_response(self, response: Response) -> Response:
        if response.status_code == 429:
            self._log.warning("Quota exceeded: %s", response.text)
            raise HTTPStatusError(429, "quota exceeded")
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text)
            raise HTTPStatusError(response.status_code, response.reason or "")
        return response

    def _request(self, method: str, url: str, **kwargs: Any) -> Response:
        self._log.debug("%s %s params=%s", method, url, kwargs.get("params"))
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise RequestTimeout(self.request_config.timeout) from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise NetworkError(f"request to {self.name} failed: {exc}") from exc
        return self._handle_response(response)

    # helpers ------------------------------------------------------------
    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise ForecastParseError(f"{self.name} returned a body that is not JSON") from exc

    def _validate(self, model: Type[ModelT], payload: Any) -> ModelT:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            self._log.error("Response does not match schema: %s", exc)
            raise ForecastParseError(
                f"{self.name} response does not match the expected schema ({exc.error_count()} errors)"
            ) from exc


def require_points(name: str, points: Sequence[Any]) -> None:
    if not points:
        raise ForecastParseError(f"{name} response contains no forecast points")


__all__ = ["ForecastProvider", "RequestConfig", "ClothingPolicy", "USER_AGENT", "require_points"]
