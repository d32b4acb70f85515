from __future__ import annotations

from datetime import datetime, timezone

import pytest
import requests
import responses

from factories import metno_document, metno_step, owm_entry
from oblecnik.config import LocationConfig
from oblecnik.exceptions import ConfigError, ForecastParseError, HTTPStatusError, NetworkError, RequestTimeout
from oblecnik.providers import MetNoProvider, OpenWeatherProvider, get_provider
from oblecnik.providers.base import RequestConfig


METNO_URL = "https://metno.test/compact"
OWM_URL = "https://owm.test/forecast"


@pytest.fixture
def prague() -> LocationConfig:
    return LocationConfig(latitude=50.075538, longitude=14.437800, altitude=250)


def test_metno_forecast_normalization(requests_mock, prague):
    provider = MetNoProvider(base_url=METNO_URL)
    requests_mock.get(
        METNO_URL,
        json=metno_document(
            [
                metno_step("2026-10-20T05:00:00Z", 6.4, 2.1, "lightrain"),
                metno_step("2026-10-20T06:00:00Z", 7.1, 2.5, None),
            ]
        ),
    )

    forecast = provider.forecast(prague)

    assert forecast.source == "met.no"
    assert forecast.updated_at == datetime(2026, 10, 19, 8, 12, 44, tzinfo=timezone.utc)
    assert len(forecast.points) == 2
    first, second = forecast.points
    assert first.timestamp == datetime(2026, 10, 20, 5, tzinfo=timezone.utc)
    assert first.temperature_c == 6.4
    assert first.wind_speed_ms == 2.1
    assert first.symbol_code == "lightrain"
    assert first.precipitation_mm == 0.0
    # without next_12_hours the one hour summary is used
    assert second.symbol_code == "clearsky_day"


def test_metno_request_parameters(requests_mock, prague):
    provider = MetNoProvider(base_url=METNO_URL)
    requests_mock.get(METNO_URL, json=metno_document([metno_step("2026-10-20T05:00:00Z", 6.4, 2.1)]))

    provider.forecast(prague)

    request = requests_mock.last_request
    assert request.qs == {"lat": ["50.0755"], "lon": ["14.4378"], "altitude": ["250"]}
    assert request.headers["User-Agent"].startswith("Oblecnik/")
    assert request.timeout == 10.0


def test_metno_omits_unset_altitude(requests_mock):
    provider = MetNoProvider(base_url=METNO_URL)
    requests_mock.get(METNO_URL, json=metno_document([metno_step("2026-10-20T05:00:00Z", 6.4, 2.1)]))

    provider.forecast(LocationConfig(latitude=50.0, longitude=14.0))

    assert "altitude" not in requests_mock.last_request.qs


def test_metno_timeout_is_a_network_error(requests_mock, prague):
    provider = MetNoProvider(base_url=METNO_URL, request_config=RequestConfig(timeout=2.5))
    requests_mock.get(METNO_URL, exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(RequestTimeout) as excinfo:
        provider.forecast(prague)

    assert isinstance(excinfo.value, NetworkError)
    assert "2.5 s" in str(excinfo.value)


def test_metno_connection_error(requests_mock, prague):
    provider = MetNoProvider(base_url=METNO_URL)
    requests_mock.get(METNO_URL, exc=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(NetworkError):
        provider.forecast(prague)


@pytest.mark.parametrize("status", [403, 429, 500, 503])
def test_metno_http_errors(requests_mock, prague, status):
    provider = MetNoProvider(base_url=METNO_URL)
    requests_mock.get(METNO_URL, status_code=status, text="nope")

    with pytest.raises(HTTPStatusError) as excinfo:
        provider.forecast(prague)

    assert excinfo.value.status_code == status


def test_metno_invalid_json(requests_mock, prague):
    provider = MetNoProvider(base_url=METNO_URL)
    requests_mock.get(METNO_URL, text="<html>maintenance</html>")

    with pytest.raises(ForecastParseError):
        provider.forecast(prague)


def test_metno_schema_mismatch(requests_mock, prague):
    provider = MetNoProvider(base_url=METNO_URL)
    requests_mock.get(METNO_URL, json={"properties": {"timeseries": [{"time": "2026-10-20T05:00:00Z", "data": {}}]}})

    with pytest.raises(ForecastParseError):
        provider.forecast(prague)


def test_metno_rejects_timestamps_without_offset(requests_mock, prague):
    provider = MetNoProvider(base_url=METNO_URL)
    requests_mock.get(METNO_URL, json=metno_document([metno_step("2026-10-20T05:00:00", 6.4, 2.1)]))

    with pytest.raises(ForecastParseError):
        provider.forecast(prague)


def test_metno_empty_timeseries(requests_mock, prague):
    provider = MetNoProvider(base_url=METNO_URL)
    requests_mock.get(METNO_URL, json=metno_document([]))

    with pytest.raises(ForecastParseError):
        provider.forecast(prague)


def test_openweather_forecast_normalization(requests_mock, prague):
    provider = OpenWeatherProvider(api_key="secret", base_url=OWM_URL)
    entry = owm_entry(1792476000, 11.3, 4.2, condition=500)
    entry["rain"] = {"3h": 0.7}
    requests_mock.get(OWM_URL, json={"cod": "200", "cnt": 1, "list": [entry], "city": {"timezone": 7200}})

    forecast = provider.forecast(prague)

    point = forecast.points[0]
    assert forecast.source == "openweather"
    assert point.timestamp == datetime.fromtimestamp(1792476000, tz=timezone.utc)
    assert point.temperature_c == 11.3
    assert point.wind_speed_ms == 4.2
    assert point.condition_id == 500
    assert point.precipitation_mm == pytest.approx(0.7)
    qs = requests_mock.last_request.qs
    assert qs["appid"] == ["secret"]
    assert qs["units"] == ["metric"]
    assert "altitude" not in qs


def test_openweather_requires_api_key():
    with pytest.raises(ConfigError):
        OpenWeatherProvider(api_key=None)


def test_openweather_schema_mismatch(requests_mock, prague):
    provider = OpenWeatherProvider(api_key="secret", base_url=OWM_URL)
    entry = owm_entry(1792476000, 11.3, 4.2)
    entry["weather"] = []
    requests_mock.get(OWM_URL, json={"list": [entry]})

    with pytest.raises(ForecastParseError):
        provider.forecast(prague)


def test_openweather_unauthorized():
    provider = OpenWeatherProvider(api_key="wrong", base_url=OWM_URL)

    with responses.RequestsMock() as rsps:
        rsps.add("GET", OWM_URL, json={"cod": 401, "message": "Invalid API key"}, status=401)
        with pytest.raises(HTTPStatusError) as excinfo:
            provider.forecast(LocationConfig(latitude=50.0, longitude=14.0))
        assert len(rsps.calls) == 1

    assert excinfo.value.status_code == 401


def test_get_provider_by_kind():
    metno = get_provider(LocationConfig(latitude=1.0, longitude=2.0, timeout=4.0))
    owm = get_provider(LocationConfig(latitude=1.0, longitude=2.0, provider="openweather", api_key="k"))

    assert isinstance(metno, MetNoProvider)
    assert metno.request_config.timeout == 4.0
    assert isinstance(owm, OpenWeatherProvider)


def test_get_provider_unknown_kind():
    with pytest.raises(ConfigError):
        get_provider(LocationConfig(latitude=1.0, longitude=2.0, provider="yr"))
