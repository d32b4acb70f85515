from __future__ import annotations

import pytest

from requests_mock import Mocker


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture(autouse=True)
def config_path(monkeypatch, tmp_path):
    for name in ("OBLECNIK_PROVIDER", "OBLECNIK_API_KEY", "OBLECNIK_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "Oblecnik" / "config.yaml"
    monkeypatch.setenv("OBLECNIK_CONFIG", str(path))
    return path
