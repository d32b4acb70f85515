"""Location configuration backed by a YAML file in the user config directory."""
from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError


logger = logging.getLogger(__name__)

APP_DIR_NAME = "Oblecnik"
CONFIG_FILE_NAME = "config.yaml"
# Older config files store this value when no altitude was set.
ALTITUDE_UNSET = -500
DEFAULT_TIMEOUT = 10.0


class LocationConfig(BaseModel):
    """Validated location and provider settings."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    altitude: Optional[int] = None
    provider: str = "metno"
    api_key: Optional[str] = None
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)

    @field_validator("altitude", mode="before")
    @classmethod
    def _drop_sentinel(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if int(v) == ALTITUDE_UNSET:
            return None
        return v

    @field_validator("provider", mode="before")
    @classmethod
    def _normalise_provider(cls, v: Any) -> Any:
        if v is None:
            return "metno"
        return str(v).strip().lower()

    def to_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "provider": self.provider,
        }
        if self.altitude is not None:
            document["altitude"] = self.altitude
        if self.api_key:
            document["api_key"] = self.api_key
        if self.timeout != DEFAULT_TIMEOUT:
            document["timeout"] = self.timeout
        return document


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Fetch an environment variable, treating empty values as unset."""

    value = os.environ.get(name)
    if not value:
        return default
    return value


def user_config_dir() -> Path:
    if sys.platform == "win32":
        base = env("APPDATA")
        if base is None:
            raise ConfigError("%APPDATA% is not set, cannot locate the config directory")
        return Path(base)
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    base = env("XDG_CONFIG_HOME")
    return Path(base) if base else Path.home() / ".config"


def default_config_path() -> Path:
    override = env("OBLECNIK_CONFIG")
    if override:
        return Path(override).expanduser()
    return user_config_dir() / APP_DIR_NAME / CONFIG_FILE_NAME


def read_document(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the raw YAML mapping, or an empty mapping when there is no file."""

    path = path or default_config_path()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path} is not valid YAML: {exc}") from exc
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError(f"{path} must contain a mapping of settings")
    return document


def load_config(path: Optional[Path] = None) -> LocationConfig:
    """Load the configuration file and apply environment overrides."""

    path = path or default_config_path()
    document = read_document(path)
    if not document:
        raise ConfigError(
            f"no location configured in {path}; run `oblecnik set <latitude> <longitude> [altitude]` first"
        )

    overrides = {
        "provider": env("OBLECNIK_PROVIDER"),
        "api_key": env("OBLECNIK_API_KEY"),
        "timeout": env("OBLECNIK_TIMEOUT"),
    }
    for key, value in overrides.items():
        if value is not None:
            logger.debug("Overriding %s from environment", key)
            document[key] = value
    return parse_config(document, source=str(path))


def parse_config(values: Dict[str, Any], source: str = "configuration") -> LocationConfig:
    try:
        return LocationConfig.model_validate(values)
    except (ValidationError, TypeError, ValueError) as exc:
        raise ConfigError(f"invalid {source}: {_describe(exc)}") from exc


def save_config(config: LocationConfig, path: Optional[Path] = None) -> Path:
    """Write the configuration atomically.

    The YAML is written to a temporary file next to the target and moved into
    place with ``os.replace``; a failed write leaves the previous file intact.
    """

    path = path or default_config_path()
    payload = yaml.safe_dump(config.to_document(), sort_keys=False, default_flow_style=False)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".config-", suffix=".yaml.tmp", dir=path.parent)
    except OSError as exc:
        raise ConfigError(f"cannot create {path.parent}: {exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        _remove_quietly(tmp_name)
        raise ConfigError(f"cannot write {path}: {exc}") from exc
    logger.info("Saved configuration to %s", path)
    return path


def _remove_quietly(name: str) -> None:
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        parts = []
        for error in exc.errors():
            location = ".".join(str(item) for item in error.get("loc", ())) or "value"
            parts.append(f"{location}: {error.get('msg')}")
        return "; ".join(parts)
    return str(exc)


__all__ = [
    "LocationConfig",
    "ConfigError",
    "ALTITUDE_UNSET",
    "default_config_path",
    "read_document",
    "load_config",
    "parse_config",
    "save_config",
]
