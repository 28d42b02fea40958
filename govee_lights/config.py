"""Client configuration and API key resolution."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .const import (
    API_KEY_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    DEVICE_CONTROL_PATH,
    DEVICE_STATE_PATH,
    DEVICES_PATH,
)
from .errors import ConfigError, GoveeLightsError
from .result import Err, Ok, Result


class GoveeLightsConfig(BaseModel):
    """Settings for talking to the Govee Developer API."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    devices_path: str = DEVICES_PATH
    control_path: str = DEVICE_CONTROL_PATH
    state_path: str = DEVICE_STATE_PATH
    api_key_env: str = API_KEY_ENV
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    def url(self, path: str) -> str:
        """Join ``path`` onto the configured base URL."""

        return f"{self.base_url.rstrip('/')}{path}"

    def resolve_api_key(
        self, environ: Mapping[str, str] | None = None
    ) -> Result[str, ConfigError]:
        """Return the explicit API key, else the one from the environment."""

        if self.api_key:
            return Ok(self.api_key)
        env = os.environ if environ is None else environ
        from_env = env.get(self.api_key_env)
        if from_env:
            return Ok(from_env)
        return Err(ConfigError(f"{self.api_key_env} must be set."))


def load_config(path: str | Path) -> GoveeLightsConfig:
    """Load a YAML configuration file.

    An empty file yields the defaults. Unreadable files, malformed YAML and
    unknown or mistyped keys raise ``GoveeLightsError`` with a
    ``ConfigError`` reason.
    """

    config_path = Path(path)
    try:
        payload = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as err:
        raise GoveeLightsError(
            ConfigError(f"Unable to read {config_path}: {err}")
        ) from err
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise GoveeLightsError(
            ConfigError(f"{config_path} must contain a mapping of settings")
        )
    try:
        return GoveeLightsConfig.model_validate(dict(payload))
    except ValidationError as err:
        raise GoveeLightsError(
            ConfigError(f"Invalid configuration in {config_path}: {err}")
        ) from err
