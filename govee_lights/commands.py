"""Outbound control commands and their argument schemas."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from .const import (
    COMMAND_BRIGHTNESS,
    COMMAND_COLOR,
    COMMAND_COLOR_TEMPERATURE,
    COMMAND_TURN,
)
from .errors import InvalidCommand
from .models import RGBColor
from .result import Err, Ok, Result
from .validation import is_strict_int


def _strict_int(value: Any) -> int:
    """Accept integers but not booleans."""

    if not is_strict_int(value):
        raise vol.Invalid("expected int")
    return value


_CHANNEL = vol.All(_strict_int, vol.Range(min=0, max=255))

TURN_SCHEMA = vol.Schema(vol.In(["on", "off"]))
BRIGHTNESS_SCHEMA = vol.Schema(vol.All(_strict_int, vol.Range(min=0, max=100)))
# Per-model Kelvin ranges are advertised in device properties, not enforced here.
TEMPERATURE_SCHEMA = vol.Schema(vol.All(_strict_int, vol.Range(min=1)))
COLOR_SCHEMA = vol.Schema(
    {
        vol.Required("r"): _CHANNEL,
        vol.Required("g"): _CHANNEL,
        vol.Required("b"): _CHANNEL,
    },
    extra=vol.REMOVE_EXTRA,
)

_SCHEMAS = {
    COMMAND_TURN: TURN_SCHEMA,
    COMMAND_BRIGHTNESS: BRIGHTNESS_SCHEMA,
    COMMAND_COLOR_TEMPERATURE: TEMPERATURE_SCHEMA,
    COMMAND_COLOR: COLOR_SCHEMA,
}


@dataclass(frozen=True)
class Command:
    """A validated control command ready to be sent."""

    name: str
    value: Any

    def as_body(self, device_id: str, model: str) -> dict[str, Any]:
        """Return the JSON body for the control endpoint."""

        return {
            "device": device_id,
            "model": model,
            "cmd": {"name": self.name, "value": self.value},
        }


def build_command(name: str, value: Any) -> Result[Command, InvalidCommand]:
    """Validate ``value`` against the schema registered for ``name``."""

    schema = _SCHEMAS[name]
    candidate = value
    if name == COMMAND_COLOR:
        if isinstance(value, RGBColor):
            candidate = value.as_dict()
        elif isinstance(value, Mapping):
            candidate = dict(value)
    try:
        return Ok(Command(name, schema(candidate)))
    except vol.Invalid:
        return Err(InvalidCommand(name, value))


def turn_command(on: bool) -> Command:
    """Return the power command for ``on``, checked against ``TURN_SCHEMA``."""

    return build_command(COMMAND_TURN, "on" if on else "off").unwrap()
