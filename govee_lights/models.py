"""Immutable domain models built from Govee API payloads."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal

from .errors import (
    COLOR_CHANNEL_RANGE,
    COLOR_MISSING_CHANNEL,
    EXPECTED_KEYWORD_LIST,
    EXPECTED_MAP_OR_KEYWORD_LIST,
    InvalidAttrs,
    InvalidBrightness,
    InvalidColor,
    ValidationReason,
)
from .result import Err, Ok, Result
from .validation import fetch_boolean, fetch_map, fetch_string, in_range

DEVICE_FIELDS = ("id", "model", "name", "state", "properties", "controllable")
_CHANNELS = ("r", "g", "b")


class _Unknown(Enum):
    """Sentinel for state fields the API did not report."""

    UNKNOWN = "unknown"

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = _Unknown.UNKNOWN
Unknown = Literal[_Unknown.UNKNOWN]


class CommandResult(Enum):
    """Outcome of a successful control command."""

    UPDATED = "updated"


@dataclass(frozen=True)
class RGBColor:
    """An RGB colour with channels in ``0..255``."""

    r: int
    g: int
    b: int

    def as_dict(self) -> dict[str, int]:
        """Return the colour in the API wire shape."""

        return {"r": self.r, "g": self.g, "b": self.b}


def parse_rgb(value: Any) -> Result[RGBColor, InvalidColor]:
    """Validate a colour mapping (or ``RGBColor``) into an ``RGBColor``."""

    if isinstance(value, RGBColor):
        channels: Mapping[str, Any] = value.as_dict()
    elif isinstance(value, Mapping):
        channels = value
    else:
        return Err(InvalidColor(value, None))
    if any(channel not in channels for channel in _CHANNELS):
        return Err(InvalidColor(value, COLOR_MISSING_CHANNEL))
    if not all(in_range(channels[channel], 0, 255) for channel in _CHANNELS):
        return Err(InvalidColor(value, COLOR_CHANNEL_RANGE))
    return Ok(RGBColor(r=channels["r"], g=channels["g"], b=channels["b"]))


@dataclass(frozen=True)
class DeviceState:
    """Normalized, partial view of a device's live status.

    Fields the API did not report hold ``UNKNOWN``. ``last_checked`` is the
    time the state was fetched, or ``None`` for states that were never
    fetched (for example the placeholder state of a listed device).
    """

    on: bool | Unknown = UNKNOWN
    brightness: int | Unknown = UNKNOWN
    color: RGBColor | Unknown = UNKNOWN
    last_checked: Any = None

    @classmethod
    def from_attrs(
        cls, attrs: Mapping[str, Any]
    ) -> Result[DeviceState, ValidationReason]:
        """Validate ``attrs`` and build a state; the first failure wins."""

        on = fetch_boolean(attrs, "on", UNKNOWN)
        if isinstance(on, Err):
            return on

        brightness: Any = UNKNOWN
        if "brightness" in attrs:
            brightness = attrs["brightness"]
            if not in_range(brightness, 0, 100):
                return Err(InvalidBrightness(brightness))

        color: Any = UNKNOWN
        if "color" in attrs:
            parsed = parse_rgb(attrs["color"])
            if isinstance(parsed, Err):
                return parsed
            color = parsed.value

        return Ok(
            cls(
                on=on.value,
                brightness=brightness,
                color=color,
                last_checked=attrs.get("last_checked"),
            )
        )


@dataclass(frozen=True)
class GoveeDevice:
    """A controllable Govee light as listed by the API."""

    id: str
    model: str
    name: str | None = None
    state: DeviceState = field(default_factory=DeviceState)
    properties: Mapping[str, Any] = field(default_factory=dict, hash=False)
    controllable: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @classmethod
    def from_attrs(cls, attrs: Any) -> Result[GoveeDevice, ValidationReason]:
        """Build a device from a mapping or a list of ``(key, value)`` pairs.

        Only the keys in ``DEVICE_FIELDS`` are considered; everything else is
        dropped before validation. ``id`` and ``model`` must be non-empty
        strings, ``name`` may be absent or any string, ``state`` is handed to
        ``DeviceState.from_attrs`` and its failures are returned unchanged.
        """

        normalized = normalize_attrs(attrs)
        if isinstance(normalized, Err):
            return normalized
        values = normalized.value

        device_id = fetch_string(values, "id")
        if isinstance(device_id, Err):
            return device_id
        model = fetch_string(values, "model")
        if isinstance(model, Err):
            return model
        name = fetch_string(values, "name", optional=True)
        if isinstance(name, Err):
            return name
        raw_state = fetch_map(values, "state")
        if isinstance(raw_state, Err):
            return raw_state
        state = DeviceState.from_attrs(raw_state.value)
        if isinstance(state, Err):
            return state
        properties = fetch_map(values, "properties")
        if isinstance(properties, Err):
            return properties
        controllable = fetch_boolean(values, "controllable")
        if isinstance(controllable, Err):
            return controllable

        return Ok(
            cls(
                id=device_id.value,
                model=model.value,
                name=name.value,
                state=state.value,
                properties=properties.value,
                controllable=controllable.value,
            )
        )

    def with_state(self, state: DeviceState) -> GoveeDevice:
        """Return a copy of this device carrying ``state``."""

        return replace(self, state=state)


def normalize_attrs(attrs: Any) -> Result[dict[str, Any], InvalidAttrs]:
    """Map the accepted constructor inputs onto one dict of known fields."""

    if isinstance(attrs, Mapping):
        pairs: Sequence[Any] = list(attrs.items())
    elif isinstance(attrs, (list, tuple)):
        if not all(_is_pair(item) for item in attrs):
            return Err(InvalidAttrs(EXPECTED_KEYWORD_LIST))
        pairs = attrs
    else:
        return Err(InvalidAttrs(EXPECTED_MAP_OR_KEYWORD_LIST))
    return Ok({key: value for key, value in pairs if key in DEVICE_FIELDS})


def _is_pair(item: Any) -> bool:
    return isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str)
