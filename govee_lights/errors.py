"""Structured error reasons and the exception raised by the strict API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

EXPECTED_KEYWORD_LIST = "expected_keyword_list"
EXPECTED_MAP_OR_KEYWORD_LIST = "expected_map_or_keyword_list"

COLOR_MISSING_CHANNEL = "expected a map with r, g, b"
COLOR_CHANNEL_RANGE = "expected r, g, b in 0..255"


@dataclass(frozen=True)
class Missing:
    """A required attribute was not supplied."""

    key: str


@dataclass(frozen=True)
class InvalidString:
    """An attribute was not a (non-empty) string."""

    key: str
    value: Any


@dataclass(frozen=True)
class InvalidMap:
    """An attribute was expected to be a mapping."""

    key: str
    value: Any


@dataclass(frozen=True)
class InvalidBoolean:
    """An attribute was expected to be a boolean."""

    key: str
    value: Any


@dataclass(frozen=True)
class InvalidBrightness:
    """Brightness outside ``0..100`` or not an integer."""

    value: Any


@dataclass(frozen=True)
class InvalidColor:
    """Colour payload with a missing or out-of-range channel.

    ``detail`` is ``None`` when the value was not a mapping at all.
    """

    value: Any
    detail: str | None = None


@dataclass(frozen=True)
class InvalidAttrs:
    """Constructor input was neither a mapping nor a list of key/value pairs."""

    expected: str


@dataclass(frozen=True)
class InvalidStateShape:
    """The state payload did not carry a ``properties`` list."""

    payload: Any


ValidationReason = (
    Missing
    | InvalidString
    | InvalidMap
    | InvalidBoolean
    | InvalidBrightness
    | InvalidColor
    | InvalidAttrs
    | InvalidStateShape
)


@dataclass(frozen=True)
class ConfigError:
    """The client is not configured well enough to talk to the API."""

    message: str


@dataclass(frozen=True)
class TransportError:
    """The HTTP transport failed before a response body was available."""

    underlying: Any


@dataclass(frozen=True)
class DecodeError:
    """The API answered with a body of an unexpected shape."""

    payload: Any


@dataclass(frozen=True)
class DeviceError:
    """A device record from the listing could not be built."""

    raw: Any
    reason: ValidationReason


@dataclass(frozen=True)
class StateError:
    """A state payload could not be turned into a ``DeviceState``."""

    raw: Any
    reason: ValidationReason


@dataclass(frozen=True)
class CommandRejected:
    """The API answered a control command with a non-success code."""

    command: str
    value: Any
    code: Any
    message: Any


@dataclass(frozen=True)
class InvalidCommand:
    """Command arguments were rejected locally; nothing was sent."""

    command: str
    value: Any


ApiErrorReason = (
    ConfigError
    | TransportError
    | DecodeError
    | DeviceError
    | StateError
    | CommandRejected
    | InvalidCommand
)


def describe_reason(reason: Any) -> str:
    """Return a human readable message for a structured error reason."""

    if isinstance(reason, ConfigError):
        return f"Govee Lights configuration error: {reason.message}"
    if isinstance(reason, TransportError):
        return f"HTTP error while calling Govee API: {reason.underlying!r}"
    if isinstance(reason, DecodeError):
        return f"Unexpected Govee API response shape: {reason.payload!r}"
    if isinstance(reason, DeviceError):
        return f"Failed to build device from {reason.raw!r}: {reason.reason!r}"
    if isinstance(reason, StateError):
        return f"Failed to build state from {reason.raw!r}: {reason.reason!r}"
    if isinstance(reason, CommandRejected):
        return (
            f"Govee command failed ({reason.command} {reason.value!r}): "
            f"code={reason.code!r} message={reason.message!r}"
        )
    if isinstance(reason, InvalidCommand):
        return f"Invalid command arguments for {reason.command!r}: {reason.value!r}"
    return f"Govee Lights error: {reason!r}"


class GoveeLightsError(Exception):
    """Raised by the strict API variants; ``reason`` keeps the structured error."""

    def __init__(self, reason: Any) -> None:
        """Store the reason and derive the message from it."""

        self.reason = reason
        super().__init__(describe_reason(reason))
