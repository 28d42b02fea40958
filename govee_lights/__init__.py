"""Typed async client for the Govee Developer API.

This library is unofficial and not affiliated with Govee.
"""

from __future__ import annotations

from .api import GoveeLightsClient
from .commands import Command, build_command
from .config import GoveeLightsConfig, load_config
from .errors import (
    CommandRejected,
    ConfigError,
    DecodeError,
    DeviceError,
    GoveeLightsError,
    InvalidAttrs,
    InvalidBoolean,
    InvalidBrightness,
    InvalidColor,
    InvalidCommand,
    InvalidMap,
    InvalidStateShape,
    InvalidString,
    Missing,
    StateError,
    TransportError,
    describe_reason,
)
from .models import UNKNOWN, CommandResult, DeviceState, GoveeDevice, RGBColor
from .result import Err, Ok, Result
from .state_payload import flatten_state_payload
from .transport import HttpClient, HttpxTransport, RawResponse

__all__ = [
    "UNKNOWN",
    "Command",
    "CommandRejected",
    "CommandResult",
    "ConfigError",
    "DecodeError",
    "DeviceError",
    "DeviceState",
    "Err",
    "GoveeDevice",
    "GoveeLightsClient",
    "GoveeLightsConfig",
    "GoveeLightsError",
    "HttpClient",
    "HttpxTransport",
    "InvalidAttrs",
    "InvalidBoolean",
    "InvalidBrightness",
    "InvalidColor",
    "InvalidCommand",
    "InvalidMap",
    "InvalidStateShape",
    "InvalidString",
    "Missing",
    "Ok",
    "RGBColor",
    "RawResponse",
    "Result",
    "StateError",
    "TransportError",
    "build_command",
    "describe_reason",
    "flatten_state_payload",
    "load_config",
]
