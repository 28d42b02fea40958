"""Async client for the Govee Developer API.

``GoveeLightsClient`` lists devices, fetches normalized device state and
sends control commands. Every operation comes in two flavours:

* ``async_<operation>`` returns ``Ok(value)`` or ``Err(reason)`` where
  ``reason`` is one of the dataclasses in ``govee_lights.errors``;
* ``async_<operation>_or_raise`` returns the value directly or raises
  ``GoveeLightsError`` whose ``reason`` attribute is the same dataclass.

Command arguments are validated before anything is sent, so an invalid
brightness or colour never reaches the network. The HTTP layer is injected
as an ``HttpClient``; by default an ``HttpxTransport`` is created and owned by
the client.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from .commands import Command, build_command, turn_command
from .config import GoveeLightsConfig
from .const import (
    API_KEY_HEADER,
    COMMAND_BRIGHTNESS,
    COMMAND_COLOR,
    COMMAND_COLOR_TEMPERATURE,
    SUCCESS_CODE,
)
from .errors import (
    EXPECTED_MAP_OR_KEYWORD_LIST,
    ApiErrorReason,
    CommandRejected,
    DecodeError,
    DeviceError,
    InvalidAttrs,
    StateError,
    TransportError,
)
from .models import CommandResult, DeviceState, GoveeDevice, RGBColor
from .result import Err, Ok, Result, map_err
from .state_payload import flatten_state_payload
from .transport import HttpClient, HttpxTransport, RawResponse

_LOGGER = logging.getLogger(__name__)

_RECORD_FIELDS = (("device", "id"), ("model", "model"), ("deviceName", "name"))


def _raising(
    method: Callable[..., Awaitable[Result[Any, Any]]],
) -> Callable[..., Awaitable[Any]]:
    """Build the raising twin of a result-returning coroutine method."""

    @functools.wraps(method)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        result = await method(*args, **kwargs)
        return result.unwrap()

    wrapper.__name__ = f"{method.__name__}_or_raise"
    wrapper.__qualname__ = f"{method.__qualname__}_or_raise"
    wrapper.__doc__ = (
        f"Same as ``{method.__name__}`` but return the value directly and "
        "raise ``GoveeLightsError`` on failure."
    )
    return wrapper


class GoveeLightsClient:
    """Typed client for listing and controlling Govee lights."""

    def __init__(
        self,
        config: GoveeLightsConfig | None = None,
        transport: HttpClient | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Bind configuration and the HTTP transport used by every call.

        ``environ`` overrides ``os.environ`` when resolving the API key.
        """

        self._config = config or GoveeLightsConfig()
        self._owns_transport = transport is None
        self._transport: HttpClient = (
            transport
            if transport is not None
            else HttpxTransport(timeout=self._config.timeout)
        )
        self._environ = environ

    @property
    def config(self) -> GoveeLightsConfig:
        """Return the active configuration."""

        return self._config

    async def __aenter__(self) -> GoveeLightsClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.async_close()

    async def async_close(self) -> None:
        """Close the transport when the client created it."""

        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    async def async_list_devices(self) -> Result[list[GoveeDevice], ApiErrorReason]:
        """Return every device on the account, in the order the API lists them.

        The first record that fails validation aborts the call with
        ``DeviceError(record, reason)``; no partial list is returned.
        """

        response = await self._get(self._config.devices_path, {})
        if isinstance(response, Err):
            return response
        raw_devices = _extract_devices(response.value.body)
        if isinstance(raw_devices, Err):
            return raw_devices

        devices: list[GoveeDevice] = []
        for raw in raw_devices.value:
            device = _build_device(raw)
            if isinstance(device, Err):
                _LOGGER.debug("Rejected device record %s: %s", raw, device.reason)
                return Err(DeviceError(raw, device.reason))
            devices.append(device.value)
        _LOGGER.debug("Listed %d devices", len(devices))
        return Ok(devices)

    async def async_get_device_state(
        self, device_id: str, model: str
    ) -> Result[DeviceState, ApiErrorReason]:
        """Fetch and normalize the live state of one device."""

        response = await self._get(
            self._config.state_path, {"device": device_id, "model": model}
        )
        if isinstance(response, Err):
            return response
        body = response.value.body
        if not (isinstance(body, Mapping) and isinstance(body.get("data"), Mapping)):
            return Err(DecodeError(body))

        raw_state = body["data"]
        attrs = flatten_state_payload(raw_state)
        if isinstance(attrs, Err):
            return attrs
        return map_err(
            DeviceState.from_attrs(attrs.value),
            lambda reason: StateError(raw_state, reason),
        )

    async def async_refresh_device(
        self, device: GoveeDevice
    ) -> Result[GoveeDevice, ApiErrorReason]:
        """Return a copy of ``device`` carrying freshly fetched state."""

        state = await self.async_get_device_state(device.id, device.model)
        if isinstance(state, Err):
            return state
        return Ok(device.with_state(state.value))

    async def async_turn_on(
        self, device_id: str, model: str
    ) -> Result[CommandResult, ApiErrorReason]:
        """Switch a device on."""

        return await self._send(device_id, model, turn_command(True))

    async def async_turn_off(
        self, device_id: str, model: str
    ) -> Result[CommandResult, ApiErrorReason]:
        """Switch a device off."""

        return await self._send(device_id, model, turn_command(False))

    async def async_set_brightness(
        self, device_id: str, model: str, value: int
    ) -> Result[CommandResult, ApiErrorReason]:
        """Set brightness; ``value`` must be an integer in ``0..100``."""

        return await self._validate_and_send(
            device_id, model, COMMAND_BRIGHTNESS, value
        )

    async def async_set_temperature(
        self, device_id: str, model: str, value: int
    ) -> Result[CommandResult, ApiErrorReason]:
        """Set colour temperature in Kelvin; ``value`` must be a positive integer.

        Supported ranges differ per model and are listed in the device
        ``properties`` (``colorTem.range``); they are not checked here.
        """

        return await self._validate_and_send(
            device_id, model, COMMAND_COLOR_TEMPERATURE, value
        )

    async def async_set_color(
        self, device_id: str, model: str, rgb: Mapping[str, int] | RGBColor
    ) -> Result[CommandResult, ApiErrorReason]:
        """Set an RGB colour from an ``RGBColor`` or an ``r``/``g``/``b`` mapping."""

        return await self._validate_and_send(device_id, model, COMMAND_COLOR, rgb)

    async_list_devices_or_raise = _raising(async_list_devices)
    async_get_device_state_or_raise = _raising(async_get_device_state)
    async_refresh_device_or_raise = _raising(async_refresh_device)
    async_turn_on_or_raise = _raising(async_turn_on)
    async_turn_off_or_raise = _raising(async_turn_off)
    async_set_brightness_or_raise = _raising(async_set_brightness)
    async_set_temperature_or_raise = _raising(async_set_temperature)
    async_set_color_or_raise = _raising(async_set_color)

    async def _validate_and_send(
        self, device_id: str, model: str, name: str, value: Any
    ) -> Result[CommandResult, ApiErrorReason]:
        command = build_command(name, value)
        if isinstance(command, Err):
            _LOGGER.debug("Refusing to send %s %r", name, value)
            return command
        return await self._send(device_id, model, command.value)

    async def _send(
        self, device_id: str, model: str, command: Command
    ) -> Result[CommandResult, ApiErrorReason]:
        headers = self._headers()
        if isinstance(headers, Err):
            return headers
        _LOGGER.debug(
            "Sending %s=%r to %s (%s)", command.name, command.value, device_id, model
        )
        response = _tag_transport_error(
            await self._transport.put(
                self._config.url(self._config.control_path),
                headers.value,
                command.as_body(device_id, model),
            )
        )
        if isinstance(response, Err):
            return response
        return _classify_command_response(command, response.value.body)

    async def _get(
        self, path: str, params: Mapping[str, Any]
    ) -> Result[RawResponse, ApiErrorReason]:
        headers = self._headers()
        if isinstance(headers, Err):
            return headers
        _LOGGER.debug("Requesting %s", path)
        return _tag_transport_error(
            await self._transport.get(self._config.url(path), headers.value, params)
        )

    def _headers(self) -> Result[dict[str, str], ApiErrorReason]:
        api_key = self._config.resolve_api_key(self._environ)
        if isinstance(api_key, Err):
            return api_key
        return Ok({API_KEY_HEADER: api_key.value})


def _tag_transport_error(result: Result[Any, Any]) -> Result[Any, Any]:
    """Ensure transport failures always surface as ``TransportError``."""

    return map_err(
        result,
        lambda reason: (
            reason if isinstance(reason, TransportError) else TransportError(reason)
        ),
    )


def _extract_devices(body: Any) -> Result[list[Any], DecodeError]:
    data = body.get("data") if isinstance(body, Mapping) else None
    devices = data.get("devices") if isinstance(data, Mapping) else None
    if not isinstance(devices, list):
        return Err(DecodeError(body))
    return Ok(devices)


def _build_device(raw: Any) -> Result[GoveeDevice, Any]:
    """Translate a vendor device record into ``GoveeDevice`` attributes.

    Null ``device``/``model``/``deviceName`` fields count as absent. Missing
    or null ``properties`` and ``controllable`` fall back to their defaults.
    """

    if not isinstance(raw, Mapping):
        return Err(InvalidAttrs(EXPECTED_MAP_OR_KEYWORD_LIST))
    attrs: dict[str, Any] = {
        target: raw[source]
        for source, target in _RECORD_FIELDS
        if raw.get(source) is not None
    }
    attrs["state"] = {}
    attrs["properties"] = _or_default(raw.get("properties"), {})
    attrs["controllable"] = _or_default(raw.get("controllable"), False)
    return GoveeDevice.from_attrs(attrs)


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None or value is False else value


def _classify_command_response(
    command: Command, body: Any
) -> Result[CommandResult, ApiErrorReason]:
    if isinstance(body, Mapping) and "code" in body:
        code = body["code"]
        if code == SUCCESS_CODE:
            return Ok(CommandResult.UPDATED)
        if "message" in body:
            _LOGGER.warning(
                "Govee rejected %s=%r: code=%s message=%s",
                command.name,
                command.value,
                code,
                body["message"],
            )
            return Err(
                CommandRejected(command.name, command.value, code, body["message"])
            )
    return Err(DecodeError(body))
