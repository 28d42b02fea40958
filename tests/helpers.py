"""Shared test doubles for the Govee Lights tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from govee_lights.errors import TransportError
from govee_lights.result import Err, Ok
from govee_lights.transport import RawResponse

DEVICE_ID = "AA:BB:CC:DD:EE:FF:11:22"
MODEL = "H6008"

DEVICES_BODY = {
    "data": {
        "devices": [
            {
                "device": DEVICE_ID,
                "model": MODEL,
                "deviceName": "User’s room",
                "controllable": True,
                "retrievable": True,
                "properties": {
                    "colorTem": {"range": {"max": 6500, "min": 2700}},
                },
                "supportCmds": ["turn", "brightness", "color", "colorTem"],
            }
        ]
    }
}

STATE_BODY = {
    "data": {
        "device": DEVICE_ID,
        "model": MODEL,
        "properties": [
            {"online": True},
            {"powerState": "on"},
            {"brightness": 10},
            {"color": {"b": 156, "g": 242, "r": 36}},
        ],
    }
}


class RecordingTransport:
    """Transport stub that replays canned bodies and records every call."""

    def __init__(
        self,
        get_body: Any = None,
        put_body: Any = None,
        *,
        error: Any = None,
    ) -> None:
        """Store the canned bodies, or an error returned for every call."""

        self.get_body = get_body
        self.put_body = put_body
        self.error = error
        self.calls: list[tuple[str, str, dict[str, str], Any]] = []

    async def get(
        self, url: str, headers: Mapping[str, str], params: Mapping[str, Any]
    ) -> Any:
        """Record a GET call and replay the configured body."""

        self.calls.append(("GET", url, dict(headers), dict(params)))
        if self.error is not None:
            return Err(TransportError(self.error))
        return Ok(RawResponse(body=self.get_body, status_code=200))

    async def put(self, url: str, headers: Mapping[str, str], json: Any) -> Any:
        """Record a PUT call and replay the configured body."""

        self.calls.append(("PUT", url, dict(headers), json))
        if self.error is not None:
            return Err(TransportError(self.error))
        return Ok(RawResponse(body=self.put_body, status_code=200))
