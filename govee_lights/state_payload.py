"""Flatten the device state endpoint's ``properties`` list into state attributes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from .errors import InvalidStateShape, StateError
from .result import Err, Ok, Result

_LOGGER = logging.getLogger(__name__)

_POWER_STATES = {"on": True, "off": False}


def flatten_state_payload(
    raw: Any, *, now: Callable[[], datetime] | None = None
) -> Result[dict[str, Any], StateError]:
    """Merge the single-key property fragments of ``raw`` into one mapping.

    The vendor returns ``{"properties": [{"powerState": "on"}, {"brightness":
    10}, ...]}``. Later fragments win on key collision. The result carries
    ``on``/``brightness``/``color`` as reported and ``last_checked`` stamped
    with the current UTC time; it is meant for ``DeviceState.from_attrs``.
    """

    properties = raw.get("properties") if isinstance(raw, Mapping) else None
    if not _is_fragment_list(properties):
        return Err(StateError(raw, InvalidStateShape(raw)))

    attrs: dict[str, Any] = {}
    for fragment in properties:
        attrs.update(normalize_fragment(fragment))
    attrs["last_checked"] = (now or _utcnow)()
    return Ok(attrs)


def normalize_fragment(fragment: Any) -> dict[str, Any]:
    """Return the state attributes contributed by one property fragment."""

    if not isinstance(fragment, Mapping):
        return {}
    if "powerState" in fragment:
        power = fragment["powerState"]
        if isinstance(power, str) and power in _POWER_STATES:
            return {"on": _POWER_STATES[power]}
    if "brightness" in fragment:
        return {"brightness": fragment["brightness"]}
    if "color" in fragment:
        color = fragment["color"]
        if isinstance(color, Mapping) and all(ch in color for ch in ("r", "g", "b")):
            return {"color": {"r": color["r"], "g": color["g"], "b": color["b"]}}
    if "online" in fragment:
        # TODO: expose connectivity once DeviceState grows an ``online`` field.
        _LOGGER.debug("Ignoring online fragment %s", fragment)
    return {}


def _is_fragment_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
