"""Field-level validators shared by the model constructors.

Every helper looks up ``key`` in a string-keyed mapping and returns either
``Ok(value)`` or ``Err(reason)``; none of them raise.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import InvalidBoolean, InvalidMap, InvalidString, Missing
from .result import Err, Ok, Result

_ABSENT = object()


def is_strict_int(value: Any) -> bool:
    """Return True for integers, excluding ``bool``."""

    return isinstance(value, int) and not isinstance(value, bool)


def in_range(value: Any, low: int, high: int) -> bool:
    """Return True when ``value`` is a strict integer within ``[low, high]``."""

    return is_strict_int(value) and low <= value <= high


def fetch_string(
    attrs: Mapping[str, Any], key: str, *, optional: bool = False
) -> Result[str | None, Missing | InvalidString]:
    """Fetch a string attribute; empty strings only pass when optional."""

    value = attrs.get(key, _ABSENT)
    if value is _ABSENT:
        return Ok(None) if optional else Err(Missing(key))
    if isinstance(value, str) and (value or optional):
        return Ok(value)
    return Err(InvalidString(key, value))


def fetch_map(
    attrs: Mapping[str, Any], key: str, default: Any = None
) -> Result[Any, InvalidMap]:
    """Fetch a mapping attribute, falling back to ``default`` (``{}``) when absent."""

    value = attrs.get(key, _ABSENT)
    if value is _ABSENT:
        return Ok({} if default is None else default)
    if isinstance(value, Mapping):
        return Ok(value)
    return Err(InvalidMap(key, value))


def fetch_boolean(
    attrs: Mapping[str, Any], key: str, default: Any = False
) -> Result[Any, InvalidBoolean]:
    """Fetch a boolean attribute, falling back to ``default`` when absent."""

    value = attrs.get(key, _ABSENT)
    if value is _ABSENT:
        return Ok(default)
    if isinstance(value, bool):
        return Ok(value)
    return Err(InvalidBoolean(key, value))
