"""Result type returned by every non-raising operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar

from .errors import GoveeLightsError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    @property
    def is_ok(self) -> bool:
        """Always ``True`` for a success."""

        return True

    def unwrap(self) -> T:
        """Return the wrapped value."""

        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying a structured ``reason``."""

    reason: E

    @property
    def is_ok(self) -> bool:
        """Always ``False`` for a failure."""

        return False

    def unwrap(self) -> NoReturn:
        """Raise ``GoveeLightsError`` carrying the reason."""

        raise GoveeLightsError(self.reason)


Result = Ok[T] | Err[E]


def map_err(result: Result[T, Any], wrap: Any) -> Result[T, Any]:
    """Return ``result`` with its error reason passed through ``wrap``."""

    if isinstance(result, Err):
        return Err(wrap(result.reason))
    return result
