"""
Admission control for maps.

A guard decides whether a value may be stored; a normalize function turns
an admitted value into the form actually stored. Together they make up an
element policy. Restricted maps are built by supplying a policy, never by
overriding storage logic.
"""

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable


def passes(result: Any) -> bool:
    """Only an exact ``False`` fails; every other result passes."""
    return result is not False


def always(value: Any) -> bool:
    return True


def identity(value: Any) -> Any:
    return value


@runtime_checkable
class GuardPolicy(Protocol):
    """Anything with a ``guard`` predicate and a ``normalize`` transform."""

    def guard(self, value: Any) -> Any:
        ...

    def normalize(self, value: Any) -> Any:
        ...


@dataclass(frozen=True)
class ElementPolicy:
    """Guard/normalize pair owned by a map type."""
    name: str                                          # Used in rejection messages
    guard: Callable[[Any], Any] = always               # Exact False rejects
    normalize: Callable[[Any], Any] = identity         # Applied after the guard passes

    def admits(self, value: Any) -> bool:
        """Check if a value would be accepted by this policy."""
        return passes(self.guard(value))


DEFAULT_POLICY = ElementPolicy(name="any")
