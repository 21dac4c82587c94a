"""Maps restricted to numeric values."""

import numbers
from typing import Any

from ..container.guards import ElementPolicy
from ..container.map import Map


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_float(value: Any) -> bool:
    return isinstance(value, float)


class MapOfNumerics(Map):
    """Map whose values must all be numbers; ``bool`` is not a number here."""

    policy = ElementPolicy(name="numeric", guard=_is_number)

    # Starting value for keys that are incremented before being set
    zero: Any = 0

    def increment(self, key: Any, by: Any = 1) -> "MapOfNumerics":
        """Add ``by`` to the value at key, treating a missing key as zero."""
        return self.set(key, self.get(key, self.zero) + by)

    def decrement(self, key: Any, by: Any = 1) -> "MapOfNumerics":
        """Subtract ``by`` from the value at key, treating a missing key as zero."""
        return self.set(key, self.get(key, self.zero) - by)


class MapOfInts(MapOfNumerics):
    """Map whose values must all be integers."""

    policy = ElementPolicy(name="int", guard=_is_int)


class MapOfFloats(MapOfNumerics):
    """Map whose values must all be floats."""

    policy = ElementPolicy(name="float", guard=_is_float)
    zero = 0.0
