"""Map restricted to object values."""

from typing import Any

from ..container.guards import ElementPolicy
from ..container.map import Map

# Builtin value types that do not count as objects
_PLAIN_VALUE_TYPES = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    list,
    tuple,
    dict,
    set,
    frozenset,
)


def _is_object(value: Any) -> bool:
    return not isinstance(value, _PLAIN_VALUE_TYPES)


class MapOfObjects(Map):
    """Map whose values must be objects rather than plain builtin values."""

    policy = ElementPolicy(name="object", guard=_is_object)

    def apply(self, method: str, *args: Any, **kwargs: Any) -> Map:
        """
        Call a method on every object and collect the results.

        Args:
            method: Name of the method to call on each value
            *args: Positional arguments passed to every call
            **kwargs: Keyword arguments passed to every call

        Returns:
            Plain Map from each key to the method's return value
        """
        result = Map()
        for key, obj in self.items():
            result.set(key, getattr(obj, method)(*args, **kwargs))
        return result
