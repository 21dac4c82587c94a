"""Map restricted to string values."""

from typing import Any

from ..container.guards import ElementPolicy
from ..container.map import Map


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


class MapOfStrings(Map):
    """Map whose values must all be ``str``."""

    policy = ElementPolicy(name="string", guard=_is_string)
