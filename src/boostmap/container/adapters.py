"""
Adapters between maps and the outside world.

collection_to_pairs() accepts anything collection-like and turns it into an
ordered list of (key, value) pairs; to_plain() turns maps nested anywhere in
a value back into plain dicts and lists for serialization.
"""

import json
from collections.abc import Iterable, Mapping
from types import ModuleType
from typing import Any, List, Optional, Protocol, Tuple, runtime_checkable

from ..errors import BoostError
from ..logging import get_logger

logger = get_logger(__name__)

Pair = Tuple[Any, Any]


class InvalidArgumentType(BoostError, TypeError):
    """Raised when a source cannot be converted into key/value pairs."""


@runtime_checkable
class Arrayable(Protocol):
    """Objects that can render themselves as a plain dict or list."""

    def to_array(self) -> Any:
        ...


@runtime_checkable
class Jsonable(Protocol):
    """Objects that can render themselves as JSON text."""

    def to_json(self) -> str:
        ...


def is_collection_like(value: Any) -> bool:
    """Check if a value could be converted into key/value pairs."""
    return _source_kind(value) is not None


def collection_to_pairs(source: Any) -> List[Pair]:
    """
    Convert a collection-like source into an ordered list of pairs.

    Sources are tried in this order: Map (original keys kept), objects with
    ``to_array()``, objects with ``to_json()``, mappings, other non-text
    iterables (enumerated from 0), and plain objects (public attributes).

    Args:
        source: The collection-like value to convert

    Returns:
        List of (key, value) tuples in source order

    Raises:
        InvalidArgumentType: If the source is not collection-like
    """
    kind = _source_kind(source)
    if kind is None:
        raise InvalidArgumentType(
            f"Thing of type {type(source).__name__} is not collection-like"
        )

    if kind == "map":
        pairs = list(source.items())
    elif kind == "arrayable":
        pairs = _plain_to_pairs(source.to_array(), source)
    elif kind == "jsonable":
        try:
            decoded = json.loads(source.to_json())
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentType(
                f"{type(source).__name__}.to_json() did not produce valid JSON"
            ) from exc
        pairs = _plain_to_pairs(decoded, source)
    elif kind == "mapping":
        pairs = list(source.items())
    elif kind == "iterable":
        pairs = list(enumerate(source))
    else:
        pairs = [
            (name, value) for name, value in vars(source).items()
            if not name.startswith("_")
        ]

    logger.debug(f"Converted {type(source).__name__} ({kind}) into {len(pairs)} pairs")
    return pairs


def to_plain(value: Any) -> Any:
    """
    Recursively replace maps and Arrayable objects with plain structures.

    Lists, tuples and dicts are walked so that maps nested inside them are
    converted too; everything else is returned unchanged.
    """
    from .map import Map

    if isinstance(value, Map):
        return value.to_array()
    if isinstance(value, Arrayable):
        return to_plain(value.to_array())
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


def _source_kind(source: Any) -> Optional[str]:
    from .map import Map

    if isinstance(source, Map):
        return "map"
    if isinstance(source, (str, bytes, bytearray)):
        return None
    if isinstance(source, Arrayable):
        return "arrayable"
    if isinstance(source, Jsonable):
        return "jsonable"
    if isinstance(source, Mapping):
        return "mapping"
    if isinstance(source, Iterable):
        return "iterable"
    if callable(source) or isinstance(source, ModuleType):
        return None
    if hasattr(source, "__dict__"):
        return "object"
    return None


def _plain_to_pairs(plain: Any, source: Any) -> List[Pair]:
    if isinstance(plain, Mapping):
        return list(plain.items())
    if isinstance(plain, (list, tuple)):
        return list(enumerate(plain))
    raise InvalidArgumentType(
        f"{type(source).__name__} rendered a {type(plain).__name__}, not a collection"
    )
