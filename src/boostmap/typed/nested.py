"""Maps whose values are themselves collections."""

from typing import Any, Optional

from ..container.adapters import is_collection_like
from ..container.guards import ElementPolicy
from ..container.map import Map
from ..logging import get_logger

logger = get_logger(__name__)


def _as_map(value: Any) -> Map:
    if isinstance(value, Map):
        return value
    logger.debug(f"Wrapping {type(value).__name__} value into a Map")
    return Map(value)


def _is_map(value: Any) -> bool:
    return isinstance(value, Map)


class MapOfCollections(Map):
    """
    Map that may only contain collection-like values.

    Every admitted value is stored as a Map, so rows can be queried with the
    full Map API regardless of whether they arrived as dicts, lists or
    objects. Values that already are maps are stored as given.
    """

    policy = ElementPolicy(name="collection", guard=is_collection_like, normalize=_as_map)

    def pluck(self, value_key: Any, key_key: Optional[Any] = None) -> Map:
        """
        Slice one column out of the contained collections.

        Example::

            rows = MapOfCollections()
            rows.push({"id": 5, "name": "Ada"}).push({"id": 6, "name": "Bee"})
            rows.pluck("name").to_array()        # {0: "Ada", 1: "Bee"}
            rows.pluck("name", "id").to_array()  # {5: "Ada", 6: "Bee"}

        Args:
            value_key: Key holding the value to extract from each row
            key_key: Key holding the new key for each value; when None the
                values are pushed under consecutive indexes

        Returns:
            Plain Map of the extracted values

        Raises:
            KeyError: If a row lacks value_key or key_key
        """
        result = Map()
        for _, row in self.items():
            if key_key is not None and not row.has(key_key):
                raise KeyError(key_key)
            if not row.has(value_key):
                raise KeyError(value_key)

            if key_key is None:
                result.push(row.get(value_key))
            else:
                result.set(row.get(key_key), row.get(value_key))
        return result


class MapOfMaps(Map):
    """Map whose values must all be Map instances."""

    policy = ElementPolicy(name="map", guard=_is_map)
