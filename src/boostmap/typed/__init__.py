"""Maps restricted to one kind of value."""

from .nested import MapOfCollections, MapOfMaps
from .numerics import MapOfFloats, MapOfInts, MapOfNumerics
from .objects import MapOfObjects
from .strings import MapOfStrings

__all__ = [
    "MapOfCollections",
    "MapOfMaps",
    "MapOfFloats",
    "MapOfInts",
    "MapOfNumerics",
    "MapOfObjects",
    "MapOfStrings",
]
