"""
boostmap: ordered maps accepting keys of any type.

Keys that a dict conflates (``True``/``1``/``1.0``) stay distinct, lists and
dicts work as keys by structure, and restricted map types admit only the
values their element policy allows.
"""

from .errors import BoostError
from .keys import InvalidKeyType, KeyCodec, Token, UnknownToken
from .container import (
    DEFAULT_POLICY,
    ElementPolicy,
    EmptyContainer,
    GuardPolicy,
    InvalidArgumentType,
    Map,
    ValueRejected,
    collection_to_pairs,
    is_collection_like,
)
from .typed import (
    MapOfCollections,
    MapOfFloats,
    MapOfInts,
    MapOfMaps,
    MapOfNumerics,
    MapOfObjects,
    MapOfStrings,
)

__all__ = [
    "BoostError",
    "InvalidKeyType",
    "KeyCodec",
    "Token",
    "UnknownToken",
    "DEFAULT_POLICY",
    "ElementPolicy",
    "EmptyContainer",
    "GuardPolicy",
    "InvalidArgumentType",
    "Map",
    "ValueRejected",
    "collection_to_pairs",
    "is_collection_like",
    "MapOfCollections",
    "MapOfFloats",
    "MapOfInts",
    "MapOfMaps",
    "MapOfNumerics",
    "MapOfObjects",
    "MapOfStrings",
]
