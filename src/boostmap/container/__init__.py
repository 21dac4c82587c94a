"""The Map container, its element-policy contract and its adapters."""

from .adapters import Arrayable, InvalidArgumentType, Jsonable, collection_to_pairs, is_collection_like
from .guards import DEFAULT_POLICY, ElementPolicy, GuardPolicy, passes
from .map import EmptyContainer, Map, ValueRejected

__all__ = [
    "Arrayable",
    "InvalidArgumentType",
    "Jsonable",
    "collection_to_pairs",
    "is_collection_like",
    "DEFAULT_POLICY",
    "ElementPolicy",
    "GuardPolicy",
    "passes",
    "EmptyContainer",
    "Map",
    "ValueRejected",
]
