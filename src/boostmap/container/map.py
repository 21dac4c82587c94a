"""
Ordered map accepting keys of any supported type.

Keys are tokenized by a per-instance KeyCodec, so ``True``, ``1``, ``1.0``
and ``"1"`` are four different keys, and structurally equal lists or dicts
are one key. Values pass through the map's element policy (guard, then
normalize) on every write.
"""

import json
from typing import Any, Callable, ClassVar, Dict, Iterator, List, Optional, Tuple

from ..errors import BoostError
from ..keys.canonical import InvalidKeyType, KeyKind, is_scalar
from ..keys.codec import KeyCodec, Token
from .adapters import collection_to_pairs, to_plain
from .guards import DEFAULT_POLICY, ElementPolicy, GuardPolicy, passes

Visitor = Callable[[Any, Any], Any]

_MISSING = object()


class ValueRejected(BoostError, ValueError):
    """Raised when a map's guard refuses a value."""


class EmptyContainer(BoostError, LookupError):
    """Raised when removing from a map that has no entries."""


class MapItems:
    """Restartable view over the (key, value) pairs of a map."""

    def __init__(self, owner: "Map") -> None:
        self._owner = owner

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        return self._owner._pairs()

    def __len__(self) -> int:
        return len(self._owner)

    def __repr__(self) -> str:
        return f"MapItems({list(self)!r})"


class Map:
    """
    An improvement on dict for keys dict cannot handle well.

    Iteration yields (key, value) pairs in insertion order, so ``dict(m)``
    works whenever the keys are hashable. Mutators return the map itself so
    calls can be chained::

        Map().set("a", 1).set(True, 2).push(3)
    """

    policy: ClassVar[GuardPolicy] = DEFAULT_POLICY

    def __init__(
        self,
        source: Any = None,
        guard: Optional[Callable[[Any], Any]] = None,
        normalize: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        """
        Create a map, optionally filled from a collection-like source.

        Args:
            source: Anything collection-like; each pair goes through set()
            guard: Overrides the guard of the class policy
            normalize: Overrides the normalize of the class policy

        Raises:
            InvalidArgumentType: If source is not collection-like
            ValueRejected: If any source value fails the guard
        """
        base = type(self).policy
        if guard is None and normalize is None:
            self._policy: GuardPolicy = base
        else:
            self._policy = ElementPolicy(
                name=f"custom {_policy_name(base)}",
                guard=guard if guard is not None else base.guard,
                normalize=normalize if normalize is not None else base.normalize,
            )
        self._codec = KeyCodec()
        self._values: Dict[Token, Any] = {}
        self._next_index = 0

        if source is not None:
            for key, value in collection_to_pairs(source):
                self.set(key, value)

    @classmethod
    def from_pairs(cls, pairs: Any) -> "Map":
        """Build a map from an iterable of (key, value) tuples."""
        result = cls()
        for key, value in pairs:
            result.set(key, value)
        return result

    @classmethod
    def from_array(cls, plain: Any) -> "Map":
        """Build a map from a plain dict or list, e.g. the output of to_array()."""
        return cls(plain)

    @classmethod
    def restricted_to(cls, policy: GuardPolicy) -> type:
        """Create a map type whose values must satisfy the given policy."""
        name = f"{cls.__name__}Of{_policy_name(policy).title().replace(' ', '')}"
        return type(name, (cls,), {"policy": policy})

    # ------------------------------------------------------------------
    # Core access

    def has(self, key: Any) -> bool:
        return self._codec.lookup(key) is not None

    def get(self, key: Any, default: Any = None) -> Any:
        token = self._codec.lookup(key)
        if token is None:
            return default
        return self._values[token]

    def set(self, key: Any, value: Any) -> "Map":
        """
        Store a value under a key, subject to the map's guard.

        Re-setting an existing key replaces its value in place; the key keeps
        its position in the iteration order.

        Raises:
            ValueRejected: If the guard returns exactly False
            InvalidKeyType: If the key type is not supported
        """
        if not passes(self._policy.guard(value)):
            raise ValueRejected(
                f"Value {value!r} rejected by {_policy_name(self._policy)} guard of {type(self).__name__}"
            )
        stored = self._policy.normalize(value)
        return self._store(key, stored)

    def forget(self, key: Any) -> "Map":
        """Remove a key and its value; absent keys are ignored."""
        token = self._codec.lookup(key)
        if token is not None:
            del self._values[token]
            self._codec.forget(token)
        return self

    def push(self, value: Any) -> "Map":
        """
        Append a value under the next integer index.

        The index is one past the highest non-negative int key this map has
        ever stored; indexes freed by forget() or pop() are not reused.
        """
        return self.set(self._next_index, value)

    def pop(self) -> Any:
        """
        Remove and return the last entry's value.

        Raises:
            EmptyContainer: If the map is empty
        """
        if not self._values:
            raise EmptyContainer(f"pop from an empty {type(self).__name__}")
        token, value = self._values.popitem()
        self._codec.forget(token)
        return value

    def keys(self) -> List[Any]:
        resolve = self._codec.resolve
        return [resolve(token) for token in self._values]

    def values(self) -> List[Any]:
        return list(self._values.values())

    def items(self) -> MapItems:
        return MapItems(self)

    def count(self) -> int:
        return len(self._values)

    def is_empty(self) -> bool:
        return not self._values

    def copy(self) -> "Map":
        result = self._empty_like()
        for key, value in self._pairs():
            result._store(key, value)
        result._next_index = self._next_index
        return result

    # ------------------------------------------------------------------
    # Traversal

    def walk(self, visitor: Visitor) -> "Map":
        """
        Call ``visitor(value, key)`` on each entry, front to back.

        Iteration stops as soon as the visitor returns exactly False. The
        visitor may replace values with set() or remove entries with forget();
        entries removed before they are reached are skipped.
        """
        return self._walk_tokens(list(self._values), visitor)

    def walk_backward(self, visitor: Visitor) -> "Map":
        """Like walk(), from the last entry to the first."""
        return self._walk_tokens(list(reversed(self._values)), visitor)

    # ------------------------------------------------------------------
    # Fluent transformations

    def filter(self, predicate: Visitor) -> "Map":
        """New map of the same type holding entries where predicate(value, key) is truthy."""
        return self._select(predicate, None, backward=False)

    def first(self, predicate: Optional[Visitor] = None, n: int = 1) -> "Map":
        """New map holding the first n entries matching the predicate (all entries if None)."""
        return self._select(predicate, _whole_number(n), backward=False)

    def last(self, predicate: Optional[Visitor] = None, n: int = 1) -> "Map":
        """New map holding the last n matching entries, in their original order."""
        return self._select(predicate, _whole_number(n), backward=True)

    def every(self, predicate: Visitor) -> bool:
        return all(predicate(value, key) for key, value in self._pairs())

    def some(self, predicate: Visitor) -> bool:
        return any(predicate(value, key) for key, value in self._pairs())

    def none(self, predicate: Visitor) -> bool:
        return not self.some(predicate)

    def map(self, transform: Visitor) -> "Map":
        """Plain Map of ``transform(value, key)`` under the same keys."""
        result = Map()
        for key, value in self._pairs():
            result.set(key, transform(value, key))
        return result

    def rekey(self, transform: Visitor) -> "Map":
        """
        New map of the same type whose keys are ``transform(value, key)``.

        When two entries produce the same new key the later one wins.
        """
        result = self._empty_like()
        for key, value in self._pairs():
            result._store(transform(value, key), value)
        return result

    def reduce(
        self,
        reducer: Callable[[Any, Any, Any], Any],
        initial: Any = _MISSING,
        finisher: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """
        Fold the map into a single value.

        Args:
            reducer: Called as ``reducer(accumulator, value, key)``
            initial: Starting accumulator; when omitted the first value seeds
                it and reduction starts at the second entry
            finisher: Optional function applied to the final accumulator

        Returns:
            The (finished) accumulator; None for an empty map without initial
        """
        pairs = self._pairs()
        if initial is _MISSING:
            first = next(pairs, None)
            accumulator = first[1] if first is not None else None
        else:
            accumulator = initial

        for key, value in pairs:
            accumulator = reducer(accumulator, value, key)

        if finisher is not None:
            return finisher(accumulator)
        return accumulator

    def partition(self, partitioner: Visitor) -> "Map":
        """
        Group entries by the scalar ``partitioner(value, key)`` returns.

        Returns:
            MapOfMaps from group key to a map of this map's type holding the
            group's entries under their original keys

        Raises:
            InvalidKeyType: If the partitioner returns a non-scalar
        """
        from ..typed.nested import MapOfMaps

        groups = MapOfMaps()
        for key, value in self._pairs():
            group = partitioner(value, key)
            if not is_scalar(group):
                raise InvalidKeyType(
                    f"Partition key must be a scalar, got {type(group).__name__}"
                )
            bucket = groups.get(group)
            if bucket is None:
                bucket = self._empty_like()
                groups.set(group, bucket)
            bucket._store(key, value)
        return groups

    def merge(
        self,
        source: Any,
        combiner: Callable[[Any, Any], Any],
        default: Any = None,
    ) -> "Map":
        """Set each source key to ``combiner(current_or_default, source_value)``."""
        for key, value in collection_to_pairs(source):
            self.set(key, combiner(self.get(key, default), value))
        return self

    def update(self, source: Any) -> "Map":
        """Set every pair of a collection-like source into this map."""
        for key, value in collection_to_pairs(source):
            self.set(key, value)
        return self

    def into(self, target: "Map") -> "Map":
        """Copy every entry into target (through target's own guard) and return target."""
        for key, value in self._pairs():
            target.set(key, value)
        return target

    # ------------------------------------------------------------------
    # Serialization

    def to_array(self) -> Dict[Any, Any]:
        """
        Copy this map into a plain dict, converting nested maps recursively.

        Keys equal under dict equality (``True``, ``1``, ``1.0``) collapse
        into one entry, the later value winning.

        Raises:
            InvalidKeyType: If a key is unhashable (e.g. a list or dict key)
        """
        plain: Dict[Any, Any] = {}
        for key, value in self._pairs():
            try:
                hash(key)
            except TypeError as exc:
                raise InvalidKeyType(
                    f"Key {key!r} has no plain representation; iterate items() instead"
                ) from exc
            plain[key] = to_plain(value)
        return plain

    def to_json(self, **kwargs: Any) -> str:
        """to_array() encoded by json.dumps; keyword arguments are passed through."""
        return json.dumps(self.to_array(), **kwargs)

    # ------------------------------------------------------------------
    # Python protocols

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __getitem__(self, key: Any) -> Any:
        token = self._codec.lookup(key)
        if token is None:
            raise KeyError(key)
        return self._values[token]

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        if not self.has(key):
            raise KeyError(key)
        self.forget(key)

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        return self._pairs()

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._pairs())!r})"

    # ------------------------------------------------------------------
    # Internals

    def _pairs(self) -> Iterator[Tuple[Any, Any]]:
        resolve = self._codec.resolve
        for token, value in self._values.items():
            yield resolve(token), value

    def _store(self, key: Any, stored: Any) -> "Map":
        # stored has already passed this map's policy
        token = self._codec.tokenize(key)
        self._values[token] = stored

        if token.kind is KeyKind.INT and token.ident >= self._next_index:
            self._next_index = token.ident + 1
        return self

    def _empty_like(self) -> "Map":
        other = type(self)()
        other._policy = self._policy
        return other

    def _walk_tokens(self, tokens: List[Token], visitor: Visitor) -> "Map":
        for token in tokens:
            if token not in self._values:
                continue
            value = self._values[token]
            if not passes(visitor(value, self._codec.resolve(token))):
                break
        return self

    def _select(self, predicate: Optional[Visitor], limit: Optional[int], backward: bool) -> "Map":
        matches: List[Tuple[Any, Any]] = []

        def collect(value: Any, key: Any) -> Any:
            if predicate is None or predicate(value, key):
                matches.append((key, value))
                if limit is not None and len(matches) >= limit:
                    return False
            return None

        if backward:
            self.walk_backward(collect)
            matches.reverse()
        else:
            self.walk(collect)

        result = self._empty_like()
        for key, value in matches:
            result._store(key, value)
        return result


def _policy_name(policy: Any) -> str:
    return getattr(policy, "name", type(policy).__name__)


def _whole_number(n: Any) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise ValueError(f"Whole number expected, got {n!r}")
    return n
