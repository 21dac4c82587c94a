"""
Canonical forms for heterogeneous map keys.

Every key is sorted into a KeyKind. Scalars keep their own kind so that
values a native dict would conflate (``True``, ``1`` and ``1.0``) stay
apart. Composite keys (sequences and records) are reduced to a kind-tagged,
JSON-serializable form whose digest identifies them structurally.
"""

import hashlib
import json
import numbers
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from types import SimpleNamespace
from typing import Any, Iterable, Mapping, Set, Tuple

from ..errors import BoostError


class InvalidKeyType(BoostError, TypeError):
    """Raised when a value cannot be used as a map key."""


class KeyKind(str, Enum):
    NULL = "n"
    BOOL = "b"
    INT = "i"
    FLOAT = "f"
    STRING = "s"
    BYTES = "y"
    SEQUENCE = "a"
    RECORD = "o"
    REFERENCE = "r"


# Kinds a partition callback may return as a group key.
SCALAR_KINDS = frozenset({
    KeyKind.BOOL,
    KeyKind.INT,
    KeyKind.FLOAT,
    KeyKind.STRING,
    KeyKind.BYTES,
})

_UNSUPPORTED_TYPES = (
    complex,
    Decimal,
    Fraction,
    set,
    frozenset,
    bytearray,
    memoryview,
)


def classify(key: Any) -> KeyKind:
    """
    Determine which kind of key a value is.

    Only mappings and SimpleNamespace are records compared by content. Every
    other object (a datetime, a class instance, a file handle) is a
    reference keyed by identity, so two equal datetimes are different keys.

    Args:
        key: Any candidate key

    Returns:
        The KeyKind the value belongs to

    Raises:
        InvalidKeyType: If the value falls outside the supported key types
    """
    if key is None:
        return KeyKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(key, bool):
        return KeyKind.BOOL
    if isinstance(key, numbers.Integral):
        return KeyKind.INT
    if isinstance(key, float):
        return KeyKind.FLOAT
    if isinstance(key, str):
        return KeyKind.STRING
    if isinstance(key, bytes):
        return KeyKind.BYTES
    if isinstance(key, _UNSUPPORTED_TYPES) or isinstance(key, numbers.Number):
        raise InvalidKeyType(f"Values of type {type(key).__name__} cannot be used as keys")
    if isinstance(key, (list, tuple)):
        return KeyKind.SEQUENCE
    if isinstance(key, (Mapping, SimpleNamespace)):
        return KeyKind.RECORD
    return KeyKind.REFERENCE


def is_scalar(value: Any) -> bool:
    """Check if a value is a scalar key (bool, int, float, str or bytes)."""
    try:
        return classify(value) in SCALAR_KINDS
    except InvalidKeyType:
        return False


def canonical_form(key: Any) -> Any:
    """
    Build the kind-tagged canonical form of a key.

    Sequences keep their order; record entries are sorted by the encoded
    text of their keys so that two records with the same entries share one
    form regardless of insertion order. Opaque references nested inside a
    composite are encoded by identity.

    Raises:
        InvalidKeyType: If the key, or anything nested in it, is unsupported
            or the composite refers back to itself
    """
    return _encode(key, set())


def dumps(form: Any) -> str:
    """Serialize a canonical form to compact, sorted, ASCII-only JSON."""
    return json.dumps(form, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def digest(form: Any, algorithm: str = "sha256") -> str:
    """Hex digest of a canonical form using the named hashlib algorithm."""
    return hashlib.new(algorithm, dumps(form).encode("ascii")).hexdigest()


def _encode(key: Any, active: Set[int]) -> Any:
    kind = classify(key)

    if kind is KeyKind.NULL:
        return [kind.value]
    if kind is KeyKind.BOOL:
        return [kind.value, key]
    if kind is KeyKind.INT:
        return [kind.value, int(key)]
    if kind is KeyKind.FLOAT:
        return [kind.value, float.hex(key)]
    if kind is KeyKind.STRING:
        return [kind.value, str.__str__(key)]
    if kind is KeyKind.BYTES:
        return [kind.value, bytes(key).hex()]
    if kind is KeyKind.REFERENCE:
        return [kind.value, id(key)]

    marker = id(key)
    if marker in active:
        raise InvalidKeyType(f"Self-referencing {type(key).__name__} cannot be used as a key")
    active.add(marker)
    try:
        if kind is KeyKind.SEQUENCE:
            return [kind.value, [_encode(item, active) for item in key]]

        entries = [
            [_encode(name, active), _encode(value, active)]
            for name, value in _record_entries(key)
        ]
        entries.sort(key=lambda entry: dumps(entry[0]))
        return [kind.value, entries]
    finally:
        active.discard(marker)


def _record_entries(record: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(record, SimpleNamespace):
        return vars(record).items()
    return record.items()

