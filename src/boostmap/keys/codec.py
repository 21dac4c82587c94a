"""
Bidirectional key <-> token registry.

A KeyCodec turns any supported key into a Token that is safe to use as a
native dict key, and remembers which original key each issued token stands
for. Each map owns its own codec; nothing is shared between instances.
"""

import hashlib
import itertools
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Dict, Hashable, Optional, Tuple

from ..config import Settings
from ..errors import BoostError
from .canonical import KeyKind, canonical_form, classify, digest


class UnknownToken(BoostError, LookupError):
    """Raised when a token was never issued by (or was forgotten from) a codec."""


@dataclass(frozen=True)
class Token:
    """
    Canonical identity of a key.

    Equality and hashing use only ``kind`` and ``ident``; ``serial`` records
    the order in which the owning codec issued the token.
    """
    kind: KeyKind
    ident: Hashable
    serial: int = field(default=-1, compare=False)

    def __lt__(self, other: "Token") -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.serial < other.serial


def _snapshot(key: Any) -> Any:
    """Detached copy of a composite key; references and scalars are kept as-is."""
    if isinstance(key, (list, tuple)):
        items = [_snapshot(item) for item in key]
        return tuple(items) if isinstance(key, tuple) else items
    if isinstance(key, SimpleNamespace):
        return SimpleNamespace(**{name: _snapshot(value) for name, value in vars(key).items()})
    if isinstance(key, Mapping):
        return {name: _snapshot(value) for name, value in key.items()}
    return key


class KeyCodec:
    """Issues tokens for keys and resolves tokens back to their keys."""

    def __init__(self, digest_algorithm: Optional[str] = None) -> None:
        algorithm = digest_algorithm or Settings().digest_algorithm
        try:
            hashlib.new(algorithm)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Unknown digest algorithm: {algorithm}") from exc

        self._algorithm = algorithm
        self._registry: Dict[Token, Tuple[Token, Any]] = {}
        self._serials = itertools.count()

    @property
    def digest_algorithm(self) -> str:
        return self._algorithm

    def identify(self, key: Any) -> Tuple[KeyKind, Hashable]:
        """
        Compute the canonical identity of a key without registering it.

        Args:
            key: Any supported key

        Returns:
            (kind, ident) pair; two keys share it iff they are the same key

        Raises:
            InvalidKeyType: If the key type is not supported
        """
        kind = classify(key)

        if kind is KeyKind.NULL:
            return kind, None
        if kind is KeyKind.BOOL:
            return kind, bool(key)
        if kind is KeyKind.INT:
            return kind, int(key)
        if kind is KeyKind.FLOAT:
            # hex keeps -0.0 apart from 0.0 and makes every NaN one key
            return kind, float.hex(key)
        if kind is KeyKind.STRING:
            return kind, str.__str__(key)
        if kind is KeyKind.BYTES:
            return kind, bytes(key)
        if kind is KeyKind.REFERENCE:
            return kind, id(key)
        return kind, digest(canonical_form(key), self._algorithm)

    def lookup(self, key: Any) -> Optional[Token]:
        """Return the token issued for a key, or None if it has none."""
        entry = self._registry.get(self._probe(key))
        return entry[0] if entry is not None else None

    def tokenize(self, key: Any) -> Token:
        """
        Return the token for a key, issuing and registering one if needed.

        Lists, tuples and records are registered as a detached copy, so
        mutating the caller's object afterwards does not change the stored key.

        Raises:
            InvalidKeyType: If the key type is not supported
        """
        probe = self._probe(key)
        entry = self._registry.get(probe)
        if entry is not None:
            return entry[0]

        token = Token(probe.kind, probe.ident, next(self._serials))
        if token.kind in (KeyKind.SEQUENCE, KeyKind.RECORD):
            # later changes to the caller's list or dict must not move the key
            key = _snapshot(key)
        self._registry[token] = (token, key)
        return token

    def resolve(self, token: Token) -> Any:
        """
        Return the original key a token was issued for.

        Raises:
            UnknownToken: If this codec never issued the token or has forgotten it
        """
        entry = self._registry.get(token)
        if entry is None:
            raise UnknownToken(f"Token {token!r} was not issued by this codec")
        return entry[1]

    def forget(self, token: Token) -> None:
        """Drop a token from the registry; unknown tokens are ignored."""
        self._registry.pop(token, None)

    def __contains__(self, token: object) -> bool:
        return token in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def _probe(self, key: Any) -> Token:
        kind, ident = self.identify(key)
        return Token(kind, ident)
