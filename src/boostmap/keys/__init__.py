"""Key canonicalization and per-map token registries."""

from .canonical import InvalidKeyType, KeyKind, canonical_form, classify, is_scalar
from .codec import KeyCodec, Token, UnknownToken

__all__ = [
    "InvalidKeyType",
    "KeyKind",
    "canonical_form",
    "classify",
    "is_scalar",
    "KeyCodec",
    "Token",
    "UnknownToken",
]
