"""Core shared types for crypto_lookup."""

from __future__ import annotations

from .errors import ConfigError, CryptoLookupError, InvalidRecordError, UnknownProviderError

__all__ = [
    "ConfigError",
    "CryptoLookupError",
    "InvalidRecordError",
    "UnknownProviderError",
]
