"""
Shared exception types for crypto_lookup.

Provider outcomes (not found, vendor down, bad payload) are never exceptions at
the aggregator surface; these cover configuration and programming errors.
"""

from __future__ import annotations


class CryptoLookupError(Exception):
    """Base exception for crypto_lookup; catch this for any package-raised error."""

    pass


class ConfigError(CryptoLookupError, ValueError):
    """A configuration value (YAML or environment) could not be interpreted."""


class InvalidRecordError(CryptoLookupError, ValueError):
    """A normalized record was built with an empty source or an unusable price."""


class UnknownProviderError(CryptoLookupError, KeyError):
    """A provider name was looked up that the registry does not know."""


__all__ = [
    "ConfigError",
    "CryptoLookupError",
    "InvalidRecordError",
    "UnknownProviderError",
]
