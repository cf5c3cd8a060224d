"""
Top-level public API surface.

Canonical entrypoint: construct an Aggregator and call price / info / search.
Does not import cli.
"""

from __future__ import annotations

from ._version import __version__
from .aggregator import Aggregator, dedupe_by_symbol
from .classifier import QueryKind, classify
from .core.errors import ConfigError, CryptoLookupError, InvalidRecordError, UnknownProviderError
from .providers.base import (
    Capability,
    DexPairRecord,
    PriceRecord,
    ProviderAdapter,
    SearchMatch,
    TokenInfoRecord,
    TokenLinks,
)
from .reports import MarketReports
from .routing import ProviderRoutes

# Do not add exports without updating __all__.
__all__ = [
    "__version__",
    "Aggregator",
    "Capability",
    "ConfigError",
    "CryptoLookupError",
    "DexPairRecord",
    "InvalidRecordError",
    "MarketReports",
    "PriceRecord",
    "ProviderAdapter",
    "ProviderRoutes",
    "QueryKind",
    "SearchMatch",
    "TokenInfoRecord",
    "TokenLinks",
    "UnknownProviderError",
    "classify",
    "dedupe_by_symbol",
]
