"""
Provider adapters for cryptocurrency market data.

Each adapter wraps one public vendor API (exchange tickers, aggregator
indices, DEX pair scanners) and maps its JSON into the normalized records in
base.py. Adapters never raise for vendor failures; they return None or [].
Built-in adapters and default priority orders live in defaults.py.
"""

from __future__ import annotations

from .base import (
    Capability,
    DexPairRecord,
    PriceRecord,
    ProviderAdapter,
    SearchMatch,
    TokenInfoRecord,
    TokenLinks,
)
from .http import HttpProvider, guarded
from .registry import ProviderRegistry

__all__ = [
    "Capability",
    "DexPairRecord",
    "HttpProvider",
    "PriceRecord",
    "ProviderAdapter",
    "ProviderRegistry",
    "SearchMatch",
    "TokenInfoRecord",
    "TokenLinks",
    "guarded",
]
