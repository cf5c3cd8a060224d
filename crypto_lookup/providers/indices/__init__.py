"""Market-data aggregator providers (coin indices with search and metadata)."""
from __future__ import annotations

from .coincap import CoinCapProvider
from .coingecko import CoinGeckoProvider
from .coinpaprika import CoinpaprikaProvider
from .cryptocompare import CryptoCompareProvider

__all__ = [
    "CoinCapProvider",
    "CoinGeckoProvider",
    "CoinpaprikaProvider",
    "CryptoCompareProvider",
]
