"""
Binance ticker provider.

Uses the public Binance API (no authentication required):
  GET https://api.binance.com/api/v3/ticker/price?symbol={pair}
  GET https://api.binance.com/api/v3/ticker/24hr?symbol={pair}

Binance has no token search; search() reports a single match when a USDT pair
for the query exists.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from ..base import Capability, PriceRecord, SearchMatch, TokenInfoRecord
from ..http import HttpProvider, guarded, to_float, to_price

BINANCE_BASE_URL = "https://api.binance.com/api/v3"

# USD-pegged quote assets; prices against these are taken as USD.
USD_QUOTES = ("USDT", "USDC", "FDUSD", "BUSD")
DEFAULT_QUOTE = "USDT"


def split_pair(query: str) -> Tuple[str, str]:
    """Return (base, pair) for a symbol like 'eth' or a pair like 'ETHUSDC'."""
    sym = query.strip().upper()
    for quote in USD_QUOTES:
        if sym.endswith(quote) and len(sym) > len(quote):
            return sym[: -len(quote)], sym
    return sym, f"{sym}{DEFAULT_QUOTE}"


class BinanceProvider(HttpProvider):
    """Spot ticker prices from the Binance public API."""

    provider_name = "Binance"
    config_key = "binance"
    default_base_url = BINANCE_BASE_URL
    capabilities = frozenset({Capability.SEARCH, Capability.SYMBOL_LOOKUP})

    @guarded(list)
    def search(self, query: str) -> List[SearchMatch]:
        base, pair = split_pair(query)
        if not base:
            return []
        data = self.get_json("ticker/price", {"symbol": pair})
        if not isinstance(data, dict) or to_price(data.get("price")) is None:
            return []
        return [SearchMatch(id=pair, name=base, symbol=base, source=self.provider_name)]

    @guarded()
    def get_price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        base, pair = split_pair(query)
        data = self.get_json("ticker/price", {"symbol": pair})
        if not isinstance(data, dict):
            return None
        price = to_price(data.get("price"))
        if price is None:
            return None
        return PriceRecord(symbol=base, price_usd=price, source=self.provider_name)

    @guarded()
    def get_token_info(
        self, query: str, network: Optional[str] = None
    ) -> Optional[TokenInfoRecord]:
        base, pair = split_pair(query)
        data = self.get_json("ticker/24hr", {"symbol": pair})
        if not isinstance(data, dict):
            return None
        price = to_price(data.get("lastPrice"))
        if price is None:
            return None
        return TokenInfoRecord(
            symbol=base,
            name=base,
            price_usd=price,
            # Quote volume in a USD stablecoin approximates USD volume.
            volume_24h=to_float(data.get("quoteVolume")),
            price_change_24h=to_float(data.get("priceChange")),
            price_change_pct_24h=to_float(data.get("priceChangePercent")),
            source=self.provider_name,
        )
