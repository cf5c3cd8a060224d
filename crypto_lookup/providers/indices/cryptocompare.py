"""
CryptoCompare provider.

Uses the public CryptoCompare min-api:
  GET https://min-api.cryptocompare.com/data/price?fsym={SYM}&tsyms=USD
  GET https://min-api.cryptocompare.com/data/pricemultifull?fsyms={SYM}&tsyms=USD

The coin list endpoint is too heavy for interactive search, so search() is empty.
"""
from __future__ import annotations

from typing import List, Optional

from ..base import Capability, PriceRecord, SearchMatch, TokenInfoRecord
from ..http import HttpProvider, guarded, to_float, to_price

CRYPTOCOMPARE_BASE_URL = "https://min-api.cryptocompare.com/data"


class CryptoCompareProvider(HttpProvider):
    """Symbol prices from the CryptoCompare public API."""

    provider_name = "CryptoCompare"
    config_key = "cryptocompare"
    default_base_url = CRYPTOCOMPARE_BASE_URL
    capabilities = frozenset({Capability.SYMBOL_LOOKUP})

    def search(self, query: str) -> List[SearchMatch]:
        return []

    @guarded()
    def get_price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        sym = query.strip().upper()
        data = self.get_json("price", {"fsym": sym, "tsyms": "USD"})
        if not isinstance(data, dict) or data.get("Response") == "Error":
            return None
        price = to_price(data.get("USD"))
        if price is None:
            return None
        return PriceRecord(symbol=sym, price_usd=price, source=self.provider_name)

    @guarded()
    def get_token_info(
        self, query: str, network: Optional[str] = None
    ) -> Optional[TokenInfoRecord]:
        sym = query.strip().upper()
        data = self.get_json("pricemultifull", {"fsyms": sym, "tsyms": "USD"})
        raw = (data.get("RAW") or {}).get(sym, {}).get("USD") if isinstance(data, dict) else None
        if not isinstance(raw, dict):
            return None
        price = to_price(raw.get("PRICE"))
        if price is None:
            return None
        return TokenInfoRecord(
            symbol=sym,
            # No display name in this endpoint.
            name=sym,
            price_usd=price,
            market_cap=to_float(raw.get("MKTCAP")),
            circulating_supply=to_float(raw.get("CIRCULATINGSUPPLY", raw.get("SUPPLY"))),
            volume_24h=to_float(raw.get("TOTALVOLUME24HTO")),
            price_change_24h=to_float(raw.get("CHANGE24HOUR")),
            price_change_pct_24h=to_float(raw.get("CHANGEPCT24HOUR")),
            source=self.provider_name,
        )
