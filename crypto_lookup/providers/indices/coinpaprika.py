"""
Coinpaprika aggregator provider.

Uses the public Coinpaprika API (no authentication required):
  GET https://api.coinpaprika.com/v1/search?q={query}&c=currencies&limit={n}
  GET https://api.coinpaprika.com/v1/tickers/{id}
"""
from __future__ import annotations

from typing import List, Optional

from ..base import Capability, PriceRecord, SearchMatch, TokenInfoRecord
from ..http import (
    HttpProvider,
    clean_str,
    find_match,
    guarded,
    safe_get,
    to_datetime,
    to_float,
    to_int,
    to_price,
    upper_symbol,
)

COINPAPRIKA_BASE_URL = "https://api.coinpaprika.com/v1"


class CoinpaprikaProvider(HttpProvider):
    """Ticker data from the Coinpaprika public API."""

    provider_name = "Coinpaprika"
    config_key = "coinpaprika"
    default_base_url = COINPAPRIKA_BASE_URL
    capabilities = frozenset({Capability.SEARCH, Capability.SYMBOL_LOOKUP})

    @guarded(list)
    def search(self, query: str) -> List[SearchMatch]:
        data = self.get_json(
            "search", {"q": query, "c": "currencies", "limit": self.search_limit}
        )
        currencies = data.get("currencies") if isinstance(data, dict) else None
        if not isinstance(currencies, list):
            return []
        out: List[SearchMatch] = []
        for coin in currencies[: self.search_limit]:
            symbol = upper_symbol(coin.get("symbol"))
            if not symbol:
                continue
            out.append(
                SearchMatch(
                    id=clean_str(coin.get("id")),
                    name=clean_str(coin.get("name")) or symbol,
                    symbol=symbol,
                    source=self.provider_name,
                )
            )
        return out

    def resolve_id(self, query: str) -> str:
        """
        Coinpaprika ids look like "btc-bitcoin". Anything without a dash is
        searched; an exact symbol/id match wins, else the top search hit.
        """
        coin_id = query.strip().lower()
        if "-" in coin_id:
            return coin_id
        matches = self.search(coin_id)
        match = find_match(matches, coin_id)
        if match is not None and match.id:
            return match.id
        if matches and matches[0].id:
            return matches[0].id
        return coin_id

    @guarded()
    def get_price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        info = self.get_token_info(query, network)
        return info.to_price_record() if info else None

    @guarded()
    def get_token_info(
        self, query: str, network: Optional[str] = None
    ) -> Optional[TokenInfoRecord]:
        data = self.get_json(f"tickers/{self.resolve_id(query)}")
        if not isinstance(data, dict):
            return None
        usd = safe_get(data, "quotes.USD") or {}
        price = to_price(usd.get("price"))
        symbol = upper_symbol(data.get("symbol"))
        if price is None or not symbol:
            return None
        return TokenInfoRecord(
            symbol=symbol,
            name=clean_str(data.get("name")),
            price_usd=price,
            market_cap=to_float(usd.get("market_cap")),
            market_cap_rank=to_int(data.get("rank")),
            fdv=to_float(usd.get("fully_diluted_market_cap")),
            circulating_supply=to_float(data.get("circulating_supply")),
            total_supply=to_float(data.get("total_supply")),
            max_supply=to_float(data.get("max_supply")),
            volume_24h=to_float(usd.get("volume_24h")),
            price_change_pct_24h=to_float(usd.get("percent_change_24h")),
            price_change_pct_7d=to_float(usd.get("percent_change_7d")),
            ath=to_float(usd.get("ath_price")),
            ath_date=to_datetime(usd.get("ath_date")),
            source=self.provider_name,
        )
