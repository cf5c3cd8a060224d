"""
CoinGecko aggregator provider.

Uses the public CoinGecko API (no authentication required):
  GET https://api.coingecko.com/api/v3/search?query={query}
  GET https://api.coingecko.com/api/v3/simple/price?ids={id}&vs_currencies=usd
  GET https://api.coingecko.com/api/v3/coins/{id}

Symbols are resolved to CoinGecko coin ids ("btc" -> "bitcoin") through search.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..base import Capability, PriceRecord, SearchMatch, TokenInfoRecord, TokenLinks
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

COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"

_COIN_DETAIL_PARAMS = {
    "localization": "false",
    "tickers": "false",
    "market_data": "true",
    "community_data": "false",
    "developer_data": "false",
    "sparkline": "false",
}


def _links(links: Dict[str, Any]) -> TokenLinks:
    homepages = links.get("homepage") or []
    twitter = clean_str(links.get("twitter_screen_name"))
    telegram = clean_str(links.get("telegram_channel_identifier"))
    chats = [c for c in (links.get("chat_url") or []) if isinstance(c, str)]
    repos = safe_get(links, "repos_url.github") or []
    return TokenLinks(
        website=next((u for u in (clean_str(h) for h in homepages) if u), None),
        twitter=f"https://twitter.com/{twitter}" if twitter else None,
        telegram=f"https://t.me/{telegram}" if telegram else None,
        discord=next((c for c in chats if "discord" in c), None),
        github=next((u for u in (clean_str(r) for r in repos) if u), None),
    )


class CoinGeckoProvider(HttpProvider):
    """Prices and rich coin metadata from the CoinGecko public API."""

    provider_name = "CoinGecko"
    config_key = "coingecko"
    default_base_url = COINGECKO_BASE_URL
    capabilities = frozenset({Capability.SEARCH, Capability.SYMBOL_LOOKUP})

    @guarded(list)
    def search(self, query: str) -> List[SearchMatch]:
        data = self.get_json("search", {"query": query})
        coins = data.get("coins") if isinstance(data, dict) else None
        if not isinstance(coins, list):
            return []
        out: List[SearchMatch] = []
        for coin in coins[: self.search_limit]:
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

    def resolve_id(self, query: str) -> Tuple[str, Optional[SearchMatch]]:
        """Map a symbol or id to a CoinGecko coin id; falls back to the lower-cased query."""
        coin_id = query.strip().lower()
        match = find_match(self.search(coin_id), coin_id)
        if match is not None and match.id:
            coin_id = match.id
        return coin_id, match

    @guarded()
    def get_price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        coin_id, match = self.resolve_id(query)
        data = self.get_json("simple/price", {"ids": coin_id, "vs_currencies": "usd"})
        quote = data.get(coin_id) if isinstance(data, dict) else None
        price = to_price(quote.get("usd")) if isinstance(quote, dict) else None
        if price is None:
            return None
        return PriceRecord(
            symbol=match.symbol if match else coin_id.upper(),
            price_usd=price,
            source=self.provider_name,
        )

    @guarded()
    def get_token_info(
        self, query: str, network: Optional[str] = None
    ) -> Optional[TokenInfoRecord]:
        coin_id, _ = self.resolve_id(query)
        data = self.get_json(f"coins/{coin_id}", _COIN_DETAIL_PARAMS)
        if not isinstance(data, dict) or data.get("error"):
            return None
        md = data.get("market_data") or {}
        price = to_price(safe_get(md, "current_price.usd"))
        symbol = upper_symbol(data.get("symbol"))
        if price is None or not symbol:
            return None
        return TokenInfoRecord(
            symbol=symbol,
            name=clean_str(data.get("name")),
            price_usd=price,
            description=clean_str(safe_get(data, "description.en")),
            market_cap=to_float(safe_get(md, "market_cap.usd")),
            market_cap_rank=to_int(data.get("market_cap_rank")),
            fdv=to_float(safe_get(md, "fully_diluted_valuation.usd")),
            circulating_supply=to_float(md.get("circulating_supply")),
            total_supply=to_float(md.get("total_supply")),
            max_supply=to_float(md.get("max_supply")),
            volume_24h=to_float(safe_get(md, "total_volume.usd")),
            price_change_24h=to_float(md.get("price_change_24h")),
            price_change_pct_24h=to_float(md.get("price_change_percentage_24h")),
            price_change_pct_7d=to_float(md.get("price_change_percentage_7d")),
            ath=to_float(safe_get(md, "ath.usd")),
            ath_date=to_datetime(safe_get(md, "ath_date.usd")),
            atl=to_float(safe_get(md, "atl.usd")),
            atl_date=to_datetime(safe_get(md, "atl_date.usd")),
            links=_links(data.get("links") or {}),
            source=self.provider_name,
        )
