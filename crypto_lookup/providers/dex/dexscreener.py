"""
Dexscreener DEX pair provider.

Uses the public Dexscreener API (no authentication required):
  GET https://api.dexscreener.com/latest/dex/tokens/{address}
  GET https://api.dexscreener.com/latest/dex/search?q={query}

Token lookups return every pair trading the token; the first pair (the most
liquid one in Dexscreener's ordering) supplies the headline figures.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base import Capability, DexPairRecord, PriceRecord, SearchMatch, TokenInfoRecord, TokenLinks
from ..http import (
    HttpProvider,
    clean_str,
    guarded,
    safe_get,
    to_float,
    to_price,
    upper_symbol,
)

DEX_BASE_URL = "https://api.dexscreener.com/latest/dex"


def _social(socials: List[Dict[str, Any]], kind: str) -> Optional[str]:
    for s in socials:
        if isinstance(s, dict) and s.get("type") == kind:
            return clean_str(s.get("url"))
    return None


def _links(pair: Dict[str, Any]) -> TokenLinks:
    websites = safe_get(pair, "info.websites") or []
    socials = safe_get(pair, "info.socials") or []
    website = None
    if websites and isinstance(websites[0], dict):
        website = clean_str(websites[0].get("url"))
    return TokenLinks(
        website=website,
        twitter=_social(socials, "twitter"),
        telegram=_social(socials, "telegram"),
        discord=_social(socials, "discord"),
    )


def _pair_record(pair: Dict[str, Any]) -> Optional[DexPairRecord]:
    address = clean_str(pair.get("pairAddress"))
    if not address:
        return None
    return DexPairRecord(
        dex_id=clean_str(pair.get("dexId")),
        pair_address=address,
        base_symbol=upper_symbol(safe_get(pair, "baseToken.symbol")),
        quote_symbol=upper_symbol(safe_get(pair, "quoteToken.symbol")),
        price_usd=to_price(pair.get("priceUsd")),
        volume_h24=to_float(safe_get(pair, "volume.h24")),
        liquidity_usd=to_float(safe_get(pair, "liquidity.usd")),
        network=clean_str(pair.get("chainId")),
    )


class DexscreenerProvider(HttpProvider):
    """Token and pair data from the Dexscreener public API."""

    provider_name = "DexScreener"
    config_key = "dexscreener"
    default_base_url = DEX_BASE_URL
    capabilities = frozenset({Capability.SEARCH, Capability.ADDRESS_LOOKUP})

    @guarded(list)
    def search(self, query: str) -> List[SearchMatch]:
        data = self.get_json("search", {"q": query})
        pairs = data.get("pairs") if isinstance(data, dict) else None
        if not isinstance(pairs, list):
            return []
        out: List[SearchMatch] = []
        for pair in pairs[: self.search_limit]:
            symbol = upper_symbol(safe_get(pair, "baseToken.symbol"))
            if not symbol:
                continue
            out.append(
                SearchMatch(
                    id=clean_str(safe_get(pair, "baseToken.address")),
                    name=clean_str(safe_get(pair, "baseToken.name")) or symbol,
                    symbol=symbol,
                    network=clean_str(pair.get("chainId")),
                    source=self.provider_name,
                )
            )
        return out

    @guarded()
    def get_price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        info = self.get_token_info(query, network)
        return info.to_price_record() if info else None

    @guarded()
    def get_token_info(
        self, query: str, network: Optional[str] = None
    ) -> Optional[TokenInfoRecord]:
        # network is ignored: Dexscreener chain ids ("ethereum") are not the
        # short network ids callers pass for GeckoTerminal ("eth").
        data = self.get_json(f"tokens/{query.strip()}")
        pairs = data.get("pairs") if isinstance(data, dict) else None
        if not isinstance(pairs, list) or not pairs:
            return None
        pairs = [p for p in pairs if isinstance(p, dict)]
        if not pairs:
            return None
        head = pairs[0]
        price = to_price(head.get("priceUsd"))
        symbol = upper_symbol(safe_get(head, "baseToken.symbol"))
        if price is None or not symbol:
            return None
        records = (_pair_record(p) for p in pairs[: self.search_limit])
        return TokenInfoRecord(
            symbol=symbol,
            name=clean_str(safe_get(head, "baseToken.name")),
            address=clean_str(safe_get(head, "baseToken.address")),
            network=clean_str(head.get("chainId")),
            price_usd=price,
            market_cap=to_float(head.get("marketCap")),
            fdv=to_float(head.get("fdv")),
            volume_24h=to_float(safe_get(head, "volume.h24")),
            liquidity_usd=to_float(safe_get(head, "liquidity.usd")),
            price_change_pct_24h=to_float(safe_get(head, "priceChange.h24")),
            links=_links(head),
            pairs=tuple(r for r in records if r is not None),
            source=self.provider_name,
        )
