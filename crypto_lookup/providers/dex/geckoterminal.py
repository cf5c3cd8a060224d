"""
GeckoTerminal on-chain token provider.

Uses the public GeckoTerminal API (no authentication required):
  GET https://api.geckoterminal.com/api/v2/search/pools?query={query}
  GET https://api.geckoterminal.com/api/v2/networks/{network}/tokens/{address}?include=top_pools

Token lookups are network-scoped ("eth", "bsc", "solana", ...).
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..base import Capability, DexPairRecord, PriceRecord, SearchMatch, TokenInfoRecord
from ..http import (
    HttpProvider,
    clean_str,
    guarded,
    safe_get,
    to_float,
    to_price,
    upper_symbol,
)

GECKOTERMINAL_BASE_URL = "https://api.geckoterminal.com/api/v2"
DEFAULT_NETWORK = "eth"


def split_pool_name(name: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """'PEPE / WETH 0.3%' -> ('PEPE', 'WETH')."""
    if not name or " / " not in name:
        return upper_symbol(name), None
    base, _, rest = name.partition(" / ")
    quote = rest.split()[0] if rest.split() else None
    return upper_symbol(base), upper_symbol(quote)


def _pool_record(pool: Dict[str, Any], network: str) -> Optional[DexPairRecord]:
    attrs = pool.get("attributes") or {}
    address = clean_str(attrs.get("address"))
    if not address:
        return None
    base, quote = split_pool_name(clean_str(attrs.get("name")))
    return DexPairRecord(
        dex_id=clean_str(safe_get(pool, "relationships.dex.data.id")),
        pair_address=address,
        base_symbol=base,
        quote_symbol=quote,
        price_usd=to_price(attrs.get("base_token_price_usd")),
        volume_h24=to_float(safe_get(attrs, "volume_usd.h24")),
        liquidity_usd=to_float(attrs.get("reserve_in_usd")),
        network=network,
    )


class GeckoTerminalProvider(HttpProvider):
    """Network-scoped token data from the GeckoTerminal public API."""

    provider_name = "GeckoTerminal"
    config_key = "geckoterminal"
    default_base_url = GECKOTERMINAL_BASE_URL
    capabilities = frozenset(
        {Capability.SEARCH, Capability.ADDRESS_LOOKUP, Capability.NETWORK_REQUIRED}
    )

    @guarded(list)
    def search(self, query: str) -> List[SearchMatch]:
        data = self.get_json("search/pools", {"query": query})
        pools = data.get("data") if isinstance(data, dict) else None
        if not isinstance(pools, list):
            return []
        out: List[SearchMatch] = []
        for pool in pools[: self.search_limit]:
            name = clean_str(safe_get(pool, "attributes.name"))
            symbol, _ = split_pool_name(name)
            if not symbol:
                continue
            out.append(
                SearchMatch(
                    id=clean_str(pool.get("id")),
                    name=name or symbol,
                    symbol=symbol,
                    network=clean_str(safe_get(pool, "relationships.network.data.id")),
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
        net = (network or DEFAULT_NETWORK).strip().lower()
        data = self.get_json(
            f"networks/{net}/tokens/{query.strip()}", {"include": "top_pools"}
        )
        attrs = safe_get(data, "data.attributes")
        if not isinstance(attrs, dict):
            return None
        price = to_price(attrs.get("price_usd"))
        symbol = upper_symbol(attrs.get("symbol"))
        if price is None or not symbol:
            return None
        included = data.get("included") or []
        pools = (
            _pool_record(p, net)
            for p in included
            if isinstance(p, dict) and p.get("type") == "pool"
        )
        return TokenInfoRecord(
            symbol=symbol,
            name=clean_str(attrs.get("name")),
            address=clean_str(attrs.get("address")),
            network=net,
            price_usd=price,
            market_cap=to_float(attrs.get("market_cap_usd")),
            fdv=to_float(attrs.get("fdv_usd")),
            volume_24h=to_float(safe_get(attrs, "volume_usd.h24")),
            liquidity_usd=to_float(attrs.get("total_reserve_in_usd")),
            pairs=tuple(p for p in pools if p is not None)[: self.search_limit],
            source=self.provider_name,
        )
