"""
CoinCap aggregator provider.

Uses the public CoinCap API:
  GET https://api.coincap.io/v2/assets?search={query}&limit={n}
  GET https://api.coincap.io/v2/assets/{id}
"""
from __future__ import annotations

from typing import List, Optional

from ..base import Capability, PriceRecord, SearchMatch, TokenInfoRecord
from ..http import (
    HttpProvider,
    clean_str,
    find_match,
    guarded,
    to_float,
    to_int,
    to_price,
    upper_symbol,
)

COINCAP_BASE_URL = "https://api.coincap.io/v2"


class CoinCapProvider(HttpProvider):
    """Asset prices from the CoinCap API."""

    provider_name = "CoinCap"
    config_key = "coincap"
    default_base_url = COINCAP_BASE_URL
    capabilities = frozenset({Capability.SEARCH, Capability.SYMBOL_LOOKUP})

    @guarded(list)
    def search(self, query: str) -> List[SearchMatch]:
        data = self.get_json("assets", {"search": query, "limit": self.search_limit})
        assets = data.get("data") if isinstance(data, dict) else None
        if not isinstance(assets, list):
            return []
        out: List[SearchMatch] = []
        for asset in assets[: self.search_limit]:
            symbol = upper_symbol(asset.get("symbol"))
            if not symbol:
                continue
            out.append(
                SearchMatch(
                    id=clean_str(asset.get("id")),
                    name=clean_str(asset.get("name")) or symbol,
                    symbol=symbol,
                    source=self.provider_name,
                )
            )
        return out

    def resolve_id(self, query: str) -> str:
        asset_id = query.strip().lower()
        match = find_match(self.search(asset_id), asset_id)
        if match is not None and match.id:
            return match.id
        return asset_id

    @guarded()
    def get_price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        info = self.get_token_info(query, network)
        return info.to_price_record() if info else None

    @guarded()
    def get_token_info(
        self, query: str, network: Optional[str] = None
    ) -> Optional[TokenInfoRecord]:
        data = self.get_json(f"assets/{self.resolve_id(query)}")
        asset = data.get("data") if isinstance(data, dict) else None
        if not isinstance(asset, dict):
            return None
        price = to_price(asset.get("priceUsd"))
        symbol = upper_symbol(asset.get("symbol"))
        if price is None or not symbol:
            return None
        return TokenInfoRecord(
            symbol=symbol,
            name=clean_str(asset.get("name")),
            price_usd=price,
            market_cap=to_float(asset.get("marketCapUsd")),
            market_cap_rank=to_int(asset.get("rank")),
            circulating_supply=to_float(asset.get("supply")),
            max_supply=to_float(asset.get("maxSupply")),
            volume_24h=to_float(asset.get("volumeUsd24Hr")),
            price_change_pct_24h=to_float(asset.get("changePercent24Hr")),
            source=self.provider_name,
        )
