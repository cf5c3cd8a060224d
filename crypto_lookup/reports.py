"""
Single-endpoint market reports: global snapshot, trending, top coins,
Fear & Greed sentiment, Ethereum gas oracle and historical price chart.

No fallback or merging here; each report is one vendor call that resolves to
a record or None / [] exactly like a provider adapter.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from .providers.base import utc_now
from .providers.http import (
    HttpProvider,
    clean_str,
    guarded,
    safe_get,
    to_datetime,
    to_float,
    to_int,
    to_price,
    upper_symbol,
)
from .providers.indices.coingecko import CoinGeckoProvider

logger = logging.getLogger(__name__)

FEAR_GREED_BASE_URL = "https://api.alternative.me"
ETHERSCAN_BASE_URL = "https://api.etherscan.io"


@dataclass(frozen=True)
class GlobalMarketSnapshot:
    total_market_cap_usd: float
    total_volume_24h_usd: float
    btc_dominance_pct: Optional[float]
    eth_dominance_pct: Optional[float]
    active_cryptocurrencies: Optional[int]
    updated_at: datetime


@dataclass(frozen=True)
class TrendingCoin:
    id: Optional[str]
    name: str
    symbol: str
    market_cap_rank: Optional[int] = None
    price_usd: Optional[float] = None
    price_change_pct_24h: Optional[float] = None
    volume_24h: Optional[float] = None


@dataclass(frozen=True)
class TopCoin:
    id: Optional[str]
    name: str
    symbol: str
    price_usd: Optional[float]
    market_cap_rank: Optional[int] = None
    market_cap: Optional[float] = None
    volume_24h: Optional[float] = None
    price_change_pct_24h: Optional[float] = None


@dataclass(frozen=True)
class SentimentReading:
    value: int
    classification: str
    updated_at: datetime


@dataclass(frozen=True)
class GasOracle:
    """Gas prices in gwei."""

    network: str
    low: float
    average: float
    high: float
    base_fee: Optional[float] = None


@dataclass(frozen=True)
class PriceChart:
    coin_id: str
    prices: Tuple[float, ...]
    timestamps: Tuple[datetime, ...]

    @property
    def min_price(self) -> float:
        return min(self.prices)

    @property
    def max_price(self) -> float:
        return max(self.prices)


class _JsonSource(HttpProvider):
    """Bare HTTP source for one report endpoint."""

    def __init__(
        self, name: str, config_key: str, base_url: str, timeout_s: Optional[float] = None
    ) -> None:
        self.provider_name = name
        self.config_key = config_key
        self.default_base_url = base_url
        super().__init__(timeout_s=timeout_s)


class MarketReports:
    """Auxiliary single-call reports; every method returns None or [] on failure."""

    provider_name = "reports"

    def __init__(
        self,
        coingecko: Optional[CoinGeckoProvider] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.coingecko = coingecko or CoinGeckoProvider(timeout_s=timeout_s)
        self._gecko = _JsonSource(
            "CoinGecko", "coingecko", self.coingecko.base_url, self.coingecko.timeout_s
        )
        self._fng = _JsonSource("alternative.me", "feargreed", FEAR_GREED_BASE_URL, timeout_s)
        self._etherscan = _JsonSource("Etherscan", "etherscan", ETHERSCAN_BASE_URL, timeout_s)

    @guarded()
    def market(self) -> Optional[GlobalMarketSnapshot]:
        d = safe_get(self._gecko.get_json("global"), "data")
        if not isinstance(d, dict):
            return None
        total_cap = to_float(safe_get(d, "total_market_cap.usd"))
        total_vol = to_float(safe_get(d, "total_volume.usd"))
        if total_cap is None or total_vol is None:
            return None
        return GlobalMarketSnapshot(
            total_market_cap_usd=total_cap,
            total_volume_24h_usd=total_vol,
            btc_dominance_pct=to_float(safe_get(d, "market_cap_percentage.btc")),
            eth_dominance_pct=to_float(safe_get(d, "market_cap_percentage.eth")),
            active_cryptocurrencies=to_int(d.get("active_cryptocurrencies")),
            updated_at=to_datetime(to_int(d.get("updated_at"))) or utc_now(),
        )

    @guarded(list)
    def trending(self, limit: int = 10) -> List[TrendingCoin]:
        data = self._gecko.get_json("search/trending")
        coins = data.get("coins") if isinstance(data, dict) else None
        if not isinstance(coins, list):
            return []
        out: List[TrendingCoin] = []
        for c in coins[:limit]:
            item = c.get("item") or {}
            symbol = upper_symbol(item.get("symbol"))
            if not symbol:
                continue
            out.append(
                TrendingCoin(
                    id=clean_str(item.get("id")),
                    name=clean_str(item.get("name")) or symbol,
                    symbol=symbol,
                    market_cap_rank=to_int(item.get("market_cap_rank")),
                    price_usd=to_price(safe_get(item, "data.price")),
                    price_change_pct_24h=to_float(
                        safe_get(item, "data.price_change_percentage_24h.usd")
                    ),
                    volume_24h=to_float(safe_get(item, "data.total_volume")),
                )
            )
        return out

    @guarded(list)
    def top(self, limit: int = 50) -> List[TopCoin]:
        data = self._gecko.get_json(
            "coins/markets",
            {
                "vs_currency": "usd",
                "order": "market_cap_desc",
                "per_page": limit,
                "page": 1,
                "sparkline": "false",
            },
        )
        if not isinstance(data, list):
            return []
        out: List[TopCoin] = []
        for c in data[:limit]:
            symbol = upper_symbol(c.get("symbol"))
            if not symbol:
                continue
            out.append(
                TopCoin(
                    id=clean_str(c.get("id")),
                    name=clean_str(c.get("name")) or symbol,
                    symbol=symbol,
                    price_usd=to_price(c.get("current_price")),
                    market_cap_rank=to_int(c.get("market_cap_rank")),
                    market_cap=to_float(c.get("market_cap")),
                    volume_24h=to_float(c.get("total_volume")),
                    price_change_pct_24h=to_float(c.get("price_change_percentage_24h")),
                )
            )
        return out

    @guarded()
    def sentiment(self) -> Optional[SentimentReading]:
        data = self._fng.get_json("fng/", {"limit": 1})
        items = data.get("data") if isinstance(data, dict) else None
        if not isinstance(items, list) or not items:
            return None
        item = items[0]
        value = to_int(item.get("value"))
        label = clean_str(item.get("value_classification"))
        if value is None or label is None:
            return None
        return SentimentReading(
            value=value,
            classification=label,
            updated_at=to_datetime(to_int(item.get("timestamp"))) or utc_now(),
        )

    @guarded()
    def gas(self) -> Optional[GasOracle]:
        data = self._etherscan.get_json(
            "api", {"module": "gastracker", "action": "gasoracle"}
        )
        if not isinstance(data, dict) or str(data.get("status")) != "1":
            logger.debug("Gas oracle returned no result: %r", data)
            return None
        result = data.get("result") or {}
        low = to_float(result.get("SafeGasPrice"))
        average = to_float(result.get("ProposeGasPrice"))
        high = to_float(result.get("FastGasPrice"))
        if low is None or average is None or high is None:
            return None
        return GasOracle(
            network="Ethereum",
            low=low,
            average=average,
            high=high,
            base_fee=to_float(result.get("suggestBaseFee")),
        )

    @guarded()
    def chart(self, query: str, days: int = 7) -> Optional[PriceChart]:
        coin_id, _ = self.coingecko.resolve_id(query)
        data = self._gecko.get_json(
            f"coins/{coin_id}/market_chart", {"vs_currency": "usd", "days": days}
        )
        points = data.get("prices") if isinstance(data, dict) else None
        if not isinstance(points, list):
            return None
        prices: List[float] = []
        stamps: List[datetime] = []
        for point in points:
            if not isinstance(point, list) or len(point) < 2:
                continue
            ts, price = to_float(point[0]), to_price(point[1])
            stamp = to_datetime(ts / 1000.0) if ts is not None else None
            if stamp is None or price is None:
                logger.debug("Skipping chart point for %s: %r", coin_id, point)
                continue
            stamps.append(stamp)
            prices.append(price)
        if not prices:
            return None
        return PriceChart(coin_id=coin_id, prices=tuple(prices), timestamps=tuple(stamps))


__all__ = [
    "GasOracle",
    "GlobalMarketSnapshot",
    "MarketReports",
    "PriceChart",
    "SentimentReading",
    "TopCoin",
    "TrendingCoin",
]
