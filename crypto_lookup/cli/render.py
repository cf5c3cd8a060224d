"""Plain-text rendering of lookup results for the terminal."""

from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional, Sequence

from ..providers.base import PriceRecord, SearchMatch, TokenInfoRecord
from ..reports import (
    GasOracle,
    GlobalMarketSnapshot,
    PriceChart,
    SentimentReading,
    TopCoin,
    TrendingCoin,
)

RULE = "-" * 40
DESCRIPTION_MAX_CHARS = 300
SPARK_CHARS = "▁▂▃▄▅▆▇█"
_TAG_RE = re.compile(r"<[^>]+>")


def fmt_usd(value: Optional[float], decimals: int = 6) -> str:
    if value is None:
        return "N/A"
    if abs(value) >= 1:
        return f"${value:,.2f}"
    return f"${value:,.{decimals}f}"


def fmt_amount(value: Optional[float]) -> str:
    return "N/A" if value is None else f"{value:,.0f}"


def fmt_pct(value: Optional[float]) -> str:
    return "N/A" if value is None else f"{value:+.2f}%"


def fmt_time(value: Optional[datetime]) -> str:
    return "N/A" if value is None else value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def _row(label: str, value: str) -> str:
    return f"{label + ':':<12} {value}"


def render_price(record: PriceRecord) -> str:
    return "\n".join(
        [
            f"Found via {record.source}",
            RULE,
            _row("Symbol", record.symbol),
            _row("Price", fmt_usd(record.price_usd)),
            _row("Updated", fmt_time(record.observed_at)),
            RULE,
        ]
    )


def render_info(info: TokenInfoRecord) -> str:
    lines = [f"Found via {info.source}", RULE]
    if info.name:
        lines.append(_row("Name", info.name))
    lines.append(_row("Symbol", info.symbol))
    lines.append(_row("Price", fmt_usd(info.price_usd)))
    optional = [
        ("MarketCap", info.market_cap, fmt_usd),
        ("Rank", info.market_cap_rank, lambda v: f"#{v}"),
        ("FDV", info.fdv, fmt_usd),
        ("Circ. Sup", info.circulating_supply, fmt_amount),
        ("Total Sup", info.total_supply, fmt_amount),
        ("Max Sup", info.max_supply, fmt_amount),
        ("24h Vol", info.volume_24h, fmt_usd),
        ("24h %", info.price_change_pct_24h, fmt_pct),
        ("7d %", info.price_change_pct_7d, fmt_pct),
        ("Liquidity", info.liquidity_usd, fmt_usd),
    ]
    for label, value, fmt in optional:
        if value is not None:
            lines.append(_row(label, fmt(value)))
    if info.ath is not None:
        when = f" ({info.ath_date:%Y-%m-%d})" if info.ath_date else ""
        lines.append(_row("ATH", fmt_usd(info.ath) + when))
    if info.atl is not None:
        when = f" ({info.atl_date:%Y-%m-%d})" if info.atl_date else ""
        lines.append(_row("ATL", fmt_usd(info.atl) + when))
    if info.network:
        lines.append(_row("Network", info.network))
    if info.address:
        lines.append(_row("Address", info.address))

    if not info.links.is_empty():
        lines += ["", "--- Links ---"]
        for label in ("website", "twitter", "telegram", "discord", "github"):
            url = getattr(info.links, label)
            if url:
                lines.append(_row(label.capitalize(), url))

    if info.description:
        desc = _TAG_RE.sub("", info.description).strip()
        if len(desc) > DESCRIPTION_MAX_CHARS:
            desc = desc[:DESCRIPTION_MAX_CHARS] + "..."
        lines += ["", "--- Description ---", desc]

    if info.pairs:
        lines += ["", "--- Top Trading Pairs ---"]
        for i, p in enumerate(info.pairs[:5], start=1):
            title = f"{p.base_symbol or '?'}/{p.quote_symbol or '?'}"
            lines.append(
                f"{i}. {title:<12} | {fmt_usd(p.price_usd):<14} | "
                f"Vol: {fmt_usd(p.volume_h24, 0)} | DEX: {p.dex_id or 'N/A'}"
            )

    lines += [RULE, _row("Updated", fmt_time(info.observed_at)), RULE]
    return "\n".join(lines)


def render_search(matches: Sequence[SearchMatch]) -> str:
    lines = [f"Found {len(matches)} results:", RULE]
    for i, m in enumerate(matches, start=1):
        lines.append(f"{i:>2}. {m.symbol:<8} | {m.name} (via {m.source})")
        if m.network:
            lines.append(f"    Network: {m.network}")
        # Long ids are contract addresses; short ones are vendor slugs.
        if m.id and len(m.id) > 20:
            lines.append(f"    Address: {m.id}")
    lines.append(RULE)
    return "\n".join(lines)


def render_market(snap: GlobalMarketSnapshot) -> str:
    return "\n".join(
        [
            "Global Market Overview:",
            RULE,
            _row("Market Cap", fmt_usd(snap.total_market_cap_usd)),
            _row("24h Volume", fmt_usd(snap.total_volume_24h_usd)),
            _row("BTC Dom.", fmt_pct(snap.btc_dominance_pct).lstrip("+")),
            _row("ETH Dom.", fmt_pct(snap.eth_dominance_pct).lstrip("+")),
            _row("Active", fmt_amount(snap.active_cryptocurrencies)),
            _row("Updated", fmt_time(snap.updated_at)),
            RULE,
        ]
    )


def render_coins(title: str, coins: Sequence[TrendingCoin] | Sequence[TopCoin]) -> str:
    lines = [title, RULE]
    for i, c in enumerate(coins, start=1):
        rank = f"#{c.market_cap_rank}" if c.market_cap_rank else ""
        lines.append(
            f"{i:>2}. {c.symbol:<8} | {fmt_usd(c.price_usd):<14} "
            f"{fmt_pct(c.price_change_pct_24h):>9} | {rank}"
        )
    lines.append(RULE)
    return "\n".join(lines)


def render_sentiment(reading: SentimentReading) -> str:
    return "\n".join(
        [
            "Current Market Sentiment:",
            RULE,
            _row("Score", f"{reading.value} / 100"),
            _row("Label", reading.classification),
            RULE,
        ]
    )


def render_gas(gas: GasOracle) -> str:
    lines = [
        f"{gas.network} Gas Tracker (Gwei):",
        RULE,
        _row("Low", f"{gas.low:g} gwei"),
        _row("Average", f"{gas.average:g} gwei"),
        _row("High", f"{gas.high:g} gwei"),
    ]
    if gas.base_fee is not None:
        lines.append(_row("Base Fee", f"{gas.base_fee:g} gwei"))
    lines.append(RULE)
    return "\n".join(lines)


def sparkline(values: Sequence[float], width: int = 60) -> str:
    """Down-sample values to at most width buckets and map each to a block glyph."""
    if not values:
        return ""
    step = max(1, -(-len(values) // width))
    buckets: List[float] = [
        sum(values[i : i + step]) / len(values[i : i + step]) for i in range(0, len(values), step)
    ]
    lo, hi = min(buckets), max(buckets)
    span = hi - lo
    if span == 0:
        return SPARK_CHARS[0] * len(buckets)
    top = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[round((v - lo) / span * top)] for v in buckets)


def render_chart(chart: PriceChart, days: int) -> str:
    direction = "up" if chart.prices[-1] >= chart.prices[0] else "down"
    return "\n".join(
        [
            f"{days}-Day Chart for {chart.coin_id} ({direction}):",
            f"Min: {fmt_usd(chart.min_price)} | Max: {fmt_usd(chart.max_price)}",
            "",
            sparkline(chart.prices),
        ]
    )
