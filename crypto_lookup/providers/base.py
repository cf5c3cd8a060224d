"""
Provider interfaces and data contracts.

Every provider adapter implements one protocol, ProviderAdapter, with three
operations (search, get_price, get_token_info) and a capability tag set that
tells the aggregator which routes it can serve.

Data is returned via frozen dataclasses for immutability and type safety.
Optional fields are None when the vendor did not report them; None is never
replaced with a placeholder such as 0.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import FrozenSet, List, Optional, Protocol, Tuple, runtime_checkable

from ..core.errors import InvalidRecordError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Capability(enum.Enum):
    """What a provider can answer."""

    SEARCH = "search"
    SYMBOL_LOOKUP = "symbol_lookup"
    ADDRESS_LOOKUP = "address_lookup"
    # Address lookups need a network qualifier (e.g. "eth", "bsc").
    NETWORK_REQUIRED = "network_required"


@dataclass(frozen=True)
class PriceRecord:
    """Immutable USD price observed by one provider."""

    symbol: str
    price_usd: float
    source: str
    observed_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.source:
            raise InvalidRecordError("record source must be non-empty")
        if self.price_usd is None or not math.isfinite(self.price_usd) or self.price_usd < 0:
            raise InvalidRecordError(
                f"{self.source}: price_usd must be finite and >= 0, got {self.price_usd!r}"
            )


@dataclass(frozen=True)
class TokenLinks:
    website: Optional[str] = None
    twitter: Optional[str] = None
    telegram: Optional[str] = None
    discord: Optional[str] = None
    github: Optional[str] = None

    def is_empty(self) -> bool:
        return not any((self.website, self.twitter, self.telegram, self.discord, self.github))


@dataclass(frozen=True)
class DexPairRecord:
    """Snapshot of one DEX pool trading the token."""

    dex_id: Optional[str]
    pair_address: str
    base_symbol: Optional[str]
    quote_symbol: Optional[str]
    price_usd: Optional[float] = None
    volume_h24: Optional[float] = None
    liquidity_usd: Optional[float] = None
    network: Optional[str] = None


@dataclass(frozen=True)
class TokenInfoRecord(PriceRecord):
    """Detailed token info: a PriceRecord plus whatever the vendor reports."""

    name: Optional[str] = None
    address: Optional[str] = None
    network: Optional[str] = None
    description: Optional[str] = None
    market_cap: Optional[float] = None
    market_cap_rank: Optional[int] = None
    fdv: Optional[float] = None
    circulating_supply: Optional[float] = None
    total_supply: Optional[float] = None
    max_supply: Optional[float] = None
    volume_24h: Optional[float] = None
    liquidity_usd: Optional[float] = None
    price_change_24h: Optional[float] = None
    price_change_pct_24h: Optional[float] = None
    price_change_pct_7d: Optional[float] = None
    ath: Optional[float] = None
    ath_date: Optional[datetime] = None
    atl: Optional[float] = None
    atl_date: Optional[datetime] = None
    links: TokenLinks = field(default_factory=TokenLinks)
    pairs: Tuple[DexPairRecord, ...] = ()

    def to_price_record(self) -> PriceRecord:
        """Price view of this record; observed_at is carried over unchanged."""
        return PriceRecord(
            symbol=self.symbol,
            price_usd=self.price_usd,
            source=self.source,
            observed_at=self.observed_at,
        )


@dataclass(frozen=True)
class SearchMatch:
    """One search hit. symbol is upper-cased and is the cross-provider dedup key."""

    name: str
    symbol: str
    source: str
    id: Optional[str] = None
    network: Optional[str] = None


@runtime_checkable
class ProviderAdapter(Protocol):
    """
    Protocol for provider adapters.

    Implementations must not raise for ordinary failures (HTTP errors, empty
    payloads, timeouts, unparseable fields): they return None or [] instead.
    """

    @property
    def provider_name(self) -> str: ...

    @property
    def capabilities(self) -> FrozenSet[Capability]: ...

    def search(self, query: str) -> List[SearchMatch]:
        """Matches in vendor relevance order, capped to a small top-N."""
        ...

    def get_price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        """Current USD price for a symbol, vendor id or address; None if not found."""
        ...

    def get_token_info(
        self, query: str, network: Optional[str] = None
    ) -> Optional[TokenInfoRecord]:
        """Detailed info for a symbol, vendor id or address; None if not found."""
        ...
