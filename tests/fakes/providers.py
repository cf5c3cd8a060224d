"""
Fake provider adapters for tests: deterministic data, always-fail, rendezvous.

No live network; used by the aggregator, routing and CLI tests.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Dict, FrozenSet, List, Optional

from crypto_lookup.providers.base import (
    Capability,
    PriceRecord,
    SearchMatch,
    TokenInfoRecord,
)

# Deterministic timestamp for reproducible tests.
FAKE_OBSERVED_AT = datetime(2026, 1, 1, tzinfo=timezone.utc)

SYMBOL_CAPS = frozenset({Capability.SEARCH, Capability.SYMBOL_LOOKUP})
ADDRESS_CAPS = frozenset({Capability.SEARCH, Capability.ADDRESS_LOOKUP})


def match(symbol: str, source: str, name: Optional[str] = None) -> SearchMatch:
    return SearchMatch(name=name or symbol.title(), symbol=symbol, source=source)


# ---------------------------------------------------------------------------
# Deterministic provider
# ---------------------------------------------------------------------------


class FakeProvider:
    """
    Provider that answers from in-memory tables. No network.

    prices maps upper-cased query -> USD price; anything else is not found.
    matches is returned verbatim by search().
    """

    def __init__(
        self,
        name: str,
        prices: Dict[str, float] | None = None,
        *,
        matches: List[SearchMatch] | None = None,
        capabilities: FrozenSet[Capability] = SYMBOL_CAPS,
    ):
        self._name = name
        self._prices = {k.upper(): v for k, v in (prices or {}).items()}
        self._matches = list(matches or [])
        self._capabilities = capabilities
        self.call_count = 0
        self.calls: List[tuple] = []

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        return self._capabilities

    def search(self, query: str) -> List[SearchMatch]:
        self.call_count += 1
        self.calls.append(("search", query, None))
        return list(self._matches)

    def get_price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        self.call_count += 1
        self.calls.append(("get_price", query, network))
        price = self._prices.get(query.upper())
        if price is None:
            return None
        return PriceRecord(
            symbol=query.upper(),
            price_usd=price,
            source=self._name,
            observed_at=FAKE_OBSERVED_AT,
        )

    def get_token_info(
        self, query: str, network: Optional[str] = None
    ) -> Optional[TokenInfoRecord]:
        self.call_count += 1
        self.calls.append(("get_token_info", query, network))
        price = self._prices.get(query.upper())
        if price is None:
            return None
        return TokenInfoRecord(
            symbol=query.upper(),
            name=f"{query.title()} Token",
            price_usd=price,
            network=network,
            source=self._name,
            observed_at=FAKE_OBSERVED_AT,
        )


# ---------------------------------------------------------------------------
# Always fail (breaks the no-raise contract on purpose)
# ---------------------------------------------------------------------------


class FakeProviderAlwaysFail(FakeProvider):
    """Raises from every operation; the aggregator must absorb it."""

    def search(self, query: str) -> List[SearchMatch]:
        self.call_count += 1
        raise RuntimeError(f"{self._name} is down")

    def get_price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        self.call_count += 1
        raise RuntimeError(f"{self._name} is down")

    def get_token_info(
        self, query: str, network: Optional[str] = None
    ) -> Optional[TokenInfoRecord]:
        self.call_count += 1
        raise RuntimeError(f"{self._name} is down")


# ---------------------------------------------------------------------------
# Rendezvous: search only completes when every party is in flight at once
# ---------------------------------------------------------------------------


class FakeRendezvousProvider(FakeProvider):
    """
    search() waits on a shared barrier before answering. With N parties the
    barrier only opens if N searches run at the same time; run one after
    another, the first one times out and raises BrokenBarrierError.
    """

    def __init__(self, name: str, barrier: threading.Barrier, **kwargs):
        super().__init__(name, **kwargs)
        self._barrier = barrier
        self.thread_name: Optional[str] = None

    def search(self, query: str) -> List[SearchMatch]:
        self.thread_name = threading.current_thread().name
        self._barrier.wait()
        return super().search(query)
