"""
Aggregation engine: one normalized answer from many providers.

price() and info() walk an ordered provider chain and stop at the first
provider that returns a record. search() queries every search provider
concurrently, waits for all of them, then merges and de-duplicates by symbol.
No operation raises for provider failures: the caller gets None or [].
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, List, Optional, Sequence

from . import config
from .classifier import QueryKind, classify
from .providers.base import PriceRecord, ProviderAdapter, SearchMatch, TokenInfoRecord
from .providers.defaults import create_default_routes
from .routing import ProviderRoutes

logger = logging.getLogger(__name__)


def dedupe_by_symbol(matches: Iterable[SearchMatch]) -> List[SearchMatch]:
    """Keep the first match for each symbol, preserving order."""
    seen = set()
    out: List[SearchMatch] = []
    for m in matches:
        if m.symbol in seen:
            continue
        seen.add(m.symbol)
        out.append(m)
    return out


class Aggregator:
    """
    Unified query layer over an ordered set of provider adapters.

    With no arguments the built-in routes are used (see
    crypto_lookup.providers.defaults, overridable from config.yaml). Passing
    providers replaces them: every route is derived from that single list
    by capability, in list order. Passing routes sets each route explicitly.
    """

    def __init__(
        self,
        providers: Optional[Sequence[ProviderAdapter]] = None,
        *,
        routes: Optional[ProviderRoutes] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        if routes is not None and providers is not None:
            raise ValueError("pass either providers or routes, not both")
        if routes is None:
            routes = (
                ProviderRoutes.from_providers(providers)
                if providers is not None
                else create_default_routes()
            )
        self.routes = routes
        self._max_workers = max_workers or config.search_max_workers()

    def price(self, query: str, network: Optional[str] = None) -> Optional[PriceRecord]:
        """Current USD price for a symbol, vendor id or contract address."""
        if classify(query) is QueryKind.ADDRESS:
            chain = self.routes.address_chain(network)
        else:
            chain = self.routes.symbol_price
        return self._first_found("get_price", chain, query, network)

    def info(self, query: str, network: Optional[str] = None) -> Optional[TokenInfoRecord]:
        """Detailed token info for a symbol, vendor id or contract address."""
        if classify(query) is QueryKind.ADDRESS:
            chain = self.routes.address_chain(network)
        else:
            chain = self.routes.symbol_info
        return self._first_found("get_token_info", chain, query, network)

    def search(self, query: str) -> List[SearchMatch]:
        """Merged, symbol-deduplicated matches from every search provider."""
        providers = list(self.routes.search)
        if not providers:
            return []
        workers = min(self._max_workers, len(providers))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="search") as pool:
            futures = [pool.submit(p.search, query) for p in providers]
            # Settle all: a failing provider never cancels the others.
            wait(futures)

        combined: List[SearchMatch] = []
        for provider, future in zip(providers, futures):
            exc = future.exception()
            if exc is not None:
                logger.debug(
                    "%s: search(%r) raised %s: %s",
                    provider.provider_name, query, type(exc).__name__, exc,
                )
                continue
            matches = future.result()
            if matches:
                combined.extend(matches)
        return dedupe_by_symbol(combined)

    def _first_found(
        self,
        operation: str,
        chain: Sequence[ProviderAdapter],
        query: str,
        network: Optional[str],
    ) -> Optional[PriceRecord]:
        for provider in chain:
            name = provider.provider_name
            try:
                result = getattr(provider, operation)(query, network)
            except Exception as exc:
                logger.debug(
                    "%s: %s(%r) raised %s: %s",
                    name, operation, query, type(exc).__name__, exc,
                )
                continue
            if result is not None:
                return result
            logger.debug("%s: %s(%r) not found", name, operation, query)

        logger.info(
            "No provider answered %s(%r) (tried: %s)",
            operation, query, ", ".join(p.provider_name for p in chain) or "none",
        )
        return None
