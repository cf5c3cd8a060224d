"""
Default provider registry configuration.

Registers built-in providers and builds routes from config.yaml settings.
To add a new provider, register it here and add it to the priority lists.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .. import config
from ..routing import ProviderRoutes, has_capability
from .base import Capability, ProviderAdapter
from .cex.binance import BinanceProvider
from .dex.dexscreener import DexscreenerProvider
from .dex.geckoterminal import GeckoTerminalProvider
from .indices.coincap import CoinCapProvider
from .indices.coingecko import CoinGeckoProvider
from .indices.coinpaprika import CoinpaprikaProvider
from .indices.cryptocompare import CryptoCompareProvider
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)

# Symbol price lookups: fastest exchange ticker first, full-metadata indices last.
DEFAULT_PRICE_PRIORITY = ["binance", "coincap", "coingecko", "coinpaprika", "cryptocompare"]
# Symbol info lookups: metadata-rich indices first, exchange tickers last.
DEFAULT_INFO_PRIORITY = ["coingecko", "coinpaprika", "coincap", "binance", "cryptocompare"]
# Address lookups (price and info): pair-liquidity scanner, then network-scoped token scanner.
DEFAULT_ADDRESS_PRIORITY = ["dexscreener", "geckoterminal"]
# Providers with a useful public search endpoint, in merge priority order.
DEFAULT_SEARCH_PROVIDERS = ["coingecko", "dexscreener", "coinpaprika", "coincap"]


def create_default_registry() -> ProviderRegistry:
    """Create a registry with all built-in providers."""
    registry = ProviderRegistry()
    registry.register("binance", BinanceProvider)
    registry.register("coingecko", CoinGeckoProvider)
    registry.register("coinpaprika", CoinpaprikaProvider)
    registry.register("coincap", CoinCapProvider)
    registry.register("cryptocompare", CryptoCompareProvider)
    registry.register("dexscreener", DexscreenerProvider)
    registry.register("geckoterminal", GeckoTerminalProvider)
    return registry


def load_provider_config() -> Dict[str, List[str]]:
    """
    Load provider priority lists from config.yaml, falling back to the defaults.

    Expected YAML structure:
        providers:
          price_priority: ["binance", "coingecko"]
          info_priority: ["coingecko", "coinpaprika"]
          address_priority: ["dexscreener", "geckoterminal"]
          search_providers: ["coingecko", "dexscreener"]
    """
    configured = config.provider_priorities()
    return {
        "price_priority": configured["price_priority"] or DEFAULT_PRICE_PRIORITY,
        "info_priority": configured["info_priority"] or DEFAULT_INFO_PRIORITY,
        "address_priority": configured["address_priority"] or DEFAULT_ADDRESS_PRIORITY,
        "search_providers": configured["search_providers"] or DEFAULT_SEARCH_PROVIDERS,
    }


def _capable_chain(
    reg: ProviderRegistry, priority: List[str], capability: Capability
) -> Tuple[ProviderAdapter, ...]:
    """Chain for one route; providers lacking the route's capability are skipped."""
    chain: List[ProviderAdapter] = []
    for provider in reg.build_chain(priority):
        if not has_capability(provider, capability):
            logger.warning(
                "Skipping provider %r: it does not support %s",
                provider.provider_name,
                capability.value,
            )
            continue
        chain.append(provider)
    return tuple(chain)


def create_default_routes(
    registry: Optional[ProviderRegistry] = None,
    priorities: Optional[Dict[str, List[str]]] = None,
) -> ProviderRoutes:
    """Build the aggregator routes from a registry and priority lists."""
    reg = registry or create_default_registry()
    order = priorities or load_provider_config()
    routes = ProviderRoutes(
        symbol_price=_capable_chain(reg, order["price_priority"], Capability.SYMBOL_LOOKUP),
        symbol_info=_capable_chain(reg, order["info_priority"], Capability.SYMBOL_LOOKUP),
        address=_capable_chain(reg, order["address_priority"], Capability.ADDRESS_LOOKUP),
        search=_capable_chain(reg, order["search_providers"], Capability.SEARCH),
    )
    logger.debug(
        "Provider routes: price=%s info=%s address=%s search=%s",
        [p.provider_name for p in routes.symbol_price],
        [p.provider_name for p in routes.symbol_info],
        [p.provider_name for p in routes.address],
        [p.provider_name for p in routes.search],
    )
    return routes
