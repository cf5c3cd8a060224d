"""
Provider registry: central catalog of available providers.

Providers register under a short lower-case name. Priority lists (from code
defaults or config.yaml) are resolved against the registry to produce the
ordered adapter lists the aggregator walks.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Type, Union

from ..core.errors import UnknownProviderError
from .base import ProviderAdapter

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Registry mapping provider names to classes/instances.

    Usage:
        registry = ProviderRegistry()
        registry.register("binance", BinanceProvider)
        registry.register("coingecko", CoinGeckoProvider)

        chain = registry.build_chain(["binance", "coingecko"])

    Classes are instantiated lazily and once, so the same adapter instance is
    shared by every chain that names it.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, Any] = {}
        self._instances: Dict[str, ProviderAdapter] = {}

    def register(
        self,
        name: str,
        factory: Union[Type[ProviderAdapter], ProviderAdapter],
    ) -> None:
        """Register a provider class or ready-made instance by name."""
        key = name.lower()
        self._factories[key] = factory
        self._instances.pop(key, None)
        logger.debug("Registered provider: %s", key)

    def get(self, name: str) -> ProviderAdapter:
        """Get or instantiate a provider by name."""
        key = name.lower()
        if key not in self._instances:
            factory = self._factories.get(key)
            if factory is None:
                raise UnknownProviderError(
                    f"Unknown provider '{name}'. Available: {list(self._factories)}"
                )
            if isinstance(factory, type):
                self._instances[key] = factory()
            else:
                self._instances[key] = factory
        return self._instances[key]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._factories

    @property
    def names(self) -> List[str]:
        return list(self._factories)

    def build_chain(self, priority: List[str]) -> List[ProviderAdapter]:
        """Ordered providers for a priority list; unknown names are skipped."""
        chain: List[ProviderAdapter] = []
        for name in priority:
            if name not in self:
                logger.warning("Skipping unknown provider %r in priority list", name)
                continue
            chain.append(self.get(name))
        return chain
