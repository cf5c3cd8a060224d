"""
Provider routes: the ordered adapter lists the aggregator walks.

price and info use separate symbol orders (speed vs. richness); address
lookups share one order; search fans out to its own subset.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .providers.base import Capability, ProviderAdapter


def has_capability(provider: ProviderAdapter, capability: Capability) -> bool:
    return capability in provider.capabilities


@dataclass(frozen=True)
class ProviderRoutes:
    symbol_price: Tuple[ProviderAdapter, ...] = ()
    symbol_info: Tuple[ProviderAdapter, ...] = ()
    address: Tuple[ProviderAdapter, ...] = ()
    search: Tuple[ProviderAdapter, ...] = ()

    @classmethod
    def from_providers(cls, providers: Iterable[ProviderAdapter]) -> ProviderRoutes:
        """
        Derive every route from one ordered list using capability tags.
        List order is the priority order on every route.
        """
        ordered = tuple(providers)
        symbol = tuple(p for p in ordered if has_capability(p, Capability.SYMBOL_LOOKUP))
        return cls(
            symbol_price=symbol,
            symbol_info=symbol,
            address=tuple(p for p in ordered if has_capability(p, Capability.ADDRESS_LOOKUP)),
            search=tuple(p for p in ordered if has_capability(p, Capability.SEARCH)),
        )

    def address_chain(self, network: Optional[str]) -> Tuple[ProviderAdapter, ...]:
        """Address providers usable for this call; network-scoped ones need a network."""
        if network:
            return self.address
        return tuple(
            p for p in self.address if not has_capability(p, Capability.NETWORK_REQUIRED)
        )
