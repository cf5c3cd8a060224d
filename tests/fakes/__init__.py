"""Fake provider adapters for aggregator and CLI tests (no live network)."""

from .providers import (
    ADDRESS_CAPS,
    FAKE_OBSERVED_AT,
    SYMBOL_CAPS,
    FakeProvider,
    FakeProviderAlwaysFail,
    FakeRendezvousProvider,
    match,
)

__all__ = [
    "ADDRESS_CAPS",
    "FAKE_OBSERVED_AT",
    "SYMBOL_CAPS",
    "FakeProvider",
    "FakeProviderAlwaysFail",
    "FakeRendezvousProvider",
    "match",
]
