"""Provider registry, default routes and capability-derived routes."""

from __future__ import annotations

import logging

import pytest

from crypto_lookup.aggregator import Aggregator
from crypto_lookup.core.errors import UnknownProviderError
from crypto_lookup.providers.base import Capability, ProviderAdapter
from crypto_lookup.providers.defaults import (
    DEFAULT_ADDRESS_PRIORITY,
    DEFAULT_INFO_PRIORITY,
    DEFAULT_PRICE_PRIORITY,
    DEFAULT_SEARCH_PROVIDERS,
    create_default_registry,
    create_default_routes,
    load_provider_config,
)
from crypto_lookup.providers.registry import ProviderRegistry
from crypto_lookup.routing import ProviderRoutes
from tests.fakes import ADDRESS_CAPS, SYMBOL_CAPS, FakeProvider

PEPE = "0x6982508145454ce325ddbe47a25d4ec3d2311933"


class _NamedFake(FakeProvider):
    def __init__(self):
        super().__init__("F")


class TestRegistry:
    def test_register_and_get_instance(self):
        reg = ProviderRegistry()
        fake = FakeProvider("A")
        reg.register("A", fake)
        assert "a" in reg
        assert reg.get("a") is fake

    def test_classes_are_instantiated_once(self):
        reg = ProviderRegistry()
        reg.register("fake", _NamedFake)
        assert reg.get("fake") is reg.get("FAKE")

    def test_unknown_provider_raises(self):
        with pytest.raises(UnknownProviderError):
            ProviderRegistry().get("nope")

    def test_unknown_provider_error_is_key_error(self):
        with pytest.raises(KeyError):
            ProviderRegistry().get("nope")

    def test_build_chain_skips_unknown_names(self, caplog):
        reg = ProviderRegistry()
        reg.register("a", FakeProvider("A"))
        reg.register("b", FakeProvider("B"))
        with caplog.at_level(logging.WARNING, logger="crypto_lookup.providers.registry"):
            chain = reg.build_chain(["b", "ghost", "a"])
        assert [p.provider_name for p in chain] == ["B", "A"]
        assert "ghost" in caplog.text


class TestDefaults:
    def test_default_registry_has_all_builtins(self):
        reg = create_default_registry()
        assert set(reg.names) == {
            "binance",
            "coingecko",
            "coinpaprika",
            "coincap",
            "cryptocompare",
            "dexscreener",
            "geckoterminal",
        }
        for name in reg.names:
            assert isinstance(reg.get(name), ProviderAdapter)

    def test_default_routes_follow_priority_lists(self):
        routes = create_default_routes()
        assert [p.provider_name.lower() for p in routes.symbol_price] == DEFAULT_PRICE_PRIORITY
        assert [p.provider_name.lower() for p in routes.symbol_info] == DEFAULT_INFO_PRIORITY
        assert [p.provider_name.lower() for p in routes.address] == DEFAULT_ADDRESS_PRIORITY
        assert [p.provider_name.lower() for p in routes.search] == DEFAULT_SEARCH_PROVIDERS

    def test_routes_share_adapter_instances(self):
        routes = create_default_routes()
        price = {p.provider_name: p for p in routes.symbol_price}
        for p in routes.symbol_info:
            assert price[p.provider_name] is p

    def test_default_routes_respect_capabilities(self):
        routes = create_default_routes()
        assert all(Capability.SYMBOL_LOOKUP in p.capabilities for p in routes.symbol_price)
        assert all(Capability.ADDRESS_LOOKUP in p.capabilities for p in routes.address)
        assert all(Capability.SEARCH in p.capabilities for p in routes.search)

    def test_configured_priorities_drop_incapable_providers(self, caplog):
        reg = ProviderRegistry()
        sym = FakeProvider("Sym", {PEPE: 1.0, "BTC": 1.0}, capabilities=SYMBOL_CAPS)
        dex = FakeProvider("Dex", {PEPE: 2.0, "BTC": 2.0}, capabilities=ADDRESS_CAPS)
        reg.register("sym", sym)
        reg.register("dex", dex)
        with caplog.at_level(logging.WARNING, logger="crypto_lookup.providers.defaults"):
            routes = create_default_routes(
                reg,
                {
                    "price_priority": ["dex"],
                    "info_priority": ["dex", "sym"],
                    "address_priority": ["sym"],
                    "search_providers": ["sym"],
                },
            )
        assert routes.symbol_price == ()
        assert [p.provider_name for p in routes.symbol_info] == ["Sym"]
        assert routes.address == ()
        assert [p.provider_name for p in routes.search] == ["Sym"]
        assert "'Dex'" in caplog.text
        assert "'Sym'" in caplog.text

        agg = Aggregator(routes=routes)
        assert agg.price(PEPE) is None
        assert agg.price("BTC") is None
        assert sym.call_count == dex.call_count == 0

    def test_search_route_needs_search_capability(self, caplog):
        reg = ProviderRegistry()
        reg.register("quiet", FakeProvider("Quiet", capabilities=frozenset({Capability.SYMBOL_LOOKUP})))
        reg.register("a", FakeProvider("A"))
        with caplog.at_level(logging.WARNING, logger="crypto_lookup.providers.defaults"):
            routes = create_default_routes(
                reg,
                {
                    "price_priority": ["quiet"],
                    "info_priority": ["quiet"],
                    "address_priority": [],
                    "search_providers": ["quiet", "a"],
                },
            )
        assert [p.provider_name for p in routes.symbol_price] == ["Quiet"]
        assert [p.provider_name for p in routes.search] == ["A"]
        assert "search" in caplog.text

    def test_config_priority_overrides_default(self, isolated_config, monkeypatch):
        cfg = isolated_config / "config.yaml"
        cfg.write_text("providers:\n  price_priority: [CoinGecko, binance]\n", encoding="utf-8")
        monkeypatch.setenv("CRYPTO_LOOKUP_CONFIG", str(cfg))
        order = load_provider_config()
        assert order["price_priority"] == ["coingecko", "binance"]
        assert order["info_priority"] == DEFAULT_INFO_PRIORITY
        routes = create_default_routes()
        assert [p.provider_name for p in routes.symbol_price] == ["CoinGecko", "Binance"]

    def test_explicit_priorities(self):
        reg = ProviderRegistry()
        reg.register("a", FakeProvider("A"))
        reg.register("d", FakeProvider("D", capabilities=ADDRESS_CAPS))
        routes = create_default_routes(
            reg,
            {
                "price_priority": ["a"],
                "info_priority": ["a"],
                "address_priority": ["d"],
                "search_providers": ["a", "d"],
            },
        )
        assert [p.provider_name for p in routes.address] == ["D"]
        assert [p.provider_name for p in routes.search] == ["A", "D"]


class TestProviderRoutes:
    def test_from_providers_keeps_order_per_capability(self):
        a = FakeProvider("A")
        d = FakeProvider("D", capabilities=ADDRESS_CAPS)
        b = FakeProvider("B", capabilities=frozenset({Capability.SYMBOL_LOOKUP}))
        routes = ProviderRoutes.from_providers([a, d, b])
        assert [p.provider_name for p in routes.symbol_price] == ["A", "B"]
        assert routes.symbol_info == routes.symbol_price
        assert [p.provider_name for p in routes.address] == ["D"]
        assert [p.provider_name for p in routes.search] == ["A", "D"]

    def test_address_chain_drops_network_required_without_network(self):
        d = FakeProvider("D", capabilities=ADDRESS_CAPS)
        g = FakeProvider("G", capabilities=ADDRESS_CAPS | {Capability.NETWORK_REQUIRED})
        routes = ProviderRoutes(address=(d, g))
        assert routes.address_chain(None) == (d,)
        assert routes.address_chain("") == (d,)
        assert routes.address_chain("eth") == (d, g)
