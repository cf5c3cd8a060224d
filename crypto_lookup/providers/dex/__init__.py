"""DEX (on-chain pair scanner) providers."""
from __future__ import annotations

from .dexscreener import DexscreenerProvider
from .geckoterminal import GeckoTerminalProvider

__all__ = ["DexscreenerProvider", "GeckoTerminalProvider"]
