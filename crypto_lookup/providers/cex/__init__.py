"""CEX (centralized exchange) ticker providers."""
from __future__ import annotations

from .binance import BinanceProvider

__all__ = ["BinanceProvider"]
