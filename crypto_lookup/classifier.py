"""
Query classification: on-chain address vs. symbol / vendor id.

Heuristic only, no checksum or format validation. Any query longer than 30
characters counts as an address (covers base58 chains), so an unusually long
symbol or id is routed to the address providers.
"""
from __future__ import annotations

import enum

EVM_ADDRESS_PREFIX = "0x"
EVM_ADDRESS_LENGTH = 42
LONG_ADDRESS_MIN_LENGTH = 31


class QueryKind(enum.Enum):
    ADDRESS = "address"
    SYMBOL = "symbol"


def is_address(query: str) -> bool:
    if query.startswith(EVM_ADDRESS_PREFIX) and len(query) == EVM_ADDRESS_LENGTH:
        return True
    return len(query) >= LONG_ADDRESS_MIN_LENGTH


def classify(query: str) -> QueryKind:
    return QueryKind.ADDRESS if is_address(query) else QueryKind.SYMBOL
