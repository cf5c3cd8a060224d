"""
Top-level CLI dispatcher: crypto-lookup <command> [args...].

Exit codes: 0 result printed, 1 nothing found, 2 usage or configuration error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional

from .._version import __version__
from ..aggregator import Aggregator
from ..core.errors import CryptoLookupError
from ..reports import MarketReports
from . import render

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_USAGE = 2

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _emit(text: Optional[str], not_found: str) -> int:
    if text is None:
        print(not_found, file=sys.stderr)
        return EXIT_NOT_FOUND
    print(text)
    return EXIT_OK


def _cmd_price(args: argparse.Namespace) -> int:
    record = Aggregator().price(args.query, args.network)
    return _emit(
        render.render_price(record) if record else None,
        f"Could not find price for {args.query!r}.",
    )


def _cmd_info(args: argparse.Namespace) -> int:
    info = Aggregator().info(args.query, args.network)
    return _emit(
        render.render_info(info) if info else None,
        f"Could not find token info for {args.query!r}.",
    )


def _cmd_search(args: argparse.Namespace) -> int:
    matches = Aggregator().search(args.query)
    if args.limit is not None:
        matches = matches[: args.limit]
    return _emit(
        render.render_search(matches) if matches else None,
        f"No results found for {args.query!r}.",
    )


def _cmd_market(args: argparse.Namespace) -> int:
    snap = MarketReports().market()
    return _emit(render.render_market(snap) if snap else None, "Could not fetch market data.")


def _cmd_trending(args: argparse.Namespace) -> int:
    coins = MarketReports().trending()
    return _emit(
        render.render_coins("Trending Coins (CoinGecko):", coins) if coins else None,
        "Could not fetch trending coins.",
    )


def _cmd_top(args: argparse.Namespace) -> int:
    coins = MarketReports().top(args.limit)
    return _emit(
        render.render_coins(f"Top {len(coins)} by Market Cap:", coins) if coins else None,
        "Could not fetch top coins.",
    )


def _cmd_sentiment(args: argparse.Namespace) -> int:
    reading = MarketReports().sentiment()
    return _emit(
        render.render_sentiment(reading) if reading else None,
        "Could not fetch sentiment data.",
    )


def _cmd_gas(args: argparse.Namespace) -> int:
    gas = MarketReports().gas()
    return _emit(render.render_gas(gas) if gas else None, "Could not fetch gas prices.")


def _cmd_chart(args: argparse.Namespace) -> int:
    chart = MarketReports().chart(args.query, args.days)
    return _emit(
        render.render_chart(chart, args.days) if chart else None,
        f"Could not fetch chart data for {args.query!r}.",
    )


_COMMANDS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "price": _cmd_price,
    "info": _cmd_info,
    "search": _cmd_search,
    "market": _cmd_market,
    "trending": _cmd_trending,
    "top": _cmd_top,
    "sentiment": _cmd_sentiment,
    "gas": _cmd_gas,
    "chart": _cmd_chart,
}


def _positive_int(value: str) -> int:
    try:
        out = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if out <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return out


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crypto-lookup",
        description="Cryptocurrency price, token info and search across public market-data APIs",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    subparsers = parser.add_subparsers(dest="command", help="command")

    for name, help_text in (
        ("price", "Current USD price for a symbol, id or contract address"),
        ("info", "Detailed token info for a symbol, id or contract address"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("query", help="Symbol (btc), vendor id (bitcoin) or contract address")
        p.add_argument("--network", default=None, help="Chain for address lookups (eth, bsc, ...)")

    p = subparsers.add_parser("search", help="Search all providers and merge by symbol")
    p.add_argument("query")
    p.add_argument("--limit", type=_positive_int, default=None, help="Max results to print")

    subparsers.add_parser("market", help="Global market overview")
    subparsers.add_parser("trending", help="Trending coins")
    p = subparsers.add_parser("top", help="Top coins by market cap")
    p.add_argument("--limit", type=_positive_int, default=50)
    subparsers.add_parser("sentiment", help="Fear & Greed index")
    subparsers.add_parser("gas", help="Ethereum gas oracle")
    p = subparsers.add_parser("chart", help="Text price chart")
    p.add_argument("query")
    p.add_argument("--days", type=_positive_int, default=7)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    query = getattr(args, "query", None)
    if query is not None and not query.strip():
        print("Query must not be empty.", file=sys.stderr)
        return EXIT_USAGE

    try:
        return _COMMANDS[args.command](args)
    except CryptoLookupError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
