"""
Shared plumbing for HTTP-backed provider adapters.

HttpProvider holds the base URL and per-request timeout and performs JSON GETs.
guarded wraps each public adapter operation so that any failure inside it
becomes the operation's not-found value (None or []).
"""
from __future__ import annotations

import functools
import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, FrozenSet, List, Optional, TypeVar

import requests

from .. import config
from .base import Capability, SearchMatch

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def guarded(default_factory: Callable[[], Any] = lambda: None) -> Callable[[F], F]:
    """
    Decorate an adapter method so it never raises.

    Any exception (network, timeout, bad JSON, unexpected payload shape) is
    logged at DEBUG and replaced by default_factory().
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            try:
                return func(self, *args, **kwargs)
            except Exception as exc:
                logger.debug(
                    "%s.%s failed: %s: %s",
                    getattr(self, "provider_name", type(self).__name__),
                    func.__name__,
                    type(exc).__name__,
                    exc,
                )
                return default_factory()

        return wrapper  # type: ignore[return-value]

    return decorator


def safe_get(d: Any, path: str, default: Any = None) -> Any:
    cur: Any = d
    for key in path.split("."):
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def to_float(x: Any) -> Optional[float]:
    if x is None or isinstance(x, bool):
        return None
    try:
        out = float(x)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def to_int(x: Any) -> Optional[int]:
    f = to_float(x)
    return int(f) if f is not None else None


def to_price(x: Any) -> Optional[float]:
    """A usable USD price (finite, >= 0) or None."""
    out = to_float(x)
    if out is None or out < 0:
        return None
    return out


def to_datetime(x: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string or a unix timestamp (seconds) into an aware datetime."""
    if x is None or x == "":
        return None
    if isinstance(x, (int, float)) and not isinstance(x, bool):
        try:
            return datetime.fromtimestamp(x, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        parsed = datetime.fromisoformat(str(x).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def clean_str(x: Any) -> Optional[str]:
    """Non-empty stripped string or None (vendors often send "" for unknown)."""
    if x is None:
        return None
    s = str(x).strip()
    return s or None


def upper_symbol(x: Any) -> Optional[str]:
    s = clean_str(x)
    return s.upper() if s else None


class HttpProvider:
    """Base class for adapters talking JSON over HTTPS to one vendor."""

    provider_name: str = ""
    # Key under endpoints.<key> in config.yaml for base URL overrides.
    config_key: str = ""
    default_base_url: str = ""
    capabilities: FrozenSet[Capability] = frozenset()

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        search_limit: Optional[int] = None,
    ) -> None:
        url = base_url or endpoint_for(self.config_key) or self.default_base_url
        self.base_url = url.rstrip("/")
        self.timeout_s = timeout_s if timeout_s is not None else config.http_timeout_s()
        self.search_limit = search_limit if search_limit is not None else config.search_limit()
        self._headers = {"Accept": "application/json", "User-Agent": config.user_agent()}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        """GET base_url/path; parsed JSON on 2xx, None on any other status."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        resp = requests.get(url, params=params, headers=self._headers, timeout=self.timeout_s)
        if resp.status_code == 429:
            logger.debug("%s rate limited (HTTP 429): %s", self.provider_name, url)
            return None
        if not 200 <= resp.status_code < 300:
            logger.debug("%s HTTP %s: %s", self.provider_name, resp.status_code, url)
            return None
        return resp.json()


def endpoint_for(config_key: str) -> Optional[str]:
    if not config_key:
        return None
    return config.endpoint_override(config_key)


def find_match(matches: List[SearchMatch], query: str) -> Optional[SearchMatch]:
    """First match whose symbol or vendor id equals query, case-insensitively."""
    q = query.strip().lower()
    for m in matches:
        if m.symbol.lower() == q or (m.id is not None and m.id.lower() == q):
            return m
    return None
