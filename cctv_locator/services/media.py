"""
Video source resolution for alert footage.

Footage pointers moved three times (raw IPFS hash -> pinned gateway URL ->
direct cloud storage URL) and migrated records may still carry several of
them. Strategies are tried in order, newest representation first; the first
one that yields a URL wins. Adding a new source means adding a strategy.
"""
from collections.abc import Callable, Sequence
import re
from typing import NamedTuple
from urllib.parse import urlsplit

from ..schemas.common import MediaReference, Unavailable

DEFAULT_GATEWAY = "https://gateway.pinata.cloud/ipfs/"
SECURE_SCHEMES = ("https",)
TRANSPORT_SCHEMES = ("http", "https")
CONTENT_HASH = re.compile(r"(?:Qm|bafy)\S+")

UNAVAILABLE = Unavailable()


class Strategy(NamedTuple):
    name: str
    resolve: Callable[[MediaReference, str], str | None]


def _is_absolute_url(value: str | None, schemes: Sequence[str]) -> bool:
    if not value or value != value.strip():
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in schemes and bool(parts.netloc)


def _primary(ref: MediaReference, gateway: str) -> str | None:
    return ref.primary_url if _is_absolute_url(ref.primary_url, SECURE_SCHEMES) else None


def _legacy(ref: MediaReference, gateway: str) -> str | None:
    return ref.legacy_url if _is_absolute_url(ref.legacy_url, SECURE_SCHEMES) else None


def _raw_url(ref: MediaReference, gateway: str) -> str | None:
    return ref.raw_reference if _is_absolute_url(ref.raw_reference, TRANSPORT_SCHEMES) else None


def _raw_hash(ref: MediaReference, gateway: str) -> str | None:
    if ref.raw_reference and CONTENT_HASH.fullmatch(ref.raw_reference):
        return gateway_url(ref.raw_reference, gateway)
    return None


def gateway_url(content_hash: str, gateway: str = DEFAULT_GATEWAY) -> str:
    return gateway.rstrip("/") + "/" + content_hash


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    Strategy("primary_url", _primary),
    Strategy("legacy_url", _legacy),
    Strategy("raw_reference_url", _raw_url),
    Strategy("raw_reference_hash", _raw_hash),
)


class MediaSourceResolver:
    def __init__(self, gateway: str = DEFAULT_GATEWAY, strategies: Sequence[Strategy] = DEFAULT_STRATEGIES):
        self.gateway = gateway
        self.strategies = tuple(strategies)

    def resolve_source(self, ref: MediaReference) -> tuple[str, str] | Unavailable:
        """Return (strategy name, url) for the first strategy that matches."""
        for strategy in self.strategies:
            url = strategy.resolve(ref, self.gateway)
            if url:
                return strategy.name, url
        return UNAVAILABLE

    def resolve(self, ref: MediaReference) -> str | Unavailable:
        hit = self.resolve_source(ref)
        if isinstance(hit, Unavailable):
            return hit
        return hit[1]


_default = MediaSourceResolver()


def resolve(ref: MediaReference) -> str | Unavailable:
    return _default.resolve(ref)
