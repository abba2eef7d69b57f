"""
netkit.tier1_runtime.urls
──────────────────────────
URL composition and query-string parsing.

build_url() always re-serializes the query with keys in ascending order, so
the same inputs produce byte-identical URLs (stable cache keys, signatures,
test assertions).
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import SplitResult, unquote_plus, urlencode, urlsplit, urlunsplit

from netkit.tier0_core.errors import ParseError

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_BAD_HOST_CHARS = re.compile(r"[ `^{|}\\]")


def _split_url(raw_url: str) -> SplitResult:
    """Parse *raw_url*, raising ParseError for input that is not a URL."""
    if raw_url.startswith(":"):
        raise ParseError(
            user_message="missing protocol scheme",
            detail=f"parse {raw_url!r}: missing protocol scheme",
            url=raw_url,
        )
    if _CONTROL_CHARS.search(raw_url):
        raise ParseError(
            user_message="invalid control character in URL",
            detail=f"parse {raw_url!r}: invalid control character in URL",
            url=raw_url,
        )
    try:
        parts = urlsplit(raw_url)
        parts.port  # validates the port component
    except ValueError as exc:
        raise ParseError(
            user_message="invalid URL",
            detail=f"parse {raw_url!r}: {exc}",
            url=raw_url,
        ) from exc

    host = parts.netloc.rpartition("@")[2]
    bad = _BAD_HOST_CHARS.search(host) or _BAD_ESCAPE.search(host)
    if bad:
        raise ParseError(
            user_message="invalid character in host name",
            detail=f"parse {raw_url!r}: invalid character {host[bad.start()]!r} in host name",
            url=raw_url,
        )
    return parts


def _segment_problem(segment: str) -> str | None:
    if ";" in segment:
        return "invalid semicolon separator in query"
    match = _BAD_ESCAPE.search(segment)
    if match:
        return f"invalid URL escape {segment[match.start():match.start() + 3]!r}"
    return None


def _parse_pairs(query: str, *, strict: bool) -> list[tuple[str, str]]:
    """
    Split *query* into decoded (name, value) pairs in order.

    A segment with a ``;`` or a malformed escape raises ParseError when
    *strict*, and is dropped otherwise.
    """
    pairs: list[tuple[str, str]] = []
    for segment in query.split("&"):
        if not segment:
            continue
        problem = _segment_problem(segment)
        if problem:
            if strict:
                raise ParseError(user_message=problem, detail=f"{problem} in query {query!r}")
            continue
        raw_key, _, raw_value = segment.partition("=")
        pairs.append((unquote_plus(raw_key), unquote_plus(raw_value)))
    return pairs


def build_url(base_url: str, query_params: Mapping[str, str] | None = None) -> str:
    """
    Merge *query_params* into the query string of *base_url*.

    Existing parameters are kept; a key present in *query_params* replaces
    every existing value for that key. Output keys are sorted ascending.
    Existing pairs that cannot be decoded are dropped. A bare trailing ``?``
    on *base_url* is kept even when the merged query is empty.

    Usage:
        build_url("https://api.example.com/users", {"page": "1", "sort": "name"})
        # → "https://api.example.com/users?page=1&sort=name"
    """
    parts = _split_url(base_url)

    merged: dict[str, list[str]] = {}
    for key, value in _parse_pairs(parts.query, strict=False):
        merged.setdefault(key, []).append(value)
    for key, value in (query_params or {}).items():
        merged[key] = [value]

    query = urlencode([(key, value) for key in sorted(merged) for value in merged[key]])
    force_query = not parts.query and "?" in base_url.partition("#")[0]

    url = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
    if query or force_query:
        url += "?" + query
    if parts.fragment:
        url += "#" + parts.fragment
    return url


def parse_query_params(query_string: str) -> dict[str, str]:
    """
    Parse a raw query string (no leading ``?``) into a name → value dict.

    When a name repeats only its first value is kept. Malformed percent
    escapes and ``;`` separators raise ParseError.

    Usage:
        parse_query_params("q=golang&page=1")   # → {"q": "golang", "page": "1"}
        parse_query_params("")                  # → {}
    """
    result: dict[str, str] = {}
    for key, value in _parse_pairs(query_string, strict=True):
        result.setdefault(key, value)
    return result


__sdk_export__ = {
    "exports": ["build_url", "parse_query_params"],
    "description": "Deterministic URL building and first-value-wins query parsing",
    "tier": "tier1_runtime",
    "module": "urls",
}
