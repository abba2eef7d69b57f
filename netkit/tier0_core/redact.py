"""
netkit.tier0_core.redact
─────────────────────────
Secret redaction for log output. Request headers and URLs routinely carry
credentials (Authorization headers, ``?api_key=`` query values); everything
the transport layer logs passes through here first.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# ── Default redacted key names (case-insensitive) ─────────────────────────

_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "api_key", "apikey",
    "access_token", "refresh_token", "private_key", "client_secret",
    "authorization", "proxy-authorization", "x-api-key", "cookie",
    "set-cookie", "session", "signature", "sig",
})

# ── Regex patterns for inline scrubbing ───────────────────────────────────

_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # Bearer tokens
    (re.compile(r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", re.I), "Bearer [REDACTED]"),
    # Basic auth
    (re.compile(r"Basic\s+[A-Za-z0-9+/=]+", re.I), "Basic [REDACTED]"),
]

REDACTED = "[REDACTED]"


# ── Public API ─────────────────────────────────────────────────────────────

def redact_headers(
    headers: Mapping[str, str] | None,
    sensitive_keys: frozenset[str] | None = None,
) -> dict[str, str]:
    """Return a copy of *headers* with sensitive values replaced by REDACTED."""
    keys = sensitive_keys if sensitive_keys is not None else _SENSITIVE_KEYS
    if not headers:
        return {}
    return {
        k: (REDACTED if k.lower() in keys else v)
        for k, v in headers.items()
    }


def redact_url(url: str) -> str:
    """
    Mask userinfo and sensitive query values in *url*.

    Unparseable input is returned unchanged; this is a log helper and must
    never raise.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"{REDACTED}@{netloc.rsplit('@', 1)[1]}"
    query = parts.query
    if query:
        pairs = parse_qsl(query, keep_blank_values=True)
        if any(k.lower() in _SENSITIVE_KEYS for k, _ in pairs):
            query = urlencode([
                (k, REDACTED if k.lower() in _SENSITIVE_KEYS else v)
                for k, v in pairs
            ])
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


def scrub_string(text: str) -> str:
    """Apply regex-based scrubbing to an arbitrary string."""
    for pattern, replacement in _PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def structlog_redact_processor(
    logger: Any,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    structlog processor: masks sensitive keys, header maps and URLs in the
    event dict. Runs before any renderer.
    """
    for key in list(event_dict.keys()):
        value = event_dict[key]
        if key.lower() in _SENSITIVE_KEYS:
            event_dict[key] = REDACTED
        elif key == "headers" and isinstance(value, Mapping):
            event_dict[key] = redact_headers(value)
        elif key == "url" and isinstance(value, str):
            event_dict[key] = redact_url(value)
        elif key == "error" and isinstance(value, str):
            event_dict[key] = scrub_string(value)
    return event_dict


__all__ = [
    "REDACTED",
    "redact_headers",
    "redact_url",
    "scrub_string",
    "structlog_redact_processor",
]
