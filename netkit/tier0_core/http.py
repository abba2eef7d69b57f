"""
netkit.tier0_core.http
───────────────────────
HTTP primitives shared by every helper: status code constants, success
classification, default JSON headers and the fixed per-call timeouts.
"""
from __future__ import annotations

from types import MappingProxyType


# ── Status code constants ──────────────────────────────────────────────────

class HTTP:
    """Standard HTTP status codes."""

    # 2xx
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204

    # 3xx
    MOVED_PERMANENTLY = 301
    FOUND = 302
    NOT_MODIFIED = 304

    # 4xx
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429

    # 5xx
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504


# ── Request defaults ───────────────────────────────────────────────────────

JSON_TIMEOUT_SECONDS = 10.0
UPLOAD_TIMEOUT_SECONDS = 30.0

DEFAULT_JSON_HEADERS = MappingProxyType({
    "Content-Type": "application/json",
    "Accept": "application/json",
})


# ── Classification ─────────────────────────────────────────────────────────

def is_success_status_code(status_code: int) -> bool:
    """True for 2xx codes, i.e. 200 <= status_code < 300."""
    return 200 <= status_code < 300


__sdk_export__ = {
    "exports": [
        "HTTP", "is_success_status_code", "DEFAULT_JSON_HEADERS",
        "JSON_TIMEOUT_SECONDS", "UPLOAD_TIMEOUT_SECONDS",
    ],
    "description": "Status codes, success classification and request defaults",
    "tier": "tier0_core",
    "module": "http",
}
