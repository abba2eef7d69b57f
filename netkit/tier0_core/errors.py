"""
netkit.tier0_core.errors
─────────────────────────
Error taxonomy for every helper in the package. Each failure mode of an
outbound call maps to exactly one class, so callers can branch on type
instead of parsing messages.

Nothing here is retried, logged or swallowed: errors are raised to the
immediate caller with the underlying exception chained as ``__cause__``.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class NetkitError(Exception):
    """
    Base class for all netkit errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - user_message: short human-readable summary
    - detail: internal context (defaults to user_message)
    - metadata: structured extras (url, path, ...)
    """

    code: str = "netkit_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "An unexpected error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.user_message = user_message
        self.detail = detail or user_message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.user_message,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class ParseError(NetkitError):
    """A URL or query string could not be parsed."""
    code = "parse_error"


class TransportError(NetkitError):
    """Connection, DNS or timeout failure before a response was received."""
    code = "transport_error"


class HTTPStatusError(NetkitError):
    """
    The server answered with a status outside [200, 300).

    ``body`` holds the decoded response body when the helper decodes JSON
    (``None`` for raw downloads).
    """
    code = "http_status_error"

    def __init__(
        self,
        status_code: int,
        status_text: str = "",
        body: Any = None,
        **metadata: Any,
    ) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(
            user_message=f"error response from server: {status_code} {status_text}".rstrip(),
            status_code=status_code,
            **metadata,
        )

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["error"]["status_code"] = self.status_code
        return d


class DecodeError(NetkitError):
    """Response body is not valid JSON, or does not match the requested model."""
    code = "decode_error"


class EncodeError(NetkitError):
    """Request body could not be serialized to JSON."""
    code = "encode_error"


class FilesystemError(NetkitError):
    """A local file needed for the request could not be opened or read."""
    code = "filesystem_error"

    def __init__(
        self,
        code: str | None = None,
        user_message: str = "Local file could not be read.",
        path: str | None = None,
        **metadata: Any,
    ) -> None:
        self.path = path
        super().__init__(code, user_message, path=path, **metadata)


__sdk_export__ = {
    "exports": [
        "NetkitError", "ParseError", "TransportError", "HTTPStatusError",
        "DecodeError", "EncodeError", "FilesystemError",
    ],
    "description": "Error taxonomy for URL parsing, transport, status and codec failures",
    "tier": "tier0_core",
    "module": "errors",
}
