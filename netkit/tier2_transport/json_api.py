"""
netkit.tier2_transport.json_api
────────────────────────────────
JSON verb helpers: GET / POST / PUT / DELETE with JSON bodies.

Every helper follows the same sequence:

1. send the request with ``Content-Type`` and ``Accept`` set to
   application/json (caller headers win on collision);
2. decode the response body as JSON, whatever the status;
3. raise the decode error if decoding failed, otherwise raise
   HTTPStatusError for a non-2xx status, otherwise return the value.

So a 4xx with a JSON error document raises HTTPStatusError whose ``body``
holds the decoded document, while a 4xx with a non-JSON body raises
DecodeError.

Without ``client=`` each call uses its own short-lived client with a 10 s
timeout. A caller-supplied client is used as-is and left open.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from netkit.tier0_core.errors import HTTPStatusError
from netkit.tier0_core.http import (
    DEFAULT_JSON_HEADERS,
    JSON_TIMEOUT_SECONDS,
    is_success_status_code,
)
from netkit.tier1_runtime.serialize import decode_json, encode_json
from netkit.tier2_transport.client import ClientLike, send, unwrap

_NO_BODY = object()


def _json_headers(headers: Mapping[str, str] | None) -> httpx.Headers:
    merged = httpx.Headers(DEFAULT_JSON_HEADERS)
    for key, value in (headers or {}).items():
        merged[key] = value
    return merged


def _do_json(
    method: str,
    url: str,
    body: Any,
    headers: Mapping[str, str] | None,
    model: Any,
    client: ClientLike | None,
) -> Any:
    content = None if body is _NO_BODY else encode_json(body)
    request_headers = _json_headers(headers)

    if client is None:
        with httpx.Client(timeout=JSON_TIMEOUT_SECONDS) as adhoc:
            response = send(adhoc, method, url, content=content, headers=request_headers)
    else:
        response = send(unwrap(client), method, url, content=content, headers=request_headers)

    # DecodeError propagates from here, ahead of any status error.
    try:
        decoded = decode_json(response.content, model)
    finally:
        response.close()

    if not is_success_status_code(response.status_code):
        raise HTTPStatusError(
            response.status_code,
            response.reason_phrase,
            body=decoded,
            url=url,
            method=method,
        )
    return decoded


def get_json(
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    model: Any = None,
    client: ClientLike | None = None,
) -> Any:
    """
    GET *url* and return the decoded JSON body.

    Usage:
        user = get_json("https://api.example.com/users/1",
                        headers={"Authorization": "Bearer token123"})
        user = get_json(url, model=User)
    """
    return _do_json("GET", url, _NO_BODY, headers, model, client)


def post_json(
    url: str,
    body: Any,
    *,
    headers: Mapping[str, str] | None = None,
    model: Any = None,
    client: ClientLike | None = None,
) -> Any:
    """POST *body* as JSON to *url* and return the decoded JSON response."""
    return _do_json("POST", url, body, headers, model, client)


def put_json(
    url: str,
    body: Any,
    *,
    headers: Mapping[str, str] | None = None,
    model: Any = None,
    client: ClientLike | None = None,
) -> Any:
    """PUT *body* as JSON to *url*, typically to replace an existing resource."""
    return _do_json("PUT", url, body, headers, model, client)


def delete_json(
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    model: Any = None,
    client: ClientLike | None = None,
) -> Any:
    """DELETE *url*. Returns the decoded body; an empty body (e.g. 204) raises DecodeError."""
    return _do_json("DELETE", url, _NO_BODY, headers, model, client)


__sdk_export__ = {
    "exports": ["get_json", "post_json", "put_json", "delete_json"],
    "description": "JSON GET/POST/PUT/DELETE helpers with decode-before-status error precedence",
    "tier": "tier2_transport",
    "module": "json_api",
}
