"""
netkit.tier2_transport.files
─────────────────────────────
Whole-file download and multipart/form-data upload.

download_file() reads the entire body into memory with no size cap; bound
the response size yourself before pointing it at untrusted URLs.
"""
from __future__ import annotations

import mimetypes
import os
import time
from collections.abc import Mapping

import httpx

from netkit.tier0_core.errors import FilesystemError, HTTPStatusError
from netkit.tier0_core.http import UPLOAD_TIMEOUT_SECONDS, is_success_status_code
from netkit.tier0_core.logging import get_logger
from netkit.tier2_transport.client import ClientLike, map_httpx_error, send, timeout_or_none, unwrap

log = get_logger(__name__)


def download_file(url: str, timeout: float) -> bytes:
    """
    GET *url* and return the raw body. *timeout* is in seconds; 0 or less disables it.

    The status is checked before the body is read: a non-2xx response
    raises HTTPStatusError and its body is discarded.

    Usage:
        data = download_file("https://example.com/files/document.pdf", 10)
        Path("document.pdf").write_bytes(data)
    """
    started = time.perf_counter()
    try:
        with httpx.Client(timeout=timeout_or_none(timeout)) as client:
            with client.stream("GET", url) as response:
                if not is_success_status_code(response.status_code):
                    raise HTTPStatusError(
                        response.status_code,
                        response.reason_phrase,
                        url=url,
                        method="GET",
                    )
                data = response.read()
    except (httpx.InvalidURL, httpx.TransportError, httpx.DecodingError) as exc:
        raise map_httpx_error(exc, "GET", url) from exc

    log.debug(
        "http.download",
        url=url,
        size=len(data),
        elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return data


def _read_upload(file_path: str) -> bytes:
    try:
        with open(file_path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise FilesystemError(
            user_message=f"cannot open {file_path}: {exc.strerror or exc}",
            path=file_path,
        ) from exc


def upload_file(
    url: str,
    field_name: str,
    file_path: str,
    extra_fields: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
    *,
    client: ClientLike | None = None,
) -> httpx.Response:
    """
    POST *file_path* as multipart/form-data under *field_name*.

    The part's filename is the file's base name; each entry of
    *extra_fields* becomes a text part. The response is returned as-is:
    no JSON decoding and no status check.

    Usage:
        resp = upload_file(
            "https://api.example.com/upload",
            "profile_picture",
            "/path/to/image.jpg",
            {"user_id": "123"},
            {"Authorization": "Bearer token123"},
        )
        if not is_success_status_code(resp.status_code):
            ...
    """
    file_path = os.path.normpath(file_path)
    content = _read_upload(file_path)

    filename = os.path.basename(file_path)
    content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    files = {field_name: (filename, content, content_type)}
    data = {key: str(value) for key, value in (extra_fields or {}).items()}
    request_headers = dict(headers or {})

    if client is None:
        with httpx.Client(timeout=UPLOAD_TIMEOUT_SECONDS) as adhoc:
            return send(adhoc, "POST", url, files=files, data=data, headers=request_headers)
    return send(unwrap(client), "POST", url, files=files, data=data, headers=request_headers)


__sdk_export__ = {
    "exports": ["download_file", "upload_file"],
    "description": "In-memory file download and multipart file upload",
    "tier": "tier2_transport",
    "module": "files",
}
