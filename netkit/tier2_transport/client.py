"""
netkit.tier2_transport.client
──────────────────────────────
Reusable HTTP client with explicit timeout and connection-pool limits, plus
the shared ``send`` path every helper goes through (error mapping, logging).

Backed by httpx (sync). A client holds no per-call state and may be shared
between threads; concurrent callers only contend on its pool limits.

Usage::

    client = create_http_client(30.0, 100, 10, 100)
    with client:
        data = get_json("https://api.example.com/items", client=client)
"""
from __future__ import annotations

import time
from typing import Any, Union

import httpx

from netkit.tier0_core.config import ClientConfig
from netkit.tier0_core.errors import DecodeError, NetkitError, ParseError, TransportError
from netkit.tier0_core.logging import get_logger

log = get_logger(__name__)


class HttpClient:
    """
    A configured ``httpx.Client``.

    ``config`` keeps the values exactly as passed to the factory. httpx pools
    connections globally rather than per host, so ``max_conns_per_host`` caps
    the pool and ``max_idle_conns_per_host`` is recorded but not enforced.
    """

    def __init__(self, config: ClientConfig) -> None:
        self.config = config
        self.limits = httpx.Limits(
            max_connections=limit_or_none(config.max_conns_per_host),
            max_keepalive_connections=limit_or_none(config.max_idle_conns),
        )
        self._client = httpx.Client(
            timeout=timeout_or_none(config.timeout),
            limits=self.limits,
        )

    @property
    def timeout(self) -> float:
        return self.config.timeout

    @property
    def max_idle_conns(self) -> int:
        return self.config.max_idle_conns

    @property
    def max_idle_conns_per_host(self) -> int:
        return self.config.max_idle_conns_per_host

    @property
    def max_conns_per_host(self) -> int:
        return self.config.max_conns_per_host

    @property
    def httpx_client(self) -> httpx.Client:
        return self._client

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one request; the response body is read before returning."""
        return send(self._client, method, url, **kwargs)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        c = self.config
        return (
            f"HttpClient(timeout={c.timeout}, max_idle_conns={c.max_idle_conns}, "
            f"max_idle_conns_per_host={c.max_idle_conns_per_host}, "
            f"max_conns_per_host={c.max_conns_per_host})"
        )


ClientLike = Union[HttpClient, httpx.Client]


def timeout_or_none(seconds: float) -> float | None:
    return seconds if seconds > 0 else None


def limit_or_none(limit: int) -> int | None:
    return limit if limit > 0 else None


def create_http_client(
    timeout: float,
    max_idle_conns: int,
    max_idle_conns_per_host: int,
    max_conns_per_host: int,
) -> HttpClient:
    """
    Build a reusable client. Inputs are not validated; non-positive values
    mean "no limit" (and "no timeout" for *timeout*).

    Args:
        timeout:                 Seconds allowed for each request.
        max_idle_conns:          Keep-alive connections kept across all hosts.
        max_idle_conns_per_host: Keep-alive connections per host (informational).
        max_conns_per_host:      Upper bound on open connections.
    """
    return HttpClient(
        ClientConfig(
            timeout=timeout,
            max_idle_conns=max_idle_conns,
            max_idle_conns_per_host=max_idle_conns_per_host,
            max_conns_per_host=max_conns_per_host,
        )
    )


def unwrap(client: ClientLike) -> httpx.Client:
    if isinstance(client, HttpClient):
        return client.httpx_client
    return client


def map_httpx_error(exc: Exception, method: str, url: str) -> NetkitError:
    """
    Translate an httpx failure into the netkit taxonomy: a malformed URL is a
    ParseError, an undecodable ``Content-Encoding`` is a DecodeError, anything
    else on the wire is a TransportError.
    """
    if isinstance(exc, httpx.InvalidURL):
        return ParseError(user_message="invalid URL", detail=f"{method} {url!r}: {exc}", url=url)
    log.debug(
        "http.transport_error",
        method=method,
        url=url,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    if isinstance(exc, httpx.DecodingError):
        return DecodeError(
            user_message=f"Response body could not be decoded: {exc}",
            url=url,
            method=method,
        )
    return TransportError(user_message=f"{method} request failed: {exc}", url=url, method=method)


def send(client: httpx.Client, method: str, url: str, **kwargs: Any) -> httpx.Response:
    """
    Build and send one request on *client*, returning a fully read response.
    httpx errors are re-raised through ``map_httpx_error``.
    """
    try:
        request = client.build_request(method, url, **kwargs)
    except httpx.InvalidURL as exc:
        raise map_httpx_error(exc, method, url) from exc

    log.debug("http.request", method=method, url=url)
    started = time.perf_counter()
    try:
        response = client.send(request)
    except (httpx.TransportError, httpx.DecodingError) as exc:
        raise map_httpx_error(exc, method, url) from exc

    log.debug(
        "http.response",
        method=method,
        url=url,
        status=response.status_code,
        elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response


__sdk_export__ = {
    "exports": ["HttpClient", "create_http_client"],
    "description": "Reusable httpx client factory with timeout and pool limits",
    "tier": "tier2_transport",
    "module": "client",
}
