"""
netkit test configuration.

Network tests talk to a throwaway HTTP server bound to 127.0.0.1 on a random
port; nothing leaves the machine.
"""
from __future__ import annotations

import os
import socket
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable

import pytest

# ── Environment ────────────────────────────────────────────────────────────
# These must be set before any netkit modules are imported.

os.environ.setdefault("NETKIT_LOG_LEVEL", "DEBUG")
os.environ.setdefault("NETKIT_LOG_FORMAT", "json")

# Keep loopback traffic away from any proxy configured on the host.
for _var in ("NO_PROXY", "no_proxy"):
    os.environ[_var] = ",".join(filter(None, ["127.0.0.1,localhost", os.environ.get(_var)]))


# ── Local server ───────────────────────────────────────────────────────────

@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: dict[str, str]
    body: bytes


@dataclass
class Reply:
    status: int = 200
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


Responder = Callable[[RecordedRequest], Reply]


class _Handler(BaseHTTPRequestHandler):
    def _dispatch(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        recorded = RecordedRequest(
            method=self.command,
            path=self.path,
            headers={k.lower(): v for k, v in self.headers.items()},
            body=body,
        )
        self.server.requests.append(recorded)
        reply = self.server.responder(recorded)

        self.send_response(reply.status)
        for key, value in reply.headers.items():
            self.send_header(key, value)
        self.send_header("Content-Length", str(len(reply.body)))
        self.end_headers()
        self.wfile.write(reply.body)

    do_GET = do_POST = do_PUT = do_DELETE = _dispatch

    def log_message(self, format: str, *args) -> None:
        pass


@pytest.fixture
def local_server():
    """
    Factory fixture: ``server = local_server(responder)`` starts a server whose
    replies come from ``responder(request) -> Reply``. ``server.url`` is its
    base URL and ``server.requests`` records everything it received.
    """
    servers: list[ThreadingHTTPServer] = []

    def start(responder: Responder) -> ThreadingHTTPServer:
        server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
        server.responder = responder
        server.requests = []
        host, port = server.server_address[:2]
        server.url = f"http://{host}:{port}"
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def json_reply():
    """Build a Reply carrying a JSON document."""
    def build(status: int, body: bytes) -> Reply:
        return Reply(status=status, body=body, headers={"Content-Type": "application/json"})
    return build


@pytest.fixture
def unused_url() -> str:
    """A loopback URL on a port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Each test sees NetkitConfig rebuilt from the current environment."""
    from netkit.tier0_core.config import _reset_config

    _reset_config()
    yield
    _reset_config()
