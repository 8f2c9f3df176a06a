"""Pytest shared fixtures for the FusionAuth client tests."""
import json
import pathlib
import sys
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Optional
from unittest.mock import MagicMock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from fusion_auth import create

BASE_URL = "http://localhost:9011"
API_KEY = "sQ9wwELaI0whHQqyQUxAJmZvVzZqUL-hpfmAmPgbIu8"
TENANT_ID = "6b40f9d6-cfd8-4312-bff8-b082ad45e93c"
APPLICATION_ID = "861f5558-34a8-43e4-ab50-317bdcd47671"
USER_ID = "84846873-89d2-44f8-91e9-dac80f420cb2"


def make_response(
    status_code: int = 200,
    body: Any = None,
    url: str = BASE_URL,
    headers: Optional[dict] = None,
) -> requests.Response:
    """Build a real ``requests.Response``.

    ``body`` may be bytes/str (sent verbatim), None (empty body) or any
    other value (JSON-encoded).
    """
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    resp.encoding = "utf-8"
    if body is None:
        resp._content = b""
    elif isinstance(body, bytes):
        resp._content = body
    elif isinstance(body, str):
        resp._content = body.encode("utf-8")
    else:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    resp.headers.update(headers or {})
    return resp


def sent_request(session: MagicMock) -> dict:
    """Return the method, url, headers and body of the last dispatched request."""
    args, kwargs = session.request.call_args
    method, url = args
    body = kwargs.get("data")
    return {
        "method": method,
        "url": url,
        "headers": kwargs["headers"],
        "body": json.loads(body) if body is not None else None,
        "timeout": kwargs.get("timeout"),
    }


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "local_server: test talks to an in-process HTTP server on 127.0.0.1"
    )


@pytest.fixture(autouse=True)
def _block_network(request, monkeypatch):
    """Prevent unit tests from reaching a real FusionAuth instance."""
    if request.node.get_closest_marker("local_server"):
        return

    def _no_send(self, prepared, **kwargs):
        raise RuntimeError(f"Unexpected HTTP {prepared.method} in unit test: {prepared.url}")

    monkeypatch.setattr(requests.Session, "send", _no_send)


# ─────────────────────────────────────────────────────────────────────────────
# Client Fixtures
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def session():
    """Transport stub answering every request with an empty 200."""
    stub = MagicMock(spec=requests.Session)
    stub.request.return_value = make_response(200)
    return stub


@pytest.fixture()
def client(session):
    """Client wired to the stub session."""
    return create(BASE_URL, API_KEY, TENANT_ID, session=session)


@pytest.fixture()
def app_client(session):
    """Client carrying a default application id."""
    return create(BASE_URL, API_KEY, TENANT_ID, application_id=APPLICATION_ID, session=session)


# ─────────────────────────────────────────────────────────────────────────────
# Local FusionAuth Stand-in
# ─────────────────────────────────────────────────────────────────────────────
class _FusionAuthHandler(BaseHTTPRequestHandler):
    """Answers logins with token cookies, everything else with ``{}``."""

    def _reply(self):
        length = int(self.headers.get("Content-Length") or 0)
        if length:
            self.rfile.read(length)
        self.server.seen.append({"method": self.command, "path": self.path, "headers": dict(self.headers)})

        body = b"{}"
        self.send_response(200)
        if self.command == "POST" and self.path.startswith("/api/login"):
            body = json.dumps({"token": "user-a-access", "refreshToken": "user-a-refresh"}).encode()
            self.send_header("Set-Cookie", "access_token=user-a-access; Path=/")
            self.send_header("Set-Cookie", "refresh_token=user-a-refresh; Path=/")
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    do_GET = do_POST = do_PUT = do_DELETE = _reply

    def log_message(self, format, *args):
        pass


@pytest.fixture()
def local_server():
    """Serve the FusionAuth stand-in on an ephemeral port.

    Yields the server; its ``seen`` list records every request received.
    """
    server = ThreadingHTTPServer(("127.0.0.1", 0), _FusionAuthHandler)
    server.seen = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    server.url = f"http://127.0.0.1:{server.server_address[1]}"
    yield server
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)
