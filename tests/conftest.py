"""
Shared pytest fixtures.

Provides sample Cycly payloads, settings and a FastAPI test client whose
settings dependency is overridden per test.
"""
import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import Mock

import pytest
import requests
from fastapi.testclient import TestClient

from export_server import settings as app_settings
from export_server.app import app
from export_server.settings import Settings, get_settings


def _vehicle(vid, vtype="Neufahrzeug", state="Fertig montiert", **extra):
    v = {
        "id": vid,
        "type": vtype,
        "state": state,
        "ean": f"400{vid}",
        "model": f"Model {vid}",
        "manufacturer": "Acme",
        "mpn": f"M{vid}",
        "sku": f"S{vid}",
        "color": "red",
        "frameSizeFormated": "L",
        "frameSize": 56,
        "price": 999,
        "discountPrice": None,
    }
    v.update(extra)
    return v


@pytest.fixture
def make_vehicle():
    return _vehicle


@pytest.fixture
def keyed_payload():
    """Cycly style payload keyed by vehicle ID: one new bike, one used bike."""
    return {
        "251": {
            "id": 251,
            "type": "Neufahrzeug",
            "state": "Fertig montiert",
            "ean": "111",
            "model": "X",
            "manufacturer": "Acme",
            "mpn": "M1",
            "sku": "S1",
            "color": "red",
            "frameSizeFormated": "L",
            "frameSize": 56,
            "price": 999,
            "discountPrice": None,
        },
        "252": _vehicle(252, vtype="Gebraucht"),
    }


def json_response(payload, status_code=200, reason="OK", body=None):
    """Streamed response whose raw body is the JSON text of ``payload``."""
    if body is None:
        body = json.dumps(payload).encode("utf-8")
    resp = Mock(spec=requests.Response)
    resp.status_code = status_code
    resp.reason = reason
    resp.ok = status_code < 400
    resp.raw = Mock()
    resp.raw.read1.side_effect = [body, b""]
    return resp


@pytest.fixture
def settings():
    return Settings(cycly_token="test-token", cycly_base_url="https://cycly.test/rest/extension")


@pytest.fixture
def client(settings, monkeypatch):
    """FastAPI test client using the ``settings`` fixture."""
    monkeypatch.setattr(app_settings, "SETTINGS", settings)
    app.dependency_overrides[get_settings] = lambda: settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


class _CyclyHandler(BaseHTTPRequestHandler):
    body = b"[]"
    delay = 0.0  # seconds between bytes; 0 sends the body at once

    def do_GET(self):
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(self.body)))
        self.end_headers()
        try:
            if not self.delay:
                self.wfile.write(self.body)
                return
            for i in range(len(self.body)):
                self.wfile.write(self.body[i:i + 1])
                self.wfile.flush()
                time.sleep(self.delay)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, format, *args):
        pass


@pytest.fixture
def cycly_server():
    """Start a local Cycly stand-in; returns a factory taking (body, delay)."""
    servers = []

    def start(body, delay=0.0):
        handler = type("Handler", (_CyclyHandler,), {"body": body, "delay": delay})
        server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
        server.daemon_threads = True
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return f"http://127.0.0.1:{server.server_address[1]}/rest/extension"

    yield start

    for server in servers:
        server.shutdown()
        server.server_close()
