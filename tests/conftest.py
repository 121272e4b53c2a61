"""Pytest fixtures."""

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


class StubServer(ThreadingHTTPServer):
    daemon_threads = True
    request_queue_size = 128


class StubHandler(BaseHTTPRequestHandler):
    """Answers every request with whatever the server's responder returns."""

    def _reply(self, status: int, body: bytes, content_type: str = "application/json"):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        self.server.requests.append({"method": "GET", "path": self.path, "headers": dict(self.headers)})
        self._reply(*self.server.responder("GET", self.path, None))

    def do_POST(self):
        length = int(self.headers.get("Content-Length", "0"))
        raw = self.rfile.read(length) if length else b""
        self.server.requests.append(
            {"method": "POST", "path": self.path, "headers": dict(self.headers), "body": raw}
        )
        self._reply(*self.server.responder("POST", self.path, raw))

    def log_message(self, format, *args):
        pass


def echo_responder(method, path, raw):
    """Ollama-style stub: echoes the prompt, or the last chat message, back."""
    if method == "GET":
        return 200, json.dumps({"models": [{"name": "mistral:latest"}]}).encode()
    payload = json.loads(raw)
    if "messages" in payload:
        reply = {"role": "assistant", "content": "echo:" + payload["messages"][-1]["content"]}
        return 200, json.dumps({"model": payload["model"], "message": reply, "done": True}).encode()
    return 200, json.dumps({"model": payload["model"], "response": "echo:" + payload["prompt"], "done": True}).encode()


@pytest.fixture
def echo_reply():
    """The default stub responder, for tests that wrap it."""
    return echo_responder


@pytest.fixture
def stub_server():
    """Start a threaded stub inference server; returns a factory taking a responder."""
    servers = []

    def start(responder=echo_responder):
        server = StubServer(("127.0.0.1", 0), StubHandler)
        server.responder = responder
        server.requests = []
        server.base_url = f"http://127.0.0.1:{server.server_address[1]}"
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def closed_port_url():
    """URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


@pytest.fixture
def make_settings():
    """Build settings that ignore the developer's environment and .env."""
    from homegpt.config import Settings

    def build(**overrides):
        overrides.setdefault("request_timeout", 5.0)
        return Settings(_env_file=None, **overrides)

    return build


@pytest.fixture
def make_client(make_settings):
    """TestClient for an app built with the given settings."""
    from fastapi.testclient import TestClient

    from homegpt.main import create_app

    def build(**overrides):
        return TestClient(create_app(make_settings(**overrides)))

    return build
