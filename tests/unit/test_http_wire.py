"""
Wire-level tests for HttpClient.

A local http.server on a background thread records each request line,
header line and body exactly as received, so these tests check what
actually leaves the client rather than what is handed to requests.
"""

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from core.http import HttpClient
from core.support import HeaderBag


pytestmark = pytest.mark.integration

# Added by the HTTP layer to frame every request; never taken from the bag.
FRAMING = {"host", "content-length"}


class _RecordingHandler(BaseHTTPRequestHandler):
    """Answers every method with a small JSON body and records the request."""

    protocol_version = "HTTP/1.1"

    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.received.append({
            "method": self.command,
            "path": self.path,
            "headers": list(self.headers.items()),
            "body": body,
        })
        payload = json.dumps({"method": self.command}).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = do_UPDATE = _handle

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _RecordingHandler)
    httpd.received = []
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield httpd
    finally:
        httpd.shutdown()
        httpd.server_close()
        thread.join(timeout=5)


def _url(httpd, path="/items"):
    host, port = httpd.server_address[:2]
    return f"http://{host}:{port}{path}"


def _bag_headers(received):
    return [(name, value) for name, value in received["headers"] if name.lower() not in FRAMING]


class TestHeadersOnTheWire:

    def test_only_bag_headers_are_sent(self, server):
        client = HttpClient.with_headers(HeaderBag({"Authorization": "Bearer X"}))
        client.post(_url(server), {"name": "x"})

        received = server.received[0]
        assert _bag_headers(received) == [("Authorization", "Bearer X")]
        names = {name.lower() for name, _ in received["headers"]}
        assert not names & {"user-agent", "accept", "accept-encoding", "connection"}

    def test_header_lines_keep_order_and_casing(self, server):
        bag = HeaderBag({"X-Trace-ID": "abc", "authorization": "Bearer X", "Accept": "text/plain"})
        HttpClient.with_headers(bag).get(_url(server))

        assert _bag_headers(server.received[0]) == [
            ("X-Trace-ID", "abc"),
            ("authorization", "Bearer X"),
            ("Accept", "text/plain"),
        ]

    def test_case_variant_names_arrive_as_separate_lines(self, server):
        bag = HeaderBag({"Accept": "text/plain", "accept": "application/json"})
        HttpClient.with_headers(bag).get(_url(server))

        values = [value for name, value in server.received[0]["headers"] if name.lower() == "accept"]
        assert values == ["text/plain", "application/json"]

    def test_bag_user_agent_is_sent_as_is(self, server):
        HttpClient.with_headers({"User-Agent": "foundation/0.1"}).get(_url(server))
        assert _bag_headers(server.received[0]) == [("User-Agent", "foundation/0.1")]


class TestBodyOnTheWire:

    def test_post_body_bytes(self, server):
        client = HttpClient.with_headers({"Authorization": "Bearer X"}).post(_url(server), {"name": "x"})

        received = server.received[0]
        assert received["method"] == "POST"
        assert received["body"] == b'{"name":"x"}'
        assert client.json() == {"method": "POST"}

    def test_patch_without_data_sends_empty_object(self, server):
        HttpClient.with_headers({}).patch(_url(server, "/items/1"))
        assert server.received[0]["body"] == b"{}"

    @pytest.mark.parametrize("verb,method", [
        ("get", "GET"),
        ("put", "PUT"),
        ("update", "UPDATE"),
        ("delete", "DELETE"),
    ])
    def test_other_verbs_send_no_body(self, server, verb, method):
        client = HttpClient.with_headers({})
        getattr(client, verb)(_url(server), {"name": "x"})

        received = server.received[0]
        assert received["method"] == method
        assert received["body"] == b""
        assert client.result().status_code == 200


class TestCannotConnect:

    def test_refused_connection_is_a_failure(self):
        with socket.socket() as sock:
            sock.bind(("127.0.0.1", 0))
            port = sock.getsockname()[1]

        client = HttpClient.with_headers({}, timeout=5.0)
        returned = client.get(f"http://127.0.0.1:{port}/items")

        assert returned is client
        assert client.response() is None
        assert client.json() == {}
        assert client.result().ok is False
        assert client.result().error
