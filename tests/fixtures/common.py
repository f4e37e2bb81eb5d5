"""
Base factories shared by the test modules.
"""

from unittest.mock import MagicMock

from urllib3.util import SKIP_HEADER

from core.support import HeaderBag


def make_response(
    text: str = "",
    status_code: int = 200,
    headers: dict | None = None,
    url: str = "https://api.example.com/items",
) -> MagicMock:
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    response.headers = headers if headers is not None else {"Content-Type": "application/json"}
    response.url = url
    return response


def make_header_bag(**extra: str) -> HeaderBag:
    """HeaderBag with a bearer token plus any extra headers."""
    headers = HeaderBag({"Authorization": "Bearer X"})
    for key, value in extra.items():
        headers.set(key.replace("_", "-"), value)
    return headers


def captured(send: MagicMock) -> dict:
    """
    What the single patched ``Session.send`` call would have put on the wire.

    ``headers`` holds the bag-supplied headers only: urllib3 skip markers and
    the body framing headers are left out.
    """
    send.assert_called_once()
    prepared = send.call_args.args[0]
    headers = {
        name: value
        for name, value in prepared.headers.items()
        if value != SKIP_HEADER and name not in ("Content-Length", "Transfer-Encoding")
    }
    body = prepared.body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return {
        "method": prepared.method,
        "url": prepared.url,
        "headers": headers,
        "data": body,
        "timeout": send.call_args.kwargs.get("timeout"),
    }
