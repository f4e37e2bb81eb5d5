"""
HTTP Client

Thin synchronous wrapper over ``requests``. Headers live in a HeaderBag,
each verb call performs exactly one request, and the last result is kept
on the client for ``response()`` / ``json()`` / ``result()``.
"""

from __future__ import annotations

import json as jsonlib
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, TYPE_CHECKING, Union

import requests
from urllib3 import HTTPHeaderDict
from urllib3.util import SKIP_HEADER

from core.schemas.errors import HttpTransportException
from core.support import HeaderBag

if TYPE_CHECKING:
    from core.receipts import ReceiptRecorder


logger = logging.getLogger(__name__)

# Only these methods attach a JSON body; every other verb sends none.
BODY_METHODS = frozenset({"POST", "PATCH"})

FRAMING_HEADERS = ("Content-Length", "Transfer-Encoding")


@dataclass
class HttpResult:
    """
    Outcome of one HTTP call.

    ``ok`` reflects the transport only: a 404 or 500 with a body is still
    ``ok``. Check ``successful`` for a 2xx status.
    """
    ok: bool
    body: Optional[str] = None
    status_code: Optional[int] = None
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""
    elapsed_ms: float = 0.0
    error: Optional[str] = None
    receipt_id: Optional[str] = None

    @classmethod
    def success(
        cls,
        body: str,
        *,
        status_code: int,
        headers: Optional[dict[str, str]] = None,
        url: str = "",
        elapsed_ms: float = 0.0,
    ) -> "HttpResult":
        return cls(
            ok=True,
            body=body,
            status_code=status_code,
            headers=headers or {},
            url=url,
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def failure(cls, reason: str, *, url: str = "", elapsed_ms: float = 0.0) -> "HttpResult":
        return cls(ok=False, error=reason, url=url, elapsed_ms=elapsed_ms)

    @property
    def successful(self) -> bool:
        """Check if the call completed with a 2xx status."""
        return self.ok and self.status_code is not None and 200 <= self.status_code < 300

    def unwrap(self) -> str:
        """Return the body, or raise if the call failed at the transport level."""
        if not self.ok:
            raise HttpTransportException(self.error or "HTTP request failed", url=self.url or None)
        return self.body or ""


class HttpClient:
    """
    HTTP client with fluent verb methods.

    Usage:
        client = HttpClient.with_headers(HeaderBag({"Authorization": "Bearer X"}))

        data = client.post("https://api.example.com/items", {"name": "x"}).json()
        if client.result().ok:
            ...

    Transport errors never raise from the verb methods: they are logged and
    recorded as a failed ``HttpResult``, and ``response()`` returns None.
    Instances are not safe to share between threads.
    """

    def __init__(
        self,
        headers: Union[HeaderBag, Mapping[str, Any], None] = None,
        *,
        timeout: Optional[float] = 30.0,
        recorder: Optional["ReceiptRecorder"] = None,
    ) -> None:
        self._headers = HeaderBag.wrap(headers)
        self.timeout = timeout
        self.recorder = recorder
        self._result: Optional[HttpResult] = None

    @classmethod
    def with_headers(
        cls,
        headers: Union[HeaderBag, Mapping[str, Any]],
        **kwargs: Any,
    ) -> "HttpClient":
        """Create a client configured with the given headers. Performs no I/O."""
        return cls(headers, **kwargs)

    def headers(self) -> HeaderBag:
        return self._headers

    def response(self) -> Optional[str]:
        """Raw body of the last call, or None if it failed (or none was made)."""
        if self._result is None or not self._result.ok:
            return None
        return self._result.body

    def result(self) -> Optional[HttpResult]:
        return self._result

    def json(self) -> Any:
        """
        Decode the last response body as JSON.

        Returns an empty dict when there is no body or it is not valid JSON.
        """
        body = self.response()
        if not body:
            return {}
        try:
            return jsonlib.loads(body)
        except ValueError:
            logger.debug("Response body is not valid JSON")
            return {}

    def request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> HttpResult:
        """
        Send one request and return its result.

        Args:
            method: HTTP method, sent literally (non-standard verbs allowed)
            endpoint: Request URL
            data: Payload; JSON-encoded and attached for POST and PATCH only

        Returns:
            HttpResult for the call
        """
        method = method.upper()
        header_lines = self._headers.to_lines()

        body = None
        if method in BODY_METHODS:
            try:
                body = jsonlib.dumps(dict(data or {}), separators=(",", ":"))
            except (TypeError, ValueError) as e:
                logger.error(f"{method} {endpoint} payload is not JSON-encodable: {e}")
                return HttpResult.failure(f"Payload is not JSON-encodable: {e}", url=endpoint)

        logger.debug(f"{method} {endpoint} headers={header_lines}")

        receipt = None
        if self.recorder:
            receipt = self.recorder.start_http_receipt(
                method=method,
                url=endpoint,
                header_lines=header_lines,
                body=body,
            )

        started = time.perf_counter()
        with requests.Session() as session:
            try:
                prepared = session.prepare_request(
                    requests.Request(
                        method=method,
                        url=endpoint,
                        data=body.encode("utf-8") if body is not None else None,
                    )
                )
                prepared.headers = self._wire_headers(prepared)
                settings = session.merge_environment_settings(prepared.url, {}, None, None, None)
                response = session.send(prepared, timeout=self.timeout, **settings)
            except requests.RequestException as e:
                elapsed_ms = (time.perf_counter() - started) * 1000
                logger.error(f"{method} {endpoint} failed: {e}")
                result = HttpResult.failure(str(e), url=endpoint, elapsed_ms=elapsed_ms)
                if receipt and self.recorder:
                    self.recorder.complete(receipt, error=str(e))
                    result.receipt_id = receipt.receipt_id
                return result

            elapsed_ms = (time.perf_counter() - started) * 1000
            response_headers = dict(response.headers)
            result = HttpResult.success(
                response.text,
                status_code=response.status_code,
                headers=response_headers,
                url=str(response.url or endpoint),
                elapsed_ms=elapsed_ms,
            )

        if receipt and self.recorder:
            self.recorder.complete(
                receipt,
                response={
                    "status_code": result.status_code,
                    "content_length": len(result.body or ""),
                    "content_type": response_headers.get("content-type")
                    or response_headers.get("Content-Type"),
                },
                status_code=result.status_code,
                response_headers=response_headers,
            )
            result.receipt_id = receipt.receipt_id

        return result

    def _wire_headers(self, prepared: requests.PreparedRequest) -> HTTPHeaderDict:
        """
        Headers to put on the wire: the bag's entries and nothing else.

        Session defaults, netrc auth and cookies are dropped. Content-Length
        and Transfer-Encoding are kept from the prepared request since they
        frame the body, and urllib3 still adds Host. Names differing only in
        case go out as separate lines under the first spelling.
        """
        wire = HTTPHeaderDict()
        for name, value in self._headers.to_wire().items():
            wire.add(name, value)
        for name in FRAMING_HEADERS:
            if name in prepared.headers and name not in wire:
                wire[name] = prepared.headers[name]
        # urllib3 fills these in unless told to skip them
        for name in ("User-Agent", "Accept-Encoding"):
            if name not in wire:
                wire[name] = SKIP_HEADER
        return wire

    def _send(self, method: str, endpoint: str, data: Optional[Mapping[str, Any]]) -> "HttpClient":
        self._result = self.request(method, endpoint, data)
        return self

    def get(self, endpoint: str, data: Optional[Mapping[str, Any]] = None) -> "HttpClient":
        """Send a GET request. ``data`` is never sent."""
        return self._send("GET", endpoint, data)

    def post(self, endpoint: str, data: Optional[Mapping[str, Any]] = None) -> "HttpClient":
        """Send a POST request with ``data`` as a JSON body."""
        return self._send("POST", endpoint, data)

    def put(self, endpoint: str, data: Optional[Mapping[str, Any]] = None) -> "HttpClient":
        """Send a PUT request. ``data`` is never sent."""
        return self._send("PUT", endpoint, data)

    def patch(self, endpoint: str, data: Optional[Mapping[str, Any]] = None) -> "HttpClient":
        """Send a PATCH request with ``data`` as a JSON body."""
        return self._send("PATCH", endpoint, data)

    def update(self, endpoint: str, data: Optional[Mapping[str, Any]] = None) -> "HttpClient":
        """Send a non-standard UPDATE request. ``data`` is never sent."""
        return self._send("UPDATE", endpoint, data)

    def delete(self, endpoint: str, data: Optional[Mapping[str, Any]] = None) -> "HttpClient":
        """Send a DELETE request. ``data`` is never sent."""
        return self._send("DELETE", endpoint, data)
