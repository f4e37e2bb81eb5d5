"""
Records Route

CRUD controller for records. Input is validated with form requests and
each call is forwarded to the upstream API through HttpClient.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from api.deps import get_http_client, get_upstream_base_url
from api.errors import UpstreamUnavailableError, ValidationFailedError
from api.forms import CreateRequest, UpdateRequest
from core.http import HttpClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/records", tags=["records"])


def _relay(client: HttpClient) -> Response:
    """Turn the client's last result into an API response."""
    result = client.result()
    if result is None or not result.ok:
        reason = result.error if result else "no request was made"
        logger.warning(f"Upstream call failed: {reason}")
        raise UpstreamUnavailableError(
            "Upstream API is unavailable",
            details={"reason": reason},
        )

    status_code = result.status_code or 200
    if status_code == 204 or not result.body:
        return Response(status_code=status_code)

    try:
        content = json.loads(result.body)
    except ValueError:
        # Not JSON (an HTML error page, plain text): relay it untouched
        return Response(
            content=result.body,
            status_code=status_code,
            media_type=_content_type(result.headers),
        )
    return JSONResponse(status_code=status_code, content=content)


def _content_type(headers: dict[str, str]) -> Optional[str]:
    for name, value in headers.items():
        if name.lower() == "content-type":
            return value
    return None


async def _send(
    client: HttpClient,
    method: str,
    url: str,
    data: Optional[dict[str, Any]] = None,
) -> Response:
    verb = getattr(client, method)
    await run_in_threadpool(verb, url, data)
    return _relay(client)


@router.get("")
async def list_records(
    client: HttpClient = Depends(get_http_client),
    base_url: str = Depends(get_upstream_base_url),
) -> Response:
    """List records from the upstream API."""
    return await _send(client, "get", f"{base_url}/records")


@router.get("/{record_id}")
async def show_record(
    record_id: str,
    client: HttpClient = Depends(get_http_client),
    base_url: str = Depends(get_upstream_base_url),
) -> Response:
    return await _send(client, "get", f"{base_url}/records/{record_id}")


@router.post("")
async def create_record(
    request: Request,
    client: HttpClient = Depends(get_http_client),
    base_url: str = Depends(get_upstream_base_url),
) -> Response:
    """
    Create a record.

    The body is validated by CreateRequest; only validated fields are
    forwarded upstream.
    """
    form = await CreateRequest.from_starlette(request)
    validator = form.validate()
    if validator.fails():
        raise ValidationFailedError(validator.errors())

    return await _send(client, "post", f"{base_url}/records", validator.validated())


@router.patch("/{record_id}")
async def update_record(
    record_id: str,
    request: Request,
    client: HttpClient = Depends(get_http_client),
    base_url: str = Depends(get_upstream_base_url),
) -> Response:
    form = await UpdateRequest.from_starlette(request)
    validator = form.validate()
    if validator.fails():
        raise ValidationFailedError(validator.errors())

    return await _send(client, "patch", f"{base_url}/records/{record_id}", validator.validated())


@router.delete("/{record_id}")
async def delete_record(
    record_id: str,
    client: HttpClient = Depends(get_http_client),
    base_url: str = Depends(get_upstream_base_url),
) -> Response:
    return await _send(client, "delete", f"{base_url}/records/{record_id}")
