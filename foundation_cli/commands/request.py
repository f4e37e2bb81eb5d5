"""
CLI Request Command

Send one HTTP request through HttpClient and print the response.

Usage:
    foundation request POST https://api.example.com/items \\
        -H "Authorization: Bearer X" -d '{"name": "x"}' [--json] [--receipts]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from core.http import HttpClient
from core.receipts import ReceiptRecorder
from core.support import HeaderBag


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_HTTP_ERROR = 2

VERB_METHODS = {
    "GET": "get",
    "POST": "post",
    "PUT": "put",
    "PATCH": "patch",
    "UPDATE": "update",
    "DELETE": "delete",
}


def parse_header_lines(lines: list[str]) -> HeaderBag:
    """
    Parse ``Key: Value`` lines into a HeaderBag.

    Raises:
        ValueError: if a line has no colon
    """
    headers = HeaderBag()
    for line in lines:
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Invalid header line (expected 'Key: Value'): {line!r}")
        headers.set(name.strip(), value.strip())
    return headers


def load_payload(args: Namespace) -> dict[str, Any]:
    """Read the JSON payload from --data or --data-file."""
    raw = None
    if args.data is not None:
        raw = args.data
    elif args.data_file is not None:
        raw = Path(args.data_file).read_text()

    if raw is None:
        return {}
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError("Request payload must be a JSON object")
    return payload


def request_cmd(args: Namespace) -> int:
    """Handle the request command."""
    config = args.cli_config
    method = args.method.upper()

    try:
        headers = parse_header_lines(args.header or [])
        payload = load_payload(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if config.http.user_agent and not headers.has("User-Agent"):
        headers.set("User-Agent", config.http.user_agent)

    recorder = ReceiptRecorder() if args.receipts else None
    client = HttpClient.with_headers(
        headers,
        timeout=args.timeout if args.timeout is not None else config.http.timeout,
        recorder=recorder,
    )

    if method in VERB_METHODS:
        getattr(client, VERB_METHODS[method])(args.url, payload)
        result = client.result()
    else:
        result = client.request(method, args.url, payload)

    if args.json:
        output: dict[str, Any] = {
            "ok": result.ok,
            "status_code": result.status_code,
            "url": result.url,
            "elapsed_ms": round(result.elapsed_ms, 2),
        }
        if result.ok:
            try:
                output["body"] = json.loads(result.body) if result.body else None
            except ValueError:
                output["body"] = result.body
        else:
            output["error"] = result.error
        if recorder:
            output["receipts"] = recorder.to_dict_list()
        print(json.dumps(output, indent=2, default=str))
    else:
        if result.ok:
            print(result.body or "")
        else:
            print(f"Request failed: {result.error}", file=sys.stderr)
        if recorder:
            print(json.dumps(recorder.to_dict_list(), indent=2, default=str), file=sys.stderr)

    if not result.ok:
        return EXIT_RUNTIME_ERROR
    if not result.successful:
        return EXIT_HTTP_ERROR
    return EXIT_SUCCESS
