"""
Receipt Recorder

Records outgoing HTTP calls made through HttpClient.
"""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from .models import HTTPReceipt, Receipt, ReceiptKind, ReceiptTiming


def generate_receipt_id(kind: ReceiptKind, request_data: dict[str, Any]) -> str:
    """
    Generate a receipt ID from kind and request data.

    Format: rc_{kind}_{hash_prefix}_{nonce}
    """
    stable_str = f"{kind}|{sorted(request_data.items(), key=lambda kv: kv[0])}"
    hash_hex = hashlib.sha256(stable_str.encode()).hexdigest()[:12]
    return f"rc_{kind}_{hash_hex}_{uuid.uuid4().hex[:6]}"


class ReceiptRecorder:
    """
    Records receipts for outgoing HTTP calls.

    Usage:
        recorder = ReceiptRecorder()
        client = HttpClient.with_headers(headers, recorder=recorder)
        client.get("https://api.example.com/items")

        receipts = recorder.get_receipts()
    """

    def __init__(self) -> None:
        self._receipts: list[Receipt] = []
        self._in_progress: dict[str, Receipt] = {}

    def start_http_receipt(
        self,
        *,
        method: str,
        url: str,
        header_lines: Optional[list[str]] = None,
        body: Optional[str] = None,
    ) -> HTTPReceipt:
        """Start recording an HTTP request."""
        request = {
            "method": method,
            "url": url,
            "headers": header_lines or [],
            "body": body,
        }

        receipt = HTTPReceipt(
            receipt_id=generate_receipt_id("http", request),
            method=method,
            url=url,
            header_lines=header_lines or [],
            request=request,
            timing=ReceiptTiming(started_at=datetime.now(timezone.utc)),
        )

        self._in_progress[receipt.receipt_id] = receipt
        return receipt

    def complete(
        self,
        receipt: Receipt,
        *,
        response: Optional[dict[str, Any]] = None,
        error: Optional[str] = None,
        **extra_fields: Any,
    ) -> Receipt:
        """
        Complete a receipt with response data or error.

        Args:
            receipt: The receipt to complete
            response: Response data (dict)
            error: Error message if failed
            **extra_fields: Additional fields to set on the receipt

        Returns:
            The completed receipt
        """
        now = datetime.now(timezone.utc)
        receipt.timing.ended_at = now
        if receipt.timing.started_at:
            delta = now - receipt.timing.started_at
            receipt.timing.duration_ms = delta.total_seconds() * 1000

        if response is not None:
            receipt.response = response
        if error is not None:
            receipt.error = error

        for key, value in extra_fields.items():
            if hasattr(receipt, key):
                setattr(receipt, key, value)

        receipt.compute_hashes()

        self._in_progress.pop(receipt.receipt_id, None)
        self._receipts.append(receipt)
        return receipt

    def get_receipts(self) -> list[Receipt]:
        """Get all completed receipts."""
        return list(self._receipts)

    def get_in_progress(self) -> list[Receipt]:
        return list(self._in_progress.values())

    def clear(self) -> None:
        """Clear all receipts."""
        self._receipts.clear()
        self._in_progress.clear()

    def to_dict_list(self) -> list[dict[str, Any]]:
        """Convert all receipts to JSON-serializable dicts."""
        return [r.model_dump(mode="json", exclude_none=True) for r in self._receipts]
