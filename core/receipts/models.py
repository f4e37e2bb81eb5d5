"""
Receipt Models

Schemas for recording outgoing HTTP calls. A receipt captures what was
sent, what came back, and how long it took.
"""

from __future__ import annotations

import hashlib
import json
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


ReceiptKind = Literal["http"]


def hash_payload(payload: Any) -> str:
    """SHA-256 of the sorted-key JSON form of ``payload``, 0x-prefixed."""
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return "0x" + hashlib.sha256(encoded.encode("utf-8")).hexdigest()


class ReceiptTiming(BaseModel):
    """
    Timing information for a receipt.

    Excluded from hashing.
    """

    model_config = ConfigDict(extra="forbid")

    started_at: Optional[datetime] = Field(
        default=None,
        description="When the operation started",
    )
    ended_at: Optional[datetime] = Field(
        default=None,
        description="When the operation completed",
    )
    duration_ms: Optional[float] = Field(
        default=None,
        description="Duration in milliseconds",
    )


class Receipt(BaseModel):
    """
    Base receipt for an external interaction.
    """

    model_config = ConfigDict(extra="forbid")

    receipt_id: str = Field(
        ...,
        description="Unique identifier for this receipt",
    )
    kind: ReceiptKind = Field(
        ...,
        description="Type of external interaction",
    )
    request: dict[str, Any] = Field(
        ...,
        description="Request parameters/payload",
    )
    response: dict[str, Any] = Field(
        default_factory=dict,
        description="Response data",
    )
    request_hash: Optional[str] = Field(default=None)
    response_hash: Optional[str] = Field(default=None)
    timing: ReceiptTiming = Field(default_factory=ReceiptTiming)
    error: Optional[str] = Field(
        default=None,
        description="Error message if operation failed",
    )

    def compute_hashes(self) -> "Receipt":
        """Compute request and response hashes if not already set."""
        if self.request_hash is None:
            self.request_hash = hash_payload(self.request)
        if self.response_hash is None and self.response:
            self.response_hash = hash_payload(self.response)
        return self

    @property
    def is_successful(self) -> bool:
        return self.error is None


class HTTPReceipt(Receipt):
    """
    Receipt for HTTP requests.

    Captures method, URL, header lines, status, and response headers.
    """

    kind: Literal["http"] = "http"

    method: str = Field(
        ...,
        description="HTTP method as sent on the wire",
    )
    url: str = Field(
        ...,
        description="Request URL",
    )
    header_lines: list[str] = Field(
        default_factory=list,
        description="Request headers as 'Key: Value' lines",
    )
    status_code: Optional[int] = Field(
        default=None,
        description="HTTP status code",
    )
    response_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Response headers",
    )
