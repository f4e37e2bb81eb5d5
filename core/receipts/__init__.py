"""
Core Receipts Module

Provides receipt recording for outgoing HTTP calls.
"""

from .models import (
    HTTPReceipt,
    Receipt,
    ReceiptKind,
    ReceiptTiming,
)
from .recorder import ReceiptRecorder

__all__ = [
    "HTTPReceipt",
    "Receipt",
    "ReceiptKind",
    "ReceiptTiming",
    "ReceiptRecorder",
]
