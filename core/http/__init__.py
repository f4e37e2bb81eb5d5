"""
HTTP Module

Outgoing HTTP client and incoming request containers.
"""

from .client import BODY_METHODS, HttpClient, HttpResult
from .request import FormRequest, Request

__all__ = [
    "BODY_METHODS",
    "FormRequest",
    "HttpClient",
    "HttpResult",
    "Request",
]
