"""
Test fixtures package for foundation tests.

This package provides factory functions for creating test objects.

Usage:
    from fixtures import captured, make_response

    def test_something(transport):
        transport.return_value = make_response('{"id": 1}', status_code=201)
        ...
        assert captured(transport)["method"] == "POST"
"""

from .common import (
    captured,
    make_response,
    make_header_bag,
)

__all__ = [
    "captured",
    "make_response",
    "make_header_bag",
]
