"""
CLI command modules.
"""

from foundation_cli.commands import request, serve, validate

__all__ = ["request", "serve", "validate"]
