"""
Core Schemas Module

Error taxonomy shared by the HTTP, validation and API layers.
"""

from .errors import (
    ConfigurationException,
    ErrorCodes,
    FoundationError,
    FoundationException,
    HttpTransportException,
    RuleDefinitionException,
    ValidationFailedException,
)

__all__ = [
    "ConfigurationException",
    "ErrorCodes",
    "FoundationError",
    "FoundationException",
    "HttpTransportException",
    "RuleDefinitionException",
    "ValidationFailedException",
]
