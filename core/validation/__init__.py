"""
Validation Module

Pipe-delimited rule strings compiled to pydantic models.
"""

from .rules import FieldRule, build_model, parse_rule
from .validator import Validator

__all__ = [
    "FieldRule",
    "Validator",
    "build_model",
    "parse_rule",
]
