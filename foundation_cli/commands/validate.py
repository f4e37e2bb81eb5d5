"""
CLI Validate Command

Validate a JSON document against pipe-delimited rules.

Usage:
    foundation validate data.json --rules rules.yaml
    foundation validate data.json --rule "domain=string|required" --rule "ttl=integer|min:60"
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

import yaml

from core.schemas.errors import RuleDefinitionException
from core.validation import Validator


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VALIDATION_FAILED = 2


def load_rules(args: Namespace) -> dict[str, str]:
    """Collect rules from --rules (JSON/YAML file) and repeated --rule options."""
    rules: dict[str, str] = {}

    if args.rules:
        data = yaml.safe_load(Path(args.rules).read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Rules file must contain a mapping: {args.rules}")
        rules.update({str(k): str(v) for k, v in data.items()})

    for item in args.rule or []:
        name, sep, rule = item.partition("=")
        if not sep or not name:
            raise ValueError(f"Invalid --rule (expected 'field=rules'): {item!r}")
        rules[name] = rule

    return rules


def load_data(path: str) -> dict[str, Any]:
    raw = sys.stdin.read() if path == "-" else Path(path).read_text()
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Input document must be a JSON object")
    return data


def validate_cmd(args: Namespace) -> int:
    """Handle the validate command."""
    try:
        rules = load_rules(args)
        data = load_data(args.data)
        validator = Validator(data, rules)
    except (OSError, ValueError, yaml.YAMLError, RuleDefinitionException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        output: dict[str, Any] = {"ok": validator.passes()}
        if validator.passes():
            output["validated"] = validator.validated()
        else:
            output["errors"] = validator.errors()
        print(json.dumps(output, indent=2))
    elif validator.passes():
        print("Validation passed")
    else:
        print("Validation failed:")
        for field, messages in validator.errors().items():
            for message in messages:
                print(f"  {field}: {message}")

    return EXIT_SUCCESS if validator.passes() else EXIT_VALIDATION_FAILED
