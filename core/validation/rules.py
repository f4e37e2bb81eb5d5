"""
Rule Parsing

Parses pipe-delimited rule strings such as ``"string|required|max:255"``
and compiles a rule set into a strict pydantic model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, create_model

from core.schemas.errors import RuleDefinitionException


TYPE_RULES: dict[str, Any] = {
    "string": str,
    "integer": int,
    "numeric": float,
    "boolean": bool,
    "array": list,
}

FLAG_RULES = frozenset({"required", "nullable"})
BOUND_RULES = frozenset({"min", "max"})
SIZED_TYPES = frozenset({"string", "array"})
NUMERIC_TYPES = frozenset({"integer", "numeric"})


@dataclass
class FieldRule:
    """Parsed rules for a single input field."""
    name: str
    required: bool = False
    nullable: bool = False
    type_name: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    choices: list[str] = field(default_factory=list)


def _parse_bound(name: str, token: str, arg: str) -> float:
    try:
        return float(arg)
    except ValueError as e:
        raise RuleDefinitionException(
            f"Rule '{token}' for field '{name}' needs a numeric argument",
            field=name,
            rule=token,
        ) from e


def parse_rule(name: str, rule: str) -> FieldRule:
    """
    Parse one rule string.

    Raises:
        RuleDefinitionException: on an unknown token or malformed argument
    """
    parsed = FieldRule(name=name)

    for token in (t.strip() for t in rule.split("|")):
        if not token:
            continue
        key, _, arg = token.partition(":")

        if key in FLAG_RULES:
            setattr(parsed, key, True)
        elif key in TYPE_RULES:
            if parsed.type_name and parsed.type_name != key:
                raise RuleDefinitionException(
                    f"Field '{name}' declares conflicting types '{parsed.type_name}' and '{key}'",
                    field=name,
                    rule=rule,
                )
            parsed.type_name = key
        elif key in BOUND_RULES:
            bound = _parse_bound(name, token, arg)
            if key == "min":
                parsed.minimum = bound
            else:
                parsed.maximum = bound
        elif key == "in":
            parsed.choices = [c.strip() for c in arg.split(",") if c.strip()]
            if not parsed.choices:
                raise RuleDefinitionException(
                    f"Rule 'in' for field '{name}' needs at least one value",
                    field=name,
                    rule=token,
                )
        else:
            raise RuleDefinitionException(
                f"Unknown validation rule '{key}' for field '{name}'",
                field=name,
                rule=token,
            )

    has_bounds = parsed.minimum is not None or parsed.maximum is not None
    if has_bounds and parsed.type_name not in SIZED_TYPES | NUMERIC_TYPES:
        raise RuleDefinitionException(
            f"Rules 'min'/'max' for field '{name}' need a string, integer, numeric or array rule",
            field=name,
            rule=rule,
        )

    return parsed


def _annotation_for(rule: FieldRule) -> Any:
    base = TYPE_RULES.get(rule.type_name, Any) if rule.type_name else Any

    if rule.choices:
        values: list[Any] = list(rule.choices)
        if rule.type_name in NUMERIC_TYPES:
            cast = int if rule.type_name == "integer" else float
            try:
                values = [cast(v) for v in values]
            except ValueError as e:
                raise RuleDefinitionException(
                    f"Rule 'in' for field '{rule.name}' has non-numeric values",
                    field=rule.name,
                ) from e
        return Literal[tuple(values)]

    constraints: dict[str, Any] = {}
    if rule.type_name in SIZED_TYPES:
        min_length = int(rule.minimum) if rule.minimum is not None else None
        if rule.required:
            min_length = max(min_length or 0, 1)
        if min_length is not None:
            constraints["min_length"] = min_length
        if rule.maximum is not None:
            constraints["max_length"] = int(rule.maximum)
    elif rule.type_name in NUMERIC_TYPES:
        if rule.minimum is not None:
            constraints["ge"] = rule.minimum
        if rule.maximum is not None:
            constraints["le"] = rule.maximum

    if constraints:
        return Annotated[base, Field(**constraints)]
    return base


def build_model(rules: Mapping[str, str], model_name: str = "ValidatedInput") -> type[BaseModel]:
    """
    Compile a rule set into a pydantic model.

    Field names are kept as aliases so keys that are not Python identifiers
    still validate.
    """
    fields: dict[str, Any] = {}
    for index, (name, rule) in enumerate(rules.items()):
        parsed = parse_rule(name, rule)
        annotation = _annotation_for(parsed)

        if parsed.nullable or not parsed.required:
            annotation = Optional[annotation]
        default = ... if parsed.required else None

        fields[f"field_{index}"] = (annotation, Field(default, alias=name))

    return create_model(
        model_name,
        __config__=ConfigDict(strict=True, extra="ignore", populate_by_name=False),
        **fields,
    )
