"""
Validator

Validates an input mapping against a rule set. Validation runs once, on
construction; results are read through passes()/fails()/errors().
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ValidationError

from core.schemas.errors import ValidationFailedException

from .rules import build_model


logger = logging.getLogger(__name__)


def _format_error(field: str, error: dict[str, Any]) -> str:
    if error.get("type") == "missing":
        return f"The {field} field is required."
    return f"The {field} field is invalid: {error.get('msg', 'invalid value')}."


class Validator:
    """
    Rule-based validator.

    Usage:
        validator = Validator({"name": "x"}, {"name": "string|required"})
        if validator.fails():
            print(validator.errors())
        data = validator.validated()

    Raises:
        RuleDefinitionException: on construction, if a rule is malformed
    """

    def __init__(self, data: Mapping[str, Any], rules: Mapping[str, str]) -> None:
        self.data = dict(data)
        self.rules = dict(rules)
        self._model = build_model(self.rules)
        self._instance: Optional[BaseModel] = None
        self._errors: dict[str, list[str]] = {}
        self._run()

    def _run(self) -> None:
        try:
            self._instance = self._model.model_validate(self.data)
        except ValidationError as e:
            for error in e.errors():
                loc = error.get("loc") or ("__root__",)
                field = str(loc[0])
                self._errors.setdefault(field, []).append(_format_error(field, error))
            logger.debug(f"Validation failed for fields: {sorted(self._errors)}")

    def passes(self) -> bool:
        return not self._errors

    def fails(self) -> bool:
        return bool(self._errors)

    def errors(self) -> dict[str, list[str]]:
        """Error messages keyed by field name."""
        return {field: list(messages) for field, messages in self._errors.items()}

    def validated(self) -> dict[str, Any]:
        """
        Return the validated fields that were present in the input.

        Raises:
            ValidationFailedException: if validation failed
        """
        if self._instance is None:
            raise ValidationFailedException(self.errors())
        return self._instance.model_dump(by_alias=True, exclude_unset=True)
