"""
Request

Incoming request input held in parameter bags, with rule-based validation.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, TYPE_CHECKING

from core.support import HeaderBag, ParameterBag
from core.validation import Validator

if TYPE_CHECKING:
    from starlette.requests import Request as StarletteRequest


logger = logging.getLogger(__name__)


class Request:
    """
    Request input container.

    Query string and body are kept in separate bags; ``all()`` merges them
    with body values taking precedence.
    """

    def __init__(
        self,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, Any]] = None,
        *,
        method: str = "GET",
        path: str = "/",
    ) -> None:
        self.query = ParameterBag(query)
        self.body = ParameterBag(body)
        self.headers = HeaderBag.wrap(headers)
        self.method = method.upper()
        self.path = path

    @classmethod
    async def from_starlette(cls, request: "StarletteRequest") -> "Request":
        """Build a Request from an incoming FastAPI/Starlette request."""
        body: dict[str, Any] = {}
        raw = await request.body()
        if raw:
            try:
                decoded = json.loads(raw)
            except ValueError:
                logger.debug(f"Ignoring non-JSON body on {request.method} {request.url.path}")
                decoded = None
            if isinstance(decoded, dict):
                body = decoded

        return cls(
            query=dict(request.query_params),
            body=body,
            headers=dict(request.headers),
            method=request.method,
            path=request.url.path,
        )

    def all(self) -> dict[str, Any]:
        merged = self.query.all()
        merged.update(self.body.all())
        return merged

    def input(self, key: str, default: Any = None) -> Any:
        """Get an input value from the body, falling back to the query string."""
        if self.body.has(key):
            return self.body.get(key)
        return self.query.get(key, default)

    def validate(self, rules: Mapping[str, str]) -> Validator:
        """
        Validate the request input against ``rules``.

        Raises:
            RuleDefinitionException: if a rule is malformed
        """
        return Validator(self.all(), rules)


class FormRequest(Request):
    """
    Request with declarative validation rules.

    Subclasses override ``rules()``:

        class CreateRequest(FormRequest):
            def rules(self):
                return {"domain": "string|required"}
    """

    def rules(self) -> dict[str, str]:
        return {}

    def validate(self, rules: Optional[Mapping[str, str]] = None) -> Validator:
        """Validate against ``rules`` when given, otherwise against ``self.rules()``."""
        return super().validate(rules or self.rules())
