"""
Tests for Request and FormRequest.
"""

import asyncio
import json

import pytest
from starlette.requests import Request as StarletteRequest

from api.forms import CreateRequest, UpdateRequest
from core.http import FormRequest, Request
from core.schemas.errors import RuleDefinitionException


def _starlette_request(body: bytes, query: str = "", method: str = "POST") -> StarletteRequest:
    scope = {
        "type": "http",
        "method": method,
        "path": "/records",
        "query_string": query.encode(),
        "headers": [(b"content-type", b"application/json"), (b"x-trace", b"abc")],
    }

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return StarletteRequest(scope, receive)


class TestRequest:

    def test_input_prefers_body_over_query(self):
        request = Request(query={"page": "1", "name": "q"}, body={"name": "b"})
        assert request.input("name") == "b"
        assert request.input("page") == "1"
        assert request.input("missing", "fallback") == "fallback"

    def test_all_merges_query_and_body(self):
        request = Request(query={"a": "1", "b": "q"}, body={"b": "body"})
        assert request.all() == {"a": "1", "b": "body"}

    def test_validate_uses_given_rules(self):
        request = Request(body={"domain": "example.com"})
        assert request.validate({"domain": "string|required"}).passes()
        assert request.validate({"other": "string|required"}).fails()

    def test_validate_rejects_unknown_rules(self):
        with pytest.raises(RuleDefinitionException):
            Request().validate({"domain": "string|bogus"})

    def test_method_is_uppercased(self):
        assert Request(method="post").method == "POST"

    def test_from_starlette_reads_json_query_and_headers(self):
        raw = _starlette_request(json.dumps({"domain": "example.com"}).encode(), query="page=2")
        request = asyncio.run(Request.from_starlette(raw))

        assert request.body.all() == {"domain": "example.com"}
        assert request.query.get("page") == "2"
        assert request.headers.get("x-trace") == "abc"
        assert request.method == "POST"
        assert request.path == "/records"

    @pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b""])
    def test_from_starlette_ignores_non_object_bodies(self, body):
        request = asyncio.run(Request.from_starlette(_starlette_request(body)))
        assert request.body.all() == {}


class TestFormRequest:

    def test_default_rules_are_empty(self):
        assert FormRequest().rules() == {}
        assert FormRequest(body={"x": 1}).validate().passes()

    def test_validate_falls_back_to_declared_rules(self):
        form = CreateRequest(body={"domain": "example.com"})
        validator = form.validate()
        assert validator.fails()
        assert set(validator.errors()) == {
            "root_cname_target",
            "sub_cname_target",
            "pagerule_destination_url",
        }

    def test_explicit_rules_override_declared_rules(self):
        form = CreateRequest(body={"domain": "example.com"})
        assert form.validate({"domain": "string|required"}).passes()

    def test_create_request_passes_with_all_fields(self):
        form = CreateRequest(body={
            "domain": "example.com",
            "root_cname_target": "root.example.net",
            "sub_cname_target": "sub.example.net",
            "pagerule_destination_url": "https://example.com/landing",
        })
        assert form.validate().passes()

    def test_update_request_fields_are_optional(self):
        form = UpdateRequest(body={"domain": "example.org"})
        validator = form.validate()
        assert validator.passes()
        assert validator.validated() == {"domain": "example.org"}

    def test_from_starlette_builds_subclass(self):
        raw = _starlette_request(b'{"domain": "example.com"}')
        form = asyncio.run(CreateRequest.from_starlette(raw))
        assert isinstance(form, CreateRequest)
