"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health reports upstream configuration
2. Record routes forward through HttpClient with the right method and body
3. Form request failures return 422
4. Transport failures return 502; missing upstream config returns 503
"""

import json
import logging

import pytest
from fastapi.testclient import TestClient

from api.app import _resolve_log_level, app
from api.deps import build_upstream_headers, get_runtime_config
from core.config.runtime import RuntimeConfig
from fixtures import captured, make_response


VALID_RECORD = {
    "domain": "example.com",
    "root_cname_target": "root.example.net",
    "sub_cname_target": "sub.example.net",
    "pagerule_destination_url": "https://example.com/landing",
}


@pytest.fixture
def upstream_config():
    return RuntimeConfig.from_dict({
        "upstream": {"base_url": "https://upstream.example.com/", "api_token": "tok"},
    })


@pytest.fixture
def client(upstream_config):
    app.dependency_overrides[get_runtime_config] = lambda: upstream_config
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["upstream_configured"] is True

    def test_root(self, client):
        assert client.get("/").json()["ok"] is True


class TestRecords:

    def test_create_forwards_validated_fields(self, client, transport):
        transport.return_value = make_response('{"id": "r1"}', status_code=201)

        response = client.post("/records", json={**VALID_RECORD, "unexpected": "dropped"})

        assert response.status_code == 201
        assert response.json() == {"id": "r1"}
        sent = captured(transport)
        assert sent["method"] == "POST"
        assert sent["url"] == "https://upstream.example.com/records"
        assert json.loads(sent["data"]) == VALID_RECORD
        assert sent["headers"]["Authorization"] == "Bearer tok"

    def test_create_rejects_invalid_input(self, client, transport):
        response = client.post("/records", json={"domain": "example.com"})

        assert response.status_code == 422
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "VALIDATION_FAILED"
        assert "root_cname_target" in body["error"]["details"]["errors"]
        transport.assert_not_called()

    def test_list_and_show(self, client, transport):
        transport.return_value = make_response('[{"id": "r1"}]')
        response = client.get("/records")
        assert response.json() == [{"id": "r1"}]
        assert captured(transport)["url"] == "https://upstream.example.com/records"

        transport.reset_mock()
        transport.return_value = make_response('{"id": "r1"}')
        response = client.get("/records/r1")
        assert response.json() == {"id": "r1"}
        assert captured(transport)["method"] == "GET"

    def test_update_sends_patch_body(self, client, transport):
        transport.return_value = make_response('{"id": "r1", "domain": "example.org"}')

        response = client.patch("/records/r1", json={"domain": "example.org"})

        assert response.status_code == 200
        sent = captured(transport)
        assert sent["method"] == "PATCH"
        assert json.loads(sent["data"]) == {"domain": "example.org"}

    def test_update_rejects_wrong_types(self, client, transport):
        response = client.patch("/records/r1", json={"domain": 42})
        assert response.status_code == 422
        transport.assert_not_called()

    def test_delete_passes_empty_response_through(self, client, transport):
        transport.return_value = make_response("", status_code=204, headers={})

        response = client.delete("/records/r1")

        assert response.status_code == 204
        sent = captured(transport)
        assert sent["method"] == "DELETE"
        assert sent["data"] is None

    def test_upstream_error_status_is_passed_through(self, client, transport):
        transport.return_value = make_response('{"error": "not found"}', status_code=404)
        response = client.get("/records/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "not found"}

    def test_non_json_upstream_body_is_passed_through(self, client, transport):
        transport.return_value = make_response(
            "<html>Bad Gateway</html>",
            status_code=500,
            headers={"Content-Type": "text/html"},
        )

        response = client.get("/records")

        assert response.status_code == 500
        assert response.text == "<html>Bad Gateway</html>"
        assert response.headers["content-type"].startswith("text/html")

    def test_empty_json_object_stays_json(self, client, transport):
        transport.return_value = make_response("{}")
        response = client.get("/records/r1")
        assert response.status_code == 200
        assert response.json() == {}
        assert response.headers["content-type"] == "application/json"

    def test_transport_failure_returns_502(self, client, transport, connection_error):
        transport.side_effect = connection_error

        response = client.get("/records")

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "UPSTREAM_UNAVAILABLE"


class TestNotConfigured:

    def test_records_need_upstream(self, transport):
        app.dependency_overrides[get_runtime_config] = lambda: RuntimeConfig()
        try:
            response = TestClient(app).get("/records")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "NOT_CONFIGURED"
        transport.assert_not_called()


def test_upstream_headers():
    config = RuntimeConfig.from_dict({
        "http": {"user_agent": "foundation/0.1"},
        "upstream": {"api_token": "tok"},
    })
    headers = build_upstream_headers(config)
    assert headers.to_lines() == [
        "Accept: application/json",
        "Content-Type: application/json",
        "Authorization: Bearer tok",
        "User-Agent: foundation/0.1",
    ]


class TestLogLevel:

    def test_log_level_from_dotted_config_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".foundation.json").write_text(json.dumps({"log_level": "DEBUG"}))
        assert _resolve_log_level() == logging.DEBUG

    def test_env_overrides_config_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "foundation.json").write_text(json.dumps({"log_level": "DEBUG"}))
        monkeypatch.setenv("FOUNDATION_LOG_LEVEL", "WARNING")
        assert _resolve_log_level() == logging.WARNING
