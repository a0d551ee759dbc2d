"""Tests for the HTTP API."""

import asyncio
import json

import pytest
import sqlparse
from fastapi.testclient import TestClient

from main import app
from routers.diff import diff_events


@pytest.fixture
def client():
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "toolbox-backend"}


class TestFormatEndpoint:
    """POST /api/format"""

    def test_json(self, client):
        response = client.post(
            "/api/format",
            json={"raw_text": '{"b":1,"a":2}', "syntax": "json", "indent_width": 2},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["formatted_text"] == '{\n  "b": 1,\n  "a": 2\n}'
        assert body["strategy"] == "exact"
        assert body["stats"]["lines"] == 4

    def test_invalid_json(self, client):
        response = client.post(
            "/api/format", json={"raw_text": "{invalid", "syntax": "json"}
        )
        assert response.status_code == 400
        assert response.json()["detail"].startswith("JSON formatting error:")

    def test_sql_failure(self, client, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("unsupported")

        monkeypatch.setattr(sqlparse, "format", boom)
        response = client.post("/api/format", json={"raw_text": "select 1", "syntax": "mysql"})
        assert response.status_code == 422
        assert response.json()["detail"] == "SQL formatting error: unsupported"

    def test_rejects_non_positive_indent(self, client):
        response = client.post(
            "/api/format", json={"raw_text": "{}", "syntax": "json", "indent_width": 0}
        )
        assert response.status_code == 422

    def test_unknown_syntax(self, client):
        response = client.post("/api/format", json={"raw_text": "x", "syntax": "cobol"})
        assert response.status_code == 422

    def test_defaults_from_config(self, client):
        client.put("/api/config", json={"formatter": {"indentWidth": 4, "keywordCase": "upper"}})

        response = client.post("/api/format", json={"raw_text": "[1]", "syntax": "json"})
        assert response.json()["formatted_text"] == "[\n    1\n]"

        response = client.post(
            "/api/format", json={"raw_text": "select 1; select 2;", "syntax": "sql"}
        )
        assert response.json()["formatted_text"] == "SELECT 1;\n\nSELECT 2;"

    def test_deep_nesting(self, client):
        response = client.post(
            "/api/format", json={"raw_text": "[" * 5000 + "]" * 5000, "syntax": "json"}
        )
        assert response.status_code == 422
        assert response.json()["detail"].startswith("JSON formatting error:")

    def test_lone_surrogate(self, client):
        response = client.post("/api/format", json={"raw_text": '"\\ud800"', "syntax": "json"})
        assert response.status_code == 200
        assert response.json()["formatted_text"] == '"\\ud800"'

    def test_explicit_null_keeps_keyword_case(self, client):
        client.put("/api/config", json={"formatter": {"keywordCase": "upper"}})

        response = client.post(
            "/api/format",
            json={"raw_text": "select a from t", "syntax": "sql", "keyword_case": None},
        )
        assert "select" in response.json()["formatted_text"]

        response = client.post("/api/format", json={"raw_text": "select a from t", "syntax": "sql"})
        assert "SELECT" in response.json()["formatted_text"]

    def test_invalid_stored_config_uses_defaults(self, client, isolated_config):
        isolated_config.mkdir(parents=True, exist_ok=True)
        (isolated_config / "config.json").write_text(json.dumps({"formatter": {"indentWidth": "4"}}))

        response = client.post("/api/format", json={"raw_text": "[1]", "syntax": "json"})
        assert response.status_code == 200
        assert response.json()["formatted_text"] == "[\n  1\n]"

    def test_request_overrides_config(self, client):
        response = client.post(
            "/api/format",
            json={
                "raw_text": "select 1; select 2;",
                "syntax": "sqlite",
                "keyword_case": "upper",
                "blank_lines": 0,
            },
        )
        assert response.json()["formatted_text"] == "SELECT 1;\nSELECT 2;"

    def test_syntaxes(self, client):
        response = client.get("/api/format/syntaxes")
        assert response.status_code == 200
        entries = {e["syntax"]: e for e in response.json()}
        assert entries["json"]["strategy"] == "exact"
        assert entries["postgresql"] == {
            "syntax": "postgresql",
            "strategy": "external",
            "family": "sql",
        }
        assert entries["html"]["strategy"] == "heuristic"


class TestDiffEndpoint:
    """POST /api/diff"""

    def test_diff(self, client):
        response = client.post("/api/diff", json={"text_a": "x\ny\nz", "text_b": "x\nY\nz\nw"})
        assert response.status_code == 200
        body = response.json()
        assert body["lines"] == [
            {"line_number": 2, "kind": "modified", "new_content": "Y", "old_content": "y"},
            {"line_number": 4, "kind": "added", "new_content": "w"},
        ]
        assert body["summary"] == {"added": 1, "removed": 0, "modified": 1, "total": 2}

    def test_no_differences(self, client):
        response = client.post("/api/diff", json={"text_a": "", "text_b": ""})
        assert response.json()["lines"] == []
        assert response.json()["report"] == ""

    def test_unified(self, client):
        response = client.post(
            "/api/diff/unified",
            json={"text_a": "a\nb", "text_b": "a\nc", "name_a": "old.sql", "name_b": "new.sql"},
        )
        assert response.status_code == 200
        assert response.json()["unified_diff"].startswith("--- a/old.sql\n+++ b/new.sql\n")


class TestDiffEvents:
    """Server-Sent Events payloads for /api/diff/stream"""

    @staticmethod
    def collect(text_a, text_b):
        async def run():
            return [event async for event in diff_events(text_a, text_b)]

        return asyncio.run(run())

    def test_lines_then_done(self):
        events = self.collect("a\nb", "a")
        assert [e["event"] for e in events] == ["message", "done"]
        assert json.loads(events[0]["data"]) == {
            "type": "line",
            "line": {"line_number": 2, "kind": "removed", "new_content": "b"},
        }
        assert json.loads(events[1]["data"])["summary"]["removed"] == 1

    def test_identical_only_done(self):
        events = self.collect("same", "same")
        assert len(events) == 1
        assert json.loads(events[0]["data"])["summary"]["total"] == 0

    def test_failure_becomes_error_event(self, monkeypatch):
        from routers import diff

        def boom(text_a, text_b):
            raise RuntimeError("broken")

        monkeypatch.setattr(diff.differ, "diff_lines", boom)
        events = self.collect("a", "b")
        assert events == [
            {"event": "error", "data": json.dumps({"type": "error", "error": "broken"})}
        ]


class TestConfigEndpoint:
    """GET/PUT /api/config"""

    def test_get_defaults(self, client):
        response = client.get("/api/config")
        assert response.status_code == 200
        assert response.json()["formatter"]["indentWidth"] == 2

    def test_update(self, client):
        response = client.put("/api/config", json={"formatter": {"blankLines": 3}})
        assert response.status_code == 200
        formatter = client.get("/api/config").json()["formatter"]
        assert formatter["blankLines"] == 3
        assert formatter["indentWidth"] == 2

    def test_reset_keyword_case(self, client):
        client.put("/api/config", json={"formatter": {"keywordCase": "lower"}})
        client.put("/api/config", json={"formatter": {"keywordCase": None}})
        assert client.get("/api/config").json()["formatter"]["keywordCase"] is None

    @pytest.mark.parametrize(
        "settings",
        [{"indentWidth": 0}, {"blankLines": -3}, {"keywordCase": "title"}, {"indentWidth": -1}],
    )
    def test_invalid_update(self, client, settings):
        response = client.put("/api/config", json={"formatter": settings})
        assert response.status_code == 400
        assert client.get("/api/config").json()["formatter"]["indentWidth"] == 2
