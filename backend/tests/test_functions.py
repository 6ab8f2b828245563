"""Tests for the serverless handler: routing, status codes, and CORS headers."""
import base64
import json

import pytest

from songbooth import functions
from songbooth.routing import FAILURE_MESSAGES, ROUTE_METHODS, failure_message, resolve_route


def _call(method, path, body=None, query=None, raw_body=None):
    event = {"httpMethod": method, "path": path, "queryStringParameters": query}
    if body is not None:
        event["body"] = json.dumps(body)
    if raw_body is not None:
        event["body"] = raw_body
    resp = functions.handler(event, None)
    return resp["statusCode"], json.loads(resp["body"]), resp["headers"]


def _create(artist="Daft Punk", title="One More Time"):
    code, body, _ = _call("POST", "/api/requests", {"artist": artist, "title": title})
    assert code == 201, body
    return body


class TestResolveRoute:

    @pytest.mark.parametrize("path,query,expected", [
        ("/api/requests", None, ("requests", None)),
        ("/.netlify/functions/requests", None, ("requests", None)),
        ("/api/requests/abc", None, ("request", "abc")),
        ("/api/requests/abc/status", None, ("status", "abc")),
        ("/.netlify/functions/status/abc", None, ("status", "abc")),
        ("/.netlify/functions/status", {"id": "abc"}, ("status", "abc")),
        ("/.netlify/functions/delete-request/abc", None, ("request", "abc")),
        ("/api/feedback", None, ("feedback", None)),
        ("/api/unknown", None, (None, None)),
        ("/.netlify/functions/status", None, (None, None)),
        ("", None, (None, None)),
    ])
    def test_paths(self, path, query, expected):
        assert resolve_route(path, query) == expected

    @pytest.mark.parametrize("path,method,expected", [
        ("/api/requests", "POST", "Failed to create request"),
        ("/.netlify/functions/status/abc", "PATCH", "Failed to update request status"),
        ("/api/health", "GET", "Internal server error"),
    ])
    def test_failure_messages(self, path, method, expected):
        assert failure_message(path, method) == expected

    def test_every_allowed_method_has_an_operation(self):
        pairs = {(route, m) for route, methods in ROUTE_METHODS.items() for m in methods}
        assert pairs == set(functions.OPERATIONS) == set(FAILURE_MESSAGES)


class TestHandler:

    def test_create_and_list(self, function_store):
        first = _create(title="First")
        second = _create(title="Second")
        code, body, headers = _call("GET", "/api/requests")
        assert code == 200
        assert [r["id"] for r in body] == [second["id"], first["id"]]
        assert headers["Access-Control-Allow-Origin"] == "*"
        assert first["status"] is None
        assert "requestedAt" in first

    def test_status_update(self, function_store):
        created = _create()
        code, body, _ = _call("PATCH", f"/api/requests/{created['id']}/status", {"status": "coming-up"})
        assert code == 200
        assert body["status"] == "coming-up"

    def test_status_update_via_query_id(self, function_store):
        created = _create()
        code, body, _ = _call("PATCH", "/.netlify/functions/status", {"status": "played"}, query={"id": created["id"]})
        assert code == 200
        assert body["status"] == "played"

    def test_status_validation(self, function_store):
        created = _create()
        code, body, _ = _call("PATCH", f"/api/requests/{created['id']}/status", {"status": "unknown-status"})
        assert code == 400
        assert [e["field"] for e in body["errors"]] == ["status"]

    def test_status_unknown_id(self, function_store):
        code, body, _ = _call("PATCH", "/api/requests/nope/status", {"status": "played"})
        assert code == 404
        assert body == {"message": "Request not found"}

    def test_create_validation_lists_fields(self, function_store):
        code, body, _ = _call("POST", "/api/requests", {})
        assert code == 400
        assert {e["field"] for e in body["errors"]} == {"artist", "title"}

    def test_missing_body(self, function_store):
        code, body, _ = _call("POST", "/api/feedback")
        assert code == 400
        assert body["errors"][0]["field"] == "body"

    def test_malformed_json(self, function_store):
        code, body, _ = _call("POST", "/api/feedback", raw_body="{not json")
        assert code == 400
        assert body["errors"][0]["field"] == "body"

    def test_base64_not_decodable(self, function_store):
        event = {"httpMethod": "POST", "path": "/api/feedback", "isBase64Encoded": True, "body": "@@@notb64"}
        resp = functions.handler(event, None)
        assert resp["statusCode"] == 400
        assert json.loads(resp["body"])["errors"][0]["field"] == "body"

    def test_base64_body_not_utf8(self, function_store):
        event = {
            "httpMethod": "POST",
            "path": "/api/feedback",
            "isBase64Encoded": True,
            "body": base64.b64encode(b'{"message": "\xff\xfe"}').decode(),
        }
        resp = functions.handler(event, None)
        assert resp["statusCode"] == 400
        assert json.loads(resp["body"])["errors"][0]["field"] == "body"
        assert function_store._feedback == {}

    def test_base64_body(self, function_store):
        event = {
            "httpMethod": "POST",
            "path": "/api/feedback",
            "isBase64Encoded": True,
            "body": base64.b64encode(json.dumps({"message": "Great set!"}).encode()).decode(),
        }
        resp = functions.handler(event, None)
        assert resp["statusCode"] == 201

    def test_delete(self, function_store):
        keep = _create(title="Keep")
        drop = _create(title="Drop")
        code, body, _ = _call("DELETE", f"/.netlify/functions/delete-request/{drop['id']}")
        assert code == 200
        assert body["deletedRequest"]["id"] == drop["id"]
        _, listed, _ = _call("GET", "/api/requests")
        assert [r["id"] for r in listed] == [keep["id"]]

    def test_delete_unknown_is_404(self, function_store):
        _create()
        code, _, _ = _call("DELETE", "/api/requests/nope")
        assert code == 404
        _, listed, _ = _call("GET", "/api/requests")
        assert len(listed) == 1

    def test_feedback_persisted(self, function_store):
        code, body, _ = _call("POST", "/api/feedback", {"message": "Great set!"})
        assert code == 201
        assert body["submittedAt"]
        assert body["id"] in function_store._feedback

    def test_options(self, function_store):
        code, _, headers = _call("OPTIONS", "/api/requests/abc/status")
        assert code == 200
        assert headers["Access-Control-Allow-Methods"] == "PATCH, OPTIONS"

    def test_method_not_allowed(self, function_store):
        code, body, headers = _call("PUT", "/api/requests")
        assert code == 405
        assert body == {"message": "Method not allowed"}
        assert headers["Access-Control-Allow-Methods"] == "GET, POST, OPTIONS"
        assert _call("GET", "/api/feedback")[0] == 405

    def test_unknown_path(self, function_store):
        code, body, _ = _call("GET", "/api/nothing-here")
        assert code == 404
        assert body == {"message": "Not found"}

    def test_store_fault_is_500(self, function_store, monkeypatch):
        async def broken():
            raise RuntimeError("connection refused: db.internal:5432")

        monkeypatch.setattr(function_store, "list_requests", broken)
        code, body, _ = _call("GET", "/api/requests")
        assert code == 500
        assert body == {"message": "Failed to fetch requests"}
