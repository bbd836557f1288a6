"""
test_flask_backend.py
---------------------
Test suite for the Flask glue and the example service.

Coverage
~~~~~~~~
Group A – to_json_response() adapter (no app required)
Group B – GET /api/health
Group C – POST /api/echo
Group D – Global error handlers (404, 405, 500)
Group E – Response body shape

All tests use Flask's built-in test client.

Response body (all routes)
~~~~~~~~~~~~~~~~~~~~~~~~~~
Every response uses the annotated shape::

    {"result": str, "message": str, "user_messages": [...], "data": ...}
"""

import sys
import os
import json
import logging

import pytest

# ---------------------------------------------------------------------------
# Make the example service importable from the repo root
# ---------------------------------------------------------------------------
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "backend"))

from app import create_app  # noqa: E402  (must come after sys.path tweak)

from annotated_response import AnnotatedResponse, HttpError, LogLevel  # noqa: E402
from annotated_response.flask_response import (  # noqa: E402
    EXPOSE_ERRORS_KEY,
    HIDDEN_ERROR_MESSAGE,
    to_json_response,
)

BODY_KEYS = ["result", "message", "user_messages", "data"]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def app():
    """Return the example app with two extra routes that raise."""
    application = create_app()
    application.config["TESTING"] = True

    @application.route("/boom")
    def boom():
        raise RuntimeError("kaboom")

    @application.route("/forbidden")
    def forbidden():
        raise HttpError("Access denied", code=403)

    return application


@pytest.fixture()
def client(app):
    """Return a Flask test client with testing mode enabled."""
    with app.test_client() as c:
        yield c


# ===========================================================================
# Group A – Adapter
# ===========================================================================

class TestToJsonResponse:
    def test_created_body_is_exact(self):
        response = to_json_response(
            AnnotatedResponse.create()
            .set_result("created")
            .set_http_status(201)
        )
        assert response.status_code == 201
        assert response.get_data(as_text=True) == (
            '{"result":"created","message":"","user_messages":[],"data":{}}'
        )

    def test_content_type_is_json(self):
        response = to_json_response(AnnotatedResponse.create())
        assert response.mimetype == "application/json"

    def test_status_passes_through(self):
        response = to_json_response(AnnotatedResponse.create().set_http_status(418))
        assert response.status_code == 418

    def test_extra_headers_are_sent(self):
        response = to_json_response(AnnotatedResponse.create(), headers={"X-Trace": "abc"})
        assert response.headers["X-Trace"] == "abc"

    def test_key_order_is_not_sorted(self, app):
        with app.app_context():
            response = to_json_response(
                AnnotatedResponse.create().set_data({"b": 1, "a": 2})
            )
        body = response.get_data(as_text=True)
        assert list(json.loads(body)) == BODY_KEYS
        assert body.index('"b"') < body.index('"a"')

    def test_user_messages_are_encoded(self):
        response = to_json_response(
            AnnotatedResponse.create()
            .add_user_message(LogLevel.NOTICE, "You've got mail!", {"count": 3})
        )
        assert json.loads(response.get_data(as_text=True))["user_messages"] == [
            {"level": "notice", "message": "You've got mail!", "context": {"count": 3}},
        ]


# ===========================================================================
# Group B – Health endpoint
# ===========================================================================

class TestHealth:
    def test_returns_200(self, client):
        r = client.get("/api/health")
        assert r.status_code == 200

    def test_returns_json(self, client):
        r = client.get("/api/health")
        assert r.content_type == "application/json"

    def test_result_succeeded(self, client):
        r = client.get("/api/health")
        assert r.get_json()["result"] == "succeeded"

    def test_body_data_content(self, client):
        r = client.get("/api/health")
        assert r.get_json()["data"] == {"status": "ok"}

    def test_post_not_allowed(self, client):
        r = client.post("/api/health")
        assert r.status_code == 405


# ===========================================================================
# Group C – Echo endpoint
# ===========================================================================

class TestEcho:
    def test_returns_201_created(self, client):
        r = client.post("/api/echo", json={"name": "alice"})
        assert r.status_code == 201
        assert r.get_json()["result"] == "created"

    def test_data_is_request_body(self, client):
        r = client.post("/api/echo", json={"name": "alice", "age": 30})
        assert r.get_json()["data"] == {"name": "alice", "age": 30}

    def test_user_message_has_context(self, client):
        r = client.post("/api/echo", json={"name": "alice", "age": 30})
        assert r.get_json()["user_messages"] == [
            {"level": "info", "message": "Stored {count} field(s).", "context": {"count": 2}},
        ]

    def test_non_json_body_returns_400(self, client):
        r = client.post("/api/echo", data="not-json", content_type="text/plain")
        assert r.status_code == 400
        assert r.get_json()["result"] == "failed"
        assert r.get_json()["message"] == "Request body must be a JSON object."

    def test_json_array_returns_400(self, client):
        r = client.post("/api/echo", json=[1, 2, 3])
        assert r.status_code == 400


# ===========================================================================
# Group D – Global error handlers
# ===========================================================================

class TestGlobalErrorHandlers:
    def test_unknown_route_returns_404_json(self, client):
        r = client.get("/api/nonexistent")
        assert r.status_code == 404
        assert r.content_type == "application/json"
        assert r.get_json()["result"] == "failed"
        assert r.get_json()["message"]

    def test_wrong_method_returns_405_with_allow_header(self, client):
        r = client.delete("/api/health")
        assert r.status_code == 405
        assert r.content_type == "application/json"
        assert "GET" in r.headers["Allow"]
        assert r.get_json()["result"] == "failed"

    def test_http_error_keeps_its_code_and_message(self, client):
        r = client.get("/forbidden")
        assert r.status_code == 403
        assert r.get_json()["message"] == "Access denied"

    def test_unhandled_error_returns_500_with_hidden_message(self, client):
        r = client.get("/boom")
        assert r.status_code == 500
        assert r.get_json()["result"] == "failed"
        assert r.get_json()["message"] == HIDDEN_ERROR_MESSAGE

    def test_unhandled_error_message_exposed_when_configured(self, app):
        app.config[EXPOSE_ERRORS_KEY] = True
        r = app.test_client().get("/boom")
        assert r.status_code == 500
        assert r.get_json()["message"] == "kaboom"

    def test_unhandled_error_is_logged(self, client, caplog):
        with caplog.at_level(logging.ERROR, logger="annotated_response.flask_response"):
            client.get("/boom")
        assert "Unhandled server error" in caplog.text


# ===========================================================================
# Group E – Response body shape
# ===========================================================================

class TestResponseBody:
    """Every response carries the same four keys, in order."""

    def _keys(self, r) -> list:
        return list(json.loads(r.get_data(as_text=True)))

    def test_health_body(self, client):
        assert self._keys(client.get("/api/health")) == BODY_KEYS

    def test_echo_body(self, client):
        assert self._keys(client.post("/api/echo", json={"a": 1})) == BODY_KEYS

    def test_validation_error_body(self, client):
        assert self._keys(client.post("/api/echo", json=[])) == BODY_KEYS

    def test_404_body(self, client):
        assert self._keys(client.get("/api/nonexistent")) == BODY_KEYS

    def test_405_body(self, client):
        assert self._keys(client.delete("/api/health")) == BODY_KEYS

    def test_500_body(self, client):
        assert self._keys(client.get("/boom")) == BODY_KEYS
