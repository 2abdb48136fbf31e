"""
Error handling and response-shape tests.

- Client errors carry a JSON body with a human-readable ``message``
- Internal failures answer with a generic message and keep details in the log
- Malformed requests are client errors (400), never 500
"""

import logging

import pytest
from fastapi.testclient import TestClient

from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceError,
    ServiceValidationError,
    StorageError,
    UnauthorizedError,
)
from main import app
from services.meal_service import MealService
from services.poop_service import PoopService
from test_fixtures import auth_headers, backend, client, context, register_user


@pytest.mark.parametrize(
    "exc_class, status",
    [
        (ServiceValidationError, 400),
        (ConflictError, 400),
        (UnauthorizedError, 401),
        (NotFoundError, 404),
        (StorageError, 500),
    ],
)
def test_error_taxonomy_status_codes(exc_class, status):
    err = exc_class("boom")

    assert isinstance(err, ServiceError)
    assert err.http_status == status
    assert err.to_dict() == {"message": "boom"}
    assert str(err) == "boom"


def test_error_default_message_and_details():
    err = NotFoundError(details={"id": "x"}, code="NOT_FOUND")

    assert err.to_dict() == {"message": "Not found", "code": "NOT_FOUND", "details": {"id": "x"}}


def test_invalid_json_is_400(client):
    r = client.post(
        "/api/auth/login",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert r.status_code == 400
    assert r.json()["message"] == "Request validation failed"
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_wrong_field_type_is_400(client):
    token, _ = register_user(client)

    r = client.post("/api/poops", json={"description": 42}, headers=auth_headers(token))

    assert r.status_code == 400


def test_unknown_route_is_json_404(client):
    r = client.get("/api/nothing-here")

    assert r.status_code == 404
    assert r.json() == {"message": "Not Found"}


def test_wrong_method_is_405(client):
    r = client.patch("/api/poops")

    assert r.status_code == 405
    assert "message" in r.json()


def test_storage_error_hides_details(client, monkeypatch, caplog):
    token, _ = register_user(client)

    def failing(db, owner_id):
        raise StorageError("secret-bucket credentials rejected")

    monkeypatch.setattr(MealService, "list_meals", failing)

    with caplog.at_level(logging.ERROR, logger="gutcheck.middleware"):
        r = client.get("/api/meals", headers=auth_headers(token))

    assert r.status_code == 500
    assert r.json() == {"message": "An unexpected error occurred"}
    assert "secret-bucket" in caplog.text


def test_unexpected_exception_is_generic_500(client, monkeypatch):
    token, _ = register_user(client)

    def failing(db, owner_id):
        raise RuntimeError("database exploded at 0xdeadbeef")

    monkeypatch.setattr(PoopService, "list_poops", failing)
    safe_client = TestClient(app, raise_server_exceptions=False)

    r = safe_client.get("/api/poops", headers=auth_headers(token))

    assert r.status_code == 500
    assert r.json() == {"message": "An unexpected error occurred"}
    assert "deadbeef" not in r.text


def test_not_found_and_unauthorized_bodies(client):
    token, _ = register_user(client)

    missing = client.get("/api/poops/000000000000000000000000", headers=auth_headers(token))
    anonymous = client.get("/api/poops/000000000000000000000000")

    assert missing.json() == {"message": "Poop entry not found"}
    assert anonymous.json() == {"message": "Authorization header missing"}
