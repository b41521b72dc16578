"""HTTP surface tests for the local FastAPI service."""

import re

from fastapi.testclient import TestClient

from errors import StoreError
from fakes import FailingStore
from main import create_app

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


def test_root_and_health(client: TestClient) -> None:
    assert client.get("/").json() == {"message": "Message Service Running"}
    assert client.get("/health").json() == {"status": "healthy"}


def test_post_valid_message(client: TestClient) -> None:
    response = client.post("/api/messages", json={"content": "hello"})

    assert response.status_code == 201
    message = response.json()["message"]
    assert message["content"] == "hello"
    assert UUID_PATTERN.match(message["id"])
    assert isinstance(message["createdAt"], int) and message["createdAt"] > 0


def test_post_blank_message(client: TestClient) -> None:
    response = client.post("/api/messages", json={"content": "   "})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_post_too_long_message(client: TestClient) -> None:
    response = client.post("/api/messages", json={"content": "a" * 281})

    assert response.status_code == 400
    assert response.json() == {
        "error": "Message content must be 280 characters or less",
        "code": "VALIDATION_ERROR",
    }


def test_post_without_body(client: TestClient) -> None:
    response = client.post("/api/messages")

    assert response.status_code == 400
    assert response.json()["error"] == "Request body is required"


def test_post_malformed_json(client: TestClient) -> None:
    response = client.post(
        "/api/messages",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "code": "INTERNAL_ERROR"}


def test_get_after_three_posts_is_newest_first(client: TestClient, monkeypatch) -> None:
    clock = iter([1_000, 2_000, 3_000])
    monkeypatch.setattr("models.now_ms", lambda: next(clock))
    for content in ("first", "second", "third"):
        assert client.post("/api/messages", json={"content": content}).status_code == 201

    response = client.get("/api/messages")

    assert response.status_code == 200
    messages = response.json()["messages"]
    assert [m["content"] for m in messages] == ["third", "second", "first"]
    assert [m["createdAt"] for m in messages] == [3_000, 2_000, 1_000]


def test_created_message_round_trips_through_list(client: TestClient) -> None:
    created = client.post("/api/messages", json={"content": "  round trip  "}).json()["message"]

    listed = client.get("/api/messages").json()["messages"]

    assert listed == [created]
    assert created["content"] == "round trip"


def test_list_is_idempotent(client: TestClient) -> None:
    client.post("/api/messages", json={"content": "a"})
    client.post("/api/messages", json={"content": "b"})

    assert client.get("/api/messages").json() == client.get("/api/messages").json()


def test_store_faults_surface_as_database_error(settings) -> None:
    app = create_app(settings, store=FailingStore(StoreError("no such table")))
    with TestClient(app) as failing_client:
        post = failing_client.post("/api/messages", json={"content": "hi"})
        get = failing_client.get("/api/messages")

    assert post.status_code == 500
    assert post.json() == {"error": "Failed to create message", "code": "DATABASE_ERROR"}
    assert get.status_code == 500
    assert get.json() == {"error": "Failed to retrieve messages", "code": "DATABASE_ERROR"}


def test_cors_preflight_from_allowed_origin(client: TestClient) -> None:
    response = client.options(
        "/api/messages",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_cors_preflight_from_unknown_origin_is_rejected(client: TestClient) -> None:
    response = client.options(
        "/api/messages",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers
