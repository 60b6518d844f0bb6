"""Tests for the HTTP shell."""

import base64
from uuid import uuid4

from fastapi.testclient import TestClient

from donation_board.api.app import create_app
from tests.conftest import (
    FakeChangeFeed,
    FakePhotoStorage,
    InMemoryListingRepository,
    make_user,
)

LISTING = {
    "title": "Desk lamp",
    "description": "Warm light",
    "category": "Electronics",
    "location": "Lyon",
    "condition": "LIKE_NEW",
    "tags": ["lamp", "desk"],
}


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_startup_subscribes_and_runs_first_search(
    container,
    listing_repository: InMemoryListingRepository,
    change_feed: FakeChangeFeed,
) -> None:
    listing_repository.add(title="Sofa")

    with TestClient(create_app(container)) as client:
        session = client.get("/session").json()
        results = client.get("/search/results").json()
        assert change_feed.subscribed is True

    assert session == {"user": None, "is_loading": False}
    assert results["results"]["total"] == 1
    assert results["results"]["items"][0]["title"] == "Sofa"
    assert results["error"] is None
    assert change_feed.subscribed is False


def test_theme_toggle_is_persisted(container) -> None:
    client = TestClient(create_app(container))

    updated = client.put("/preferences/theme", json={"is_dark_mode": True})
    current = client.get("/preferences/theme")

    assert updated.json() == {"is_dark_mode": True, "mode": "dark"}
    assert current.json() == updated.json()
    assert container.store.storage.load() == {"is_dark_mode": True}


def test_theme_write_failure_is_reported_as_notification(
    container, monkeypatch
) -> None:
    client = TestClient(create_app(container))

    def fail_save(state: dict[str, object]) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(container.store.storage, "save", fail_save)
    response = client.put("/preferences/theme", json={"is_dark_mode": True})
    notifications = client.get("/notifications").json()

    assert response.status_code == 200
    assert response.json() == {"is_dark_mode": True, "mode": "dark"}
    assert [item["kind"] for item in notifications] == ["error"]


def test_sign_up_sign_out_flow(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/auth/sign-up",
        json={
            "email": "dana@example.com",
            "password": "secret1",
            "full_name": "Dana",
            "role": "DONOR",
        },
    )
    signed_in = client.get("/session").json()
    client.post("/auth/sign-out")

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "dana@example.com"
    assert signed_in["user"]["email"] == "dana@example.com"
    assert client.get("/session").json()["user"] is None


def test_listing_requires_sign_in(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/listings", json=LISTING)

    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "validation"


def test_create_list_and_delete_listing(
    container, photo_storage: FakePhotoStorage
) -> None:
    container.store.set_user(make_user())
    client = TestClient(create_app(container))
    photo = {
        "filename": "lamp.png",
        "content_type": "image/png",
        "content": base64.b64encode(b"png-bytes").decode(),
    }

    created = client.post("/listings", json={**LISTING, "photos": [photo]})
    listing_id = created.json()["id"]
    dashboard = client.get("/dashboard").json()
    deleted = client.delete(f"/listings/{listing_id}")

    assert created.status_code == 200
    assert created.json()["tags"] == ["lamp", "desk"]
    assert photo_storage.objects == {}
    assert len(photo_storage.removed) == 1
    assert dashboard["stats"]["total_donations"] == 1
    assert dashboard["items"][0]["id"] == listing_id
    assert deleted.status_code == 200
    assert client.get("/dashboard").json()["items"] == []


def test_editing_another_users_listing_is_forbidden(
    container, listing_repository: InMemoryListingRepository
) -> None:
    listing = listing_repository.add()
    container.store.set_user(make_user())
    client = TestClient(create_app(container))

    response = client.patch(f"/listings/{listing.id}", json=LISTING)

    assert response.status_code == 403


def test_search_failure_offers_retry(
    container, listing_repository: InMemoryListingRepository
) -> None:
    listing_repository.add(title="Bike", category="Sports")
    listing_repository.add(title="Novel", category="Books")
    container.search_view.debouncer.delay_seconds = 60

    with TestClient(create_app(container)) as client:
        listing_repository.fail_search = True
        client.put("/search/filters", json={"category": "Sports"})
        failed = client.post("/search/refresh").json()
        notifications = client.get("/notifications").json()
        listing_repository.fail_search = False
        retried = client.post("/search/retry").json()
        client.delete(f"/notifications/{notifications[0]['id']}")
        remaining = client.get("/notifications").json()

    assert failed["error"]["retryable"] is True
    assert failed["results"]["total"] == 2
    assert len(notifications) == 1
    assert notifications[0]["retry_action"] == "search"
    assert retried["error"] is None
    assert retried["filters"]["category"] == "Sports"
    assert [item["title"] for item in retried["results"]["items"]] == ["Bike"]
    assert remaining == []


def test_unknown_product_is_not_found(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/products/{uuid4()}")

    assert response.status_code == 404


def test_send_and_list_messages(container) -> None:
    container.store.set_user(make_user())
    client = TestClient(create_app(container))
    other = uuid4()

    sent = client.post(f"/chats/{other}/messages", json={"content": "Still free?"})
    chats = client.get("/chats").json()
    conversation = client.get(f"/chats/{other}/messages").json()

    assert sent.status_code == 200
    assert chats[0]["counterpart_id"] == str(other)
    assert [message["content"] for message in conversation] == ["Still free?"]
