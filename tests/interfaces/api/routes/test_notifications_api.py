"""HTTP tests for the notification endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.interfaces.api.dependencies import get_broadcaster
from main import create_app


@pytest.fixture()
def client(broadcaster):
    app = create_app()
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster
    with TestClient(app) as test_client:
        yield test_client


def _create(client, headers, **payload):
    body = {"title": "Holiday", "message": "College closed on Friday"}
    body.update(payload)
    return client.post("/notifications", json=body, headers=headers)


def test_create_returns_201_with_envelope(
    client, auth_headers, admin, make_user, broadcaster
):
    student = make_user("asha")

    response = _create(
        client, auth_headers(admin), category="Holiday", targetType="individual", targetIds=[student.id]
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["sent_count"] == 1
    assert body["data"]["receivers"][0]["user_id"] == student.id
    assert body["data"]["sender"]["username"] == "admin"
    assert broadcaster.identities == [student.id]


def test_create_without_title_returns_400(client, auth_headers, admin):
    response = client.post(
        "/notifications", json={"message": "No title"}, headers=auth_headers(admin)
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Title and message are required"}


def test_create_rejects_malformed_payload_with_envelope(client, auth_headers, admin):
    response = _create(client, auth_headers(admin), requireAck="not-a-bool")

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_admin_routes_reject_students(client, auth_headers, make_user):
    student = make_user("ravi")

    response = client.get("/notifications", headers=auth_headers(student))

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Admin access required"}


def test_requests_without_token_are_unauthorized(client):
    response = client.get("/notifications/me")

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_listing_includes_pagination_and_stats(client, auth_headers, admin):
    for index in range(3):
        _create(client, auth_headers(admin), title=f"Notice {index}", category="Academic")

    response = client.get(
        "/notifications",
        params={"category": "Academic", "page": 2, "limit": 2},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["notifications"]) == 1
    assert data["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}
    assert data["stats"]["total"] == 3
    assert data["stats"]["by_category"] == [{"category": "Academic", "count": 3}]


def test_listing_with_invalid_status_returns_400(client, auth_headers, admin):
    response = client.get(
        "/notifications", params={"status": "archived"}, headers=auth_headers(admin)
    )

    assert response.status_code == 400


def test_detail_reports_engagement(client, auth_headers, admin, make_user):
    readers = [make_user("a"), make_user("b"), make_user("c")]
    created = _create(
        client,
        auth_headers(admin),
        targetType="individual",
        targetIds=[user.id for user in readers],
    ).json()["data"]

    client.put(f"/notifications/{created['id']}/read", headers=auth_headers(readers[0]))
    response = client.get(f"/notifications/{created['id']}", headers=auth_headers(admin))

    assert response.status_code == 200
    stats = response.json()["data"]["stats"]
    assert stats == {
        "totalReceivers": 3,
        "readCount": 1,
        "ackCount": 0,
        "readPercentage": 33.33,
    }


def test_detail_of_missing_notification_returns_404(client, auth_headers, admin):
    response = client.get("/notifications/999", headers=auth_headers(admin))

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Notification not found"}


def test_update_ignores_sender(client, auth_headers, admin, make_user):
    other = make_user("other")
    created = _create(client, auth_headers(admin)).json()["data"]

    response = client.put(
        f"/notifications/{created['id']}",
        json={"title": "Holiday moved", "sender": other.id, "sender_id": other.id},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Holiday moved"
    assert data["sender_id"] == admin.id


def test_delete_missing_notification_returns_404(client, auth_headers, admin):
    kept = _create(client, auth_headers(admin)).json()["data"]

    response = client.delete("/notifications/4242", headers=auth_headers(admin))

    assert response.status_code == 404
    still_there = client.get(f"/notifications/{kept['id']}", headers=auth_headers(admin))
    assert still_there.status_code == 200


def test_delete_removes_notification(client, auth_headers, admin):
    created = _create(client, auth_headers(admin)).json()["data"]

    response = client.delete(f"/notifications/{created['id']}", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert (
        client.get(f"/notifications/{created['id']}", headers=auth_headers(admin)).status_code
        == 404
    )


def test_mark_read_twice_counts_once(client, auth_headers, admin, make_user):
    student = make_user("tara")
    created = _create(
        client, auth_headers(admin), targetType="individual", targetIds=[student.id]
    ).json()["data"]

    for _ in range(2):
        response = client.put(
            f"/notifications/{created['id']}/read", headers=auth_headers(student)
        )
        assert response.status_code == 200

    detail = client.get(f"/notifications/{created['id']}", headers=auth_headers(admin))
    assert detail.json()["data"]["notification"]["read_count"] == 1


def test_my_notifications_show_read_state(client, auth_headers, admin, make_user):
    student = make_user("zoya")
    created = _create(
        client, auth_headers(admin), targetType="individual", targetIds=[student.id], requireAck=True
    ).json()["data"]

    unread = client.get(
        "/notifications/me", params={"unread": True}, headers=auth_headers(student)
    )
    assert [item["id"] for item in unread.json()["data"]] == [created["id"]]
    assert unread.json()["data"][0]["read"] is False

    client.put(f"/notifications/{created['id']}/acknowledge", headers=auth_headers(student))
    client.get("/notifications/me", params={"mark_read": True}, headers=auth_headers(student))

    after = client.get("/notifications/me", headers=auth_headers(student)).json()["data"]
    assert after[0]["read"] is True
    assert after[0]["acknowledged"] is True


def test_stats_endpoint(client, auth_headers, admin):
    _create(client, auth_headers(admin), priority="urgent", category="Emergency")
    _create(client, auth_headers(admin), priority="low")

    response = client.get("/notifications/stats", headers=auth_headers(admin))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["overview"]["total"] == 2
    assert [item["priority"] for item in data["priority_distribution"]] == ["low", "urgent"]
    assert len(data["recent_activity"]) == 1


def test_send_now_pushes_scheduled_notification(
    client, auth_headers, admin, make_user, broadcaster
):
    student = make_user("omar")
    created = _create(
        client,
        auth_headers(admin),
        targetType="individual",
        targetIds=[student.id],
        scheduleAt="2999-01-01T00:00:00+05:30",
    ).json()["data"]
    assert created["sent_at"] is None
    assert broadcaster.identity_events == []

    response = client.post(f"/notifications/{created['id']}/send", headers=auth_headers(admin))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["pushed"] is True
    assert data["notification"]["sent_at"] is not None
    assert broadcaster.identities == [student.id]
