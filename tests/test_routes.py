"""
HTTP tests for the API routes.

The engine singleton is replaced with one wired to in-memory fakes;
TestClient is used without its context manager so startup (database
connect) never runs.
"""
from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from portal.app import app
from portal.models import CalendarEvent
from portal.routes.auth import create_token
from portal.services import engine_service
from portal.services.calendar_service import CalendarService
from portal.services.mention_service import MentionService
from portal.services.notification_service import NotificationService
from portal.services.post_service import PostService
from portal.services.recipient_service import RecipientService

from conftest import FakeCalendarStorage, FakeMemberStorage, FakeNotificationStorage, FakePostStorage, mention


@pytest.fixture
def engine(roster, monkeypatch):
    member_storage = FakeMemberStorage(roster)
    notification_storage = FakeNotificationStorage()
    notification_service = NotificationService(
        member_storage=member_storage,
        notification_storage=notification_storage,
    )
    fake = SimpleNamespace(
        is_initialized=True,
        member_storage=member_storage,
        notification_storage=notification_storage,
        notification_service=notification_service,
        post_service=PostService(
            post_storage=FakePostStorage(),
            member_storage=member_storage,
            mention_service=MentionService(),
            recipient_service=RecipientService(),
            notification_service=notification_service,
        ),
        calendar_service=CalendarService(FakeCalendarStorage([
            CalendarEvent(id="mt", title="MT", date=date(2024, 5, 1), end_date=date(2024, 5, 2)),
            CalendarEvent(id="dev-sync", title="개발부 회의", date=date(2024, 5, 2), allowed_departments=["개발부"]),
        ])),
    )
    monkeypatch.setattr(engine_service, "_engine_service", fake)
    return fake


@pytest.fixture
def client(engine):
    return TestClient(app)


def auth(member_id):
    return {"Authorization": f"Bearer {create_token(member_id)}"}


class TestAuth:
    """Bearer token dependency"""

    def test_missing_header(self, client):
        assert client.get("/api/v1/posts").status_code == 401

    def test_malformed_header(self, client):
        response = client.get("/api/v1/posts", headers={"Authorization": "Token abc"})
        assert response.status_code == 401

    def test_inactive_member_rejected(self, client):
        assert client.get("/api/v1/posts", headers=auth(7)).status_code == 401

    def test_unknown_member_rejected(self, client):
        assert client.get("/api/v1/posts", headers=auth(999)).status_code == 401


class TestPostRoutes:
    """/posts"""

    def test_create_post_notifies_department_and_mentions(self, client, engine):
        response = client.post(
            "/api/v1/posts",
            headers=auth(1),
            json={
                "title": "개발부 공지",
                "content": f"<p>{mention(5, '정기획')} 확인 부탁</p>",
                "permission": {"read": "특정 부서", "allowedDepartments": ["개발부"]},
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["post"]["permission"]["read"] == "특정 부서"
        assert body["notifications"]["notified"] == [5, 2, 3, 4, 6]
        assert body["notifications"]["emails_scheduled"] == 0
        assert len(engine.notification_storage.records) == 5

    def test_unknown_permission_level(self, client):
        response = client.post(
            "/api/v1/posts",
            headers=auth(1),
            json={"title": "t", "permission": {"read": "비밀"}},
        )
        assert response.status_code == 400

    def test_blank_title(self, client):
        response = client.post("/api/v1/posts", headers=auth(1), json={"title": "  "})
        assert response.status_code == 400

    def test_read_permission_enforced(self, client):
        created = client.post(
            "/api/v1/posts",
            headers=auth(3),
            json={"title": "메모", "permission": {"read": "작성자만"}},
        ).json()["post"]

        own = client.get(f"/api/v1/posts/{created['id']}", headers=auth(3))
        assert own.status_code == 200
        assert own.json()["post"]["canEdit"] is True

        assert client.get(f"/api/v1/posts/{created['id']}", headers=auth(1)).status_code == 403
        assert client.get("/api/v1/posts", headers=auth(1)).json()["posts"] == []

    def test_search_query(self, client):
        client.post("/api/v1/posts", headers=auth(1), json={"title": "정기 회의 안내"})
        client.post("/api/v1/posts", headers=auth(1), json={"title": "MT 공지"})

        posts = client.get("/api/v1/posts", params={"search": "회의"}, headers=auth(3)).json()["posts"]

        assert [p["title"] for p in posts] == ["정기 회의 안내"]

    def test_unknown_category(self, client):
        response = client.post("/api/v1/posts", headers=auth(1), json={"title": "t", "category": "자유"})
        assert response.status_code == 400

    def test_missing_post(self, client):
        assert client.get("/api/v1/posts/404", headers=auth(1)).status_code == 404


class TestCalendarRoutes:
    """/calendar"""

    def test_day_index_filtered_by_department(self, client):
        params = {"start": "2024-05-01", "end": "2024-05-31"}

        dev_days = client.get("/api/v1/calendar/days", params=params, headers=auth(3)).json()["days"]
        plan_days = client.get("/api/v1/calendar/days", params=params, headers=auth(5)).json()["days"]

        assert [e["id"] for e in dev_days["2024-05-02"]] == ["mt", "dev-sync"]
        assert [e["id"] for e in plan_days["2024-05-02"]] == ["mt"]
        assert list(plan_days) == ["2024-05-01", "2024-05-02"]

    def test_reversed_window(self, client):
        response = client.get(
            "/api/v1/calendar/days",
            params={"start": "2024-05-31", "end": "2024-05-01"},
            headers=auth(3),
        )
        assert response.status_code == 400

    def test_window_too_large(self, client):
        response = client.get(
            "/api/v1/calendar/days",
            params={"start": "2024-01-01", "end": "2025-06-01"},
            headers=auth(3),
        )
        assert response.status_code == 400

    def test_restricted_event_hidden(self, client):
        assert client.get("/api/v1/calendar/events/dev-sync", headers=auth(3)).status_code == 200
        assert client.get("/api/v1/calendar/events/dev-sync", headers=auth(5)).status_code == 404


class TestNotificationRoutes:
    """/notifications"""

    def test_read_flow(self, client):
        client.post(
            "/api/v1/posts",
            headers=auth(1),
            json={"title": "호출", "content": mention(5) + mention(5)},
        )

        assert client.get("/api/v1/notifications/unread-count", headers=auth(5)).json() == {"count": 1}
        items = client.get("/api/v1/notifications", headers=auth(5)).json()["notifications"]
        assert len(items) == 1

        assert client.post(f"/api/v1/notifications/{items[0]['id']}/read", headers=auth(3)).status_code == 404
        assert client.post(f"/api/v1/notifications/{items[0]['id']}/read", headers=auth(5)).status_code == 200
        assert client.get("/api/v1/notifications/unread-count", headers=auth(5)).json() == {"count": 0}

    def test_read_all(self, client):
        response = client.post("/api/v1/notifications/read-all", headers=auth(5))
        assert response.json() == {"success": True, "updated": 0}


class TestHealth:
    def test_ready(self, client):
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True
        assert response.json()["email_enabled"] is False

    def test_not_ready_before_startup(self, client, engine):
        engine.is_initialized = False
        assert client.get("/api/v1/health/ready").status_code == 503

    def test_live(self, client):
        assert client.get("/api/v1/health/live").json()["alive"] is True
