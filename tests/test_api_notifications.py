"""
Tests for the notification inbox API.
"""
from sqlalchemy import select

from app.models import Notification
from app.services.notification import NotificationHub, NotificationService

API = "/api/v1"


def send(db_session, user_id, *titles):
    service = NotificationService(db_session, hub=NotificationHub())
    for title in titles:
        service.notify_user(user_id, title, "body")


class TestInbox:
    def test_read_all_only_touches_own_unread(
        self, client, db_session, admin_user, warden_user, admin_headers
    ):
        send(db_session, admin_user.id, "One", "Two", "Three")
        send(db_session, warden_user.id, "Theirs")
        inbox = client.get(f"{API}/notifications", headers=admin_headers).json()
        [first] = [n for n in inbox if n["title"] == "One"]
        client.post(f"{API}/notifications/{first['id']}/read", headers=admin_headers)

        response = client.post(f"{API}/notifications/read-all", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"updated": 2}
        inbox = client.get(f"{API}/notifications", headers=admin_headers).json()
        assert all(n["is_read"] for n in inbox)
        assert db_session.scalar(
            select(Notification.is_read).where(Notification.user_id == warden_user.id)
        ) is False

    def test_read_all_with_nothing_unread(self, client, admin_headers):
        response = client.post(f"{API}/notifications/read-all", headers=admin_headers)
        assert response.json() == {"updated": 0}

    def test_read_all_requires_login(self, client, db_session):
        assert client.post(f"{API}/notifications/read-all").status_code == 401
