"""
Tests for the complaints API.
"""
from sqlalchemy import select

from app.models import Notification, Staff
from tests.conftest import auth_headers_for

API = "/api/v1"


def raise_complaint(client, headers, title="Leaking tap"):
    return client.post(
        f"{API}/complaints",
        json={"title": title, "description": "Bathroom tap drips all night"},
        headers=headers,
    )


class TestRaise:
    def test_admin_and_warden_are_notified(
        self, client, db_session, student, student_headers, admin_user, warden_user
    ):
        response = raise_complaint(client, student_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "Pending"
        assert body["student_id"] == student.id
        assert body["student_name"] == student.user.full_name
        recipients = db_session.scalars(
            select(Notification.user_id).where(Notification.title == "New complaint: Leaking tap")
        ).all()
        assert sorted(recipients) == sorted([admin_user.id, warden_user.id])

    def test_staff_cannot_raise(self, client, warden_headers):
        assert raise_complaint(client, warden_headers).status_code == 403

    def test_blank_title(self, client, student_headers):
        response = raise_complaint(client, student_headers, title="")
        assert response.status_code == 400


class TestListing:
    def test_students_see_only_their_own(self, client, student_factory, admin_headers):
        mine, theirs = student_factory(), student_factory()
        raise_complaint(client, auth_headers_for(mine.user), "Mine")
        raise_complaint(client, auth_headers_for(theirs.user), "Theirs")

        listed = client.get(f"{API}/complaints", headers=auth_headers_for(mine.user)).json()
        own = client.get(f"{API}/complaints/my", headers=auth_headers_for(mine.user)).json()
        everything = client.get(f"{API}/complaints", headers=admin_headers).json()

        assert [c["title"] for c in listed] == ["Mine"]
        assert [c["title"] for c in own] == ["Mine"]
        assert {c["title"] for c in everything} == {"Mine", "Theirs"}


class TestStatus:
    def test_resolve_notifies_student(
        self, client, db_session, student, student_headers, warden_headers
    ):
        complaint_id = raise_complaint(client, student_headers).json()["id"]

        progress = client.put(
            f"{API}/complaints/{complaint_id}/status",
            json={"status": "In Progress"},
            headers=warden_headers,
        )
        resolved = client.put(
            f"{API}/complaints/{complaint_id}/status",
            json={"status": "Resolved"},
            headers=warden_headers,
        )
        again = client.put(
            f"{API}/complaints/{complaint_id}/status",
            json={"status": "Resolved"},
            headers=warden_headers,
        )

        assert progress.json()["status"] == "In Progress"
        assert resolved.json()["status"] == "Resolved"
        assert again.status_code == 200
        titles = db_session.scalars(
            select(Notification.title).where(Notification.user_id == student.user_id)
        ).all()
        assert titles == ["Complaint resolved"]

    def test_assign_and_clear_staff(self, client, db_session, student_headers, admin_headers):
        member = Staff(name="Ramesh", role="Plumber")
        db_session.add(member)
        db_session.commit()
        complaint_id = raise_complaint(client, student_headers).json()["id"]

        assigned = client.put(
            f"{API}/complaints/{complaint_id}/status",
            json={"status": "In Progress", "assigned_to_staff_id": member.id},
            headers=admin_headers,
        ).json()
        kept = client.put(
            f"{API}/complaints/{complaint_id}/status",
            json={"status": "In Progress"},
            headers=admin_headers,
        ).json()
        cleared = client.put(
            f"{API}/complaints/{complaint_id}/status",
            json={"status": "In Progress", "assigned_to_staff_id": None},
            headers=admin_headers,
        ).json()

        assert assigned["assigned_staff_name"] == "Ramesh"
        assert kept["assigned_to_staff_id"] == member.id
        assert cleared["assigned_to_staff_id"] is None

    def test_unknown_staff_member(self, client, student_headers, admin_headers):
        complaint_id = raise_complaint(client, student_headers).json()["id"]
        response = client.put(
            f"{API}/complaints/{complaint_id}/status",
            json={"status": "In Progress", "assigned_to_staff_id": "missing"},
            headers=admin_headers,
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "STAFF_NOT_FOUND"

    def test_unknown_complaint(self, client, admin_headers):
        response = client.put(
            f"{API}/complaints/missing/status", json={"status": "Resolved"}, headers=admin_headers
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "COMPLAINT_NOT_FOUND"

    def test_student_cannot_triage(self, client, student_headers):
        complaint_id = raise_complaint(client, student_headers).json()["id"]
        response = client.put(
            f"{API}/complaints/{complaint_id}/status",
            json={"status": "Resolved"},
            headers=student_headers,
        )
        assert response.status_code == 403
