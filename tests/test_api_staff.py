"""
Tests for the staff directory API.
"""
from app.models import Complaint
from app.models.base.enums import ComplaintStatus

API = "/api/v1"


class TestStaffDirectory:
    def test_crud(self, client, admin_headers, warden_headers):
        created = client.post(
            f"{API}/staff",
            json={"name": "Lakshmi", "role": "Cook", "shift": "Morning"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        staff_id = created.json()["id"]

        updated = client.put(
            f"{API}/staff/{staff_id}", json={"shift": "Evening"}, headers=admin_headers
        )
        assert updated.json()["shift"] == "Evening"
        assert updated.json()["role"] == "Cook"

        listed = client.get(f"{API}/staff", headers=warden_headers).json()
        assert [s["name"] for s in listed] == ["Lakshmi"]

        assert client.delete(f"{API}/staff/{staff_id}", headers=admin_headers).status_code == 204
        assert client.get(f"{API}/staff", headers=admin_headers).json() == []

    def test_name_cannot_be_cleared(self, client, admin_headers):
        staff_id = client.post(
            f"{API}/staff", json={"name": "Lakshmi", "role": "Cook"}, headers=admin_headers
        ).json()["id"]
        response = client.put(f"{API}/staff/{staff_id}", json={"name": None}, headers=admin_headers)
        assert response.status_code == 400

    def test_unknown_member(self, client, admin_headers):
        response = client.put(f"{API}/staff/missing", json={"shift": "Night"}, headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "STAFF_NOT_FOUND"

    def test_role_gates(self, client, warden_headers, student_headers):
        payload = {"name": "Lakshmi", "role": "Cook"}
        assert client.post(f"{API}/staff", json=payload, headers=warden_headers).status_code == 403
        assert client.get(f"{API}/staff", headers=student_headers).status_code == 403

    def test_delete_unassigns_complaints(self, client, db_session, student, admin_headers):
        staff_id = client.post(
            f"{API}/staff", json={"name": "Ramesh", "role": "Plumber"}, headers=admin_headers
        ).json()["id"]
        complaint = Complaint(
            student_id=student.id,
            title="Blocked drain",
            status=ComplaintStatus.IN_PROGRESS,
            assigned_to_staff_id=staff_id,
        )
        db_session.add(complaint)
        db_session.commit()

        assert client.delete(f"{API}/staff/{staff_id}", headers=admin_headers).status_code == 204

        db_session.refresh(complaint)
        assert complaint.assigned_to_staff_id is None
