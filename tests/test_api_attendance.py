"""
Tests for the attendance API.
"""
import pytest

from app.services.attendance import month_bounds
from tests.conftest import auth_headers_for

API = "/api/v1"


def mark(client, headers, marks, day="2024-05-03", session="Day"):
    return client.post(
        f"{API}/attendance/mark",
        json={"date": day, "session": session, "marks": marks},
        headers=headers,
    )


@pytest.mark.parametrize(
    "month,bounds",
    [
        ("2024-05", ("2024-05-01", "2024-06-01")),
        ("2024-12-19", ("2024-12-01", "2025-01-01")),
    ],
)
def test_month_bounds(month, bounds):
    start, end = month_bounds(month)
    assert (start.isoformat(), end.isoformat()) == bounds


class TestMark:
    def test_remarking_overwrites_slot(self, client, student, warden_headers, admin_headers):
        first = mark(client, warden_headers, [{"student_id": student.id, "status": "Absent"}])
        second = mark(client, warden_headers, [{"student_id": student.id, "status": "Present"}])
        night = mark(
            client, warden_headers, [{"student_id": student.id, "status": "Absent"}], session="Night"
        )

        assert first.json() == {"saved": 1}
        assert second.json() == {"saved": 1}
        assert night.json() == {"saved": 1}
        [row] = client.get(
            f"{API}/attendance/summary", params={"month": "2024-05"}, headers=admin_headers
        ).json()
        assert row["date"] == "2024-05-03"
        assert (row["present_day"], row["absent_day"]) == (1, 0)
        assert (row["present_night"], row["absent_night"]) == (0, 1)
        assert (row["present"], row["absent"]) == (1, 1)
        assert row["student_name"] == student.user.full_name

    def test_unknown_student_rejects_whole_batch(self, client, student, warden_headers):
        response = mark(
            client,
            warden_headers,
            [
                {"student_id": student.id, "status": "Present"},
                {"student_id": "missing", "status": "Present"},
            ],
        )
        assert response.status_code == 404
        summary = client.get(
            f"{API}/attendance/summary", params={"month": "2024-05"}, headers=warden_headers
        )
        assert summary.json() == []

    def test_students_cannot_mark(self, client, student, student_headers):
        response = mark(client, student_headers, [{"student_id": student.id, "status": "Present"}])
        assert response.status_code == 403


class TestSummary:
    def test_student_sees_only_own_rows(self, client, student_factory, warden_headers):
        mine, theirs = student_factory(), student_factory()
        mark(
            client,
            warden_headers,
            [
                {"student_id": mine.id, "status": "Present"},
                {"student_id": theirs.id, "status": "Absent"},
            ],
        )

        own = client.get(
            f"{API}/attendance/summary",
            params={"month": "2024-05"},
            headers=auth_headers_for(mine.user),
        ).json()
        everyone = client.get(
            f"{API}/attendance/summary", params={"month": "2024-05"}, headers=warden_headers
        ).json()

        assert [row["student_id"] for row in own] == [mine.id]
        assert {row["student_id"] for row in everyone} == {mine.id, theirs.id}

    def test_other_months_excluded(self, client, student, warden_headers):
        mark(client, warden_headers, [{"student_id": student.id, "status": "Present"}], day="2024-04-30")
        response = client.get(
            f"{API}/attendance/summary", params={"month": "2024-05"}, headers=warden_headers
        )
        assert response.json() == []

    def test_bad_month(self, client, warden_headers):
        response = client.get(
            f"{API}/attendance/summary", params={"month": "May"}, headers=warden_headers
        )
        assert response.status_code == 400
