"""
일정 API 테스트
"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models import Location, Schedule, User


class TestSchedules:
    """일정 생성/조회/수정/삭제"""

    def test_create_schedule(self, client: TestClient, owner_headers, create_plan, schedule_payload):
        plan = create_plan(owner_headers)

        response = client.post(
            f"/api/plan/{plan['planId']}/schedule/", json=schedule_payload, headers=owner_headers
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["planId"] == plan["planId"]
        assert data["status"] is False
        assert data["travelDayCount"] == 1
        assert data["travelTime"] == "05:30"
        assert data["location"]["name"] == "성산일출봉"
        assert data["vehicle"] == "CAR"
        assert data["budget"]["amount"] == 5000

    def test_schedule_without_vehicle_and_budget(self, client: TestClient, owner_headers, create_plan, schedule_payload):
        plan = create_plan(owner_headers)
        payload = {k: v for k, v in schedule_payload.items() if k not in ("vehicle", "budget")}

        response = client.post(f"/api/plan/{plan['planId']}/schedule/", json=payload, headers=owner_headers)

        assert response.status_code == 201
        assert response.json()["data"]["vehicle"] is None
        assert response.json()["data"]["budget"] is None

    def test_invalid_day_count(self, client: TestClient, owner_headers, create_plan, schedule_payload):
        plan = create_plan(owner_headers)

        response = client.post(
            f"/api/plan/{plan['planId']}/schedule/",
            json={**schedule_payload, "travelDayCount": 0},
            headers=owner_headers,
        )

        assert response.status_code == 422

    def test_non_participant_cannot_add(self, client: TestClient, owner_headers, member_headers, create_plan, schedule_payload):
        plan = create_plan(owner_headers)

        response = client.post(
            f"/api/plan/{plan['planId']}/schedule/", json=schedule_payload, headers=member_headers
        )

        assert response.status_code == 403

    def test_list_schedules_ordered_by_day(self, client: TestClient, owner_headers, create_plan, schedule_payload):
        plan = create_plan(owner_headers)
        url = f"/api/plan/{plan['planId']}/schedule/"
        client.post(url, json={**schedule_payload, "travelDayCount": 2, "description": "둘째 날"}, headers=owner_headers)
        client.post(url, json={**schedule_payload, "travelDayCount": 1, "description": "첫째 날"}, headers=owner_headers)

        response = client.get(url, headers=owner_headers)

        assert response.status_code == 200
        assert [s["description"] for s in response.json()["data"]] == ["첫째 날", "둘째 날"]

    def test_update_schedule(self, client: TestClient, owner_headers, create_plan, schedule_payload):
        plan = create_plan(owner_headers)
        created = client.post(
            f"/api/plan/{plan['planId']}/schedule/", json=schedule_payload, headers=owner_headers
        ).json()["data"]

        response = client.put(
            f"/api/plan/{plan['planId']}/schedule/{created['scheduleId']}",
            json={**schedule_payload, "location": {"name": "우도"}, "vehicle": "SHIP"},
            headers=owner_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["location"]["name"] == "우도"
        assert data["vehicle"] == "SHIP"

    def test_update_copied_schedule_keeps_original_location(
        self, client: TestClient, db_session: Session, member: User,
        owner_headers, member_headers, create_plan, schedule_payload,
    ):
        plan = create_plan(owner_headers)
        original = client.post(
            f"/api/plan/{plan['planId']}/schedule/", json=schedule_payload, headers=owner_headers
        ).json()["data"]
        copied = client.post(f"/api/plan/{plan['planId']}/copy", headers=member_headers).json()["data"]
        copied_schedule = copied["schedules"][0]

        client.put(
            f"/api/plan/{copied['planId']}/schedule/{copied_schedule['scheduleId']}",
            json={**schedule_payload, "location": {"name": "한라산"}},
            headers=member_headers,
        )

        schedule = db_session.query(Schedule).filter(Schedule.schedule_id == original["scheduleId"]).one()
        location = db_session.query(Location).filter(Location.location_id == schedule.location_id).one()
        assert location.name == "성산일출봉"

    def test_toggle_status(self, client: TestClient, owner_headers, create_plan, schedule_payload):
        plan = create_plan(owner_headers)
        created = client.post(
            f"/api/plan/{plan['planId']}/schedule/", json=schedule_payload, headers=owner_headers
        ).json()["data"]
        url = f"/api/plan/{plan['planId']}/schedule/{created['scheduleId']}/status"

        first = client.put(url, headers=owner_headers)
        second = client.put(url, headers=owner_headers)

        assert first.json()["data"]["status"] is True
        assert second.json()["data"]["status"] is False

    def test_delete_schedule(self, client: TestClient, db_session: Session, owner_headers, create_plan, schedule_payload):
        plan = create_plan(owner_headers)
        created = client.post(
            f"/api/plan/{plan['planId']}/schedule/", json=schedule_payload, headers=owner_headers
        ).json()["data"]

        response = client.delete(
            f"/api/plan/{plan['planId']}/schedule/{created['scheduleId']}", headers=owner_headers
        )

        assert response.status_code == 200
        assert db_session.query(Schedule).filter(Schedule.schedule_id == created["scheduleId"]).count() == 0

    def test_schedule_of_other_plan(self, client: TestClient, owner_headers, create_plan, schedule_payload):
        plan = create_plan(owner_headers)
        other_plan = create_plan(owner_headers, title="다른 여행")
        created = client.post(
            f"/api/plan/{plan['planId']}/schedule/", json=schedule_payload, headers=owner_headers
        ).json()["data"]

        response = client.delete(
            f"/api/plan/{other_plan['planId']}/schedule/{created['scheduleId']}", headers=owner_headers
        )

        assert response.status_code == 404
