"""
알림 테스트
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.exceptions import NotFoundException
from app.models import Alarm, User
from app.schemas.alarm_schemas import AlarmRequest
from app.services.alarm_service import AlarmService


@pytest.fixture
def alarm_service(db_session: Session) -> AlarmService:
    return AlarmService(db_session)


class TestAlarmService:
    """알림 서비스"""

    def test_create_alarm(self, alarm_service: AlarmService, owner: User):
        alarm = alarm_service.create_alarm(AlarmRequest(member_id=owner.user_id, alarm_content="새 알림"))

        assert alarm.alarm_id is not None
        assert alarm.user_id == owner.user_id
        assert alarm.is_checked is False

    def test_create_alarm_for_unknown_user(self, alarm_service: AlarmService):
        with pytest.raises(NotFoundException):
            alarm_service.create_alarm(AlarmRequest(member_id=9999, alarm_content="없는 사용자"))

    def test_create_alarm_safely_swallows_failure(self, alarm_service: AlarmService):
        assert alarm_service.create_alarm_safely(AlarmRequest(member_id=9999, alarm_content="x")) is None


class TestAlarmApi:
    """알림 API"""

    def test_list_newest_first(self, client: TestClient, alarm_service: AlarmService, owner: User, owner_headers):
        alarm_service.create_alarm(AlarmRequest(member_id=owner.user_id, alarm_content="먼저"))
        alarm_service.create_alarm(AlarmRequest(member_id=owner.user_id, alarm_content="나중"))

        response = client.get("/api/alarms/", headers=owner_headers)

        assert response.status_code == 200
        assert [a["alarmContent"] for a in response.json()["data"]] == ["나중", "먼저"]

    def test_check_alarm(self, client: TestClient, alarm_service: AlarmService, owner: User, owner_headers):
        alarm = alarm_service.create_alarm(AlarmRequest(member_id=owner.user_id, alarm_content="확인할 알림"))

        response = client.put(f"/api/alarms/{alarm.alarm_id}/check", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["data"]["isChecked"] is True

    def test_cannot_touch_others_alarm(
        self, client: TestClient, alarm_service: AlarmService, owner: User, member_headers
    ):
        alarm = alarm_service.create_alarm(AlarmRequest(member_id=owner.user_id, alarm_content="남의 알림"))

        assert client.put(f"/api/alarms/{alarm.alarm_id}/check", headers=member_headers).status_code == 403
        assert client.delete(f"/api/alarms/{alarm.alarm_id}", headers=member_headers).status_code == 403

    def test_delete_alarm(self, client: TestClient, db_session: Session, alarm_service: AlarmService, owner: User, owner_headers):
        alarm = alarm_service.create_alarm(AlarmRequest(member_id=owner.user_id, alarm_content="지울 알림"))
        alarm_id = alarm.alarm_id

        response = client.delete(f"/api/alarms/{alarm_id}", headers=owner_headers)

        assert response.status_code == 200
        assert db_session.query(Alarm).filter(Alarm.alarm_id == alarm_id).count() == 0
        assert client.delete(f"/api/alarms/{alarm_id}", headers=owner_headers).status_code == 404

    def test_delete_all_alarms(
        self, client: TestClient, db_session: Session, alarm_service: AlarmService,
        owner: User, member: User, owner_headers,
    ):
        for content in ("하나", "둘"):
            alarm_service.create_alarm(AlarmRequest(member_id=owner.user_id, alarm_content=content))
        alarm_service.create_alarm(AlarmRequest(member_id=member.user_id, alarm_content="다른 사용자"))

        response = client.delete("/api/alarms/", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["data"] == 2
        assert db_session.query(Alarm).filter(Alarm.user_id == owner.user_id).count() == 0
        assert db_session.query(Alarm).filter(Alarm.user_id == member.user_id).count() == 1
