"""
플랜 참여자 초대/수락/거절/제거 테스트
"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models import Alarm, ChatRoom, ChatRoomUser, PlanUser, PlanUserStatus, User


def room_user_ids(db_session: Session, plan_id: int) -> list[int]:
    room = db_session.query(ChatRoom).filter(ChatRoom.plan_id == plan_id).one()
    return sorted(
        ru.user_id
        for ru in db_session.query(ChatRoomUser).filter(ChatRoomUser.room_id == room.room_id).all()
    )


class TestInvite:
    """초대"""

    def test_invite_creates_pending_participant_and_alarm(
        self, client: TestClient, db_session: Session, member: User, owner_headers, create_plan
    ):
        plan = create_plan(owner_headers)

        response = client.post(
            f"/api/plan/{plan['planId']}/participants/invite",
            json={"userId": member.user_id},
            headers=owner_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["userId"] == member.user_id
        assert data["status"] == "PENDING"

        alarm = db_session.query(Alarm).filter(Alarm.user_id == member.user_id).one()
        assert alarm.alarm_content == "[제주도 여행] 플랜에 초대되었습니다."

        # 수락 전에는 채팅방에 참여하지 않음
        assert member.user_id not in room_user_ids(db_session, plan["planId"])

    def test_only_owner_can_invite(
        self, client: TestClient, create_user, member_headers, owner_headers, create_plan
    ):
        plan = create_plan(owner_headers)
        other = create_user("other1")

        response = client.post(
            f"/api/plan/{plan['planId']}/participants/invite",
            json={"userId": other.user_id},
            headers=member_headers,
        )

        assert response.status_code == 403

    def test_invite_twice_is_duplicate(self, client: TestClient, member: User, owner_headers, create_plan):
        plan = create_plan(owner_headers)
        url = f"/api/plan/{plan['planId']}/participants/invite"

        client.post(url, json={"userId": member.user_id}, headers=owner_headers)
        response = client.post(url, json={"userId": member.user_id}, headers=owner_headers)

        assert response.status_code == 409

    def test_invite_unknown_user(self, client: TestClient, owner_headers, create_plan):
        plan = create_plan(owner_headers)

        response = client.post(
            f"/api/plan/{plan['planId']}/participants/invite",
            json={"userId": 9999},
            headers=owner_headers,
        )

        assert response.status_code == 404


class TestRespond:
    """수락/거절"""

    def test_accept_joins_chat_room(
        self, client: TestClient, db_session: Session, owner: User, member: User,
        owner_headers, member_headers, create_plan, invite_and_accept,
    ):
        plan = create_plan(owner_headers)

        invite_and_accept(plan["planId"], member, owner_headers, member_headers)

        plan_user = (
            db_session.query(PlanUser)
            .filter(PlanUser.plan_id == plan["planId"], PlanUser.user_id == member.user_id)
            .one()
        )
        assert plan_user.status == PlanUserStatus.ACCEPTED
        assert room_user_ids(db_session, plan["planId"]) == sorted([owner.user_id, member.user_id])

        owner_alarms = [a.alarm_content for a in db_session.query(Alarm).filter(Alarm.user_id == owner.user_id)]
        assert f"[제주도 여행] 플랜에 {member.nickname}님이 참여했습니다." in owner_alarms

    def test_accepted_member_can_edit(
        self, client: TestClient, member: User, owner_headers, member_headers, create_plan, invite_and_accept, plan_payload
    ):
        plan = create_plan(owner_headers, isPublic=False)
        invite_and_accept(plan["planId"], member, owner_headers, member_headers)

        assert client.get(f"/api/plan/{plan['planId']}", headers=member_headers).status_code == 200
        response = client.put(
            f"/api/plan/{plan['planId']}",
            json={**plan_payload, "title": "함께 수정한 여행"},
            headers=member_headers,
        )
        assert response.status_code == 200

    def test_pending_member_cannot_edit(
        self, client: TestClient, member: User, owner_headers, member_headers, create_plan, plan_payload
    ):
        plan = create_plan(owner_headers)
        client.post(
            f"/api/plan/{plan['planId']}/participants/invite",
            json={"userId": member.user_id},
            headers=owner_headers,
        )

        response = client.put(f"/api/plan/{plan['planId']}", json=plan_payload, headers=member_headers)

        assert response.status_code == 403

    def test_accept_without_invitation(self, client: TestClient, owner_headers, member_headers, create_plan):
        plan = create_plan(owner_headers)

        response = client.post(f"/api/plan/{plan['planId']}/participants/accept", headers=member_headers)

        assert response.status_code == 404

    def test_reject_then_reinvite(
        self, client: TestClient, member: User, owner_headers, member_headers, create_plan
    ):
        plan = create_plan(owner_headers)
        invite_url = f"/api/plan/{plan['planId']}/participants/invite"
        client.post(invite_url, json={"userId": member.user_id}, headers=owner_headers)

        reject = client.post(f"/api/plan/{plan['planId']}/participants/reject", headers=member_headers)
        assert reject.status_code == 200
        assert reject.json()["data"]["status"] == "REJECTED"

        reinvite = client.post(invite_url, json={"userId": member.user_id}, headers=owner_headers)
        assert reinvite.status_code == 200
        assert reinvite.json()["data"]["status"] == "PENDING"

    def test_list_participants(
        self, client: TestClient, owner: User, member: User, owner_headers, member_headers, create_plan, invite_and_accept
    ):
        plan = create_plan(owner_headers)
        invite_and_accept(plan["planId"], member, owner_headers, member_headers)

        response = client.get(f"/api/plan/{plan['planId']}/participants/", headers=owner_headers)

        assert response.status_code == 200
        participants = response.json()["data"]
        assert [p["userId"] for p in participants] == [owner.user_id, member.user_id]
        assert all(p["status"] == "ACCEPTED" for p in participants)


class TestRemove:
    """내보내기/나가기"""

    def test_owner_removes_member(
        self, client: TestClient, db_session: Session, owner: User, member: User,
        owner_headers, member_headers, create_plan, invite_and_accept,
    ):
        plan = create_plan(owner_headers)
        invite_and_accept(plan["planId"], member, owner_headers, member_headers)

        response = client.delete(
            f"/api/plan/{plan['planId']}/participants/{member.user_id}", headers=owner_headers
        )

        assert response.status_code == 200
        assert (
            db_session.query(PlanUser)
            .filter(PlanUser.plan_id == plan["planId"], PlanUser.user_id == member.user_id)
            .count()
            == 0
        )
        assert room_user_ids(db_session, plan["planId"]) == [owner.user_id]

    def test_member_leaves(
        self, client: TestClient, member: User, owner_headers, member_headers, create_plan, invite_and_accept
    ):
        plan = create_plan(owner_headers)
        invite_and_accept(plan["planId"], member, owner_headers, member_headers)

        response = client.delete(
            f"/api/plan/{plan['planId']}/participants/{member.user_id}", headers=member_headers
        )

        assert response.status_code == 200

    def test_member_cannot_remove_others(
        self, client: TestClient, create_user, auth_headers, member: User,
        owner_headers, member_headers, create_plan, invite_and_accept,
    ):
        plan = create_plan(owner_headers)
        other = create_user("other1")
        invite_and_accept(plan["planId"], member, owner_headers, member_headers)
        invite_and_accept(plan["planId"], other, owner_headers, auth_headers(other))

        response = client.delete(
            f"/api/plan/{plan['planId']}/participants/{other.user_id}", headers=member_headers
        )

        assert response.status_code == 403

    def test_owner_cannot_leave(self, client: TestClient, owner: User, owner_headers, create_plan):
        plan = create_plan(owner_headers)

        response = client.delete(
            f"/api/plan/{plan['planId']}/participants/{owner.user_id}", headers=owner_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "플랜 생성자는 플랜에서 나갈 수 없습니다."
