"""
플랜 참여자 서비스
초대, 수락/거절, 내보내기/나가기와 채팅방 참여 동기화를 담당합니다.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import BadRequestException, DuplicateException, NotFoundException
from app.models import ChatRoomUser, PlanUser, PlanUserStatus, User
from app.schemas.alarm_schemas import AlarmRequest
from app.services.plan_service import PlanService

logger = logging.getLogger(__name__)


class PlanUserService:
    """플랜 참여자 관리 서비스"""

    def __init__(self, db: Session):
        self.db = db
        self.plan_service = PlanService(db)

    def _get_plan_user(self, plan_id: int, user_id: int) -> PlanUser | None:
        return (
            self.db.query(PlanUser)
            .filter(PlanUser.plan_id == plan_id, PlanUser.user_id == user_id)
            .first()
        )

    def get_participants(self, plan_id: int, user: User) -> list[PlanUser]:
        plan = self.plan_service.get_plan(plan_id)
        self.plan_service.check_readable(plan, user)
        return (
            self.db.query(PlanUser)
            .filter(PlanUser.plan_id == plan.plan_id)
            .order_by(PlanUser.plan_participant_id.asc())
            .all()
        )

    def invite_user(self, plan_id: int, owner: User, invitee_id: int) -> PlanUser:
        """플랜에 사용자 초대 (PENDING 상태로 추가하고 알림 생성)"""
        plan = self.plan_service.get_plan(plan_id)
        self.plan_service.check_owner(plan, owner)

        invitee = self.db.query(User).filter(User.user_id == invitee_id).first()
        if not invitee:
            raise NotFoundException("초대할 사용자를 찾을 수 없습니다.")

        plan_user = self._get_plan_user(plan.plan_id, invitee.user_id)
        if plan_user and plan_user.status != PlanUserStatus.REJECTED:
            raise DuplicateException("이미 초대되었거나 참여 중인 사용자입니다.")

        if plan_user:
            # 거절했던 사용자는 다시 초대 가능
            plan_user.status = PlanUserStatus.PENDING
        else:
            plan_user = PlanUser(
                plan_id=plan.plan_id, user_id=invitee.user_id, status=PlanUserStatus.PENDING
            )
            self.db.add(plan_user)
        self.db.commit()
        self.db.refresh(plan_user)
        logger.info(f"플랜 초대: plan {plan.plan_id} -> user {invitee.user_id}")

        self.plan_service.alarm_service.create_alarm_safely(
            AlarmRequest(
                member_id=invitee.user_id,
                alarm_content=f"[{plan.title}] 플랜에 초대되었습니다.",
            )
        )
        return plan_user

    def _get_pending(self, plan_id: int, user: User) -> PlanUser:
        plan_user = self._get_plan_user(plan_id, user.user_id)
        if not plan_user or plan_user.status != PlanUserStatus.PENDING:
            raise NotFoundException("대기 중인 초대가 없습니다.")
        return plan_user

    def accept_invitation(self, plan_id: int, user: User) -> PlanUser:
        """초대 수락 후 플랜 채팅방에 참여"""
        plan = self.plan_service.get_plan(plan_id)
        plan_user = self._get_pending(plan.plan_id, user)
        plan_user.status = PlanUserStatus.ACCEPTED

        chat_service = self.plan_service.chat_service
        room = chat_service.get_room_by_plan(plan.plan_id)
        if room is None:
            room = chat_service.create_chat_room(plan, plan.plan_user, commit=False)
        chat_service.add_user(room, user, commit=False)

        self.db.commit()
        self.db.refresh(plan_user)
        logger.info(f"초대 수락: plan {plan.plan_id}, user {user.user_id}")

        self.plan_service.alarm_service.create_alarm_safely(
            AlarmRequest(
                member_id=plan.plan_user_id,
                alarm_content=f"[{plan.title}] 플랜에 {user.nickname}님이 참여했습니다.",
            )
        )
        return plan_user

    def reject_invitation(self, plan_id: int, user: User) -> PlanUser:
        plan = self.plan_service.get_plan(plan_id)
        plan_user = self._get_pending(plan.plan_id, user)
        plan_user.status = PlanUserStatus.REJECTED
        self.db.commit()
        self.db.refresh(plan_user)
        logger.info(f"초대 거절: plan {plan.plan_id}, user {user.user_id}")
        return plan_user

    def remove_participant(self, plan_id: int, current_user: User, target_user_id: int) -> None:
        """참여자 내보내기 (생성자) 또는 플랜 나가기 (본인)"""
        plan = self.plan_service.get_plan(plan_id)

        if target_user_id == plan.plan_user_id:
            raise BadRequestException("플랜 생성자는 플랜에서 나갈 수 없습니다.")
        if target_user_id != current_user.user_id:
            self.plan_service.check_owner(plan, current_user)

        plan_user = self._get_plan_user(plan.plan_id, target_user_id)
        if not plan_user:
            raise NotFoundException("플랜 참여자를 찾을 수 없습니다.")

        self.db.delete(plan_user)
        room = self.plan_service.chat_service.get_room_by_plan(plan.plan_id)
        if room is not None:
            self.db.query(ChatRoomUser).filter(
                ChatRoomUser.room_id == room.room_id,
                ChatRoomUser.user_id == target_user_id,
            ).delete(synchronize_session=False)
        self.db.commit()
        logger.info(f"플랜 참여자 제거: plan {plan.plan_id}, user {target_user_id}")


def get_plan_user_service(db: Session = Depends(get_db)) -> PlanUserService:
    return PlanUserService(db)
