"""
알림 서비스
플랜 수정, 초대, 댓글 등의 이벤트를 사용자 알림으로 저장합니다.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import ForbiddenException, NotFoundException
from app.models import Alarm, User
from app.schemas.alarm_schemas import AlarmRequest

logger = logging.getLogger(__name__)


class AlarmService:
    """알림 서비스 클래스"""

    def __init__(self, db: Session):
        self.db = db

    def create_alarm(self, request: AlarmRequest) -> Alarm:
        """알림 생성"""
        user = self.db.query(User).filter(User.user_id == request.member_id).first()
        if not user:
            raise NotFoundException("알림 대상 사용자를 찾을 수 없습니다.")

        alarm = Alarm(user_id=user.user_id, alarm_content=request.alarm_content)
        self.db.add(alarm)
        self.db.commit()
        self.db.refresh(alarm)

        logger.info(f"Alarm created: {alarm.alarm_id} -> user {user.user_id}")
        return alarm

    def create_alarm_safely(self, request: AlarmRequest) -> Alarm | None:
        """
        알림 생성 (best effort)

        호출한 쪽의 트랜잭션은 이미 커밋된 상태이므로 알림 생성 실패는
        기록만 하고 전파하지 않습니다.
        """
        try:
            return self.create_alarm(request)
        except Exception as e:
            self.db.rollback()
            logger.error(f"알림 생성 실패 (user {request.member_id}): {e}")
            return None

    def get_alarms(self, user: User) -> list[Alarm]:
        return (
            self.db.query(Alarm)
            .filter(Alarm.user_id == user.user_id)
            .order_by(Alarm.created_at.desc(), Alarm.alarm_id.desc())
            .all()
        )

    def _get_own_alarm(self, alarm_id: int, user: User) -> Alarm:
        alarm = self.db.query(Alarm).filter(Alarm.alarm_id == alarm_id).first()
        if not alarm:
            raise NotFoundException("알림을 찾을 수 없습니다.")
        if alarm.user_id != user.user_id:
            raise ForbiddenException("본인의 알림만 처리할 수 있습니다.")
        return alarm

    def check_alarm(self, alarm_id: int, user: User) -> Alarm:
        """알림 읽음 처리"""
        alarm = self._get_own_alarm(alarm_id, user)
        alarm.is_checked = True
        self.db.commit()
        self.db.refresh(alarm)
        return alarm

    def delete_alarm(self, alarm_id: int, user: User) -> None:
        alarm = self._get_own_alarm(alarm_id, user)
        self.db.delete(alarm)
        self.db.commit()

    def delete_all_alarms(self, user: User) -> int:
        deleted = self.db.query(Alarm).filter(Alarm.user_id == user.user_id).delete()
        self.db.commit()
        logger.info(f"알림 전체 삭제: user {user.user_id}, {deleted}건")
        return deleted


def get_alarm_service(db: Session = Depends(get_db)) -> AlarmService:
    return AlarmService(db)
