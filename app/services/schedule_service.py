import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundException
from app.models import Budget, Location, Schedule, User, Vehicle
from app.schemas.plan_schemas import ScheduleRequest
from app.services.plan_service import PlanService

logger = logging.getLogger(__name__)


class ScheduleService:
    """플랜 일정 서비스"""

    def __init__(self, db: Session):
        self.db = db
        self.plan_service = PlanService(db)

    def get_schedules(self, plan_id: int, user: User) -> list[Schedule]:
        plan = self.plan_service.get_plan(plan_id)
        self.plan_service.check_readable(plan, user)
        return (
            self.db.query(Schedule)
            .filter(Schedule.plan_id == plan.plan_id)
            .order_by(Schedule.travel_day_count.asc(), Schedule.schedule_id.asc())
            .all()
        )

    def _get_schedule(self, plan_id: int, schedule_id: int) -> Schedule:
        schedule = (
            self.db.query(Schedule)
            .filter(Schedule.schedule_id == schedule_id, Schedule.plan_id == plan_id)
            .first()
        )
        if not schedule:
            raise NotFoundException("일정을 찾을 수 없습니다.")
        return schedule

    def _apply(self, schedule: Schedule, dto: ScheduleRequest) -> None:
        # 장소/이동수단/예산 행은 복사된 플랜과 공유될 수 있으므로 항상 새 행을 만든다
        schedule.travel_day_count = dto.travel_day_count
        schedule.description = dto.description
        schedule.travel_time = dto.travel_time
        schedule.location = Location(**dto.location.model_dump())
        schedule.vehicle = Vehicle(vehicle=dto.vehicle) if dto.vehicle else None
        schedule.budget = Budget(**dto.budget.model_dump()) if dto.budget else None

    def create_schedule(self, plan_id: int, user: User, dto: ScheduleRequest) -> Schedule:
        plan = self.plan_service.get_plan(plan_id)
        self.plan_service.check_accepted_participant(plan, user)

        schedule = Schedule(plan_id=plan.plan_id, status=False)
        self._apply(schedule, dto)
        self.db.add(schedule)
        self.db.commit()
        self.db.refresh(schedule)
        logger.info(f"일정 생성: schedule {schedule.schedule_id} (plan {plan.plan_id})")
        return schedule

    def update_schedule(self, plan_id: int, schedule_id: int, user: User, dto: ScheduleRequest) -> Schedule:
        plan = self.plan_service.get_plan(plan_id)
        self.plan_service.check_accepted_participant(plan, user)

        schedule = self._get_schedule(plan.plan_id, schedule_id)
        self._apply(schedule, dto)
        self.db.commit()
        self.db.refresh(schedule)
        return schedule

    def toggle_status(self, plan_id: int, schedule_id: int, user: User) -> Schedule:
        """일정 완료 여부 토글"""
        plan = self.plan_service.get_plan(plan_id)
        self.plan_service.check_accepted_participant(plan, user)

        schedule = self._get_schedule(plan.plan_id, schedule_id)
        schedule.status = not schedule.status
        self.db.commit()
        self.db.refresh(schedule)
        return schedule

    def delete_schedule(self, plan_id: int, schedule_id: int, user: User) -> None:
        plan = self.plan_service.get_plan(plan_id)
        self.plan_service.check_accepted_participant(plan, user)

        schedule = self._get_schedule(plan.plan_id, schedule_id)
        self.db.delete(schedule)
        self.db.commit()
        logger.info(f"일정 삭제: schedule {schedule_id}")


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    return ScheduleService(db)
