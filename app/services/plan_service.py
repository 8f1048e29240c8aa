"""
여행 플랜 서비스
플랜 생성/수정/삭제/복사와 목록 응답 조립을 담당합니다.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import ForbiddenException, NotFoundException
from app.models import Plan, PlanUser, PlanUserStatus, Schedule, User
from app.schemas.alarm_schemas import AlarmRequest
from app.schemas.plan_schemas import (
    CommentResponse,
    PlanListResponse,
    PlanRequest,
    PlanResponse,
    PlanUserResponse,
    ScheduleResponse,
)
from app.services.alarm_service import AlarmService
from app.services.bookmark_service import BookmarkService
from app.services.chat_service import ChatService
from app.services.comment_service import CommentService
from app.services.like_service import LikeService

logger = logging.getLogger(__name__)

PLAN_NOT_FOUND = "여행 플랜을 찾을 수 없습니다."


def to_plan_user_response(plan_user: PlanUser) -> PlanUserResponse:
    return PlanUserResponse(
        plan_participant_id=plan_user.plan_participant_id,
        user_id=plan_user.user_id,
        nickname=plan_user.user.nickname if plan_user.user else None,
        status=plan_user.status,
    )


def to_comment_response(comment) -> CommentResponse:
    return CommentResponse(
        comment_id=comment.comment_id,
        plan_id=comment.plan_id,
        user_id=comment.user_id,
        nickname=comment.user.nickname if comment.user else None,
        content=comment.content,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


class PlanService:
    """여행 플랜 서비스"""

    def __init__(self, db: Session):
        self.db = db
        self.bookmark_service = BookmarkService(db)
        self.like_service = LikeService(db)
        self.comment_service = CommentService(db)
        self.alarm_service = AlarmService(db)
        self.chat_service = ChatService(db)

    # ----- 조회 / 권한 -----

    def get_plan(self, plan_id: int) -> Plan:
        plan = self.db.query(Plan).filter(Plan.plan_id == plan_id).first()
        if not plan:
            raise NotFoundException(PLAN_NOT_FOUND)
        return plan

    def is_accepted_participant(self, plan: Plan, user: User) -> bool:
        return (
            self.db.query(PlanUser)
            .filter(
                PlanUser.plan_id == plan.plan_id,
                PlanUser.user_id == user.user_id,
                PlanUser.status == PlanUserStatus.ACCEPTED,
            )
            .first()
            is not None
        )

    def check_accepted_participant(self, plan: Plan, user: User) -> None:
        if not self.is_accepted_participant(plan, user):
            raise ForbiddenException("플랜 참여자만 수행할 수 있습니다.")

    def check_owner(self, plan: Plan, user: User) -> None:
        if plan.plan_user_id != user.user_id:
            raise ForbiddenException("플랜 생성자만 수행할 수 있습니다.")

    def check_readable(self, plan: Plan, user: User) -> None:
        """비공개 플랜은 참여자만 조회 가능"""
        if not plan.is_public and not self.is_accepted_participant(plan, user):
            raise ForbiddenException("비공개 플랜입니다.")

    # ----- 생성 / 수정 / 삭제 -----

    def create_plan(self, dto: PlanRequest, user: User) -> Plan:
        """플랜 생성 (생성자를 ACCEPTED 참여자로 추가하고 채팅방 생성)"""
        plan = Plan(**dto.model_dump(), status=False, plan_user_id=user.user_id)
        plan.plan_users = [PlanUser(status=PlanUserStatus.ACCEPTED, user_id=user.user_id)]
        self.db.add(plan)
        self.db.flush()

        self.chat_service.create_chat_room(plan, user, commit=False)
        self.db.commit()
        self.db.refresh(plan)

        logger.info(f"플랜 생성: plan {plan.plan_id} by user {user.user_id}")
        return plan

    def update_plan(self, plan_id: int, dto: PlanRequest, user: User) -> Plan:
        plan = self.get_plan(plan_id)
        self.check_accepted_participant(plan, user)

        for key, value in dto.model_dump().items():
            setattr(plan, key, value)
        self.db.commit()
        self.db.refresh(plan)
        logger.info(f"플랜 수정: plan {plan.plan_id}")

        self.alarm_service.create_alarm_safely(
            AlarmRequest(
                member_id=plan.plan_user_id,
                alarm_content=f"[{plan.title}] 플랜이 수정되었습니다.",
            )
        )
        return plan

    def delete_plan(self, plan_id: int, user: User) -> None:
        plan = self.get_plan(plan_id)
        self.check_owner(plan, user)

        self.chat_service.delete_room_by_plan(plan.plan_id, commit=False)
        self.db.delete(plan)
        self.db.commit()
        logger.info(f"플랜 삭제: plan {plan_id}")

    def copy_plan(self, plan_id: int, user: User) -> Plan:
        """플랜 복사 (일정 포함, 비공개/미완료 상태로 현재 사용자 소유)"""
        plan = self.get_plan(plan_id)
        self.check_readable(plan, user)

        new_plan = Plan(
            title=plan.title,
            location=plan.location,
            description=plan.description,
            start_date=plan.start_date,
            end_date=plan.end_date,
            is_public=False,
            status=False,
            total_budget=plan.total_budget,
            plan_user_id=user.user_id,
        )
        new_plan.schedules = [
            Schedule(
                status=False,
                travel_day_count=schedule.travel_day_count,
                description=schedule.description,
                travel_time=schedule.travel_time,
                location_id=schedule.location_id,
            )
            for schedule in plan.schedules
        ]
        new_plan.plan_users = [PlanUser(status=PlanUserStatus.ACCEPTED, user_id=user.user_id)]
        self.db.add(new_plan)
        self.db.flush()

        self.chat_service.create_chat_room(new_plan, user, commit=False)
        self.db.commit()
        self.db.refresh(new_plan)

        logger.info(f"플랜 복사: plan {plan_id} -> plan {new_plan.plan_id}")
        return new_plan

    # ----- 응답 조립 -----

    def to_plan_response(self, plan: Plan, with_comments: bool = False) -> PlanResponse:
        comment_list = []
        if with_comments:
            comment_list = [
                to_comment_response(c) for c in self.comment_service.get_comments_by_plan(plan)
            ]
        return PlanResponse(
            plan_id=plan.plan_id,
            title=plan.title,
            location=plan.location,
            description=plan.description,
            start_date=plan.start_date,
            end_date=plan.end_date,
            is_public=plan.is_public,
            status=plan.status,
            total_budget=plan.total_budget,
            plan_user_id=plan.plan_user_id,
            plan_user_nickname=plan.plan_user.nickname,
            schedules=[ScheduleResponse.model_validate(s) for s in plan.schedules],
            participants=[to_plan_user_response(pu) for pu in plan.plan_users],
            comment_list=comment_list,
            bookmark_number=self.bookmark_service.count_bookmark(plan),
            like_number=self.like_service.count_like(plan),
        )

    def convert_to_plan_list_response(self, plan: Plan) -> PlanListResponse:
        return PlanListResponse(
            plan_id=plan.plan_id,
            title=plan.title,
            location=plan.location,
            description=plan.description,
            start_date=plan.start_date,
            end_date=plan.end_date,
            bookmark_number=self.bookmark_service.count_bookmark(plan),
            like_number=self.like_service.count_like(plan),
            plan_user_nickname=plan.plan_user.nickname,
        )

    def get_plan_details(self, plan_id: int, user: User) -> PlanResponse:
        plan = self.get_plan(plan_id)
        self.check_readable(plan, user)
        return self.to_plan_response(plan, with_comments=True)

    def get_plan_for_modify(self, plan_id: int, user: User) -> PlanResponse:
        plan = self.get_plan(plan_id)
        self.check_accepted_participant(plan, user)
        return self.to_plan_response(plan)

    # ----- 목록 -----

    def get_public_plans(self) -> list[PlanListResponse]:
        plans = (
            self.db.query(Plan)
            .filter(Plan.is_public.is_(True))
            .order_by(Plan.plan_id.desc())
            .all()
        )
        return [self.convert_to_plan_list_response(plan) for plan in plans]

    def get_specific_plans(self, keyword: str) -> list[PlanListResponse]:
        plans = (
            self.db.query(Plan)
            .filter(Plan.is_public.is_(True), Plan.title.contains(keyword))
            .order_by(Plan.plan_id.desc())
            .all()
        )
        return [self.convert_to_plan_list_response(plan) for plan in plans]

    def get_my_plans(self, user: User) -> list[PlanListResponse]:
        plans = (
            self.db.query(Plan)
            .join(PlanUser, PlanUser.plan_id == Plan.plan_id)
            .filter(
                PlanUser.user_id == user.user_id,
                PlanUser.status == PlanUserStatus.ACCEPTED,
            )
            .order_by(Plan.start_date.desc(), Plan.plan_id.desc())
            .all()
        )
        return [self.convert_to_plan_list_response(plan) for plan in plans]

    def get_recent_bookmarked_plans(self, user: User) -> list[PlanListResponse]:
        plans = self.bookmark_service.get_recent_bookmarked_plans_by_user(user.user_id)
        return [self.convert_to_plan_list_response(plan) for plan in plans]

    def get_all_bookmarked_plans(self, user: User) -> list[PlanListResponse]:
        plans = self.bookmark_service.get_all_bookmarked_plans_by_user(user.user_id)
        return [self.convert_to_plan_list_response(plan) for plan in plans]

    def get_recent_liked_plans(self, user: User) -> list[PlanListResponse]:
        plans = self.like_service.get_recent_liked_plans_by_user(user.user_id)
        return [self.convert_to_plan_list_response(plan) for plan in plans]

    def get_all_liked_plans(self, user: User) -> list[PlanListResponse]:
        plans = self.like_service.get_all_liked_plans_by_user(user.user_id)
        return [self.convert_to_plan_list_response(plan) for plan in plans]


def get_plan_service(db: Session = Depends(get_db)) -> PlanService:
    return PlanService(db)
