"""여행 플랜 스키마"""
from datetime import date, datetime

from pydantic import Field, field_validator, model_validator

from ..models import PlanUserStatus, VehicleType
from .common import CamelModel


class PlanRequest(CamelModel):
    """플랜 생성/수정 요청"""

    title: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    start_date: date
    end_date: date
    is_public: bool = False
    total_budget: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("여행 종료일은 시작일보다 빠를 수 없습니다")
        return self


class LocationRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None


class BudgetRequest(CamelModel):
    amount: int = Field(0, ge=0)
    description: str | None = None


class ScheduleRequest(CamelModel):
    """일정 생성/수정 요청"""

    travel_day_count: int = Field(..., ge=1)
    description: str | None = None
    travel_time: str | None = None
    location: LocationRequest
    vehicle: VehicleType | None = None
    budget: BudgetRequest | None = None


class LocationResponse(CamelModel):
    location_id: int
    name: str
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None


class BudgetResponse(CamelModel):
    budget_id: int
    amount: int
    description: str | None = None


class ScheduleResponse(CamelModel):
    schedule_id: int
    plan_id: int
    status: bool
    travel_day_count: int
    description: str | None = None
    travel_time: str | None = None
    location: LocationResponse
    vehicle: VehicleType | None = None
    budget: BudgetResponse | None = None

    @field_validator("vehicle", mode="before")
    @classmethod
    def unwrap_vehicle(cls, v):
        # ORM Vehicle 행을 enum 값으로 변환
        return getattr(v, "vehicle", v)


class CommentRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=1000)


class CommentResponse(CamelModel):
    comment_id: int
    plan_id: int
    user_id: int
    nickname: str | None = None
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PlanUserResponse(CamelModel):
    plan_participant_id: int
    user_id: int
    nickname: str | None = None
    status: PlanUserStatus


class InviteRequest(CamelModel):
    user_id: int


class PlanResponse(CamelModel):
    """플랜 상세 응답"""

    plan_id: int
    title: str
    location: str
    description: str | None = None
    start_date: date
    end_date: date
    is_public: bool
    status: bool
    total_budget: int | None = None
    plan_user_id: int
    plan_user_nickname: str | None = None
    schedules: list[ScheduleResponse] = []
    participants: list[PlanUserResponse] = []
    comment_list: list[CommentResponse] = []
    bookmark_number: int = 0
    like_number: int = 0


class PlanListResponse(CamelModel):
    """플랜 목록 항목"""

    plan_id: int
    title: str
    location: str
    description: str | None = None
    start_date: date
    end_date: date
    bookmark_number: int = 0
    like_number: int = 0
    plan_user_nickname: str | None = None


class LikeResponse(CamelModel):
    liked: bool
    like_number: int


class BookmarkResponse(CamelModel):
    bookmarked: bool
    bookmark_number: int
