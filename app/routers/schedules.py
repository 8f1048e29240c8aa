from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user
from app.models import User
from app.schemas.common import ApiResponse, success_response
from app.schemas.plan_schemas import ScheduleRequest, ScheduleResponse
from app.services.schedule_service import ScheduleService, get_schedule_service

router = APIRouter(prefix="/plan/{plan_id}/schedule", tags=["schedules"])


@router.get("/", response_model=ApiResponse[list[ScheduleResponse]])
def list_schedules(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
):
    schedules = service.get_schedules(plan_id, current_user)
    return success_response([ScheduleResponse.model_validate(s) for s in schedules], "일정 조회 성공")


@router.post("/", response_model=ApiResponse[ScheduleResponse], status_code=status.HTTP_201_CREATED)
def create_schedule(
    plan_id: int,
    dto: ScheduleRequest,
    current_user: User = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
):
    schedule = service.create_schedule(plan_id, current_user, dto)
    return success_response(ScheduleResponse.model_validate(schedule), "일정 생성 성공")


@router.put("/{schedule_id}", response_model=ApiResponse[ScheduleResponse])
def update_schedule(
    plan_id: int,
    schedule_id: int,
    dto: ScheduleRequest,
    current_user: User = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
):
    schedule = service.update_schedule(plan_id, schedule_id, current_user, dto)
    return success_response(ScheduleResponse.model_validate(schedule), "일정 수정 성공")


@router.put("/{schedule_id}/status", response_model=ApiResponse[ScheduleResponse])
def toggle_schedule_status(
    plan_id: int,
    schedule_id: int,
    current_user: User = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
):
    schedule = service.toggle_status(plan_id, schedule_id, current_user)
    return success_response(ScheduleResponse.model_validate(schedule), "일정 상태 변경 성공")


@router.delete("/{schedule_id}", response_model=ApiResponse[None])
def delete_schedule(
    plan_id: int,
    schedule_id: int,
    current_user: User = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
):
    service.delete_schedule(plan_id, schedule_id, current_user)
    return success_response(None, "일정 삭제 성공")
