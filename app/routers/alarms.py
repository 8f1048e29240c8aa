from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.models import User
from app.schemas.alarm_schemas import AlarmResponse
from app.schemas.common import ApiResponse, success_response
from app.services.alarm_service import AlarmService, get_alarm_service

router = APIRouter(prefix="/alarms", tags=["alarms"])


@router.get("/", response_model=ApiResponse[list[AlarmResponse]])
def list_alarms(
    current_user: User = Depends(get_current_user),
    service: AlarmService = Depends(get_alarm_service),
):
    """내 알림 목록 (최신 순)"""
    alarms = service.get_alarms(current_user)
    return success_response([AlarmResponse.model_validate(a) for a in alarms], "알림 조회 성공")


@router.put("/{alarm_id}/check", response_model=ApiResponse[AlarmResponse])
def check_alarm(
    alarm_id: int,
    current_user: User = Depends(get_current_user),
    service: AlarmService = Depends(get_alarm_service),
):
    alarm = service.check_alarm(alarm_id, current_user)
    return success_response(AlarmResponse.model_validate(alarm), "알림 확인 처리 성공")


@router.delete("/{alarm_id}", response_model=ApiResponse[None])
def delete_alarm(
    alarm_id: int,
    current_user: User = Depends(get_current_user),
    service: AlarmService = Depends(get_alarm_service),
):
    service.delete_alarm(alarm_id, current_user)
    return success_response(None, "알림 삭제 성공")


@router.delete("/", response_model=ApiResponse[int])
def delete_all_alarms(
    current_user: User = Depends(get_current_user),
    service: AlarmService = Depends(get_alarm_service),
):
    deleted = service.delete_all_alarms(current_user)
    return success_response(deleted, "알림 전체 삭제 성공")
