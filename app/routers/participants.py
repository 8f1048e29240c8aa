from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.models import User
from app.schemas.common import ApiResponse, success_response
from app.schemas.plan_schemas import InviteRequest, PlanUserResponse
from app.services.plan_service import to_plan_user_response
from app.services.plan_user_service import PlanUserService, get_plan_user_service

router = APIRouter(prefix="/plan/{plan_id}/participants", tags=["plan participants"])


@router.get("/", response_model=ApiResponse[list[PlanUserResponse]])
def list_participants(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanUserService = Depends(get_plan_user_service),
):
    participants = service.get_participants(plan_id, current_user)
    return success_response([to_plan_user_response(pu) for pu in participants], "참여자 목록 조회 성공")


@router.post("/invite", response_model=ApiResponse[PlanUserResponse])
def invite(
    plan_id: int,
    dto: InviteRequest,
    current_user: User = Depends(get_current_user),
    service: PlanUserService = Depends(get_plan_user_service),
):
    """플랜에 사용자 초대 (생성자만)"""
    plan_user = service.invite_user(plan_id, current_user, dto.user_id)
    return success_response(to_plan_user_response(plan_user), "초대 성공")


@router.post("/accept", response_model=ApiResponse[PlanUserResponse])
def accept(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanUserService = Depends(get_plan_user_service),
):
    plan_user = service.accept_invitation(plan_id, current_user)
    return success_response(to_plan_user_response(plan_user), "초대 수락 성공")


@router.post("/reject", response_model=ApiResponse[PlanUserResponse])
def reject(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanUserService = Depends(get_plan_user_service),
):
    plan_user = service.reject_invitation(plan_id, current_user)
    return success_response(to_plan_user_response(plan_user), "초대 거절 성공")


@router.delete("/{user_id}", response_model=ApiResponse[None])
def remove(
    plan_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanUserService = Depends(get_plan_user_service),
):
    """참여자 내보내기 또는 플랜 나가기"""
    service.remove_participant(plan_id, current_user, user_id)
    return success_response(None, "참여자 제거 성공")
