from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.models import User
from app.schemas.common import ApiResponse, success_response
from app.schemas.plan_schemas import LikeResponse
from app.services.plan_service import PlanService, get_plan_service

router = APIRouter(prefix="/plan/{plan_id}/like", tags=["likes"])


@router.post("/", response_model=ApiResponse[LikeResponse])
def toggle_like(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    """좋아요 토글"""
    plan = service.get_plan(plan_id)
    service.check_readable(plan, current_user)
    liked = service.like_service.toggle_like(current_user, plan)
    return success_response(
        LikeResponse(liked=liked, like_number=service.like_service.count_like(plan)),
        "좋아요 등록 성공" if liked else "좋아요 취소 성공",
    )


@router.get("/", response_model=ApiResponse[LikeResponse])
def get_like_status(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    plan = service.get_plan(plan_id)
    return success_response(
        LikeResponse(
            liked=service.like_service.is_liked(current_user, plan),
            like_number=service.like_service.count_like(plan),
        ),
        "좋아요 상태 조회 성공",
    )
