from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.models import User
from app.schemas.common import ApiResponse, success_response
from app.schemas.plan_schemas import BookmarkResponse
from app.services.plan_service import PlanService, get_plan_service

router = APIRouter(prefix="/plan/{plan_id}/bookmark", tags=["bookmarks"])


@router.post("/", response_model=ApiResponse[BookmarkResponse])
def toggle_bookmark(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    """북마크 토글"""
    plan = service.get_plan(plan_id)
    service.check_readable(plan, current_user)
    bookmarked = service.bookmark_service.toggle_bookmark(current_user, plan)
    return success_response(
        BookmarkResponse(bookmarked=bookmarked, bookmark_number=service.bookmark_service.count_bookmark(plan)),
        "북마크 등록 성공" if bookmarked else "북마크 취소 성공",
    )


@router.get("/", response_model=ApiResponse[BookmarkResponse])
def get_bookmark_status(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    plan = service.get_plan(plan_id)
    return success_response(
        BookmarkResponse(
            bookmarked=service.bookmark_service.is_bookmarked(current_user, plan),
            bookmark_number=service.bookmark_service.count_bookmark(plan),
        ),
        "북마크 상태 조회 성공",
    )
