from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user
from app.models import User
from app.schemas.common import ApiResponse, success_response
from app.schemas.plan_schemas import CommentRequest, CommentResponse
from app.services.plan_service import PlanService, get_plan_service, to_comment_response

router = APIRouter(prefix="/plan/{plan_id}/comment", tags=["comments"])


@router.get("/", response_model=ApiResponse[list[CommentResponse]])
def list_comments(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    plan = service.get_plan(plan_id)
    service.check_readable(plan, current_user)
    comments = service.comment_service.get_comments_by_plan(plan)
    return success_response([to_comment_response(c) for c in comments], "댓글 조회 성공")


@router.post("/", response_model=ApiResponse[CommentResponse], status_code=status.HTTP_201_CREATED)
def create_comment(
    plan_id: int,
    dto: CommentRequest,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    """댓글 작성 (작성자가 플랜 생성자가 아니면 생성자에게 알림)"""
    plan = service.get_plan(plan_id)
    service.check_readable(plan, current_user)
    comment = service.comment_service.create_comment(plan, current_user, dto)
    return success_response(to_comment_response(comment), "댓글 작성 성공")


@router.put("/{comment_id}", response_model=ApiResponse[CommentResponse])
def update_comment(
    plan_id: int,
    comment_id: int,
    dto: CommentRequest,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    plan = service.get_plan(plan_id)
    comment = service.comment_service.update_comment(plan, comment_id, current_user, dto)
    return success_response(to_comment_response(comment), "댓글 수정 성공")


@router.delete("/{comment_id}", response_model=ApiResponse[None])
def delete_comment(
    plan_id: int,
    comment_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    plan = service.get_plan(plan_id)
    service.comment_service.delete_comment(plan, comment_id, current_user)
    return success_response(None, "댓글 삭제 성공")
