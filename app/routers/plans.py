from fastapi import APIRouter, Depends, Query, status

from app.auth.dependencies import get_current_user
from app.models import User
from app.schemas.common import ApiResponse, success_response
from app.schemas.plan_schemas import PlanListResponse, PlanRequest, PlanResponse
from app.services.plan_service import PlanService, get_plan_service

router = APIRouter(prefix="/plan", tags=["plans"])


# 정적 경로는 /{plan_id} 보다 먼저 등록해야 함

@router.get("/list", response_model=ApiResponse[list[PlanListResponse]])
def list_public_plans(service: PlanService = Depends(get_plan_service)):
    """공개 플랜 목록"""
    return success_response(service.get_public_plans(), "공개 플랜 목록 조회 성공")


@router.get("/search", response_model=ApiResponse[list[PlanListResponse]])
def search_plans(
    keyword: str = Query("", description="제목 검색어"),
    service: PlanService = Depends(get_plan_service),
):
    """제목으로 공개 플랜 검색"""
    return success_response(service.get_specific_plans(keyword), "플랜 검색 성공")


@router.get("/mine", response_model=ApiResponse[list[PlanListResponse]])
def list_my_plans(
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    return success_response(service.get_my_plans(current_user), "내 플랜 목록 조회 성공")


@router.get("/bookmarked", response_model=ApiResponse[list[PlanListResponse]])
def list_bookmarked_plans(
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    return success_response(service.get_all_bookmarked_plans(current_user), "북마크한 플랜 조회 성공")


@router.get("/bookmarked/recent", response_model=ApiResponse[list[PlanListResponse]])
def list_recent_bookmarked_plans(
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    return success_response(service.get_recent_bookmarked_plans(current_user), "최근 북마크한 플랜 조회 성공")


@router.get("/liked", response_model=ApiResponse[list[PlanListResponse]])
def list_liked_plans(
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    return success_response(service.get_all_liked_plans(current_user), "좋아요한 플랜 조회 성공")


@router.get("/liked/recent", response_model=ApiResponse[list[PlanListResponse]])
def list_recent_liked_plans(
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    return success_response(service.get_recent_liked_plans(current_user), "최근 좋아요한 플랜 조회 성공")


@router.post("/", response_model=ApiResponse[PlanResponse], status_code=status.HTTP_201_CREATED)
def create_plan(
    dto: PlanRequest,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    plan = service.create_plan(dto, current_user)
    return success_response(service.to_plan_response(plan), "플랜 생성 성공")


@router.get("/{plan_id}", response_model=ApiResponse[PlanResponse])
def get_plan_details(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    """플랜 상세 (일정, 댓글, 북마크/좋아요 수 포함)"""
    return success_response(service.get_plan_details(plan_id, current_user), "플랜 조회 성공")


@router.get("/{plan_id}/modify", response_model=ApiResponse[PlanResponse])
def get_plan_for_modify(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    return success_response(service.get_plan_for_modify(plan_id, current_user), "플랜 조회 성공")


@router.put("/{plan_id}", response_model=ApiResponse[PlanResponse])
def update_plan(
    plan_id: int,
    dto: PlanRequest,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    plan = service.update_plan(plan_id, dto, current_user)
    return success_response(service.to_plan_response(plan), "플랜 수정 성공")


@router.delete("/{plan_id}", response_model=ApiResponse[None])
def delete_plan(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    service.delete_plan(plan_id, current_user)
    return success_response(None, "플랜 삭제 성공")


@router.post("/{plan_id}/copy", response_model=ApiResponse[PlanResponse], status_code=status.HTTP_201_CREATED)
def copy_plan(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    service: PlanService = Depends(get_plan_service),
):
    """플랜 복사 (현재 사용자 소유의 비공개 플랜으로)"""
    new_plan = service.copy_plan(plan_id, current_user)
    return success_response(service.to_plan_response(new_plan), "플랜 복사 성공")
