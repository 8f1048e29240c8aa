import logging

from fastapi import APIRouter, Depends, Response

from ..auth.dependencies import get_current_user
from ..models import User
from ..schemas.common import ApiResponse, success_response
from ..schemas.user_schemas import UserBriefResponse, UserResponse
from ..services.refresh_token_service import RefreshTokenService
from ..services.user_service import UserService, get_user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/", response_model=ApiResponse[list[UserBriefResponse]])
async def get_all_users(
    user_service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
):
    """플랜 초대용 전체 사용자 목록"""
    users = user_service.get_all_users()
    return success_response(
        [UserBriefResponse.model_validate(u) for u in users if u.user_id != current_user.user_id],
        "사용자 목록 조회 성공",
    )


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_my_profile(current_user: User = Depends(get_current_user)):
    """현재 사용자 프로필 조회"""
    return success_response(UserResponse.model_validate(current_user), "내 정보 조회 성공")


@router.delete("/me", response_model=ApiResponse[None])
async def delete_my_account(
    response: Response,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """
    회원 탈퇴

    - 소유한 플랜과 채팅방, 채팅방 참여 기록, 좋아요/북마크/댓글, 알림, 리프레시 토큰을 함께 삭제
    """
    user_service.delete_user(current_user)
    RefreshTokenService.clear_refresh_cookie(response)
    return success_response(None, "회원 탈퇴 성공")
