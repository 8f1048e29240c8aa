"""
인증 라우터
회원가입, 로그인/로그아웃, 토큰 재발급, 아이디/비밀번호 찾기, OAuth2 가입 연결
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status

from ..auth.utils import ACCESS_TOKEN_TYPE, OAUTH2_TOKEN_TYPE, generate_temporary_password, parse_token
from ..config import settings
from ..exceptions import NotFoundException
from ..schemas.common import ApiResponse, failure_response, success_response
from ..schemas.user_schemas import (
    LoginRequest,
    LoginResponse,
    OAuth2AdditionalInfoRequest,
    OAuth2SignUpResponse,
    PasswordResetRequest,
    UsernameRequest,
    UserRegisterRequest,
    UserResponse,
)
from ..services.email_service import send_temp_password_email
from ..services.refresh_token_service import RefreshTokenService, get_refresh_token_service
from ..services.user_service import UserService, get_user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _login_response(user, access_token: str) -> LoginResponse:
    return LoginResponse(
        user_id=user.user_id,
        nickname=user.nickname,
        role=user.role.value,
        access_token=access_token,
    )


@router.post("/signup", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def register_user(
    dto: UserRegisterRequest,
    user_service: UserService = Depends(get_user_service),
):
    """회원가입"""
    new_user = user_service.register_new_user(dto)
    return success_response(UserResponse.model_validate(new_user), "회원가입 성공")


@router.post("/check-username", response_model=ApiResponse[str])
async def check_username(
    username: str = Query(..., min_length=1),
    user_service: UserService = Depends(get_user_service),
):
    """아이디 중복 검사"""
    user_service.check_duplicate_username(username)
    return success_response(username, "아이디 사용 가능")


@router.post("/check-email", response_model=ApiResponse[str])
async def check_email(
    email: str = Query(..., min_length=1),
    user_service: UserService = Depends(get_user_service),
):
    """이메일 중복 검사"""
    user_service.check_duplicate_email(email)
    return success_response(email, "이메일 사용 가능")


@router.post("/check-nickname", response_model=ApiResponse[str])
async def check_nickname(
    nickname: str = Query(..., min_length=1),
    user_service: UserService = Depends(get_user_service),
):
    """닉네임 중복 검사"""
    user_service.check_duplicate_nickname(nickname)
    return success_response(nickname, "닉네임 사용 가능")


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    dto: LoginRequest,
    response: Response,
    user_service: UserService = Depends(get_user_service),
    token_service: RefreshTokenService = Depends(get_refresh_token_service),
):
    """로그인: 액세스 토큰은 본문으로, 리프레시 토큰은 쿠키로 전달"""
    login_user = user_service.check_login_available(dto.username, dto.password)
    access_token = token_service.issue_tokens_and_set_cookie(response, login_user)
    return success_response(_login_response(login_user, access_token), "로그인 성공")


@router.post("/refresh", response_model=ApiResponse[LoginResponse])
async def refresh_access_token(
    request: Request,
    token_service: RefreshTokenService = Depends(get_refresh_token_service),
):
    """리프레시 토큰 쿠키로 액세스 토큰 재발급"""
    refresh_token = request.cookies.get(settings.refresh_cookie_name)
    user, access_token = token_service.reissue_access_token(refresh_token)
    return success_response(_login_response(user, access_token), "토큰 재발급 성공")


@router.post("/find-username", response_model=ApiResponse[str])
async def find_username(
    dto: UsernameRequest,
    user_service: UserService = Depends(get_user_service),
):
    """아이디 찾기"""
    username = user_service.get_username(dto)
    return success_response(username, "아이디 찾기 성공")


@router.post("/find-password", response_model=ApiResponse[None])
async def find_password(
    dto: PasswordResetRequest,
    user_service: UserService = Depends(get_user_service),
):
    """임시 비밀번호 발급 및 이메일 전송"""
    temp_password = generate_temporary_password()
    user = user_service.set_temp_password(dto.username, dto.email, temp_password)

    sent = await send_temp_password_email(user.email, temp_password, user.name)
    if not sent:
        logger.warning(f"임시 비밀번호 이메일 전송 실패: {user.email}")
    return success_response(None, "임시 비밀번호가 이메일로 전송되었습니다.")


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
    request: Request,
    response: Response,
    token_service: RefreshTokenService = Depends(get_refresh_token_service),
):
    """로그아웃: 리프레시 토큰 쿠키와 서버 측 토큰 삭제"""
    token_service.clear_refresh_cookie(response)

    authorization = request.headers.get("Authorization")
    if authorization and authorization.startswith("Bearer "):
        access_token = authorization[7:]
        try:
            claims = parse_token(access_token, ACCESS_TOKEN_TYPE)
            token_service.delete_refresh_token(int(claims["userId"]))
        except Exception as e:
            logger.error(f"Failed to delete refresh token: {e}")

    # 액세스 토큰 삭제는 클라이언트에서 처리
    return success_response(None, "로그아웃 성공")


@router.get("/oauth2/signup", response_model=ApiResponse[OAuth2SignUpResponse])
async def get_oauth2_user_info(
    token: str = Query(...),
    user_service: UserService = Depends(get_user_service),
):
    """OAuth2 첫 가입 시 가입 대기 계정 정보 조회"""
    try:
        claims = parse_token(token, OAUTH2_TOKEN_TYPE)
        signup_info = user_service.get_oauth2_signup_info(claims["sub"])
        return success_response(signup_info, "OAuth2 가입 정보 조회 성공")
    except Exception as e:
        logger.error(f"OAuth2 가입 정보 조회 실패: {e}")
        return failure_response("OAuth2 가입 정보 조회 실패")


@router.get("/oauth2/login", response_model=ApiResponse[LoginResponse])
async def oauth2_user_login(
    response: Response,
    token: str = Query(...),
    user_service: UserService = Depends(get_user_service),
    token_service: RefreshTokenService = Depends(get_refresh_token_service),
):
    """OAuth2 기존 가입 사용자 로그인"""
    try:
        claims = parse_token(token, OAUTH2_TOKEN_TYPE)
        user = user_service.get_user_by_email(claims["sub"])
        if user.username is None:
            raise NotFoundException("추가 정보 입력이 완료되지 않은 계정입니다.")

        access_token = token_service.issue_tokens_and_set_cookie(response, user)
        return success_response(_login_response(user, access_token), "OAuth2 로그인 성공")
    except Exception as e:
        logger.error(f"OAuth2 로그인 실패: {e}")
        return failure_response(f"OAuth2 로그인 실패: {e}")


@router.post("/oauth2/additional-info", response_model=ApiResponse[LoginResponse])
async def update_oauth2_user_additional_info(
    dto: OAuth2AdditionalInfoRequest,
    response: Response,
    user_service: UserService = Depends(get_user_service),
    token_service: RefreshTokenService = Depends(get_refresh_token_service),
):
    """OAuth2 첫 가입 시 추가 정보 입력 후 로그인 처리"""
    try:
        claims = parse_token(dto.token, OAUTH2_TOKEN_TYPE)
        updated_user = user_service.update_oauth2_user_additional_info(dto, claims["sub"])
        access_token = token_service.issue_tokens_and_set_cookie(response, updated_user)
        return success_response(_login_response(updated_user, access_token), "추가 정보 업데이트 성공")
    except Exception as e:
        logger.error(f"OAuth2 추가 정보 업데이트 실패: {e}")
        return failure_response("추가 정보 업데이트 실패")
