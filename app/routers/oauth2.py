"""
OAuth2 제공자 연동 라우터
제공자 인가 화면으로 이동시키고, 콜백에서 가입/로그인 연결 토큰을 발급해 프론트엔드로 돌려보냅니다.
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..exceptions import TodoTravelException
from ..services.oauth2_service import (
    build_authorize_url,
    fetch_user_info,
    get_provider,
    handle_oauth2_success,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oauth2", tags=["OAuth2"])


@router.get("/authorize/{provider}")
async def authorize(provider: str, state: str | None = Query(None)):
    """OAuth2 제공자 인가 화면으로 이동"""
    oauth2_provider = get_provider(provider)
    return RedirectResponse(build_authorize_url(oauth2_provider, state))


@router.get("/callback/{provider}")
async def callback(
    provider: str,
    code: str = Query(...),
    state: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """OAuth2 콜백: 사용자 정보를 받아 가입 계속 또는 로그인 화면으로 이동"""
    oauth2_provider = get_provider(provider)
    try:
        user_info = await fetch_user_info(oauth2_provider, code, state)
        email, provider_id = oauth2_provider.extract(user_info)
        redirect_url = handle_oauth2_success(db, provider, email, provider_id)
    except TodoTravelException as e:
        logger.warning(f"OAuth2 로그인 처리 실패 ({provider}): {e.message}")
        return RedirectResponse(f"{settings.frontend_url}/login?error=oauth2")

    return RedirectResponse(redirect_url)
