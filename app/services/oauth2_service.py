"""
OAuth2 로그인 서비스

제공자(google, kakao, naver)와 인가 코드 → 액세스 토큰 → 사용자 정보를 교환하고,
결과에 따라 프론트엔드의 가입 계속 화면 또는 로그인 화면으로 보낼 주소를 만듭니다.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urlencode

import httpx
from sqlalchemy.orm import Session

from app.auth.utils import create_oauth2_token
from app.config import settings
from app.exceptions import AuthenticationException, BadRequestException
from app.models import User
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OAuth2Provider:
    name: str
    authorize_url: str
    token_url: str
    user_info_url: str
    scope: str
    # 사용자 정보 응답에서 (email, provider_id) 추출
    extract: Callable[[dict[str, Any]], tuple[str | None, str | None]]

    @property
    def client_id(self) -> str:
        return getattr(settings, f"{self.name}_client_id")

    @property
    def client_secret(self) -> str:
        return getattr(settings, f"{self.name}_client_secret")

    @property
    def redirect_uri(self) -> str:
        return getattr(settings, f"{self.name}_redirect_uri")


def _extract_google(info: dict[str, Any]) -> tuple[str | None, str | None]:
    return info.get("email"), info.get("sub")


def _extract_kakao(info: dict[str, Any]) -> tuple[str | None, str | None]:
    account = info.get("kakao_account") or {}
    provider_id = info.get("id")
    return account.get("email"), str(provider_id) if provider_id is not None else None


def _extract_naver(info: dict[str, Any]) -> tuple[str | None, str | None]:
    response = info.get("response") or {}
    return response.get("email"), response.get("id")


PROVIDERS: dict[str, OAuth2Provider] = {
    "google": OAuth2Provider(
        name="google",
        authorize_url="https://accounts.google.com/o/oauth2/v2/auth",
        token_url="https://oauth2.googleapis.com/token",
        user_info_url="https://www.googleapis.com/oauth2/v3/userinfo",
        scope="openid email profile",
        extract=_extract_google,
    ),
    "kakao": OAuth2Provider(
        name="kakao",
        authorize_url="https://kauth.kakao.com/oauth/authorize",
        token_url="https://kauth.kakao.com/oauth/token",
        user_info_url="https://kapi.kakao.com/v2/user/me",
        scope="account_email",
        extract=_extract_kakao,
    ),
    "naver": OAuth2Provider(
        name="naver",
        authorize_url="https://nid.naver.com/oauth2.0/authorize",
        token_url="https://nid.naver.com/oauth2.0/token",
        user_info_url="https://openapi.naver.com/v1/nid/me",
        scope="email",
        extract=_extract_naver,
    ),
}


def get_provider(name: str) -> OAuth2Provider:
    provider = PROVIDERS.get(name)
    if provider is None:
        raise BadRequestException(f"지원하지 않는 OAuth2 제공자입니다: {name}")
    return provider


def build_authorize_url(provider: OAuth2Provider, state: str | None = None) -> str:
    params = {
        "response_type": "code",
        "client_id": provider.client_id,
        "redirect_uri": provider.redirect_uri,
        "scope": provider.scope,
    }
    if state:
        params["state"] = state
    return f"{provider.authorize_url}?{urlencode(params)}"


async def fetch_user_info(provider: OAuth2Provider, code: str, state: str | None = None) -> dict[str, Any]:
    """인가 코드로 제공자 사용자 정보 조회"""
    token_data = {
        "grant_type": "authorization_code",
        "client_id": provider.client_id,
        "client_secret": provider.client_secret,
        "redirect_uri": provider.redirect_uri,
        "code": code,
    }
    if state:
        token_data["state"] = state

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            token_response = await client.post(
                provider.token_url, data=token_data, headers={"Accept": "application/json"}
            )
            token_response.raise_for_status()
            access_token = token_response.json().get("access_token")
            if not access_token:
                raise AuthenticationException("OAuth2 액세스 토큰을 받지 못했습니다.")

            info_response = await client.get(
                provider.user_info_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            info_response.raise_for_status()
            return info_response.json()
    except httpx.HTTPError as e:
        logger.error(f"OAuth2 제공자 통신 실패 ({provider.name}): {e}")
        raise AuthenticationException("OAuth2 제공자와의 통신에 실패했습니다.")


def handle_oauth2_success(
    db: Session, provider_name: str, email: str | None, provider_id: str | None = None
) -> str:
    """
    OAuth2 인증 성공 처리

    처음 로그인한 이메일이면 추가 정보 입력 전 계정을 만들고 가입 계속 화면으로,
    이미 가입된 이메일이면 로그인 화면으로 보낼 주소를 반환합니다.
    두 주소 모두 이메일을 담은 단기 토큰을 쿼리로 전달합니다.
    """
    if not email:
        raise AuthenticationException("OAuth2 제공자가 이메일을 제공하지 않았습니다.")

    user_service = UserService(db)
    user = db.query(User).filter(User.email == email).first()
    token = create_oauth2_token(email)

    if user is None:
        user_service.create_oauth2_user(email, provider_name, provider_id)
        return f"{settings.frontend_url}/oauth2/signup?{urlencode({'token': token})}"

    if user.username is None:
        # 추가 정보 입력을 마치지 않은 계정
        return f"{settings.frontend_url}/oauth2/signup?{urlencode({'token': token})}"

    logger.info(f"OAuth2 기존 사용자 로그인: {email} ({provider_name})")
    return f"{settings.frontend_url}/oauth2/login?{urlencode({'token': token})}"
