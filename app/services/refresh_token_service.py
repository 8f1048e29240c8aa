"""
리프레시 토큰 서비스
토큰 발급, 쿠키 설정, 서버 측 저장/폐기를 담당합니다.
"""

import logging
from datetime import UTC, datetime, timedelta

from fastapi import Depends, Response
from sqlalchemy.orm import Session

from ..auth.utils import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    verify_token,
)
from ..config import settings
from ..database import get_db
from ..exceptions import AuthenticationException
from ..models import RefreshToken, User

logger = logging.getLogger(__name__)


class RefreshTokenService:
    """리프레시 토큰 관리 서비스"""

    def __init__(self, db: Session):
        self.db = db

    def save_refresh_token(self, user: User, token: str) -> RefreshToken:
        """사용자의 리프레시 토큰 저장 (사용자당 하나, 재로그인 시 교체)"""
        expires_at = datetime.now(UTC) + timedelta(minutes=settings.refresh_token_expire_minutes)
        record = self.db.query(RefreshToken).filter(RefreshToken.user_id == user.user_id).first()
        if record:
            record.refresh_token = token
            record.expires_at = expires_at
        else:
            record = RefreshToken(user_id=user.user_id, refresh_token=token, expires_at=expires_at)
            self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def get_refresh_token(self, user_id: int) -> RefreshToken | None:
        return self.db.query(RefreshToken).filter(RefreshToken.user_id == user_id).first()

    def delete_refresh_token(self, user_id: int) -> bool:
        """사용자의 리프레시 토큰 삭제"""
        deleted = self.db.query(RefreshToken).filter(RefreshToken.user_id == user_id).delete()
        self.db.commit()
        logger.info(f"리프레시 토큰 삭제: user_id={user_id}, deleted={deleted}")
        return deleted > 0

    def issue_tokens_and_set_cookie(self, response: Response, user: User) -> str:
        """액세스/리프레시 토큰 발급, 리프레시 토큰 저장 및 쿠키 설정 후 액세스 토큰 반환"""
        role = user.role.value
        access_token = create_access_token(user.user_id, user.username, role)
        refresh_token = create_refresh_token(user.user_id, user.username, role)

        self.save_refresh_token(user, refresh_token)
        response.set_cookie(
            key=settings.refresh_cookie_name,
            value=refresh_token,
            max_age=settings.refresh_token_expire_minutes * 60,
            path="/",
            httponly=True,
            secure=settings.refresh_cookie_secure,
            samesite="lax",
        )
        logger.info(f"토큰 발급 완료: user_id={user.user_id}")
        return access_token

    def reissue_access_token(self, refresh_token: str | None) -> tuple[User, str]:
        """리프레시 토큰으로 새 액세스 토큰 발급"""
        if not refresh_token:
            raise AuthenticationException("리프레시 토큰이 없습니다.")

        payload = verify_token(refresh_token, REFRESH_TOKEN_TYPE)
        if payload is None or payload.get("userId") is None:
            raise AuthenticationException("유효하지 않은 리프레시 토큰입니다.")

        record = self.get_refresh_token(int(payload["userId"]))
        if record is None or record.refresh_token != refresh_token:
            raise AuthenticationException("만료되었거나 폐기된 리프레시 토큰입니다.")

        user = record.user
        return user, create_access_token(user.user_id, user.username, user.role.value)

    @staticmethod
    def clear_refresh_cookie(response: Response) -> None:
        response.delete_cookie(key=settings.refresh_cookie_name, path="/")


def get_refresh_token_service(db: Session = Depends(get_db)) -> RefreshTokenService:
    return RefreshTokenService(db)
