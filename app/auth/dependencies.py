from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.auth.utils import ACCESS_TOKEN_TYPE, verify_token
from app.database import get_db
from app.models import User

# HTTP Bearer 토큰 스키마
security = HTTPBearer()


def get_user_from_token(token: str, db: Session) -> User | None:
    """액세스 토큰에서 사용자 조회 (검증 실패 시 None)"""
    payload = verify_token(token, ACCESS_TOKEN_TYPE)
    if payload is None:
        return None

    user_id = payload.get("userId")
    if user_id is None:
        return None

    return db.query(User).filter(User.user_id == int(user_id)).first()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """현재 인증된 사용자 정보 가져오기"""
    user = get_user_from_token(credentials.credentials, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="인증이 필요합니다",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
