import secrets
import string
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings

# 패스워드 해싱 컨텍스트
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"
OAUTH2_TOKEN_TYPE = "oauth2"


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """비밀번호 검증"""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """비밀번호 해싱"""
    return pwd_context.hash(password)


def create_token(data: dict, expires_delta: timedelta) -> str:
    """만료 시간이 포함된 JWT 생성"""
    to_encode = data.copy()
    now = datetime.now(UTC)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def parse_token(token: str, token_type: str | None = None) -> dict:
    """
    JWT 파싱

    서명이나 만료 검증에 실패하면 JWTError를 그대로 발생시킵니다.
    token_type이 주어지면 type 클레임도 확인합니다.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    if token_type is not None and payload.get("type") != token_type:
        raise JWTError(f"Unexpected token type: {payload.get('type')}")
    return payload


def verify_token(token: str, token_type: str | None = None) -> dict | None:
    """JWT 검증 (실패 시 None)"""
    try:
        return parse_token(token, token_type)
    except JWTError:
        return None


def create_access_token(user_id: int, username: str | None, role: str) -> str:
    """액세스 토큰 생성"""
    token_data = {
        "sub": username or str(user_id),
        "userId": user_id,
        "role": role,
        "type": ACCESS_TOKEN_TYPE,
    }
    return create_token(token_data, timedelta(minutes=settings.access_token_expire_minutes))


def create_refresh_token(user_id: int, username: str | None, role: str) -> str:
    """리프레시 토큰 생성"""
    token_data = {
        "sub": username or str(user_id),
        "userId": user_id,
        "role": role,
        "type": REFRESH_TOKEN_TYPE,
        # 같은 초에 재발급되어도 토큰이 달라지도록
        "jti": secrets.token_hex(8),
    }
    return create_token(token_data, timedelta(minutes=settings.refresh_token_expire_minutes))


def create_oauth2_token(email: str) -> str:
    """OAuth2 가입/로그인 연결용 단기 토큰 (subject = 이메일)"""
    token_data = {"sub": email, "type": OAUTH2_TOKEN_TYPE}
    return create_token(token_data, timedelta(minutes=settings.oauth2_token_expire_minutes))


def generate_temporary_password(length: int = 12) -> str:
    """임시 비밀번호 생성"""
    lowercase = string.ascii_lowercase
    uppercase = string.ascii_uppercase
    digits = string.digits
    special_chars = "!@#$%^&*"

    # 각 유형별로 최소 1개씩
    password = [
        secrets.choice(lowercase),
        secrets.choice(uppercase),
        secrets.choice(digits),
        secrets.choice(special_chars),
    ]

    all_chars = lowercase + uppercase + digits + special_chars
    for _ in range(length - 4):
        password.append(secrets.choice(all_chars))

    secrets.SystemRandom().shuffle(password)

    return "".join(password)
