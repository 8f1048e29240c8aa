from datetime import date, datetime

from pydantic import EmailStr, Field, field_validator

from ..models import Gender
from ..validators import CommonValidators
from .common import CamelModel


class UserRegisterRequest(CamelModel):
    """회원가입 요청"""

    username: str
    password: str = Field(..., description="비밀번호 (최소 8자)")
    email: EmailStr
    nickname: str
    name: str = Field(..., min_length=1, max_length=50)
    gender: Gender | None = None
    birth_date: date | None = None
    phone_number: str | None = None

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v):
        return CommonValidators.validate_username(v)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v):
        return CommonValidators.validate_password(v)

    @field_validator("nickname", mode="before")
    @classmethod
    def validate_nickname(cls, v):
        return CommonValidators.validate_nickname(v)

    @field_validator("phone_number", mode="before")
    @classmethod
    def validate_phone_number(cls, v):
        return CommonValidators.validate_phone_number(v)


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    user_id: int
    nickname: str | None
    role: str
    access_token: str


class UsernameRequest(CamelModel):
    """아이디 찾기 요청"""

    name: str
    email: EmailStr


class PasswordResetRequest(CamelModel):
    """임시 비밀번호 발급 요청"""

    username: str
    email: EmailStr


class OAuth2AdditionalInfoRequest(CamelModel):
    """OAuth2 첫 가입 시 추가 정보"""

    token: str
    user_id: int
    username: str
    nickname: str
    name: str
    gender: Gender | None = None
    birth_date: date | None = None
    phone_number: str | None = None

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v):
        return CommonValidators.validate_username(v)

    @field_validator("nickname", mode="before")
    @classmethod
    def validate_nickname(cls, v):
        return CommonValidators.validate_nickname(v)

    @field_validator("phone_number", mode="before")
    @classmethod
    def validate_phone_number(cls, v):
        return CommonValidators.validate_phone_number(v)


class OAuth2SignUpResponse(CamelModel):
    user_id: int
    email: str


class UserResponse(CamelModel):
    """사용자 정보 응답"""

    user_id: int
    username: str | None
    email: str
    nickname: str | None
    name: str | None
    gender: Gender | None = None
    birth_date: date | None = None
    phone_number: str | None = None
    role: str
    provider: str
    created_at: datetime | None = None

    @field_validator("role", mode="before")
    @classmethod
    def role_value(cls, v):
        return getattr(v, "value", v)


class UserBriefResponse(CamelModel):
    """초대 목록 등에 사용하는 간단한 사용자 정보"""

    user_id: int
    username: str | None
    nickname: str | None
