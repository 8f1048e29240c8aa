"""
공통 입력 검증 함수
스키마의 field_validator에서 재사용합니다.
"""

import re

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{4,20}$")
PHONE_PATTERN = re.compile(r"^01[016789]-?\d{3,4}-?\d{4}$")


class CommonValidators:
    """공통 검증 로직"""

    @staticmethod
    def validate_username(v: str) -> str:
        if v is None:
            raise ValueError("아이디를 입력해주세요")
        v = v.strip()
        if not USERNAME_PATTERN.match(v):
            raise ValueError("아이디는 4~20자의 영문, 숫자, 밑줄만 사용할 수 있습니다")
        return v

    @staticmethod
    def validate_password(v: str) -> str:
        if v is None or len(v) < 8:
            raise ValueError("비밀번호는 최소 8자 이상이어야 합니다")
        if len(v.encode("utf-8")) > 72:
            raise ValueError("비밀번호가 너무 깁니다")
        if not re.search(r"[A-Za-z]", v) or not re.search(r"\d", v):
            raise ValueError("비밀번호는 영문과 숫자를 모두 포함해야 합니다")
        return v

    @staticmethod
    def validate_nickname(v: str) -> str:
        if v is None:
            raise ValueError("닉네임을 입력해주세요")
        v = v.strip()
        if not 2 <= len(v) <= 20:
            raise ValueError("닉네임은 2~20자여야 합니다")
        return v

    @staticmethod
    def validate_phone_number(v: str | None) -> str | None:
        if v is None or v == "":
            return None
        if not PHONE_PATTERN.match(v):
            raise ValueError("전화번호 형식이 올바르지 않습니다")
        return v
