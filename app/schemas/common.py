"""
공통 응답 스키마 정의
모든 API 응답에 사용할 표준 형식을 제공합니다.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """camelCase JSON 필드를 사용하는 DTO 기반 클래스"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """표준 API 응답 형식"""

    success: bool = Field(..., description="요청 성공 여부")
    message: str = Field(..., description="응답 메시지")
    data: T | None = Field(None, description="응답 데이터")


def success_response(data: Any = None, message: str = "요청이 성공적으로 처리되었습니다.") -> ApiResponse:
    """성공 응답 헬퍼"""
    return ApiResponse(success=True, message=message, data=data)


def failure_response(message: str, data: Any = None) -> ApiResponse:
    """실패 응답 헬퍼"""
    return ApiResponse(success=False, message=message, data=data)

