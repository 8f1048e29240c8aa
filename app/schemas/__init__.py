"""
스키마 패키지
모든 Pydantic 스키마를 포함합니다.
"""

from .common import (
    ApiResponse,
    CamelModel,
    failure_response,
    success_response,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "failure_response",
    "success_response",
]
