"""
애플리케이션 예외 정의
서비스 계층에서 발생시키고 main.py의 예외 핸들러에서 공통 응답으로 변환합니다.
"""

from fastapi import status


class TodoTravelException(Exception):
    """모든 애플리케이션 예외의 기반 클래스"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundException(TodoTravelException):
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateException(TodoTravelException):
    status_code = status.HTTP_409_CONFLICT


class AuthenticationException(TodoTravelException):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenException(TodoTravelException):
    status_code = status.HTTP_403_FORBIDDEN


class BadRequestException(TodoTravelException):
    status_code = status.HTTP_400_BAD_REQUEST
