"""
통합 에러 처리 미들웨어
예외 핸들러까지 도달하지 못한 데이터베이스 오류와 예상치 못한 오류를 공통 응답 형식으로 변환합니다.
"""
import logging
import traceback
import uuid
from typing import Callable

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.schemas.common import failure_response

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """요청 ID 기반 로깅과 500 오류 변환"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # 요청 ID 생성 (추적용)
        request_id = str(uuid.uuid4())[:8]

        logger.debug(
            f"Request [{request_id}] {request.method} {request.url.path} "
            f"from {request.client.host if request.client else 'unknown'}"
        )

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        except SQLAlchemyError as exc:
            return self._handle_database_error(request, exc, request_id)

        except Exception as exc:
            return self._handle_unexpected_error(request, exc, request_id)

    def _handle_database_error(
        self, request: Request, exc: SQLAlchemyError, request_id: str
    ) -> JSONResponse:
        """데이터베이스 오류 처리"""
        logger.error(
            f"Database Error [{request_id}] {request.method} {request.url.path}: "
            f"{type(exc).__name__} - {exc}"
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure_response("데이터베이스 처리 중 오류가 발생했습니다.").model_dump(),
            headers={"X-Request-ID": request_id},
        )

    def _handle_unexpected_error(
        self, request: Request, exc: Exception, request_id: str
    ) -> JSONResponse:
        """예상치 못한 오류 처리 (스택 트레이스는 로그에만 기록)"""
        logger.critical(
            f"Unexpected Error [{request_id}] {request.method} {request.url.path}: "
            f"{type(exc).__name__} - {exc}\n{traceback.format_exc()}"
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure_response("서버 내부 오류가 발생했습니다.").model_dump(),
            headers={"X-Request-ID": request_id},
        )


class HealthCheckMiddleware(BaseHTTPMiddleware):
    """헬스체크 미들웨어 (데이터베이스 연결 확인 포함)"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in ["/health", "/api/health"]:
            from app.database import check_db_connection

            db_ok, db_msg = check_db_connection()
            if not db_ok:
                logger.warning(f"Health check database failure: {db_msg}")
                return JSONResponse(
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    content={"status": "unhealthy", "database": db_msg, "service": "todotravel"},
                )

            return JSONResponse(
                content={"status": "healthy", "database": "connected", "service": "todotravel"}
            )

        return await call_next(request)
