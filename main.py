import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import TodoTravelException
from app.logging_config import setup_logging
from app.middleware.error_handling import ErrorHandlingMiddleware, HealthCheckMiddleware
from app.routers.alarms import router as alarms_router
from app.routers.auth import router as auth_router
from app.routers.bookmarks import router as bookmarks_router
from app.routers.chat import router as chat_router
from app.routers.comments import router as comments_router
from app.routers.likes import router as likes_router
from app.routers.oauth2 import router as oauth2_router
from app.routers.participants import router as participants_router
from app.routers.plans import router as plans_router
from app.routers.schedules import router as schedules_router
from app.routers.users import router as users_router
from app.routers.websocket import router as websocket_router
from app.schemas.common import failure_response

# 로깅 설정 초기화
setup_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리"""
    # Startup
    logging.info(f"🚀 {settings.app_name} v{settings.app_version} 시작")
    logging.info(f"환경: {settings.environment}")
    logging.info(f"디버그 모드: {settings.debug}")
    logging.info(f"서버 주소: http://{settings.host}:{settings.port}")

    # 개발 환경에서만 자동으로 테이블 생성 및 초기 데이터 설정
    if settings.debug:
        try:
            from app.init_data import init_database

            logging.info("데이터베이스 초기화 시작...")
            init_database()
            logging.info("데이터베이스 초기화 완료")
        except Exception as e:
            logging.error(f"⚠️  초기화 중 오류 발생: {e}", exc_info=True)

    yield

    # Shutdown
    logging.info(f"🛑 {settings.app_name} 종료")


app = FastAPI(
    title="TodoTravel API",
    description="여행 플랜 공유 및 협업 백엔드 API",
    version=settings.app_version,
    lifespan=lifespan,
)

# 미들웨어 추가 (순서 중요: 나중에 추가한 것이 바깥쪽)
app.add_middleware(HealthCheckMiddleware)
app.add_middleware(ErrorHandlingMiddleware)

# 리프레시 토큰 쿠키를 주고받으므로 credentials 허용
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


# 요청 로깅 미들웨어
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    logging.info(f"[REQUEST] {request.method} {request.url.path}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time

        logging.info(
            f"[RESPONSE] {request.method} {request.url.path} - "
            f"Status: {response.status_code} - Time: {process_time:.3f}s"
        )

        return response
    except Exception as e:
        process_time = time.time() - start_time
        logging.error(
            f"[ERROR] {request.method} {request.url.path} - "
            f"Error: {str(e)} - Time: {process_time:.3f}s"
        )
        raise


# 라우터 등록 (API prefix 통일)
app.include_router(auth_router, prefix="/api")
app.include_router(oauth2_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(plans_router, prefix="/api")
app.include_router(participants_router, prefix="/api")
app.include_router(schedules_router, prefix="/api")
app.include_router(comments_router, prefix="/api")
app.include_router(likes_router, prefix="/api")
app.include_router(bookmarks_router, prefix="/api")
app.include_router(chat_router, prefix="/api")
app.include_router(alarms_router, prefix="/api")
# WebSocket은 /ws/chat/{room_id}
app.include_router(websocket_router)


@app.get("/")
async def root():
    return {"message": "TodoTravel API is running!"}


# 한국어 필드명 매핑
FIELD_NAME_MAPPING = {
    "email": "이메일",
    "password": "비밀번호",
    "name": "이름",
    "nickname": "닉네임",
    "username": "아이디",
    "phoneNumber": "전화번호",
    "birthDate": "생년월일",
    "title": "제목",
    "location": "여행지",
    "description": "설명",
    "startDate": "시작일",
    "endDate": "종료일",
    "travelDayCount": "여행 일차",
    "content": "내용",
    "userId": "사용자 ID",
}

# 한국어 오류 메시지 매핑
ERROR_MESSAGE_MAPPING = {
    "missing": "을(를) 입력해주세요",
    "string_too_short": "이(가) 너무 짧습니다",
    "string_too_long": "이(가) 너무 깁니다",
    "value_error": "형식이 올바르지 않습니다",
    "type_error": "형식이 올바르지 않습니다",
}


def get_korean_field_name(field: str) -> str:
    """필드명을 한국어로 변환"""
    return FIELD_NAME_MAPPING.get(field, field)


def get_object_particle(word: str) -> str:
    """받침에 따라 을/를 선택"""
    if not word:
        return "을"
    last_char = word[-1]
    # 한글 완성형이 아니면 기본값
    if not "가" <= last_char <= "힣":
        return "을"
    final_consonant = (ord(last_char) - ord("가")) % 28
    return "을" if final_consonant != 0 else "를"


def get_korean_validation_message(field: str, error_type: str, msg: str) -> str:
    """검증 오류를 한국어 메시지로 변환"""
    korean_field = get_korean_field_name(field)

    if error_type == "missing":
        return f"{korean_field}{get_object_particle(korean_field)} 입력해주세요"
    elif error_type in ["string_too_short", "string_too_long"]:
        return f"{korean_field}{ERROR_MESSAGE_MAPPING.get(error_type, '이(가) 올바르지 않습니다')}"
    elif error_type == "value_error" and msg.startswith("Value error, "):
        # field_validator에서 발생시킨 메시지는 그대로 사용
        return msg.removeprefix("Value error, ")
    elif "email" in msg.lower():
        return f"{korean_field} 형식이 올바르지 않습니다"
    else:
        return f"{korean_field} {ERROR_MESSAGE_MAPPING.get(error_type, '형식이 올바르지 않습니다')}"


@app.exception_handler(TodoTravelException)
async def todotravel_exception_handler(request: Request, exc: TodoTravelException):
    logging.warning(f"[{type(exc).__name__}] {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=failure_response(exc.message).model_dump(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=failure_response(str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logging.error(f"[ValidationError] {request.url}: {exc}")

    # 검증 에러를 한국어로 변환
    error_messages = []
    for error in exc.errors():
        field = str(error["loc"][-1]) if error["loc"] else "unknown"
        korean_message = get_korean_validation_message(field, error["type"], error["msg"])
        error_messages.append(korean_message)

    # 중복 제거하고 결합
    combined_message = " ".join(dict.fromkeys(error_messages))

    return JSONResponse(status_code=422, content=failure_response(combined_message).model_dump())


# 전역 에러 핸들러
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logging.error(f"[GlobalError] {request.url}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content=failure_response("서버 내부 오류").model_dump())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app", host=settings.host, port=settings.port, reload=settings.debug
    )
