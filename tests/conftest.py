"""
Pytest configuration and fixtures for TodoTravel backend tests.
"""

import os
import sys
from typing import Callable, Generator

# 설정 로드 전에 테스트용 환경 변수 지정
os.environ.setdefault("JWT_SECRET_KEY", "test_secret_key_for_testing_only")
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["DEBUG"] = "false"
os.environ["LOG_TO_FILE"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.auth.utils import create_access_token, get_password_hash
from app.database import get_db
from app.models import Base, Role, User
from main import app

# 테스트용 데이터베이스 URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite:///:memory:"

TEST_PASSWORD = "password123"

# 테스트용 엔진 생성
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(test_engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """SQLite 외래키 제약 활성화"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# 테스트용 세션 팩토리
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    각 테스트 함수마다 새로운 데이터베이스 세션을 생성합니다.
    테스트가 끝나면 데이터베이스를 초기화합니다.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    테스트용 FastAPI 클라이언트를 생성합니다.
    데이터베이스 의존성을 테스트용 세션으로 오버라이드합니다.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def create_user(db_session: Session) -> Callable[..., User]:
    """로컬 가입 사용자를 직접 생성하는 팩토리"""
    def _create_user(username: str = "traveler", nickname: str | None = None, **kwargs) -> User:
        user = User(
            username=username,
            email=kwargs.pop("email", f"{username}@example.com"),
            nickname=nickname or f"{username}_nick",
            password=get_password_hash(kwargs.pop("password", TEST_PASSWORD)),
            name=kwargs.pop("name", "Test User"),
            role=kwargs.pop("role", Role.ROLE_USER),
            provider=kwargs.pop("provider", "local"),
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user


def make_auth_headers(user: User) -> dict:
    token = create_access_token(user.user_id, user.username, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    return make_auth_headers


@pytest.fixture
def owner(create_user) -> User:
    return create_user("owner1")


@pytest.fixture
def member(create_user) -> User:
    return create_user("member1")


@pytest.fixture
def owner_headers(owner: User) -> dict:
    return make_auth_headers(owner)


@pytest.fixture
def member_headers(member: User) -> dict:
    return make_auth_headers(member)


@pytest.fixture
def plan_payload() -> dict:
    return {
        "title": "제주도 여행",
        "location": "제주",
        "description": "3박 4일 제주 여행",
        "startDate": "2024-07-01",
        "endDate": "2024-07-04",
        "isPublic": True,
        "totalBudget": 500000,
    }


@pytest.fixture
def create_plan(client: TestClient, plan_payload: dict) -> Callable[..., dict]:
    """API로 플랜을 생성하고 응답 데이터를 반환하는 팩토리"""
    def _create_plan(headers: dict, **overrides) -> dict:
        response = client.post("/api/plan/", json={**plan_payload, **overrides}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create_plan


@pytest.fixture
def schedule_payload() -> dict:
    return {
        "travelDayCount": 1,
        "description": "성산일출봉 일출 보기",
        "travelTime": "05:30",
        "location": {"name": "성산일출봉", "latitude": 33.458, "longitude": 126.942},
        "vehicle": "CAR",
        "budget": {"amount": 5000, "description": "입장료"},
    }


@pytest.fixture
def invite_and_accept(client: TestClient) -> Callable[..., None]:
    """초대 후 수락까지 진행하는 헬퍼"""
    def _invite_and_accept(plan_id: int, invitee: User, owner_headers: dict, invitee_headers: dict) -> None:
        invite = client.post(
            f"/api/plan/{plan_id}/participants/invite",
            json={"userId": invitee.user_id},
            headers=owner_headers,
        )
        assert invite.status_code == 200, invite.text
        accept = client.post(f"/api/plan/{plan_id}/participants/accept", headers=invitee_headers)
        assert accept.status_code == 200, accept.text

    return _invite_and_accept
