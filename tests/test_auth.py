"""
Authentication 관련 테스트
"""

from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.auth.utils import ACCESS_TOKEN_TYPE, parse_token, verify_password
from app.config import settings
from app.models import RefreshToken, User

# conftest의 create_user 기본 비밀번호
TEST_PASSWORD = "password123"


def signup_payload(**overrides) -> dict:
    payload = {
        "username": "newuser",
        "password": "password123",
        "email": "newuser@example.com",
        "nickname": "새사용자",
        "name": "홍길동",
        "gender": "MAN",
        "birthDate": "1995-05-05",
        "phoneNumber": "010-1234-5678",
    }
    payload.update(overrides)
    return payload


class TestSignup:
    """회원가입 테스트"""

    def test_signup_success(self, client: TestClient, db_session: Session):
        response = client.post("/api/auth/signup", json=signup_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["username"] == "newuser"
        assert body["data"]["role"] == "ROLE_USER"
        assert body["data"]["provider"] == "local"
        assert "password" not in body["data"]

        user = db_session.query(User).filter(User.username == "newuser").first()
        assert user is not None
        assert user.password != "password123"
        assert verify_password("password123", user.password)

    def test_signup_duplicate_username(self, client: TestClient, create_user):
        create_user("newuser", email="other@example.com", nickname="다른닉네임")

        response = client.post("/api/auth/signup", json=signup_payload())

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "이미 사용 중인 아이디입니다."

    def test_signup_duplicate_email(self, client: TestClient, create_user):
        create_user("someone", email="newuser@example.com")

        response = client.post("/api/auth/signup", json=signup_payload())

        assert response.status_code == 409
        assert response.json()["message"] == "이미 사용 중인 이메일입니다."

    def test_signup_weak_password(self, client: TestClient):
        response = client.post("/api/auth/signup", json=signup_payload(password="short"))

        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_signup_missing_field(self, client: TestClient):
        payload = signup_payload()
        del payload["email"]

        response = client.post("/api/auth/signup", json=payload)

        assert response.status_code == 422
        assert "이메일을 입력해주세요" in response.json()["message"]


class TestDuplicateChecks:
    """아이디/이메일/닉네임 중복 검사 테스트"""

    def test_check_username_available(self, client: TestClient):
        response = client.post("/api/auth/check-username", params={"username": "freename"})

        assert response.status_code == 200
        assert response.json()["data"] == "freename"

    def test_check_username_taken(self, client: TestClient, owner: User):
        response = client.post("/api/auth/check-username", params={"username": owner.username})

        assert response.status_code == 409

    def test_check_email_taken(self, client: TestClient, owner: User):
        response = client.post("/api/auth/check-email", params={"email": owner.email})

        assert response.status_code == 409

    def test_check_nickname_uses_nickname(self, client: TestClient, owner: User):
        # 닉네임 검사는 아이디가 아니라 닉네임으로 비교
        taken = client.post("/api/auth/check-nickname", params={"nickname": owner.nickname})
        free = client.post("/api/auth/check-nickname", params={"nickname": owner.username})

        assert taken.status_code == 409
        assert taken.json()["message"] == "이미 사용 중인 닉네임입니다."
        assert free.status_code == 200


class TestLogin:
    """로그인/토큰 테스트"""

    def test_login_success(self, client: TestClient, db_session: Session, owner: User):
        response = client.post(
            "/api/auth/login",
            json={"username": owner.username, "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["userId"] == owner.user_id
        assert data["nickname"] == owner.nickname
        assert data["role"] == "ROLE_USER"

        claims = parse_token(data["accessToken"], ACCESS_TOKEN_TYPE)
        assert claims["sub"] == owner.username
        assert claims["userId"] == owner.user_id
        assert claims["role"] == "ROLE_USER"

        assert "refreshToken" in response.cookies
        stored = db_session.query(RefreshToken).filter(RefreshToken.user_id == owner.user_id).first()
        assert stored is not None
        assert stored.refresh_token == response.cookies["refreshToken"]

    def test_refresh_token_expiry_in_utc(self, client: TestClient, db_session: Session, owner: User):
        before = datetime.now(UTC).replace(tzinfo=None)

        client.post("/api/auth/login", json={"username": owner.username, "password": TEST_PASSWORD})

        stored = db_session.query(RefreshToken).filter(RefreshToken.user_id == owner.user_id).one()
        expires_at = stored.expires_at.replace(tzinfo=None)
        expected = before + timedelta(minutes=settings.refresh_token_expire_minutes)
        assert expected <= expires_at < expected + timedelta(minutes=1)

    def test_login_invalid_password(self, client: TestClient, owner: User):
        response = client.post(
            "/api/auth/login",
            json={"username": owner.username, "password": "wrongpass1"},
        )

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "아이디 또는 비밀번호가 올바르지 않습니다."

    def test_login_nonexistent_user(self, client: TestClient):
        response = client.post(
            "/api/auth/login",
            json={"username": "nobody", "password": "password123"},
        )

        assert response.status_code == 401

    def test_relogin_replaces_refresh_token(self, client: TestClient, db_session: Session, owner: User):
        credentials = {"username": owner.username, "password": TEST_PASSWORD}
        first = client.post("/api/auth/login", json=credentials).cookies["refreshToken"]
        second = client.post("/api/auth/login", json=credentials).cookies["refreshToken"]

        assert first != second
        tokens = db_session.query(RefreshToken).filter(RefreshToken.user_id == owner.user_id).all()
        assert len(tokens) == 1
        assert tokens[0].refresh_token == second

    def test_refresh_with_cookie(self, client: TestClient, owner: User):
        client.post("/api/auth/login", json={"username": owner.username, "password": TEST_PASSWORD})

        response = client.post("/api/auth/refresh")

        assert response.status_code == 200
        claims = parse_token(response.json()["data"]["accessToken"], ACCESS_TOKEN_TYPE)
        assert claims["userId"] == owner.user_id

    def test_refresh_without_cookie(self, client: TestClient):
        response = client.post("/api/auth/refresh")

        assert response.status_code == 401
        assert response.json()["message"] == "리프레시 토큰이 없습니다."

    def test_logout_revokes_refresh_token(self, client: TestClient, db_session: Session, owner: User):
        login = client.post("/api/auth/login", json={"username": owner.username, "password": TEST_PASSWORD})
        access_token = login.json()["data"]["accessToken"]

        response = client.post("/api/auth/logout", headers={"Authorization": f"Bearer {access_token}"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert db_session.query(RefreshToken).filter(RefreshToken.user_id == owner.user_id).count() == 0

        # 쿠키 만료 지시
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("refreshToken=")
        assert "Max-Age=0" in set_cookie
        assert "refreshToken" not in client.cookies
        assert client.post("/api/auth/refresh").status_code == 401

    def test_protected_endpoint_requires_token(self, client: TestClient):
        response = client.get("/api/users/me")

        assert response.status_code in (401, 403)
        assert response.json()["success"] is False

    def test_refresh_token_rejected_as_access_token(self, client: TestClient, owner: User):
        login = client.post("/api/auth/login", json={"username": owner.username, "password": TEST_PASSWORD})
        refresh_token = login.cookies["refreshToken"]

        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {refresh_token}"})

        assert response.status_code == 401


class TestFindAccount:
    """아이디/비밀번호 찾기 테스트"""

    def test_find_username(self, client: TestClient, owner: User):
        response = client.post(
            "/api/auth/find-username",
            json={"name": owner.name, "email": owner.email},
        )

        assert response.status_code == 200
        assert response.json()["data"] == owner.username

    def test_find_username_not_found(self, client: TestClient, owner: User):
        response = client.post(
            "/api/auth/find-username",
            json={"name": "다른 이름", "email": owner.email},
        )

        assert response.status_code == 404

    def test_find_password_resets_password(self, client: TestClient, db_session: Session, owner: User):
        response = client.post(
            "/api/auth/find-password",
            json={"username": owner.username, "email": owner.email},
        )

        assert response.status_code == 200
        db_session.refresh(owner)
        assert not verify_password(TEST_PASSWORD, owner.password)

        login = client.post("/api/auth/login", json={"username": owner.username, "password": TEST_PASSWORD})
        assert login.status_code == 401
