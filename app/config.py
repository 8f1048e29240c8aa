"""TodoTravel application configuration settings."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env 파일 로드
from dotenv import load_dotenv
load_dotenv()


class Settings(BaseSettings):
    """TodoTravel application settings configuration."""

    # 기본 설정
    app_name: str = "TodoTravel API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # 서버 설정
    host: str = "127.0.0.1"
    port: int = 8080

    # CORS 설정
    cors_origins: list[str] = ["http://localhost:3000"]

    # JWT 설정
    secret_key: str = os.getenv("JWT_SECRET_KEY", "")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    refresh_token_expire_minutes: int = 10080  # 7 days
    oauth2_token_expire_minutes: int = 5

    # 리프레시 토큰 쿠키 설정
    refresh_cookie_name: str = "refreshToken"
    refresh_cookie_secure: bool = False

    # 데이터베이스 설정
    database_url: str = os.getenv("DATABASE_URL", "")

    # 이메일 설정
    mail_username: str = os.getenv("MAIL_USERNAME", "")
    mail_password: str = os.getenv("MAIL_PASSWORD", "")
    mail_from: str = os.getenv("MAIL_FROM", "noreply@todotravel.com")
    mail_port: int = int(os.getenv("MAIL_PORT", "587"))
    mail_server: str = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    mail_starttls: bool = os.getenv("MAIL_STARTTLS", "true").lower() == "true"
    mail_ssl_tls: bool = os.getenv("MAIL_SSL_TLS", "false").lower() == "true"
    mail_from_name: str = os.getenv("MAIL_FROM_NAME", "TodoTravel")

    # OAuth2 제공자 설정
    google_client_id: str = os.getenv("GOOGLE_CLIENT_ID", "")
    google_client_secret: str = os.getenv("GOOGLE_CLIENT_SECRET", "")
    google_redirect_uri: str = os.getenv(
        "GOOGLE_REDIRECT_URI", "http://localhost:8080/api/oauth2/callback/google"
    )

    kakao_client_id: str = os.getenv("KAKAO_CLIENT_ID", "")
    kakao_client_secret: str = os.getenv("KAKAO_CLIENT_SECRET", "")
    kakao_redirect_uri: str = os.getenv(
        "KAKAO_REDIRECT_URI", "http://localhost:8080/api/oauth2/callback/kakao"
    )

    naver_client_id: str = os.getenv("NAVER_CLIENT_ID", "")
    naver_client_secret: str = os.getenv("NAVER_CLIENT_SECRET", "")
    naver_redirect_uri: str = os.getenv(
        "NAVER_REDIRECT_URI", "http://localhost:8080/api/oauth2/callback/naver"
    )

    # 프론트엔드 설정
    frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

    # 로깅 설정
    log_dir: str = "logs"
    log_level: str = ""  # 비어 있으면 debug 여부로 결정
    log_to_file: bool = True
    log_max_bytes: int = 10 * 1024 * 1024
    log_backup_count: int = 5
    log_sql: bool = False

    @field_validator("secret_key")
    @classmethod
    def secret_key_must_be_set(cls, v: str) -> str:
        """Validate that secret key is set."""
        if not v:
            raise ValueError("JWT_SECRET_KEY must be set")
        return v

    @field_validator("database_url")
    @classmethod
    def database_url_must_be_set(cls, v: str) -> str:
        """Validate that database URL is set."""
        if not v:
            raise ValueError("DATABASE_URL must be set")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.debug else "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as list."""
        if self.is_production:
            return [self.frontend_url]
        return self.cors_origins

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # 추가 필드 무시


# 설정 인스턴스 생성
settings = Settings()
