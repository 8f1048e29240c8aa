import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.database_url

if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    # 로컬 개발용 SQLite
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        echo=settings.debug,
    )
else:
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        pool_size=10,
        max_overflow=15,
        pool_timeout=60,
        pool_pre_ping=True,  # 연결 상태 확인 활성화
        pool_recycle=1800,  # 30분마다 연결 재생성
        echo=settings.debug,  # 디버그 모드에서 SQL 로그 출력
        connect_args={
            "connect_timeout": 30,
            "application_name": "todotravel",
        },
    )

# 세션 팩토리 생성
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base 클래스
Base = declarative_base()


def get_db():
    """요청 단위 데이터베이스 세션 의존성"""
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        db.rollback()
        logger.error(f"Database error: {e}")
        raise
    finally:
        db.close()


def check_db_connection():
    """데이터베이스 연결 상태 확인"""
    try:
        db = SessionLocal()
        db.execute(text("SELECT 1")).fetchone()
        db.close()
        return True, "Database connection successful"
    except Exception as e:
        return False, f"Database connection failed: {str(e)}"
