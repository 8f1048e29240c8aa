from sqlalchemy.orm import Session

from app.auth.utils import get_password_hash
from app.database import SessionLocal, engine
from app.models import Base, Role, User

ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@todotravel.com"
ADMIN_PASSWORD = "admin1234"


def create_tables():
    """데이터베이스 테이블 생성 (이미 있는 테이블은 건너뜀)"""
    Base.metadata.create_all(bind=engine)
    print("ℹ️  데이터베이스 테이블을 확인했습니다.")


def create_admin_user():
    """관리자 계정 생성"""
    db: Session = SessionLocal()
    try:
        existing_admin = db.query(User).filter(User.username == ADMIN_USERNAME).first()

        if existing_admin:
            print("⚠️  관리자 계정이 이미 존재합니다.")
            print(f"   아이디: {existing_admin.username}")
            print(f"   사용자 ID: {existing_admin.user_id}")
            return

        admin = User(
            username=ADMIN_USERNAME,
            email=ADMIN_EMAIL,
            nickname="관리자",
            password=get_password_hash(ADMIN_PASSWORD),
            name="Admin",
            role=Role.ROLE_ADMIN,
        )

        db.add(admin)
        db.commit()
        db.refresh(admin)

        print("✅ 관리자 계정이 생성되었습니다.")
        print(f"   아이디: {admin.username}")
        print(f"   이메일: {admin.email}")
        print(f"   사용자 ID: {admin.user_id}")

    except Exception as e:
        print(f"❌ 관리자 계정 생성 중 오류 발생: {e}")
        db.rollback()
    finally:
        db.close()


def init_database():
    """데이터베이스 초기화"""
    print("🚀 데이터베이스 초기화를 시작합니다...")

    try:
        create_tables()
        create_admin_user()
        print("✅ 데이터베이스 초기화가 완료되었습니다.")

    except Exception as e:
        print(f"❌ 데이터베이스 초기화 중 오류 발생: {e}")


if __name__ == "__main__":
    init_database()
