import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from ..auth.utils import get_password_hash, verify_password
from ..database import get_db
from ..exceptions import (
    AuthenticationException,
    BadRequestException,
    DuplicateException,
    NotFoundException,
)
from ..models import (
    Alarm,
    Bookmark,
    ChatMessage,
    Comment,
    Like,
    Plan,
    PlanUser,
    Role,
    User,
)
from ..schemas.user_schemas import (
    OAuth2AdditionalInfoRequest,
    OAuth2SignUpResponse,
    UsernameRequest,
    UserRegisterRequest,
)
from .chat_service import ChatService

logger = logging.getLogger(__name__)


class UserService:
    """사용자 관리 서비스"""

    def __init__(self, db: Session):
        self.db = db

    # ----- 조회 -----

    def get_user_by_user_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def get_user_by_email(self, email: str) -> User:
        user = self.db.query(User).filter(User.email == email).first()
        if not user:
            raise NotFoundException("해당 이메일로 가입된 사용자가 없습니다.")
        return user

    def get_all_users(self) -> list[User]:
        """플랜 초대용 전체 사용자 목록"""
        return (
            self.db.query(User)
            .filter(User.username.isnot(None))
            .order_by(User.user_id.asc())
            .all()
        )

    # ----- 중복 검사 -----

    def check_duplicate_username(self, username: str) -> None:
        if self.db.query(User).filter(User.username == username).first():
            raise DuplicateException("이미 사용 중인 아이디입니다.")

    def check_duplicate_email(self, email: str) -> None:
        if self.db.query(User).filter(User.email == email).first():
            raise DuplicateException("이미 사용 중인 이메일입니다.")

    def check_duplicate_nickname(self, nickname: str) -> None:
        if self.db.query(User).filter(User.nickname == nickname).first():
            raise DuplicateException("이미 사용 중인 닉네임입니다.")

    # ----- 가입 / 로그인 -----

    def register_new_user(self, dto: UserRegisterRequest) -> User:
        """새 사용자 생성"""
        self.check_duplicate_username(dto.username)
        self.check_duplicate_email(dto.email)
        self.check_duplicate_nickname(dto.nickname)

        new_user = User(
            username=dto.username,
            password=get_password_hash(dto.password),
            email=dto.email,
            nickname=dto.nickname,
            name=dto.name,
            gender=dto.gender,
            birth_date=dto.birth_date,
            phone_number=dto.phone_number,
            role=Role.ROLE_USER,
            provider="local",
        )
        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)

        logger.info(f"새 사용자 생성 완료: {new_user.username}")
        return new_user

    def check_login_available(self, username: str, password: str) -> User:
        """아이디/비밀번호 검증"""
        user = self.db.query(User).filter(User.username == username).first()
        if not user or not verify_password(password, user.password):
            logger.warning(f"로그인 실패: {username}")
            raise AuthenticationException("아이디 또는 비밀번호가 올바르지 않습니다.")
        return user

    def get_username(self, dto: UsernameRequest) -> str:
        """이름과 이메일로 아이디 찾기"""
        user = (
            self.db.query(User)
            .filter(User.name == dto.name, User.email == dto.email)
            .first()
        )
        if not user or not user.username:
            raise NotFoundException("일치하는 사용자 정보가 없습니다.")
        return user.username

    def set_temp_password(self, username: str, email: str, temp_password: str) -> User:
        """임시 비밀번호로 변경"""
        user = (
            self.db.query(User)
            .filter(User.username == username, User.email == email)
            .first()
        )
        if not user:
            raise NotFoundException("일치하는 사용자 정보가 없습니다.")

        user.password = get_password_hash(temp_password)
        self.db.commit()
        logger.info(f"임시 비밀번호 발급: {username}")
        return user

    # ----- OAuth2 -----

    def create_oauth2_user(self, email: str, provider: str, provider_id: str | None = None) -> User:
        """OAuth2 첫 로그인 사용자 생성 (추가 정보 입력 전 상태)"""
        user = User(
            email=email,
            provider=provider,
            provider_id=provider_id,
            role=Role.ROLE_USER,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"OAuth2 사용자 생성: {email} ({provider})")
        return user

    def get_oauth2_signup_info(self, email: str) -> OAuth2SignUpResponse:
        user = self.get_user_by_email(email)
        return OAuth2SignUpResponse(user_id=user.user_id, email=user.email)

    def update_oauth2_user_additional_info(self, dto: OAuth2AdditionalInfoRequest, email: str) -> User:
        """OAuth2 가입자의 추가 정보 저장 (email: OAuth2 토큰의 sub)"""
        user = self.get_user_by_user_id(dto.user_id)
        if not user:
            raise NotFoundException("사용자를 찾을 수 없습니다.")
        if user.provider == "local":
            raise BadRequestException("OAuth2 가입 사용자가 아닙니다.")
        if user.email != email:
            raise AuthenticationException("OAuth2 토큰과 사용자가 일치하지 않습니다.")
        if user.username is not None:
            raise BadRequestException("이미 가입이 완료된 계정입니다.")

        self.check_duplicate_username(dto.username)
        if user.nickname != dto.nickname:
            self.check_duplicate_nickname(dto.nickname)

        user.username = dto.username
        user.nickname = dto.nickname
        user.name = dto.name
        user.gender = dto.gender
        user.birth_date = dto.birth_date
        user.phone_number = dto.phone_number
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"OAuth2 추가 정보 저장 완료: {user.email}")
        return user

    # ----- 탈퇴 -----

    def delete_user(self, user: User) -> None:
        """회원 탈퇴: 사용자와 연관된 행을 한 트랜잭션에서 정리"""
        user_id = user.user_id
        try:
            chat_service = ChatService(self.db)

            for plan in self.db.query(Plan).filter(Plan.plan_user_id == user.user_id).all():
                chat_service.delete_room_by_plan(plan.plan_id, commit=False)
                self.db.delete(plan)
            self.db.flush()
            self.db.expire(user, ["plans"])

            chat_service.delete_room_users_of(user)
            self.db.query(ChatMessage).filter(ChatMessage.sender_id == user.user_id).delete(
                synchronize_session=False
            )
            # 리프레시 토큰은 User 관계의 cascade로 삭제됨
            for model in (Like, Bookmark, Comment, PlanUser, Alarm):
                self.db.query(model).filter(model.user_id == user.user_id).delete(
                    synchronize_session=False
                )

            self.db.delete(user)
            self.db.commit()
            logger.info(f"회원 탈퇴 완료: user {user_id}")
        except Exception as e:
            logger.error(f"회원 탈퇴 실패 (ID: {user_id}): {e}")
            self.db.rollback()
            raise


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)
