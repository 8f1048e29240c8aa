"""
TodoTravel 데이터베이스 모델 정의

각 모델의 주석에는 테이블의 용도와 주요 관계가 포함됩니다.
"""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base

# ===========================================
# Enum 정의
# ===========================================


class Role(enum.Enum):
    """사용자 역할"""

    ROLE_USER = "ROLE_USER"
    ROLE_ADMIN = "ROLE_ADMIN"


class Gender(enum.Enum):
    MAN = "MAN"
    WOMAN = "WOMAN"


class PlanUserStatus(enum.Enum):
    """플랜 참여 상태"""

    ACCEPTED = "ACCEPTED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


class VehicleType(enum.Enum):
    """이동 수단"""

    WALK = "WALK"
    BUS = "BUS"
    SUBWAY = "SUBWAY"
    CAR = "CAR"
    TAXI = "TAXI"
    BICYCLE = "BICYCLE"
    TRAIN = "TRAIN"
    AIRPLANE = "AIRPLANE"
    SHIP = "SHIP"


# ===========================================
# 사용자 및 인증 관련 테이블
# ===========================================


class User(Base):
    """
    사용자 정보 테이블
    설명: 일반 로그인 및 OAuth2 가입 사용자 계정
    """

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(50), unique=True, index=True, nullable=True)
    email = Column(String(100), unique=True, index=True, nullable=False)
    nickname = Column(String(50), unique=True, index=True, nullable=True)
    # OAuth2로 가입 중인 사용자는 비밀번호가 없음
    password = Column(String(255), nullable=True)
    name = Column(String(50), nullable=True)
    gender = Column(SqlEnum(Gender), nullable=True)
    birth_date = Column(Date, nullable=True)
    phone_number = Column(String(20), nullable=True)
    role = Column(SqlEnum(Role), default=Role.ROLE_USER, nullable=False)
    provider = Column(String(20), default="local", nullable=False)
    provider_id = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    refresh_token = relationship(
        "RefreshToken", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    plans = relationship("Plan", back_populates="plan_user")


class RefreshToken(Base):
    """
    리프레시 토큰 테이블
    설명: 사용자별 리프레시 토큰 (서버 측 폐기용)
    """

    __tablename__ = "refresh_tokens"

    token_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), unique=True, nullable=False)
    refresh_token = Column(String(512), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="refresh_token")


# ===========================================
# 여행 플랜 및 일정 관련 테이블
# ===========================================


class Plan(Base):
    """
    여행 플랜 테이블
    설명: 사용자가 작성한 여행 일정 묶음. 생성자는 plan_user_id
    """

    __tablename__ = "plans"

    plan_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    location = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)
    status = Column(Boolean, default=False, nullable=False)
    total_budget = Column(Integer, nullable=True)
    plan_user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    plan_user = relationship("User", back_populates="plans")
    schedules = relationship(
        "Schedule",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="Schedule.travel_day_count, Schedule.schedule_id",
    )
    plan_users = relationship(
        "PlanUser",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="PlanUser.plan_participant_id",
    )
    comments = relationship("Comment", back_populates="plan", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="plan", cascade="all, delete-orphan")
    bookmarks = relationship("Bookmark", back_populates="plan", cascade="all, delete-orphan")


class PlanUser(Base):
    """
    플랜 참여자 테이블
    설명: 사용자와 플랜의 참여 관계 및 초대 상태
    """

    __tablename__ = "plan_users"
    __table_args__ = (
        UniqueConstraint("plan_id", "user_id", name="uq_plan_user"),
    )

    plan_participant_id = Column(Integer, primary_key=True, autoincrement=True)
    plan_id = Column(Integer, ForeignKey("plans.plan_id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    status = Column(SqlEnum(PlanUserStatus), default=PlanUserStatus.PENDING, nullable=False)

    plan = relationship("Plan", back_populates="plan_users")
    user = relationship("User")


class Location(Base):
    """일정 장소"""

    __tablename__ = "locations"

    location_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    address = Column(String(255), nullable=True)


class Vehicle(Base):
    """일정 이동 수단"""

    __tablename__ = "vehicles"

    vehicle_id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle = Column(SqlEnum(VehicleType), nullable=False)


class Budget(Base):
    """일정 예산"""

    __tablename__ = "budgets"

    budget_id = Column(Integer, primary_key=True, autoincrement=True)
    amount = Column(Integer, nullable=False, default=0)
    description = Column(String(255), nullable=True)


class Schedule(Base):
    """
    일정 테이블
    설명: 플랜의 일차별 세부 일정 (장소, 이동 수단, 예산)
    """

    __tablename__ = "schedules"

    schedule_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    plan_id = Column(Integer, ForeignKey("plans.plan_id"), nullable=False, index=True)
    status = Column(Boolean, default=False, nullable=False)
    travel_day_count = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    travel_time = Column(String(20), nullable=True)
    location_id = Column(Integer, ForeignKey("locations.location_id"), nullable=False)
    vehicle_id = Column(Integer, ForeignKey("vehicles.vehicle_id"), nullable=True)
    budget_id = Column(Integer, ForeignKey("budgets.budget_id"), nullable=True)

    plan = relationship("Plan", back_populates="schedules")
    location = relationship("Location")
    vehicle = relationship("Vehicle")
    budget = relationship("Budget")


# ===========================================
# 댓글, 좋아요, 북마크
# ===========================================


class Comment(Base):
    """플랜 댓글"""

    __tablename__ = "comments"

    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    plan_id = Column(Integer, ForeignKey("plans.plan_id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    user = relationship("User")
    plan = relationship("Plan", back_populates="comments")


class Like(Base):
    """플랜 좋아요 (사용자당 플랜 하나)"""

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("user_id", "plan_id", name="uq_like_user_plan"),
    )

    like_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    plan_id = Column(Integer, ForeignKey("plans.plan_id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now)

    user = relationship("User")
    plan = relationship("Plan", back_populates="likes")


class Bookmark(Base):
    """플랜 북마크 (사용자당 플랜 하나)"""

    __tablename__ = "bookmarks"
    __table_args__ = (
        UniqueConstraint("user_id", "plan_id", name="uq_bookmark_user_plan"),
    )

    bookmark_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    plan_id = Column(Integer, ForeignKey("plans.plan_id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.now)

    user = relationship("User")
    plan = relationship("Plan", back_populates="bookmarks")


# ===========================================
# 채팅
# ===========================================


class ChatRoom(Base):
    """
    채팅방 테이블
    설명: 플랜마다 하나씩 생성되는 채팅방
    """

    __tablename__ = "chat_rooms"

    room_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    plan_id = Column(Integer, ForeignKey("plans.plan_id"), unique=True, nullable=False)
    room_name = Column(String(100), nullable=False)
    room_date = Column(DateTime, default=datetime.now, nullable=False)

    plan = relationship("Plan")


class ChatRoomUser(Base):
    """
    채팅방 참여자 테이블
    설명: 채팅방 삭제나 회원 탈퇴 시 명시적 삭제 쿼리로 정리됨
    """

    __tablename__ = "chat_room_users"
    __table_args__ = (
        UniqueConstraint("room_id", "user_id", name="uq_chat_room_user"),
    )

    chat_room_user_id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(Integer, ForeignKey("chat_rooms.room_id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)

    chat_room = relationship("ChatRoom")
    user = relationship("User")


class ChatMessage(Base):
    """채팅 메시지"""

    __tablename__ = "chat_messages"

    message_id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(Integer, ForeignKey("chat_rooms.room_id"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    sender = relationship("User")


# ===========================================
# 알림
# ===========================================


class Alarm(Base):
    """
    알림 테이블
    설명: 플랜 수정, 초대, 댓글 등으로 생성되는 사용자 알림
    """

    __tablename__ = "alarms"

    alarm_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    alarm_content = Column(String(255), nullable=False)
    is_checked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    user = relationship("User")
