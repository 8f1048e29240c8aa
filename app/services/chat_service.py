"""
채팅방 서비스
플랜별 채팅방, 채팅방 참여자, 메시지를 관리합니다.
채팅방 참여자 행은 외래키 cascade 없이 명시적 삭제 쿼리로 정리합니다.
"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import ForbiddenException, NotFoundException
from app.models import ChatMessage, ChatRoom, ChatRoomUser, Plan, User

logger = logging.getLogger(__name__)


class ChatService:
    """채팅방 관리 서비스"""

    def __init__(self, db: Session):
        self.db = db

    # ----- 채팅방 -----

    def create_chat_room(self, plan: Plan, user: User, commit: bool = True) -> ChatRoom:
        """플랜 채팅방 생성 후 생성자를 첫 참여자로 추가"""
        room = ChatRoom(plan_id=plan.plan_id, room_name=plan.title)
        self.db.add(room)
        self.db.flush()
        self.db.add(ChatRoomUser(room_id=room.room_id, user_id=user.user_id))
        if commit:
            self.db.commit()
            self.db.refresh(room)
        logger.info(f"채팅방 생성: room {room.room_id} (plan {plan.plan_id})")
        return room

    def get_room(self, room_id: int) -> ChatRoom:
        room = self.db.query(ChatRoom).filter(ChatRoom.room_id == room_id).first()
        if not room:
            raise NotFoundException("채팅방을 찾을 수 없습니다.")
        return room

    def get_room_by_plan(self, plan_id: int) -> ChatRoom | None:
        return self.db.query(ChatRoom).filter(ChatRoom.plan_id == plan_id).first()

    def get_rooms_for_user(self, user_id: int) -> list[ChatRoom]:
        """사용자가 참여 중인 채팅방 (최근 생성 순)"""
        return (
            self.db.query(ChatRoom)
            .join(ChatRoomUser, ChatRoomUser.room_id == ChatRoom.room_id)
            .filter(ChatRoomUser.user_id == user_id)
            .order_by(ChatRoom.room_date.desc(), ChatRoom.room_id.desc())
            .all()
        )

    def delete_room(self, room_id: int, commit: bool = True) -> None:
        """채팅방 삭제 (메시지와 참여자 행을 먼저 삭제)"""
        self.db.query(ChatMessage).filter(ChatMessage.room_id == room_id).delete(
            synchronize_session=False
        )
        deleted_users = self.delete_room_users(room_id)
        self.db.query(ChatRoom).filter(ChatRoom.room_id == room_id).delete(
            synchronize_session=False
        )
        if commit:
            self.db.commit()
        logger.info(f"채팅방 삭제: room {room_id}, 참여자 {deleted_users}명 정리")

    def delete_room_by_plan(self, plan_id: int, commit: bool = True) -> None:
        room = self.get_room_by_plan(plan_id)
        if room:
            self.delete_room(room.room_id, commit=commit)

    # ----- 참여자 -----

    def is_member(self, room_id: int, user: User) -> bool:
        return (
            self.db.query(ChatRoomUser)
            .filter(ChatRoomUser.room_id == room_id, ChatRoomUser.user_id == user.user_id)
            .first()
            is not None
        )

    def add_user(self, room: ChatRoom, user: User, commit: bool = True) -> ChatRoomUser:
        """채팅방에 사용자 추가 (이미 참여 중이면 기존 행 반환)"""
        existing = (
            self.db.query(ChatRoomUser)
            .filter(ChatRoomUser.room_id == room.room_id, ChatRoomUser.user_id == user.user_id)
            .first()
        )
        if existing:
            return existing

        room_user = ChatRoomUser(room_id=room.room_id, user_id=user.user_id)
        self.db.add(room_user)
        if commit:
            self.db.commit()
            self.db.refresh(room_user)
        return room_user

    def find_first_user_in_room(self, room_id: int) -> ChatRoomUser | None:
        """가장 먼저 참여한 사용자 (방장)"""
        return (
            self.db.query(ChatRoomUser)
            .filter(ChatRoomUser.room_id == room_id)
            .order_by(ChatRoomUser.chat_room_user_id.asc())
            .first()
        )

    def get_room_users(self, room_id: int, user: User) -> list[ChatRoomUser]:
        self.get_room(room_id)
        if not self.is_member(room_id, user):
            raise ForbiddenException("채팅방 참여자만 참여자 목록을 조회할 수 있습니다.")

        return (
            self.db.query(ChatRoomUser)
            .filter(ChatRoomUser.room_id == room_id)
            .order_by(ChatRoomUser.chat_room_user_id.asc())
            .all()
        )

    def leave_room(self, room_id: int, user: User, commit: bool = True) -> None:
        """채팅방 나가기"""
        deleted = (
            self.db.query(ChatRoomUser)
            .filter(ChatRoomUser.room_id == room_id, ChatRoomUser.user_id == user.user_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise NotFoundException("참여 중인 채팅방이 아닙니다.")
        if commit:
            self.db.commit()

    def delete_room_users(self, room_id: int) -> int:
        """채팅방의 모든 참여자 행 삭제"""
        return (
            self.db.query(ChatRoomUser)
            .filter(ChatRoomUser.room_id == room_id)
            .delete(synchronize_session=False)
        )

    def delete_room_users_of(self, user: User) -> int:
        """사용자가 참여한 모든 채팅방 참여자 행 삭제"""
        return (
            self.db.query(ChatRoomUser)
            .filter(ChatRoomUser.user_id == user.user_id)
            .delete(synchronize_session=False)
        )

    # ----- 메시지 -----

    def save_message(self, room_id: int, user: User, content: str) -> ChatMessage:
        self.get_room(room_id)
        if not self.is_member(room_id, user):
            raise ForbiddenException("채팅방 참여자만 메시지를 보낼 수 있습니다.")

        message = ChatMessage(room_id=room_id, sender_id=user.user_id, content=content)
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

    def get_messages(self, room_id: int, user: User) -> list[ChatMessage]:
        self.get_room(room_id)
        if not self.is_member(room_id, user):
            raise ForbiddenException("채팅방 참여자만 메시지를 조회할 수 있습니다.")

        return (
            self.db.query(ChatMessage)
            .filter(ChatMessage.room_id == room_id)
            .order_by(ChatMessage.created_at.asc(), ChatMessage.message_id.asc())
            .all()
        )


def get_chat_service(db: Session = Depends(get_db)) -> ChatService:
    return ChatService(db)
