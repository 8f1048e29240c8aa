"""채팅 스키마"""
from datetime import datetime

from pydantic import Field

from .common import CamelModel


class ChatRoomResponse(CamelModel):
    room_id: int
    plan_id: int
    room_name: str
    room_date: datetime


class ChatRoomUserResponse(CamelModel):
    chat_room_user_id: int
    room_id: int
    user_id: int
    nickname: str | None = None


class ChatMessageRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=2000)


class ChatMessageResponse(CamelModel):
    message_id: int
    room_id: int
    sender_id: int
    sender_nickname: str | None = None
    content: str
    created_at: datetime
