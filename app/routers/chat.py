"""
채팅 라우터
플랜 채팅방 목록, 참여자, 메시지 조회/전송과 채팅방 나가기
"""

import logging

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user
from app.models import ChatMessage, ChatRoomUser, User
from app.schemas.chat_schemas import (
    ChatMessageRequest,
    ChatMessageResponse,
    ChatRoomResponse,
    ChatRoomUserResponse,
)
from app.schemas.common import ApiResponse, success_response
from app.services.chat_service import ChatService, get_chat_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def to_room_user_response(room_user: ChatRoomUser) -> ChatRoomUserResponse:
    return ChatRoomUserResponse(
        chat_room_user_id=room_user.chat_room_user_id,
        room_id=room_user.room_id,
        user_id=room_user.user_id,
        nickname=room_user.user.nickname if room_user.user else None,
    )


def to_message_response(message: ChatMessage) -> ChatMessageResponse:
    return ChatMessageResponse(
        message_id=message.message_id,
        room_id=message.room_id,
        sender_id=message.sender_id,
        sender_nickname=message.sender.nickname if message.sender else None,
        content=message.content,
        created_at=message.created_at,
    )


@router.get("/rooms", response_model=ApiResponse[list[ChatRoomResponse]])
def list_my_rooms(
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    """내가 참여 중인 채팅방 목록 (최근 생성 순)"""
    rooms = service.get_rooms_for_user(current_user.user_id)
    return success_response([ChatRoomResponse.model_validate(r) for r in rooms], "채팅방 목록 조회 성공")


@router.get("/rooms/{room_id}/users", response_model=ApiResponse[list[ChatRoomUserResponse]])
def list_room_users(
    room_id: int,
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    room_users = service.get_room_users(room_id, current_user)
    return success_response([to_room_user_response(ru) for ru in room_users], "채팅방 참여자 조회 성공")


@router.get("/rooms/{room_id}/messages", response_model=ApiResponse[list[ChatMessageResponse]])
def list_messages(
    room_id: int,
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    messages = service.get_messages(room_id, current_user)
    return success_response([to_message_response(m) for m in messages], "메시지 조회 성공")


@router.post(
    "/rooms/{room_id}/messages",
    response_model=ApiResponse[ChatMessageResponse],
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    room_id: int,
    dto: ChatMessageRequest,
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    message = service.save_message(room_id, current_user, dto.content)
    return success_response(to_message_response(message), "메시지 전송 성공")


@router.delete("/rooms/{room_id}/leave", response_model=ApiResponse[None])
def leave_room(
    room_id: int,
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    service.get_room(room_id)
    service.leave_room(room_id, current_user)
    logger.info(f"채팅방 나가기: user {current_user.user_id} <- room {room_id}")
    return success_response(None, "채팅방 나가기 성공")
