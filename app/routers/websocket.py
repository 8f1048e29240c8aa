"""
실시간 채팅 WebSocket
채팅방 참여자끼리 메시지를 주고받고, 받은 메시지는 저장 후 같은 방의 모든 연결로 전달합니다.
"""

import logging
from typing import Dict, Set

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from app.auth.dependencies import get_user_from_token
from app.database import get_db
from app.exceptions import TodoTravelException
from app.routers.chat import to_message_response
from app.services.chat_service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ws",
    tags=["websocket"],
)

# 인증 실패, 참여자 아님
CLOSE_UNAUTHORIZED = 4001
CLOSE_FORBIDDEN = 4003


# 채팅방별 활성 WebSocket 연결 관리
class ConnectionManager:
    def __init__(self):
        self.active_connections: Dict[int, Set[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, room_id: int):
        await websocket.accept()
        if room_id not in self.active_connections:
            self.active_connections[room_id] = set()
        self.active_connections[room_id].add(websocket)
        logger.info(f"WebSocket connected for room {room_id}")

    def disconnect(self, websocket: WebSocket, room_id: int):
        if room_id in self.active_connections:
            self.active_connections[room_id].discard(websocket)
            if not self.active_connections[room_id]:
                del self.active_connections[room_id]
        logger.info(f"WebSocket disconnected for room {room_id}")

    async def broadcast(self, room_id: int, message: dict):
        if room_id in self.active_connections:
            disconnected = set()
            for connection in self.active_connections[room_id]:
                try:
                    await connection.send_json(message)
                except Exception as e:
                    logger.error(f"Error sending message to websocket: {e}")
                    disconnected.add(connection)

            # 실패한 연결 제거
            for conn in disconnected:
                self.active_connections[room_id].discard(conn)


manager = ConnectionManager()


@router.websocket("/chat/{room_id}")
async def chat_endpoint(
    websocket: WebSocket,
    room_id: int,
    token: str = Query(...),
    db: Session = Depends(get_db),
):
    """
    채팅방 WebSocket

    - **room_id**: 채팅방 ID
    - **token**: 액세스 토큰 (쿼리 파라미터로 전달)
    """
    user = get_user_from_token(token, db)
    if user is None:
        await websocket.close(code=CLOSE_UNAUTHORIZED, reason="Invalid token")
        return

    chat_service = ChatService(db)
    if not chat_service.is_member(room_id, user):
        await websocket.close(code=CLOSE_FORBIDDEN, reason="Not a room member")
        return

    await manager.connect(websocket, room_id)

    try:
        while True:
            try:
                data = await websocket.receive_json()
            except ValueError:
                await websocket.send_json({"type": "error", "message": "JSON 형식의 메시지만 보낼 수 있습니다."})
                continue

            if not isinstance(data, dict):
                await websocket.send_json({"type": "error", "message": "메시지는 {\"content\": ...} 형식이어야 합니다."})
                continue

            content = str(data.get("content", "")).strip()
            if not content:
                continue

            try:
                message = chat_service.save_message(room_id, user, content)
            except TodoTravelException as e:
                await websocket.send_json({"type": "error", "message": e.message})
                continue

            payload = to_message_response(message).model_dump(mode="json", by_alias=True)
            await manager.broadcast(room_id, {"type": "message", "data": payload})
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket, room_id)
