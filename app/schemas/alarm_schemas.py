"""알림 스키마"""
from datetime import datetime

from pydantic import BaseModel

from .common import CamelModel


class AlarmRequest(BaseModel):
    """알림 생성 요청 (서비스 간 전달용)"""

    member_id: int
    alarm_content: str


class AlarmResponse(CamelModel):
    alarm_id: int
    alarm_content: str
    is_checked: bool
    created_at: datetime | None = None
