import uuid
from datetime import datetime
from typing import Any
from pydantic import Field
from mentorhub.dto.base_dto import BaseDto
from mentorhub.dto.base_request_dto import BaseRequestDto
from mentorhub.common.mentorship_enums import NotificationType


class NotificationDto(BaseDto):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    message: str
    type: NotificationType
    link: str | None = None
    is_read: bool = False
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None


class NotificationCreateDto(BaseRequestDto):
    user_id: uuid.UUID
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    type: NotificationType
    link: str | None = None
    metadata: dict[str, Any] | None = None


class NotificationUpdateDto(BaseRequestDto):
    notification_id: uuid.UUID | None = None
    mark_all_as_read: bool = False
