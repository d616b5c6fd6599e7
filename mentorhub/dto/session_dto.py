import uuid
from datetime import datetime
from pydantic import Field
from mentorhub.dto.base_dto import BaseDto
from mentorhub.dto.base_request_dto import BaseRequestDto
from mentorhub.common.mentorship_enums import SessionMode, SessionStatus


class SessionDto(BaseDto):
    id: uuid.UUID
    match_id: uuid.UUID
    session_date: datetime
    duration_minutes: int
    mode: SessionMode
    notes: str | None = None
    status: SessionStatus
    created_at: datetime | None = None


class SessionCreateDto(BaseRequestDto):
    match_id: uuid.UUID
    session_date: datetime
    duration_minutes: int = Field(gt=0)
    mode: SessionMode
    notes: str | None = None
    status: SessionStatus = SessionStatus.COMPLETED
