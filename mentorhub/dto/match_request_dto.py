import uuid
from pydantic import Field
from mentorhub.dto.base_request_dto import BaseRequestDto


class MentorshipRequestDto(BaseRequestDto):
    mentor_id: uuid.UUID
    mentee_id: uuid.UUID
    goals: str | None = Field(default=None, max_length=2000)


class AdminMatchRequestDto(BaseRequestDto):
    mentor_id: uuid.UUID
    mentee_id: uuid.UUID
    program_id: uuid.UUID | None = None
    goals: str | None = Field(default=None, max_length=2000)
