import uuid
from pydantic import Field
from mentorhub.dto.base_dto import BaseDto
from mentorhub.common.mentorship_enums import AvailabilityStatus


class MentorSummaryDto(BaseDto):
    id: uuid.UUID
    full_name: str
    email: str
    avatar_url: str | None = None
    headline: str | None = None
    expertise_areas: list[str] = Field(default_factory=list)
    bio: str | None = None
    years_of_experience: int | None = None
    linkedin_url: str | None = None


class MentorProfileDto(BaseDto):
    id: uuid.UUID
    user_id: uuid.UUID
    availability_status: AvailabilityStatus
    max_mentees: int
    headline: str | None = None
    expertise_areas: list[str] = Field(default_factory=list)
    bio: str | None = None
    years_of_experience: int | None = None
    linkedin_url: str | None = None
