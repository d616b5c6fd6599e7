import uuid
from datetime import datetime
from pydantic import Field
from mentorhub.dto.base_dto import BaseDto
from mentorhub.dto.base_request_dto import BaseRequestDto
from mentorhub.dto.profile_dto import ProfileSummaryDto
from mentorhub.common.mentorship_enums import (
    AvailabilityStatus,
    MentorApplicationStatus,
)


class MentorApplicationDto(BaseDto):
    id: uuid.UUID
    profile_id: uuid.UUID
    status: MentorApplicationStatus
    bio: str
    headline: str | None = None
    expertise_areas: list[str] = Field(default_factory=list)
    years_of_experience: int | None = None
    linkedin_url: str | None = None
    admin_notes: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None
    applicant: ProfileSummaryDto | None = None


class MentorApplicationCreateDto(BaseRequestDto):
    bio: str = Field(min_length=1, max_length=4000)
    expertise_areas: list[str] = Field(min_length=1, max_length=20)
    headline: str | None = Field(default=None, max_length=200)
    years_of_experience: int | None = Field(default=None, ge=0, le=80)
    linkedin_url: str | None = Field(default=None, max_length=500)


class MentorApplicationReviewDto(BaseRequestDto):
    status: MentorApplicationStatus
    admin_notes: str | None = Field(default=None, max_length=2000)
    # Capacity granted to the new mentor; the default applies when omitted.
    max_mentees: int | None = Field(default=None, ge=1, le=50)


class MentorAvailabilityUpdateDto(BaseRequestDto):
    availability_status: AvailabilityStatus
