import uuid
from datetime import datetime
from mentorhub.dto.base_dto import BaseDto
from mentorhub.dto.profile_dto import ProfileSummaryDto
from mentorhub.common.mentorship_enums import MatchStatus


class MatchDto(BaseDto):
    id: uuid.UUID
    mentor_id: uuid.UUID
    mentee_id: uuid.UUID
    status: MatchStatus
    goals: str | None = None
    program_id: uuid.UUID | None = None
    start_date: datetime
    created_at: datetime | None = None
    mentor: ProfileSummaryDto | None = None
    mentee: ProfileSummaryDto | None = None


class MentorshipStatusDto(BaseDto):
    has_mentor: bool
    status: MatchStatus | None = None
    match_id: uuid.UUID | None = None
    mentor_name: str | None = None
    mentor_email: str | None = None
    goals: str | None = None
    created_at: datetime | None = None
