import uuid
from mentorhub.dto.base_dto import BaseDto
from mentorhub.common.mentorship_enums import ProfileRole


class ProfileDto(BaseDto):
    id: uuid.UUID
    role: ProfileRole
    full_name: str
    email: str
    phone: str | None = None
    avatar_url: str | None = None


class ProfileSummaryDto(BaseDto):
    full_name: str
    email: str
    avatar_url: str | None = None
