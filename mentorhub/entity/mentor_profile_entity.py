import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Integer,
    String,
    Text,
    DateTime,
    Uuid,
    ForeignKey,
    func,
    Enum as SAEnum,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column
from mentorhub.common.base import Base
from mentorhub.common.mentorship_enums import AvailabilityStatus


class MentorProfileEntity(Base):
    __tablename__ = "mentor_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), unique=True
    )

    bio: Mapped[str | None] = mapped_column(Text)
    headline: Mapped[str | None] = mapped_column(String)
    expertise_areas: Mapped[list[str] | None] = mapped_column(ARRAY(String))
    years_of_experience: Mapped[int | None] = mapped_column(Integer)
    availability_status: Mapped[AvailabilityStatus] = mapped_column(
        SAEnum(
            AvailabilityStatus,
            name="availability_status",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=AvailabilityStatus.AVAILABLE,
    )
    max_mentees: Mapped[int] = mapped_column(Integer, default=3)
    linkedin_url: Mapped[str | None] = mapped_column(String)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
