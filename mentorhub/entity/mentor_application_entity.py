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
from mentorhub.common.mentorship_enums import MentorApplicationStatus


class MentorApplicationEntity(Base):
    __tablename__ = "mentor_applications"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), index=True
    )

    bio: Mapped[str] = mapped_column(Text)
    headline: Mapped[str | None] = mapped_column(String)
    expertise_areas: Mapped[list[str]] = mapped_column(ARRAY(String))
    years_of_experience: Mapped[int | None] = mapped_column(Integer)
    linkedin_url: Mapped[str | None] = mapped_column(String)

    status: Mapped[MentorApplicationStatus] = mapped_column(
        SAEnum(
            MentorApplicationStatus,
            name="mentor_application_status",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=MentorApplicationStatus.PENDING,
    )
    admin_notes: Mapped[str | None] = mapped_column(Text)
    # Admin profile that approved or rejected the application.
    reviewed_by: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("profiles.id"))
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
