import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Text,
    DateTime,
    Uuid,
    ForeignKey,
    CheckConstraint,
    func,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column
from mentorhub.common.base import Base
from mentorhub.common.mentorship_enums import MatchStatus


class MentorshipMatchEntity(Base):
    __tablename__ = "mentorship_matches"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    mentor_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("profiles.id"))
    mentee_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("profiles.id"))
    status: Mapped[MatchStatus] = mapped_column(
        SAEnum(
            MatchStatus,
            name="match_status",
            values_callable=lambda obj: [e.value for e in obj],
        )
    )
    goals: Mapped[str | None] = mapped_column(Text)
    program_id: Mapped[uuid.UUID | None] = mapped_column(Uuid)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("mentor_id <> mentee_id", name="check_match_different_ids"),
    )
