import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Integer,
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
from mentorhub.common.mentorship_enums import SessionMode, SessionStatus


class MentorshipSessionEntity(Base):
    __tablename__ = "mentorship_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    match_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("mentorship_matches.id"))
    session_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    duration_minutes: Mapped[int] = mapped_column(Integer)
    mode: Mapped[SessionMode] = mapped_column(
        SAEnum(
            SessionMode,
            name="session_mode",
            values_callable=lambda obj: [e.value for e in obj],
        )
    )
    notes: Mapped[str | None] = mapped_column(Text)
    status: Mapped[SessionStatus] = mapped_column(
        SAEnum(
            SessionStatus,
            name="session_status",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=SessionStatus.COMPLETED,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="check_positive_duration"),
    )
