import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Uuid, func, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from mentorhub.common.base import Base
from mentorhub.common.mentorship_enums import ProfileRole


class ProfileEntity(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Subject identifier issued by the auth provider.
    user_id: Mapped[str] = mapped_column(String, unique=True)

    role: Mapped[ProfileRole] = mapped_column(
        SAEnum(
            ProfileRole,
            name="profile_role",
            values_callable=lambda obj: [e.value for e in obj],
        )
    )
    full_name: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String)
    phone: Mapped[str | None] = mapped_column(String)
    avatar_url: Mapped[str | None] = mapped_column(String)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
