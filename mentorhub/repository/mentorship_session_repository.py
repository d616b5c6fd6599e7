import uuid
from mentorhub.entity.mentorship_session_entity import MentorshipSessionEntity
from mentorhub.entity.mentorship_match_entity import MentorshipMatchEntity
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


class MentorshipSessionRepository:
    """
    Repository for handling database operations related to MentorshipSessionEntity.
    """

    async def insert_session(
        self, session: AsyncSession, entity: MentorshipSessionEntity
    ) -> MentorshipSessionEntity:
        """
        Add a new session log entry and flush it.

        Args:
            session (AsyncSession): The active async database session.
            entity (MentorshipSessionEntity): The session record to insert.

        Returns:
            MentorshipSessionEntity: The flushed entity.
        """
        session.add(entity)
        await session.flush()

        return entity

    async def list_sessions(
        self,
        session: AsyncSession,
        match_id: uuid.UUID | None = None,
        mentor_id: uuid.UUID | None = None,
        mentee_id: uuid.UUID | None = None,
    ) -> list[MentorshipSessionEntity]:
        """
        List session log entries, scoped through the parent match.

        Args:
            session (AsyncSession): The active async database session.
            match_id (uuid.UUID | None): Restrict to one match.
            mentor_id (uuid.UUID | None): Restrict to matches of this mentor.
            mentee_id (uuid.UUID | None): Restrict to matches of this mentee.

        Returns:
            list[MentorshipSessionEntity]: Sessions ordered by session date, newest first.
        """
        stmt = select(MentorshipSessionEntity).join(
            MentorshipMatchEntity,
            MentorshipMatchEntity.id == MentorshipSessionEntity.match_id,
        )
        if match_id is not None:
            stmt = stmt.where(MentorshipSessionEntity.match_id == match_id)
        if mentor_id is not None:
            stmt = stmt.where(MentorshipMatchEntity.mentor_id == mentor_id)
        if mentee_id is not None:
            stmt = stmt.where(MentorshipMatchEntity.mentee_id == mentee_id)

        result = await session.execute(
            stmt.order_by(MentorshipSessionEntity.session_date.desc())
        )
        return list(result.scalars().all())
