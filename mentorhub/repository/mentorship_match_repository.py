import uuid
from mentorhub.entity.mentorship_match_entity import MentorshipMatchEntity
from mentorhub.common.mentorship_enums import MatchStatus
from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession


class MentorshipMatchRepository:
    """
    Repository for handling database operations related to MentorshipMatchEntity.
    """

    async def insert_match(
        self, session: AsyncSession, entity: MentorshipMatchEntity
    ) -> MentorshipMatchEntity:
        """
        Add a new match to the session and flush it so generated values are available.

        Args:
            session (AsyncSession): The active async database session.
            entity (MentorshipMatchEntity): The match to insert.

        Returns:
            MentorshipMatchEntity: The flushed entity.
        """
        session.add(entity)
        await session.flush()

        return entity

    async def get_by_id(
        self, session: AsyncSession, match_id: uuid.UUID
    ) -> MentorshipMatchEntity | None:
        """
        Retrieve a match by its ID.

        Args:
            session (AsyncSession): The active async database session.
            match_id (uuid.UUID): The match ID.

        Returns:
            MentorshipMatchEntity | None: The match if found; otherwise None.
        """
        result = await session.execute(
            select(MentorshipMatchEntity).where(MentorshipMatchEntity.id == match_id)
        )

        return result.scalars().one_or_none()

    async def get_match_for_pair(
        self,
        session: AsyncSession,
        mentor_id: uuid.UUID,
        mentee_id: uuid.UUID,
        statuses: list[MatchStatus],
    ) -> MentorshipMatchEntity | None:
        """
        Retrieve the most recent match between a mentor and a mentee in any of the given statuses.

        Args:
            session (AsyncSession): The active async database session.
            mentor_id (uuid.UUID): The mentor's profile ID.
            mentee_id (uuid.UUID): The mentee's profile ID.
            statuses (list[MatchStatus]): Statuses to consider.

        Returns:
            MentorshipMatchEntity | None: The latest matching row, or None.
        """
        result = await session.execute(
            select(MentorshipMatchEntity)
            .where(
                MentorshipMatchEntity.mentor_id == mentor_id,
                MentorshipMatchEntity.mentee_id == mentee_id,
                MentorshipMatchEntity.status.in_(statuses),
            )
            .order_by(MentorshipMatchEntity.created_at.desc())
            .limit(1)
        )

        return result.scalars().first()

    async def get_latest_for_mentee(
        self,
        session: AsyncSession,
        mentee_id: uuid.UUID,
        statuses: list[MatchStatus],
    ) -> MentorshipMatchEntity | None:
        """
        Retrieve the mentee's most recent match in any of the given statuses.

        Args:
            session (AsyncSession): The active async database session.
            mentee_id (uuid.UUID): The mentee's profile ID.
            statuses (list[MatchStatus]): Statuses to consider.

        Returns:
            MentorshipMatchEntity | None: The latest matching row, or None.
        """
        result = await session.execute(
            select(MentorshipMatchEntity)
            .where(
                MentorshipMatchEntity.mentee_id == mentee_id,
                MentorshipMatchEntity.status.in_(statuses),
            )
            .order_by(MentorshipMatchEntity.created_at.desc())
            .limit(1)
        )

        return result.scalars().first()

    async def count_by_mentor_and_status(
        self, session: AsyncSession, mentor_id: uuid.UUID, status: MatchStatus
    ) -> int:
        """
        Count a mentor's matches in the given status.

        Args:
            session (AsyncSession): The active async database session.
            mentor_id (uuid.UUID): The mentor's profile ID.
            status (MatchStatus): The status to count.

        Returns:
            int: Number of matching rows.
        """
        result = await session.execute(
            select(func.count())
            .select_from(MentorshipMatchEntity)
            .where(
                MentorshipMatchEntity.mentor_id == mentor_id,
                MentorshipMatchEntity.status == status,
            )
        )

        return result.scalar_one()

    async def transition_status(
        self,
        session: AsyncSession,
        match_id: uuid.UUID,
        from_status: MatchStatus,
        to_status: MatchStatus,
        mentor_id: uuid.UUID | None = None,
        mentee_id: uuid.UUID | None = None,
    ) -> MentorshipMatchEntity | None:
        """
        Move a match from one status to another with a single conditional UPDATE.

        The row is only updated while it still holds `from_status` and, when given,
        still belongs to `mentor_id` / `mentee_id`. A concurrent transition that got
        there first therefore leaves nothing to update.

        Args:
            session (AsyncSession): The active async database session.
            match_id (uuid.UUID): The match ID.
            from_status (MatchStatus): The status the row must currently hold.
            to_status (MatchStatus): The new status.
            mentor_id (uuid.UUID | None): Optional owner filter on the mentor side.
            mentee_id (uuid.UUID | None): Optional owner filter on the mentee side.

        Returns:
            MentorshipMatchEntity | None: The updated entity, or None when no row matched.
        """
        stmt = (
            update(MentorshipMatchEntity)
            .where(
                MentorshipMatchEntity.id == match_id,
                MentorshipMatchEntity.status == from_status,
            )
            .values(status=to_status)
            .returning(MentorshipMatchEntity)
            .execution_options(synchronize_session="fetch", populate_existing=True)
        )
        if mentor_id is not None:
            stmt = stmt.where(MentorshipMatchEntity.mentor_id == mentor_id)
        if mentee_id is not None:
            stmt = stmt.where(MentorshipMatchEntity.mentee_id == mentee_id)

        result = await session.execute(stmt)

        return result.scalars().one_or_none()

    async def list_matches(
        self,
        session: AsyncSession,
        mentor_id: uuid.UUID | None = None,
        mentee_id: uuid.UUID | None = None,
        status: MatchStatus | None = None,
    ) -> list[MentorshipMatchEntity]:
        """
        List matches, optionally scoped to a mentor, a mentee and/or a status.

        Args:
            session (AsyncSession): The active async database session.
            mentor_id (uuid.UUID | None): Restrict to this mentor.
            mentee_id (uuid.UUID | None): Restrict to this mentee.
            status (MatchStatus | None): Restrict to this status.

        Returns:
            list[MentorshipMatchEntity]: Matches ordered by start date, newest first.
        """
        stmt = select(MentorshipMatchEntity)
        if mentor_id is not None:
            stmt = stmt.where(MentorshipMatchEntity.mentor_id == mentor_id)
        if mentee_id is not None:
            stmt = stmt.where(MentorshipMatchEntity.mentee_id == mentee_id)
        if status is not None:
            stmt = stmt.where(MentorshipMatchEntity.status == status)

        result = await session.execute(
            stmt.order_by(
                MentorshipMatchEntity.start_date.desc(),
                MentorshipMatchEntity.created_at.desc(),
            )
        )
        return list(result.scalars().all())
