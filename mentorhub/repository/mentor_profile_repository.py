import uuid
from mentorhub.entity.mentor_profile_entity import MentorProfileEntity
from mentorhub.common.mentorship_enums import AvailabilityStatus
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession


class MentorProfileRepository:
    """
    Repository for handling database operations related to MentorProfileEntity.
    """

    async def get_by_user_id(
        self, session: AsyncSession, user_id: uuid.UUID
    ) -> MentorProfileEntity | None:
        """
        Retrieve the mentor extension record of a profile.

        Args:
            session (AsyncSession): The active async database session.
            user_id (uuid.UUID): The profile ID the mentor record belongs to.

        Returns:
            MentorProfileEntity | None: The mentor record if found; otherwise None.
        """
        result = await session.execute(
            select(MentorProfileEntity).where(MentorProfileEntity.user_id == user_id)
        )

        return result.scalars().one_or_none()

    async def insert_mentor_profile(
        self, session: AsyncSession, entity: MentorProfileEntity
    ) -> MentorProfileEntity:
        """
        Add a mentor record to the session and flush it.

        Args:
            session (AsyncSession): The active async database session.
            entity (MentorProfileEntity): The mentor record to insert.

        Returns:
            MentorProfileEntity: The flushed entity.
        """
        session.add(entity)
        await session.flush()

        return entity

    async def update_availability(
        self,
        session: AsyncSession,
        user_id: uuid.UUID,
        availability_status: AvailabilityStatus,
    ) -> MentorProfileEntity | None:
        """
        Set the availability of a profile's mentor record.

        Args:
            session (AsyncSession): The active async database session.
            user_id (uuid.UUID): The profile ID the mentor record belongs to.
            availability_status (AvailabilityStatus): The new availability.

        Returns:
            MentorProfileEntity | None: The updated record, or None when the profile has none.
        """
        result = await session.execute(
            update(MentorProfileEntity)
            .where(MentorProfileEntity.user_id == user_id)
            .values(availability_status=availability_status)
            .returning(MentorProfileEntity)
            .execution_options(synchronize_session="fetch", populate_existing=True)
        )

        return result.scalars().one_or_none()

    async def get_all_by_availability(
        self, session: AsyncSession, availability_status: AvailabilityStatus
    ) -> list[MentorProfileEntity]:
        """
        Retrieve mentor records with the given availability status.

        Rows are ordered by years of experience (most experienced first, unknown
        experience last), then by creation time so the order is deterministic.

        Args:
            session (AsyncSession): The active async database session.
            availability_status (AvailabilityStatus): The status to filter by.

        Returns:
            list[MentorProfileEntity]: Matching mentor records, possibly empty.
        """
        result = await session.execute(
            select(MentorProfileEntity)
            .where(MentorProfileEntity.availability_status == availability_status)
            .order_by(
                MentorProfileEntity.years_of_experience.desc().nulls_last(),
                MentorProfileEntity.created_at.asc(),
                MentorProfileEntity.id.asc(),
            )
        )
        return list(result.scalars().all())
