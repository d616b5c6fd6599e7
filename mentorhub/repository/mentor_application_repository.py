import uuid
from datetime import datetime
from mentorhub.entity.mentor_application_entity import MentorApplicationEntity
from mentorhub.common.mentorship_enums import MentorApplicationStatus
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession


class MentorApplicationRepository:
    """
    Repository for handling database operations related to MentorApplicationEntity.
    """

    async def insert_application(
        self, session: AsyncSession, entity: MentorApplicationEntity
    ) -> MentorApplicationEntity:
        """
        Add a new application to the session and flush it so generated values are available.

        Args:
            session (AsyncSession): The active async database session.
            entity (MentorApplicationEntity): The application to insert.

        Returns:
            MentorApplicationEntity: The flushed entity.
        """
        session.add(entity)
        await session.flush()

        return entity

    async def get_by_id(
        self, session: AsyncSession, application_id: uuid.UUID
    ) -> MentorApplicationEntity | None:
        result = await session.execute(
            select(MentorApplicationEntity).where(
                MentorApplicationEntity.id == application_id
            )
        )

        return result.scalars().one_or_none()

    async def get_latest_for_profile(
        self,
        session: AsyncSession,
        profile_id: uuid.UUID,
        statuses: list[MentorApplicationStatus],
    ) -> MentorApplicationEntity | None:
        """
        Retrieve the profile's most recent application in any of the given statuses.

        Args:
            session (AsyncSession): The active async database session.
            profile_id (uuid.UUID): The applicant's profile ID.
            statuses (list[MentorApplicationStatus]): Statuses to consider.

        Returns:
            MentorApplicationEntity | None: The latest matching row, or None.
        """
        result = await session.execute(
            select(MentorApplicationEntity)
            .where(
                MentorApplicationEntity.profile_id == profile_id,
                MentorApplicationEntity.status.in_(statuses),
            )
            .order_by(MentorApplicationEntity.created_at.desc())
            .limit(1)
        )

        return result.scalars().first()

    async def list_applications(
        self, session: AsyncSession, status: MentorApplicationStatus | None = None
    ) -> list[MentorApplicationEntity]:
        """
        List applications, oldest first so the review queue reads in arrival order.

        Args:
            session (AsyncSession): The active async database session.
            status (MentorApplicationStatus | None): Restrict to this status.

        Returns:
            list[MentorApplicationEntity]: Matching applications, possibly empty.
        """
        stmt = select(MentorApplicationEntity)
        if status is not None:
            stmt = stmt.where(MentorApplicationEntity.status == status)

        result = await session.execute(
            stmt.order_by(
                MentorApplicationEntity.created_at.asc(),
                MentorApplicationEntity.id.asc(),
            )
        )
        return list(result.scalars().all())

    async def review(
        self,
        session: AsyncSession,
        application_id: uuid.UUID,
        to_status: MentorApplicationStatus,
        reviewed_by: uuid.UUID,
        reviewed_at: datetime,
        admin_notes: str | None = None,
    ) -> MentorApplicationEntity | None:
        """
        Record the review decision with a single conditional UPDATE.

        Only a row that is still `pending` is updated, so two admins reviewing
        the same application cannot both succeed.

        Args:
            session (AsyncSession): The active async database session.
            application_id (uuid.UUID): The application ID.
            to_status (MentorApplicationStatus): `approved` or `rejected`.
            reviewed_by (uuid.UUID): The reviewing admin's profile ID.
            reviewed_at (datetime): Time of the decision.
            admin_notes (str | None): Optional note for the applicant.

        Returns:
            MentorApplicationEntity | None: The updated entity, or None when no row matched.
        """
        result = await session.execute(
            update(MentorApplicationEntity)
            .where(
                MentorApplicationEntity.id == application_id,
                MentorApplicationEntity.status == MentorApplicationStatus.PENDING,
            )
            .values(
                status=to_status,
                reviewed_by=reviewed_by,
                reviewed_at=reviewed_at,
                admin_notes=admin_notes,
            )
            .returning(MentorApplicationEntity)
            .execution_options(synchronize_session="fetch", populate_existing=True)
        )

        return result.scalars().one_or_none()
