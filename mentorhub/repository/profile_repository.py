import uuid
from mentorhub.entity.profile_entity import ProfileEntity
from mentorhub.common.mentorship_enums import ProfileRole
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession


class ProfileRepository:
    """
    Repository for handling database operations related to ProfileEntity.
    """

    async def get_by_id(
        self, session: AsyncSession, profile_id: uuid.UUID
    ) -> ProfileEntity | None:
        """
        Retrieve a profile entity by its primary key.

        Args:
            session (AsyncSession): The active async database session.
            profile_id (uuid.UUID): The ID of the profile to retrieve.

        Returns:
            ProfileEntity | None: The matching profile if found; otherwise None.
        """
        result = await session.execute(
            select(ProfileEntity).where(ProfileEntity.id == profile_id)
        )

        return result.scalars().one_or_none()

    async def get_by_user_id(
        self, session: AsyncSession, user_id: str
    ) -> ProfileEntity | None:
        """
        Retrieve a profile entity by the auth provider's subject identifier.

        Args:
            session (AsyncSession): The active async database session.
            user_id (str): The subject identifier from the access token.

        Returns:
            ProfileEntity | None: The matching profile if found; otherwise None.
        """
        result = await session.execute(
            select(ProfileEntity).where(ProfileEntity.user_id == user_id)
        )

        return result.scalars().one_or_none()

    async def get_all_by_ids(
        self, session: AsyncSession, profile_ids: list[uuid.UUID]
    ) -> list[ProfileEntity]:
        """
        Retrieve multiple profile entities by a list of IDs.

        Args:
            session (AsyncSession): The active async database session.
            profile_ids (list[uuid.UUID]): A list of profile IDs to retrieve.

        Returns:
            list[ProfileEntity]: A list of matching profiles.
                                 Returns an empty list if no matches are found.
        """
        if not profile_ids:
            return []

        result = await session.execute(
            select(ProfileEntity).where(ProfileEntity.id.in_(profile_ids))
        )
        return list(result.scalars().all())

    async def get_ids_by_role(
        self, session: AsyncSession, role: ProfileRole
    ) -> list[uuid.UUID]:
        """
        Retrieve the IDs of every profile holding the given role.

        Args:
            session (AsyncSession): The active async database session.
            role (ProfileRole): The role to filter by.

        Returns:
            list[uuid.UUID]: Matching profile IDs, possibly empty.
        """
        result = await session.execute(
            select(ProfileEntity.id).where(ProfileEntity.role == role)
        )
        return list(result.scalars().all())

    async def get_all_by_role(
        self, session: AsyncSession, role: ProfileRole
    ) -> list[ProfileEntity]:
        """
        Retrieve every profile holding the given role, ordered by name.

        Args:
            session (AsyncSession): The active async database session.
            role (ProfileRole): The role to filter by.

        Returns:
            list[ProfileEntity]: Matching profiles, possibly empty.
        """
        result = await session.execute(
            select(ProfileEntity)
            .where(ProfileEntity.role == role)
            .order_by(ProfileEntity.full_name.asc())
        )
        return list(result.scalars().all())

    async def update_role(
        self, session: AsyncSession, profile_id: uuid.UUID, role: ProfileRole
    ) -> ProfileEntity | None:
        """
        Change a profile's role.

        Args:
            session (AsyncSession): The active async database session.
            profile_id (uuid.UUID): The profile to update.
            role (ProfileRole): The new role.

        Returns:
            ProfileEntity | None: The updated profile, or None when it does not exist.
        """
        result = await session.execute(
            update(ProfileEntity)
            .where(ProfileEntity.id == profile_id)
            .values(role=role)
            .returning(ProfileEntity)
            .execution_options(synchronize_session="fetch", populate_existing=True)
        )

        return result.scalars().one_or_none()
