import uuid
from mentorhub.entity.notification_entity import NotificationEntity
from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession


class NotificationRepository:
    """
    Repository for handling database operations related to NotificationEntity.

    Every mutating query filters on the owning user_id.
    """

    async def insert_all(
        self, session: AsyncSession, entities: list[NotificationEntity]
    ) -> list[NotificationEntity]:
        """
        Add notifications to the session and flush them.

        Args:
            session (AsyncSession): The active async database session.
            entities (list[NotificationEntity]): Notifications to insert.

        Returns:
            list[NotificationEntity]: The flushed entities.
        """
        if not entities:
            return []

        session.add_all(entities)
        await session.flush()

        return entities

    async def get_by_id(
        self, session: AsyncSession, notification_id: uuid.UUID
    ) -> NotificationEntity | None:
        """
        Retrieve a notification by its ID regardless of owner.

        Args:
            session (AsyncSession): The active async database session.
            notification_id (uuid.UUID): The notification ID.

        Returns:
            NotificationEntity | None: The notification if found; otherwise None.
        """
        result = await session.execute(
            select(NotificationEntity).where(NotificationEntity.id == notification_id)
        )

        return result.scalars().one_or_none()

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: uuid.UUID,
        unread_only: bool = False,
        limit: int = 50,
    ) -> list[NotificationEntity]:
        """
        List a user's notifications, newest first.

        Args:
            session (AsyncSession): The active async database session.
            user_id (uuid.UUID): The recipient's profile ID.
            unread_only (bool): Only return rows with is_read = False.
            limit (int): Maximum number of rows.

        Returns:
            list[NotificationEntity]: The user's notifications.
        """
        stmt = select(NotificationEntity).where(NotificationEntity.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationEntity.is_read.is_(False))

        result = await session.execute(
            stmt.order_by(
                NotificationEntity.created_at.desc(), NotificationEntity.id.desc()
            ).limit(limit)
        )
        return list(result.scalars().all())

    async def mark_read(
        self, session: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
    ) -> int:
        """
        Mark one of the user's notifications as read.

        Returns:
            int: Number of updated rows (0 when the row is absent or owned by someone else).
        """
        result = await session.execute(
            update(NotificationEntity)
            .where(
                NotificationEntity.id == notification_id,
                NotificationEntity.user_id == user_id,
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def mark_all_read(self, session: AsyncSession, user_id: uuid.UUID) -> int:
        """
        Mark all unread notifications of the user as read.

        Returns:
            int: Number of updated rows.
        """
        result = await session.execute(
            update(NotificationEntity)
            .where(
                NotificationEntity.user_id == user_id,
                NotificationEntity.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_for_user(
        self, session: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
    ) -> int:
        """
        Delete one of the user's notifications.

        Returns:
            int: Number of deleted rows.
        """
        result = await session.execute(
            delete(NotificationEntity)
            .where(
                NotificationEntity.id == notification_id,
                NotificationEntity.user_id == user_id,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
