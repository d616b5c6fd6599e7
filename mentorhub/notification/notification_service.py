import uuid
from typing import Any
from sqlalchemy.ext.asyncio import AsyncSession
from mentorhub.common.errors import ForbiddenError, NotFoundError, ValidationError
from mentorhub.common.mentorship_enums import NotificationType, ProfileRole
from mentorhub.dto.notification_dto import NotificationDto
from mentorhub.entity.notification_entity import NotificationEntity

MIN_LIST_LIMIT = 1
MAX_LIST_LIMIT = 100
DEFAULT_LIST_LIMIT = 50


class NotificationService:
    """Service for creating, listing and updating in-app notifications."""

    def __init__(
        self,
        logger,
        notification_repository,
        profile_repository,
        notification_mapper,
    ):
        """
        Initializes the NotificationService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            notification_repository (NotificationRepository):
                The repository for accessing notification entity data.
            profile_repository (ProfileRepository):
                The repository used to resolve admin recipients.
            notification_mapper (NotificationMapper):
                The mapper for converting notification entities to DTOs.
        """
        self.logger = logger
        self.notification_repository = notification_repository
        self.profile_repository = profile_repository
        self.notification_mapper = notification_mapper

    def _build_entity(
        self,
        user_id: uuid.UUID,
        title: str,
        message: str,
        type: NotificationType,
        link: str | None,
        metadata: dict[str, Any] | None,
    ) -> NotificationEntity:
        if not user_id:
            raise ValidationError("Recipient user_id is required")
        if not title or not title.strip():
            raise ValidationError("Notification title is required")
        if not message or not message.strip():
            raise ValidationError("Notification message is required")

        return NotificationEntity(
            user_id=user_id,
            title=title.strip(),
            message=message.strip(),
            type=NotificationType(type),
            link=link,
            is_read=False,
            notification_metadata=metadata,
        )

    async def create(
        self,
        session: AsyncSession,
        user_id: uuid.UUID,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        link: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> NotificationDto:
        """
        Create a single notification and commit it.

        Args:
            session (AsyncSession): Active database async session.
            user_id (uuid.UUID): Recipient profile ID.
            title (str): Short headline, must not be blank.
            message (str): Body text, must not be blank.
            type (NotificationType): Visual category of the notification.
            link (str | None): Optional in-app link.
            metadata (dict | None): Optional structured payload.

        Returns:
            NotificationDto: The stored notification.

        Raises:
            ValidationError: If the recipient, title or message is missing.
        """
        entity = self._build_entity(user_id, title, message, type, link, metadata)
        [entity] = await self.notification_repository.insert_all(
            session=session, entities=[entity]
        )
        await session.commit()

        self.logger.info(
            "[NotificationService] created %s notification %s for user %s",
            entity.type,
            entity.id,
            user_id,
        )
        return self.notification_mapper.map_to_notification_dto(entity)

    async def create_bulk(
        self,
        session: AsyncSession,
        user_ids: list[uuid.UUID],
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        link: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> list[NotificationDto]:
        """
        Create the same notification for several recipients in one commit.

        Duplicate recipient IDs are collapsed; an empty recipient list is a no-op.
        """
        unique_user_ids = list(dict.fromkeys(user_ids or []))
        if not unique_user_ids:
            return []

        entities = [
            self._build_entity(user_id, title, message, type, link, metadata)
            for user_id in unique_user_ids
        ]
        entities = await self.notification_repository.insert_all(
            session=session, entities=entities
        )
        await session.commit()

        self.logger.info(
            "[NotificationService] created %d notifications titled %r",
            len(entities),
            title,
        )
        return self.notification_mapper.map_to_notification_dtos(entities)

    async def notify_admins(
        self,
        session: AsyncSession,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        link: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> list[NotificationDto]:
        """Create the notification for every profile with the admin role."""
        admin_ids = await self.profile_repository.get_ids_by_role(
            session=session, role=ProfileRole.ADMIN
        )
        if not admin_ids:
            self.logger.warning("[NotificationService] no admin profiles to notify")
            return []

        return await self.create_bulk(
            session=session,
            user_ids=admin_ids,
            title=title,
            message=message,
            type=type,
            link=link,
            metadata=metadata,
        )

    async def list_notifications(
        self,
        session: AsyncSession,
        user_id: uuid.UUID,
        unread_only: bool = False,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[NotificationDto]:
        """
        List the user's notifications, newest first.

        Args:
            session (AsyncSession): Active database async session.
            user_id (uuid.UUID): The owner's profile ID.
            unread_only (bool): Only include unread notifications.
            limit (int): Page size between 1 and 100.

        Returns:
            list[NotificationDto]: The user's notifications.

        Raises:
            ValidationError: If `limit` is out of range.
        """
        if limit is None or not MIN_LIST_LIMIT <= limit <= MAX_LIST_LIMIT:
            raise ValidationError(
                f"limit must be between {MIN_LIST_LIMIT} and {MAX_LIST_LIMIT}"
            )

        entities = await self.notification_repository.list_for_user(
            session=session, user_id=user_id, unread_only=unread_only, limit=limit
        )
        return self.notification_mapper.map_to_notification_dtos(entities)

    async def _raise_for_missing_row(
        self, session: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
    ):
        existing = await self.notification_repository.get_by_id(
            session=session, notification_id=notification_id
        )
        if existing is None:
            raise NotFoundError("Notification not found")

        self.logger.warning(
            "[NotificationService] user %s attempted to modify notification %s of user %s",
            user_id,
            notification_id,
            existing.user_id,
        )
        raise ForbiddenError("Forbidden: notification belongs to another user")

    async def mark_read(
        self, session: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
    ):
        """
        Mark one notification as read.

        Raises:
            NotFoundError: If the notification does not exist.
            ForbiddenError: If it belongs to another user.
        """
        updated = await self.notification_repository.mark_read(
            session=session, user_id=user_id, notification_id=notification_id
        )
        if not updated:
            await session.rollback()
            await self._raise_for_missing_row(session, user_id, notification_id)

        await session.commit()

    async def mark_all_read(self, session: AsyncSession, user_id: uuid.UUID) -> int:
        """
        Mark every unread notification of the user as read.

        Returns:
            int: The number of notifications that changed.
        """
        updated = await self.notification_repository.mark_all_read(
            session=session, user_id=user_id
        )
        await session.commit()

        return updated

    async def delete(
        self, session: AsyncSession, user_id: uuid.UUID, notification_id: uuid.UUID
    ):
        """
        Delete one of the user's notifications.

        Raises:
            NotFoundError: If the notification does not exist.
            ForbiddenError: If it belongs to another user.
        """
        deleted = await self.notification_repository.delete_for_user(
            session=session, user_id=user_id, notification_id=notification_id
        )
        if not deleted:
            await session.rollback()
            await self._raise_for_missing_row(session, user_id, notification_id)

        await session.commit()
        self.logger.info(
            "[NotificationService] user %s deleted notification %s",
            user_id,
            notification_id,
        )
