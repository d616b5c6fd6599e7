from mentorhub.dto.notification_dto import NotificationDto
from mentorhub.entity.notification_entity import NotificationEntity


class NotificationMapper:
    """
    Mapper for converting notification entities to DTOs.
    """

    def map_to_notification_dto(self, entity: NotificationEntity) -> NotificationDto:
        """Maps a NotificationEntity to a NotificationDto."""
        return NotificationDto(
            id=entity.id,
            user_id=entity.user_id,
            title=entity.title,
            message=entity.message,
            type=entity.type,
            link=entity.link,
            is_read=bool(entity.is_read),
            metadata=entity.notification_metadata,
            created_at=entity.created_at,
        )

    def map_to_notification_dtos(
        self, entities: list[NotificationEntity]
    ) -> list[NotificationDto]:
        """Maps a list of NotificationEntity objects to NotificationDto objects."""
        return [self.map_to_notification_dto(entity) for entity in entities]
