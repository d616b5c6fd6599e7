import uuid
import unittest
from datetime import datetime, timezone
from mentorhub.common.mentorship_enums import NotificationType
from mentorhub.entity.notification_entity import NotificationEntity
from mentorhub.notification.notification_mapper import NotificationMapper


class TestNotificationMapper(unittest.TestCase):
    def setUp(self):
        self.mapper = NotificationMapper()
        self.entity = NotificationEntity(
            id=uuid.uuid4(),
            user_id=uuid.uuid4(),
            title="Session logged",
            message="Ada logged a 60-minute session.",
            type=NotificationType.INFO,
            link="/mentorship",
            is_read=None,
            notification_metadata={"session_id": "s-1"},
            created_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
        )

    def test_map_to_notification_dto(self):
        """Test map every field, exposing the metadata column as `metadata`."""
        dto = self.mapper.map_to_notification_dto(self.entity)

        self.assertEqual(dto.id, self.entity.id)
        self.assertEqual(dto.metadata, {"session_id": "s-1"})
        self.assertFalse(dto.is_read)
        self.assertEqual(
            dto.model_dump(by_alias=True)["isRead"], False
        )

    def test_map_to_notification_dtos(self):
        """Test map a list of notifications preserving order."""
        other = NotificationEntity(
            id=uuid.uuid4(),
            user_id=self.entity.user_id,
            title="Other",
            message="Body",
            type=NotificationType.ERROR,
            is_read=True,
        )

        dtos = self.mapper.map_to_notification_dtos([self.entity, other])

        self.assertEqual([d.title for d in dtos], ["Session logged", "Other"])
        self.assertTrue(dtos[1].is_read)


if __name__ == "__main__":
    unittest.main()
