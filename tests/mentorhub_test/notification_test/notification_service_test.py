import uuid
import unittest
from unittest.mock import MagicMock, AsyncMock
from mentorhub.common.errors import ForbiddenError, NotFoundError, ValidationError
from mentorhub.common.mentorship_enums import NotificationType, ProfileRole
from mentorhub.entity.notification_entity import NotificationEntity
from mentorhub.notification.notification_mapper import NotificationMapper
from mentorhub.notification.notification_service import NotificationService


def _assign_ids(session, entities):
    for entity in entities:
        entity.id = uuid.uuid4()
    return entities


class TestNotificationService(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.logger = MagicMock()
        self.mock_session = AsyncMock()

        self.mock_notification_repo = MagicMock()
        self.mock_notification_repo.insert_all = AsyncMock(side_effect=_assign_ids)
        self.mock_notification_repo.get_by_id = AsyncMock()
        self.mock_notification_repo.list_for_user = AsyncMock()
        self.mock_notification_repo.mark_read = AsyncMock()
        self.mock_notification_repo.mark_all_read = AsyncMock()
        self.mock_notification_repo.delete_for_user = AsyncMock()

        self.mock_profile_repo = MagicMock()
        self.mock_profile_repo.get_ids_by_role = AsyncMock()

        self.service = NotificationService(
            logger=self.logger,
            notification_repository=self.mock_notification_repo,
            profile_repository=self.mock_profile_repo,
            notification_mapper=NotificationMapper(),
        )

        self.user_id = uuid.uuid4()
        self.notification_id = uuid.uuid4()

    async def test_create(self):
        """Test create a notification, commit it and return the DTO."""
        result = await self.service.create(
            session=self.mock_session,
            user_id=self.user_id,
            title="  Mentorship request accepted ",
            message="Ada accepted your request.",
            type=NotificationType.SUCCESS,
            link="/mentorship",
            metadata={"match_id": "m-1"},
        )

        inserted = self.mock_notification_repo.insert_all.await_args.kwargs["entities"]
        self.assertEqual(len(inserted), 1)
        self.assertEqual(inserted[0].user_id, self.user_id)
        self.assertFalse(inserted[0].is_read)
        self.mock_session.commit.assert_awaited_once()

        self.assertEqual(result.title, "Mentorship request accepted")
        self.assertEqual(result.type, NotificationType.SUCCESS)
        self.assertEqual(result.metadata, {"match_id": "m-1"})
        self.assertFalse(result.is_read)

    async def test_create_blank_title(self):
        """Test reject a notification with a blank title."""
        with self.assertRaises(ValidationError):
            await self.service.create(
                session=self.mock_session,
                user_id=self.user_id,
                title="   ",
                message="Body",
            )

        self.mock_notification_repo.insert_all.assert_not_awaited()
        self.mock_session.commit.assert_not_awaited()

    async def test_create_blank_message(self):
        """Test reject a notification without a message."""
        with self.assertRaises(ValidationError):
            await self.service.create(
                session=self.mock_session,
                user_id=self.user_id,
                title="Title",
                message="",
            )

    async def test_create_bulk_deduplicates_recipients(self):
        """Test create one notification per distinct recipient in one commit."""
        other_id = uuid.uuid4()

        result = await self.service.create_bulk(
            session=self.mock_session,
            user_ids=[self.user_id, other_id, self.user_id],
            title="Program update",
            message="New cohort opens soon.",
        )

        self.assertEqual([n.user_id for n in result], [self.user_id, other_id])
        self.mock_session.commit.assert_awaited_once()

    async def test_create_bulk_empty(self):
        """Test an empty recipient list creates nothing."""
        result = await self.service.create_bulk(
            session=self.mock_session, user_ids=[], title="T", message="M"
        )

        self.assertEqual(result, [])
        self.mock_notification_repo.insert_all.assert_not_awaited()

    async def test_notify_admins(self):
        """Test notify every admin profile."""
        admin_ids = [uuid.uuid4(), uuid.uuid4()]
        self.mock_profile_repo.get_ids_by_role.return_value = admin_ids

        result = await self.service.notify_admins(
            session=self.mock_session,
            title="New mentor application",
            message="Review pending.",
            type=NotificationType.WARNING,
        )

        self.mock_profile_repo.get_ids_by_role.assert_awaited_once_with(
            session=self.mock_session, role=ProfileRole.ADMIN
        )
        self.assertEqual([n.user_id for n in result], admin_ids)

    async def test_notify_admins_without_admins(self):
        """Test no notification is created when there are no admins."""
        self.mock_profile_repo.get_ids_by_role.return_value = []

        result = await self.service.notify_admins(
            session=self.mock_session, title="T", message="M"
        )

        self.assertEqual(result, [])
        self.logger.warning.assert_called_once()

    async def test_list_notifications(self):
        """Test list passes the owner, filter and limit to the repository."""
        entity = NotificationEntity(
            id=self.notification_id,
            user_id=self.user_id,
            title="Hello",
            message="World",
            type=NotificationType.INFO,
            is_read=False,
        )
        self.mock_notification_repo.list_for_user.return_value = [entity]

        result = await self.service.list_notifications(
            session=self.mock_session, user_id=self.user_id, unread_only=True, limit=10
        )

        self.mock_notification_repo.list_for_user.assert_awaited_once_with(
            session=self.mock_session, user_id=self.user_id, unread_only=True, limit=10
        )
        self.assertEqual(result[0].id, self.notification_id)

    async def test_list_notifications_limit_out_of_range(self):
        """Test reject limits outside 1..100."""
        for limit in (0, 101, -5):
            with self.subTest(limit=limit):
                with self.assertRaises(ValidationError):
                    await self.service.list_notifications(
                        session=self.mock_session, user_id=self.user_id, limit=limit
                    )

        self.mock_notification_repo.list_for_user.assert_not_awaited()

    async def test_mark_read(self):
        """Test mark the caller's notification as read and commit."""
        self.mock_notification_repo.mark_read.return_value = 1

        await self.service.mark_read(
            session=self.mock_session,
            user_id=self.user_id,
            notification_id=self.notification_id,
        )

        self.mock_session.commit.assert_awaited_once()
        self.mock_notification_repo.get_by_id.assert_not_awaited()

    async def test_mark_read_other_users_notification(self):
        """Test marking another user's notification is forbidden."""
        self.mock_notification_repo.mark_read.return_value = 0
        self.mock_notification_repo.get_by_id.return_value = MagicMock(
            spec=NotificationEntity, user_id=uuid.uuid4()
        )

        with self.assertRaises(ForbiddenError):
            await self.service.mark_read(
                session=self.mock_session,
                user_id=self.user_id,
                notification_id=self.notification_id,
            )

        self.mock_session.commit.assert_not_awaited()

    async def test_mark_read_missing_notification(self):
        """Test marking an unknown notification raises NotFoundError."""
        self.mock_notification_repo.mark_read.return_value = 0
        self.mock_notification_repo.get_by_id.return_value = None

        with self.assertRaises(NotFoundError):
            await self.service.mark_read(
                session=self.mock_session,
                user_id=self.user_id,
                notification_id=self.notification_id,
            )

    async def test_mark_all_read(self):
        """Test return the number of updated notifications."""
        self.mock_notification_repo.mark_all_read.return_value = 4

        result = await self.service.mark_all_read(
            session=self.mock_session, user_id=self.user_id
        )

        self.assertEqual(result, 4)
        self.mock_session.commit.assert_awaited_once()

    async def test_delete(self):
        """Test delete the caller's notification."""
        self.mock_notification_repo.delete_for_user.return_value = 1

        await self.service.delete(
            session=self.mock_session,
            user_id=self.user_id,
            notification_id=self.notification_id,
        )

        self.mock_notification_repo.delete_for_user.assert_awaited_once_with(
            session=self.mock_session,
            user_id=self.user_id,
            notification_id=self.notification_id,
        )
        self.mock_session.commit.assert_awaited_once()

    async def test_delete_other_users_notification(self):
        """Test deleting another user's notification is forbidden."""
        self.mock_notification_repo.delete_for_user.return_value = 0
        self.mock_notification_repo.get_by_id.return_value = MagicMock(
            spec=NotificationEntity, user_id=uuid.uuid4()
        )

        with self.assertRaises(ForbiddenError):
            await self.service.delete(
                session=self.mock_session,
                user_id=self.user_id,
                notification_id=self.notification_id,
            )

    async def test_delete_missing_notification(self):
        """Test deleting an unknown notification raises NotFoundError."""
        self.mock_notification_repo.delete_for_user.return_value = 0
        self.mock_notification_repo.get_by_id.return_value = None

        with self.assertRaises(NotFoundError):
            await self.service.delete(
                session=self.mock_session,
                user_id=self.user_id,
                notification_id=self.notification_id,
            )


if __name__ == "__main__":
    unittest.main()
