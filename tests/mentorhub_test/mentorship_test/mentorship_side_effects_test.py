import uuid
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, AsyncMock
from mentorhub.common.mentorship_enums import (
    MatchStatus,
    MentorApplicationStatus,
    NotificationType,
    ProfileRole,
)
from mentorhub.dto.email_dto import (
    BulkEmailResultDto,
    EmailResultDto,
    RenderedEmailDto,
)
from mentorhub.entity.mentor_application_entity import MentorApplicationEntity
from mentorhub.entity.mentorship_match_entity import MentorshipMatchEntity
from mentorhub.entity.mentorship_session_entity import MentorshipSessionEntity
from mentorhub.entity.profile_entity import ProfileEntity
from mentorhub.mentorship.mentorship_side_effects import MentorshipSideEffects


class TestMentorshipSideEffects(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.logger = MagicMock()
        self.mock_session = AsyncMock()

        self.mock_notification_service = MagicMock()
        self.mock_notification_service.create = AsyncMock()
        self.mock_notification_service.notify_admins = AsyncMock(return_value=[])

        self.mock_email_service = MagicMock()
        self.mock_email_service.send = AsyncMock(
            return_value=EmailResultDto(success=True, message_id="msg-1")
        )
        self.mock_email_service.is_configured.return_value = True
        self.mock_email_service.send_bulk = AsyncMock(
            return_value=BulkEmailResultDto(success=True, sent=2, failed=0)
        )

        self.mock_renderer = MagicMock()
        for name in (
            "render_request_received",
            "render_request_sent",
            "render_request_accepted",
            "render_request_rejected",
            "render_mentor_application_received",
            "render_mentor_application_reviewed",
        ):
            getattr(self.mock_renderer, name).return_value = RenderedEmailDto(
                subject=f"subject:{name}", html="<p>html</p>", text="text"
            )

        self.side_effects = MentorshipSideEffects(
            logger=self.logger,
            notification_service=self.mock_notification_service,
            email_service=self.mock_email_service,
            email_template_renderer=self.mock_renderer,
        )

        self.mentor = ProfileEntity(
            id=uuid.uuid4(),
            role=ProfileRole.MENTOR,
            full_name="Ada Obi",
            email="ada@example.org",
        )
        self.mentee = ProfileEntity(
            id=uuid.uuid4(),
            role=ProfileRole.APPLICANT,
            full_name="Tunde Bello",
            email="tunde@example.org",
        )
        self.match = MentorshipMatchEntity(
            id=uuid.uuid4(),
            mentor_id=self.mentor.id,
            mentee_id=self.mentee.id,
            status=MatchStatus.PENDING,
            goals="Grow my NGO",
        )
        self.admins = [
            ProfileEntity(
                id=uuid.uuid4(),
                role=ProfileRole.ADMIN,
                full_name="Grace Eze",
                email="grace@example.org",
            ),
            ProfileEntity(
                id=uuid.uuid4(),
                role=ProfileRole.ADMIN,
                full_name="Musa Bala",
                email="musa@example.org",
            ),
        ]
        self.application = MentorApplicationEntity(
            id=uuid.uuid4(),
            profile_id=self.mentee.id,
            bio="Program officer",
            headline="Grants lead",
            expertise_areas=["grant writing"],
            status=MentorApplicationStatus.PENDING,
        )

    async def _submit_application(self):
        await self.side_effects.on_mentor_application_submitted(
            session=self.mock_session,
            application=self.application,
            applicant=self.mentee,
            admins=self.admins,
        )

    async def test_on_request_created(self):
        """Test notify the mentor and email both parties about a new request."""
        await self.side_effects.on_request_created(
            session=self.mock_session,
            match=self.match,
            mentor=self.mentor,
            mentee=self.mentee,
        )

        create_kwargs = self.mock_notification_service.create.await_args.kwargs
        self.assertEqual(create_kwargs["user_id"], self.mentor.id)
        self.assertEqual(create_kwargs["type"], NotificationType.INFO)
        self.assertEqual(create_kwargs["metadata"], {"match_id": str(self.match.id)})

        self.mock_renderer.render_request_received.assert_called_once_with(
            mentor_name="Ada Obi",
            mentee_name="Tunde Bello",
            mentee_email="tunde@example.org",
            goals="Grow my NGO",
        )
        recipients = [c.kwargs["to"] for c in self.mock_email_service.send.await_args_list]
        self.assertEqual(recipients, ["ada@example.org", "tunde@example.org"])

    async def test_on_admin_match_created(self):
        """Test notify both parties with a success notification and send no email."""
        await self.side_effects.on_admin_match_created(
            session=self.mock_session,
            match=self.match,
            mentor=self.mentor,
            mentee=self.mentee,
        )

        calls = self.mock_notification_service.create.await_args_list
        self.assertEqual(
            [c.kwargs["user_id"] for c in calls], [self.mentor.id, self.mentee.id]
        )
        self.assertTrue(
            all(c.kwargs["type"] == NotificationType.SUCCESS for c in calls)
        )
        self.mock_email_service.send.assert_not_awaited()

    async def test_on_request_accepted(self):
        """Test notify the mentee with a success notification and the accepted email."""
        await self.side_effects.on_request_accepted(
            session=self.mock_session,
            match=self.match,
            mentor=self.mentor,
            mentee=self.mentee,
        )

        create_kwargs = self.mock_notification_service.create.await_args.kwargs
        self.assertEqual(create_kwargs["user_id"], self.mentee.id)
        self.assertEqual(create_kwargs["type"], NotificationType.SUCCESS)
        self.assertEqual(create_kwargs["link"], "/mentorship")

        self.mock_renderer.render_request_accepted.assert_called_once_with(
            mentee_name="Tunde Bello",
            mentor_name="Ada Obi",
            mentor_email="ada@example.org",
        )
        send_kwargs = self.mock_email_service.send.await_args.kwargs
        self.assertEqual(send_kwargs["to"], "tunde@example.org")
        self.assertEqual(send_kwargs["subject"], "subject:render_request_accepted")

    async def test_on_request_rejected(self):
        """Test notify the mentee with an info notification and the rejected email."""
        await self.side_effects.on_request_rejected(
            session=self.mock_session,
            match=self.match,
            mentor=self.mentor,
            mentee=self.mentee,
        )

        create_kwargs = self.mock_notification_service.create.await_args.kwargs
        self.assertEqual(create_kwargs["user_id"], self.mentee.id)
        self.assertEqual(create_kwargs["type"], NotificationType.INFO)
        self.mock_renderer.render_request_rejected.assert_called_once()

    async def test_on_request_withdrawn(self):
        """Test notify the mentor only, without email."""
        await self.side_effects.on_request_withdrawn(
            session=self.mock_session,
            match=self.match,
            mentor=self.mentor,
            mentee=self.mentee,
        )

        create_kwargs = self.mock_notification_service.create.await_args.kwargs
        self.assertEqual(create_kwargs["user_id"], self.mentor.id)
        self.mock_email_service.send.assert_not_awaited()

    async def test_on_session_logged(self):
        """Test notify the mentee about a logged session."""
        logged = MentorshipSessionEntity(
            id=uuid.uuid4(),
            match_id=self.match.id,
            session_date=datetime(2025, 3, 10, 15, tzinfo=timezone.utc),
            duration_minutes=60,
        )

        await self.side_effects.on_session_logged(
            session=self.mock_session,
            logged_session=logged,
            mentor=self.mentor,
            mentee=self.mentee,
        )

        create_kwargs = self.mock_notification_service.create.await_args.kwargs
        self.assertEqual(create_kwargs["user_id"], self.mentee.id)
        self.assertIn("60-minute", create_kwargs["message"])
        self.assertIn("2025-03-10", create_kwargs["message"])

    async def test_notification_failure_is_swallowed(self):
        """Test a failing notification is rolled back and the email still goes out."""
        self.mock_notification_service.create.side_effect = Exception("db down")

        await self.side_effects.on_request_accepted(
            session=self.mock_session,
            match=self.match,
            mentor=self.mentor,
            mentee=self.mentee,
        )

        self.mock_session.rollback.assert_awaited_once()
        self.logger.warning.assert_called()
        self.mock_email_service.send.assert_awaited_once()

    async def test_email_failure_result_is_logged(self):
        """Test an unsuccessful email result is logged and not raised."""
        self.mock_email_service.send.return_value = EmailResultDto(
            success=False, error="Email service not configured"
        )

        await self.side_effects.on_request_rejected(
            session=self.mock_session,
            match=self.match,
            mentor=self.mentor,
            mentee=self.mentee,
        )

        self.logger.warning.assert_called_once()
        self.assertIn(
            "Email service not configured", self.logger.warning.call_args.args
        )

    async def test_email_exception_is_swallowed(self):
        """Test an exception while rendering or sending never propagates."""
        self.mock_renderer.render_request_accepted.side_effect = Exception("bad template")

        await self.side_effects.on_request_accepted(
            session=self.mock_session,
            match=self.match,
            mentor=self.mentor,
            mentee=self.mentee,
        )

        self.mock_email_service.send.assert_not_awaited()
        self.logger.warning.assert_called_once()

    async def test_on_mentor_application_submitted(self):
        """Test notify every admin in-app and email them in one bulk send."""
        await self._submit_application()

        notify_kwargs = self.mock_notification_service.notify_admins.await_args.kwargs
        self.assertEqual(notify_kwargs["title"], "New mentor application")
        self.assertIn("Tunde Bello", notify_kwargs["message"])
        self.assertEqual(notify_kwargs["link"], "/admin/mentors/applications")
        self.assertEqual(
            notify_kwargs["metadata"], {"application_id": str(self.application.id)}
        )

        self.mock_renderer.render_mentor_application_received.assert_called_once_with(
            applicant_name="Tunde Bello",
            applicant_email="tunde@example.org",
            expertise_areas=["grant writing"],
            headline="Grants lead",
        )
        [messages] = self.mock_email_service.send_bulk.await_args.args
        self.assertEqual(
            [m.to for m in messages], ["grace@example.org", "musa@example.org"]
        )
        self.assertTrue(all(m.reply_to == "tunde@example.org" for m in messages))
        self.assertEqual(messages[0].subject, "subject:render_mentor_application_received")
        self.logger.warning.assert_not_called()

    async def test_on_mentor_application_submitted_email_not_configured(self):
        """Test admins are still notified in-app when email is not configured."""
        self.mock_email_service.is_configured.return_value = False

        await self._submit_application()

        self.mock_notification_service.notify_admins.assert_awaited_once()
        self.mock_email_service.send_bulk.assert_not_awaited()
        self.mock_renderer.render_mentor_application_received.assert_not_called()

    async def test_on_mentor_application_submitted_without_admins(self):
        self.admins = []

        await self._submit_application()

        self.mock_notification_service.notify_admins.assert_awaited_once()
        self.mock_email_service.send_bulk.assert_not_awaited()

    async def test_on_mentor_application_submitted_failures_are_swallowed(self):
        """Test a failed admin notification is rolled back and partial email failures are logged."""
        self.mock_notification_service.notify_admins.side_effect = Exception("db down")
        self.mock_email_service.send_bulk.return_value = BulkEmailResultDto(
            success=True, sent=1, failed=1, errors=["bounced"]
        )

        await self._submit_application()

        self.mock_session.rollback.assert_awaited_once()
        self.mock_email_service.send_bulk.assert_awaited_once()
        self.assertEqual(self.logger.warning.call_count, 2)

    async def test_on_mentor_application_reviewed(self):
        """Test approval is a success notification and rejection an info one, each with an email."""
        cases = [
            (MentorApplicationStatus.APPROVED, NotificationType.SUCCESS, True),
            (MentorApplicationStatus.REJECTED, NotificationType.INFO, False),
        ]
        for status, notification_type, approved in cases:
            with self.subTest(status=status):
                self.mock_notification_service.create.reset_mock()
                self.mock_renderer.render_mentor_application_reviewed.reset_mock()
                self.application.status = status
                self.application.admin_notes = "See you soon"

                await self.side_effects.on_mentor_application_reviewed(
                    session=self.mock_session,
                    application=self.application,
                    applicant=self.mentee,
                )

                create_kwargs = self.mock_notification_service.create.await_args.kwargs
                self.assertEqual(create_kwargs["user_id"], self.mentee.id)
                self.assertEqual(create_kwargs["type"], notification_type)
                self.mock_renderer.render_mentor_application_reviewed.assert_called_once_with(
                    applicant_name="Tunde Bello",
                    approved=approved,
                    admin_notes="See you soon",
                )
                self.assertEqual(
                    self.mock_email_service.send.await_args.kwargs["to"],
                    "tunde@example.org",
                )


if __name__ == "__main__":
    unittest.main()
