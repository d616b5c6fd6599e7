import uuid
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, AsyncMock
from mentorhub.common.errors import ConflictError
from mentorhub.common.mentorship_enums import (
    AvailabilityStatus,
    MatchStatus,
    MentorApplicationStatus,
    NotificationType,
    ProfileRole,
    SessionMode,
)
from mentorhub.dto.user_context_dto import UserContextDto
from mentorhub.email.email_service import EmailService
from mentorhub.email.email_template_renderer import EmailTemplateRenderer
from mentorhub.entity.mentor_profile_entity import MentorProfileEntity
from mentorhub.entity.profile_entity import ProfileEntity
from mentorhub.mentorship.match_service import MatchService
from mentorhub.mentorship.mentor_directory_service import MentorDirectoryService
from mentorhub.mentorship.mentor_onboarding_service import MentorOnboardingService
from mentorhub.mentorship.mentorship_mapper import MentorshipMapper
from mentorhub.mentorship.mentorship_side_effects import MentorshipSideEffects
from mentorhub.mentorship.session_service import SessionService
from mentorhub.notification.notification_mapper import NotificationMapper
from mentorhub.notification.notification_service import NotificationService
from mentorhub.profile.profile_identity_service import ProfileIdentityService
from mentorhub.utils.retry_utils import RetryUtils
from tests.mentorhub_test.mentorship_test.in_memory_repository_lib import (
    InMemoryMatchRepository,
    InMemoryMentorApplicationRepository,
    InMemoryMentorProfileRepository,
    InMemoryNotificationRepository,
    InMemoryProfileRepository,
    InMemorySessionRepository,
)


def _profile(user_id, full_name, email, role):
    return ProfileEntity(
        id=uuid.uuid4(),
        user_id=user_id,
        full_name=full_name,
        email=email,
        role=role,
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


class TestMentorshipFlow(unittest.IsolatedAsyncioTestCase):
    """
    Drive the services together against in-memory repositories.

    Only the storage layer and the SendGrid client are replaced, so each step
    goes through the real side effects, notification service, template
    renderer and email service.
    """

    async def asyncSetUp(self):
        self.logger = MagicMock()
        self.session = AsyncMock()

        self.ada = _profile(
            "auth|ada", "Ada Obi", "ada@example.org", ProfileRole.APPLICANT
        )
        self.tunde = _profile(
            "auth|tunde", "Tunde Okoro", "tunde@example.org", ProfileRole.MENTOR
        )
        self.chidi = _profile(
            "auth|chidi", "Chidi Nwosu", "chidi@example.org", ProfileRole.MENTOR
        )
        self.grace = _profile(
            "auth|grace", "Grace Eze", "grace@example.org", ProfileRole.ADMIN
        )

        self.profile_repository = InMemoryProfileRepository(
            [self.ada, self.tunde, self.chidi, self.grace]
        )
        self.mentor_profile_repository = InMemoryMentorProfileRepository()
        for mentor in (self.tunde, self.chidi):
            await self.mentor_profile_repository.insert_mentor_profile(
                self.session,
                MentorProfileEntity(
                    user_id=mentor.id,
                    bio="Nonprofit finance",
                    expertise_areas=["budgeting"],
                    availability_status=AvailabilityStatus.AVAILABLE,
                    max_mentees=3,
                ),
            )
        self.mentor_application_repository = InMemoryMentorApplicationRepository()
        self.match_repository = InMemoryMatchRepository()
        self.session_repository = InMemorySessionRepository(self.match_repository)
        self.notification_repository = InMemoryNotificationRepository()

        self.sendgrid_client = MagicMock()
        self.sendgrid_client.send.return_value = MagicMock(
            status_code=202, headers={"X-Message-Id": "msg-1"}
        )

        mapper = MentorshipMapper()
        identity = ProfileIdentityService(
            logger=self.logger, profile_repository=self.profile_repository
        )
        self.notification_service = NotificationService(
            logger=self.logger,
            notification_repository=self.notification_repository,
            profile_repository=self.profile_repository,
            notification_mapper=NotificationMapper(),
        )
        side_effects = MentorshipSideEffects(
            logger=self.logger,
            notification_service=self.notification_service,
            email_service=EmailService(
                logger=self.logger,
                retry_utils=RetryUtils(),
                sendgrid_client=self.sendgrid_client,
                from_address="no-reply@example.org",
                from_name="Mentorship Portal",
            ),
            email_template_renderer=EmailTemplateRenderer(
                app_name="Mentorship Portal", app_url="https://portal.example.org"
            ),
        )

        self.match_service = MatchService(
            logger=self.logger,
            profile_repository=self.profile_repository,
            mentor_profile_repository=self.mentor_profile_repository,
            mentorship_match_repository=self.match_repository,
            mentorship_mapper=mapper,
            profile_identity_service=identity,
            mentorship_side_effects=side_effects,
        )
        self.session_service = SessionService(
            logger=self.logger,
            profile_repository=self.profile_repository,
            mentorship_match_repository=self.match_repository,
            mentorship_session_repository=self.session_repository,
            mentorship_mapper=mapper,
            profile_identity_service=identity,
            mentorship_side_effects=side_effects,
        )
        self.onboarding_service = MentorOnboardingService(
            logger=self.logger,
            profile_repository=self.profile_repository,
            mentor_profile_repository=self.mentor_profile_repository,
            mentor_application_repository=self.mentor_application_repository,
            mentorship_mapper=mapper,
            profile_identity_service=identity,
            mentorship_side_effects=side_effects,
        )
        self.directory_service = MentorDirectoryService(
            logger=self.logger,
            mentor_profile_repository=self.mentor_profile_repository,
            profile_repository=self.profile_repository,
            mentorship_mapper=mapper,
        )

    @staticmethod
    def _as(profile: ProfileEntity) -> UserContextDto:
        return UserContextDto(sub=profile.user_id, primary_email=profile.email)

    def _sent_emails(self) -> list[tuple[str, str]]:
        """(recipient, subject) of every message handed to SendGrid, in order."""
        sent = []
        for call in self.sendgrid_client.send.call_args_list:
            payload = call.args[0].get()
            sent.append(
                (payload["personalizations"][0]["to"][0]["email"], payload["subject"])
            )
        return sent

    async def _notifications_for(self, profile: ProfileEntity):
        return await self.notification_service.list_notifications(
            self.session, user_id=profile.id
        )

    async def test_request_accept_and_log_session(self):
        # Ada asks Tunde for mentorship.
        requested = await self.match_service.request_mentorship(
            self.session,
            self._as(self.ada),
            mentee_id=self.ada.id,
            mentor_id=self.tunde.id,
            goals="Grow my NGO",
        )

        self.assertEqual(requested.status, MatchStatus.PENDING)
        self.assertEqual(requested.mentor.full_name, "Tunde Okoro")
        [tunde_notification] = await self._notifications_for(self.tunde)
        self.assertEqual(tunde_notification.title, "New mentorship request")
        self.assertEqual(tunde_notification.type, NotificationType.INFO)
        self.assertEqual(
            tunde_notification.metadata, {"match_id": str(requested.id)}
        )
        self.assertEqual(
            self._sent_emails(),
            [
                ("tunde@example.org", "New Mentorship Request from Ada Obi"),
                ("ada@example.org", "Mentorship Request Sent to Tunde Okoro"),
            ],
        )

        status = await self.match_service.get_mentorship_status(
            self.session, self._as(self.ada)
        )
        self.assertTrue(status.has_mentor)
        self.assertEqual(status.status, MatchStatus.PENDING)
        self.assertEqual(status.mentor_name, "Tunde Okoro")

        # Tunde accepts.
        accepted = await self.match_service.accept_request(
            self.session, self._as(self.tunde), requested.id
        )

        self.assertEqual(accepted.status, MatchStatus.ACTIVE)
        [ada_accepted] = await self._notifications_for(self.ada)
        self.assertEqual(ada_accepted.title, "Mentorship request accepted")
        self.assertEqual(ada_accepted.type, NotificationType.SUCCESS)
        self.assertEqual(
            self._sent_emails()[-1],
            ("ada@example.org", "Mentorship Request Accepted by Tunde Okoro"),
        )

        # Tunde logs an hour-long virtual session.
        logged = await self.session_service.log_session(
            self.session,
            self._as(self.tunde),
            match_id=accepted.id,
            session_date=datetime(2025, 3, 4, 15, 0, tzinfo=timezone.utc),
            duration_minutes=60,
            mode="virtual",
        )

        self.assertEqual(logged.match_id, accepted.id)
        self.assertEqual(logged.mode, SessionMode.VIRTUAL)
        self.assertEqual(len(self.session_repository.rows), 1)
        ada_logged, _ = await self._notifications_for(self.ada)
        self.assertEqual(ada_logged.type, NotificationType.INFO)
        self.assertIn("60-minute session on 2025-03-04", ada_logged.message)
        self.assertEqual(ada_logged.metadata["session_id"], str(logged.id))

        # With an active mentor Ada cannot open a second mentorship.
        with self.assertRaises(ConflictError) as context:
            await self.match_service.request_mentorship(
                self.session,
                self._as(self.ada),
                mentee_id=self.ada.id,
                mentor_id=self.chidi.id,
            )
        self.assertEqual(str(context.exception), "You already have an active mentor")
        self.assertEqual(len(self.match_repository.rows), 1)

        self.session.commit.assert_awaited()
        self.session.rollback.assert_not_awaited()

    async def test_pending_request_blocks_other_mentors_until_rejected(self):
        requested = await self.match_service.request_mentorship(
            self.session,
            self._as(self.ada),
            mentee_id=self.ada.id,
            mentor_id=self.tunde.id,
        )

        with self.assertRaises(ConflictError) as context:
            await self.match_service.request_mentorship(
                self.session,
                self._as(self.ada),
                mentee_id=self.ada.id,
                mentor_id=self.chidi.id,
            )
        self.assertIn("pending mentorship request", str(context.exception))

        await self.match_service.reject_request(
            self.session, self._as(self.tunde), requested.id
        )
        with self.assertRaises(ConflictError):
            await self.match_service.reject_request(
                self.session, self._as(self.tunde), requested.id
            )

        retried = await self.match_service.request_mentorship(
            self.session,
            self._as(self.ada),
            mentee_id=self.ada.id,
            mentor_id=self.chidi.id,
        )
        self.assertEqual(retried.status, MatchStatus.PENDING)
        self.assertEqual(
            [m.status for m in self.match_repository.rows],
            [MatchStatus.REJECTED, MatchStatus.PENDING],
        )

    async def test_mentor_onboarding(self):
        # Ada applies to become a mentor.
        application = await self.onboarding_service.apply_as_mentor(
            self.session,
            self._as(self.ada),
            bio="Program officer at a community foundation",
            expertise_areas=["grant writing", " "],
            headline="Grants lead",
            years_of_experience=8,
        )

        self.assertEqual(application.status, MentorApplicationStatus.PENDING)
        self.assertEqual(application.expertise_areas, ["grant writing"])
        [admin_notification] = await self._notifications_for(self.grace)
        self.assertEqual(admin_notification.title, "New mentor application")
        self.assertEqual(admin_notification.link, "/admin/mentors/applications")
        self.assertEqual(
            self._sent_emails(),
            [("grace@example.org", "New Mentor Application from Ada Obi")],
        )
        admin_email = self.sendgrid_client.send.call_args.args[0].get()
        self.assertEqual(admin_email["reply_to"]["email"], "ada@example.org")

        pending = await self.onboarding_service.list_mentor_applications(
            self.session,
            self._as(self.grace),
            status=MentorApplicationStatus.PENDING,
        )
        self.assertEqual([a.id for a in pending], [application.id])
        self.assertEqual(pending[0].applicant.full_name, "Ada Obi")

        # Grace approves with room for two mentees.
        reviewed = await self.onboarding_service.review_mentor_application(
            self.session,
            self._as(self.grace),
            application_id=application.id,
            decision=MentorApplicationStatus.APPROVED,
            admin_notes="Welcome aboard",
            max_mentees=2,
        )

        self.assertEqual(reviewed.status, MentorApplicationStatus.APPROVED)
        self.assertEqual(self.ada.role, ProfileRole.MENTOR)
        mentor_record = await self.mentor_profile_repository.get_by_user_id(
            self.session, self.ada.id
        )
        self.assertEqual(mentor_record.availability_status, AvailabilityStatus.AVAILABLE)
        self.assertEqual(mentor_record.max_mentees, 2)
        self.assertEqual(mentor_record.headline, "Grants lead")
        [ada_approved] = await self._notifications_for(self.ada)
        self.assertEqual(ada_approved.title, "Mentor application approved")
        self.assertEqual(ada_approved.type, NotificationType.SUCCESS)
        self.assertEqual(
            self._sent_emails()[-1],
            ("ada@example.org", "Your Mentor Application Was Approved"),
        )

        with self.assertRaises(ConflictError):
            await self.onboarding_service.review_mentor_application(
                self.session,
                self._as(self.grace),
                application_id=application.id,
                decision=MentorApplicationStatus.REJECTED,
            )

        # Ada now shows up in the directory until the availability is paused.
        found = await self.directory_service.search_mentors(self.session, "grant")
        self.assertEqual([m.full_name for m in found], ["Ada Obi"])

        paused = await self.onboarding_service.update_availability(
            self.session, self._as(self.ada), AvailabilityStatus.UNAVAILABLE
        )
        self.assertEqual(paused.availability_status, AvailabilityStatus.UNAVAILABLE)
        self.assertEqual(
            await self.directory_service.search_mentors(self.session, "grant"), []
        )


if __name__ == "__main__":
    unittest.main()
