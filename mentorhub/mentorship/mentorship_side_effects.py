import uuid
from dataclasses import dataclass
from typing import Any
from sqlalchemy.ext.asyncio import AsyncSession
from mentorhub.common.mentorship_enums import MentorApplicationStatus, NotificationType
from mentorhub.dto.email_dto import EmailMessageDto, RenderedEmailDto
from mentorhub.entity.mentor_application_entity import MentorApplicationEntity
from mentorhub.entity.mentorship_match_entity import MentorshipMatchEntity
from mentorhub.entity.mentorship_session_entity import MentorshipSessionEntity
from mentorhub.entity.profile_entity import ProfileEntity

MENTORSHIP_LINK = "/mentorship"
MENTOR_MENTEES_LINK = "/mentor/mentees"
MENTOR_APPLICATIONS_LINK = "/admin/mentors/applications"


@dataclass(frozen=True)
class _Party:
    id: uuid.UUID
    full_name: str
    email: str

    @classmethod
    def of(cls, profile: ProfileEntity) -> "_Party":
        return cls(id=profile.id, full_name=profile.full_name, email=profile.email)


class MentorshipSideEffects:
    """
    Best-effort notifications and emails fired after a mentorship change is committed.

    Every public method swallows failures: they are logged and never change
    the outcome of the operation that triggered them. Notification inserts
    commit on their own and are rolled back alone when they fail.

    Entity attributes are copied up front, since a rollback expires every
    instance attached to the session.
    """

    def __init__(
        self, logger, notification_service, email_service, email_template_renderer
    ):
        """
        Args:
            logger: The logger instance for logging messages.
            notification_service (NotificationService): Creates in-app notifications.
            email_service (EmailService): Sends transactional emails.
            email_template_renderer (EmailTemplateRenderer): Renders email bodies.
        """
        self.logger = logger
        self.notification_service = notification_service
        self.email_service = email_service
        self.email_template_renderer = email_template_renderer

    async def _notify(
        self,
        session: AsyncSession,
        recipient: _Party,
        title: str,
        message: str,
        type: NotificationType,
        link: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        try:
            await self.notification_service.create(
                session=session,
                user_id=recipient.id,
                title=title,
                message=message,
                type=type,
                link=link,
                metadata=metadata,
            )
        except Exception as e:
            await session.rollback()
            self.logger.warning(
                "[MentorshipSideEffects] notification %r for user %s failed: %s",
                title,
                recipient.id,
                e,
            )
            return False
        return True

    async def _email(self, recipient: _Party, render) -> bool:
        try:
            rendered: RenderedEmailDto = render()
            result = await self.email_service.send(
                to=recipient.email,
                subject=rendered.subject,
                html=rendered.html,
                to_name=recipient.full_name,
                text=rendered.text,
            )
        except Exception as e:
            self.logger.warning(
                "[MentorshipSideEffects] email to %s failed: %s", recipient.email, e
            )
            return False

        if not result.success:
            self.logger.warning(
                "[MentorshipSideEffects] email %r to %s not sent: %s",
                rendered.subject,
                recipient.email,
                result.error,
            )
        return result.success

    async def on_request_created(
        self,
        session: AsyncSession,
        match: MentorshipMatchEntity,
        mentor: ProfileEntity,
        mentee: ProfileEntity,
    ):
        """Tell the mentor about a new pending request and confirm it to the mentee."""
        mentor, mentee = _Party.of(mentor), _Party.of(mentee)
        match_id, goals = str(match.id), match.goals

        await self._notify(
            session,
            recipient=mentor,
            title="New mentorship request",
            message=f"{mentee.full_name} has requested you as their mentor.",
            type=NotificationType.INFO,
            link=MENTOR_MENTEES_LINK,
            metadata={"match_id": match_id},
        )
        await self._email(
            mentor,
            lambda: self.email_template_renderer.render_request_received(
                mentor_name=mentor.full_name,
                mentee_name=mentee.full_name,
                mentee_email=mentee.email,
                goals=goals,
            ),
        )
        await self._email(
            mentee,
            lambda: self.email_template_renderer.render_request_sent(
                mentee_name=mentee.full_name, mentor_name=mentor.full_name
            ),
        )

    async def on_admin_match_created(
        self,
        session: AsyncSession,
        match: MentorshipMatchEntity,
        mentor: ProfileEntity,
        mentee: ProfileEntity,
    ):
        """Tell both parties that an administrator paired them."""
        mentor, mentee = _Party.of(mentor), _Party.of(mentee)
        metadata = {"match_id": str(match.id)}

        await self._notify(
            session,
            recipient=mentor,
            title="New mentee assigned",
            message=f"You have been matched with {mentee.full_name} as their mentor.",
            type=NotificationType.SUCCESS,
            link=MENTOR_MENTEES_LINK,
            metadata=metadata,
        )
        await self._notify(
            session,
            recipient=mentee,
            title="Mentor assigned",
            message=f"You have been matched with {mentor.full_name} as your mentor.",
            type=NotificationType.SUCCESS,
            link=MENTORSHIP_LINK,
            metadata=metadata,
        )

    async def on_request_accepted(
        self,
        session: AsyncSession,
        match: MentorshipMatchEntity,
        mentor: ProfileEntity,
        mentee: ProfileEntity,
    ):
        mentor, mentee = _Party.of(mentor), _Party.of(mentee)

        await self._notify(
            session,
            recipient=mentee,
            title="Mentorship request accepted",
            message=f"{mentor.full_name} has accepted your mentorship request.",
            type=NotificationType.SUCCESS,
            link=MENTORSHIP_LINK,
            metadata={"match_id": str(match.id)},
        )
        await self._email(
            mentee,
            lambda: self.email_template_renderer.render_request_accepted(
                mentee_name=mentee.full_name,
                mentor_name=mentor.full_name,
                mentor_email=mentor.email,
            ),
        )

    async def on_request_rejected(
        self,
        session: AsyncSession,
        match: MentorshipMatchEntity,
        mentor: ProfileEntity,
        mentee: ProfileEntity,
    ):
        mentor, mentee = _Party.of(mentor), _Party.of(mentee)

        await self._notify(
            session,
            recipient=mentee,
            title="Mentorship request update",
            message=f"{mentor.full_name} is unable to accept your mentorship request at this time.",
            type=NotificationType.INFO,
            link=MENTORSHIP_LINK,
            metadata={"match_id": str(match.id)},
        )
        await self._email(
            mentee,
            lambda: self.email_template_renderer.render_request_rejected(
                mentee_name=mentee.full_name, mentor_name=mentor.full_name
            ),
        )

    async def on_request_withdrawn(
        self,
        session: AsyncSession,
        match: MentorshipMatchEntity,
        mentor: ProfileEntity,
        mentee: ProfileEntity,
    ):
        mentor, mentee = _Party.of(mentor), _Party.of(mentee)

        await self._notify(
            session,
            recipient=mentor,
            title="Mentorship request withdrawn",
            message=f"{mentee.full_name} has withdrawn their mentorship request.",
            type=NotificationType.INFO,
            link=MENTOR_MENTEES_LINK,
            metadata={"match_id": str(match.id)},
        )

    async def on_session_logged(
        self,
        session: AsyncSession,
        logged_session: MentorshipSessionEntity,
        mentor: ProfileEntity,
        mentee: ProfileEntity,
    ):
        mentor, mentee = _Party.of(mentor), _Party.of(mentee)

        await self._notify(
            session,
            recipient=mentee,
            title="Mentorship session logged",
            message=(
                f"{mentor.full_name} logged a {logged_session.duration_minutes}-minute "
                f"session on {logged_session.session_date:%Y-%m-%d}."
            ),
            type=NotificationType.INFO,
            link=MENTORSHIP_LINK,
            metadata={
                "match_id": str(logged_session.match_id),
                "session_id": str(logged_session.id),
            },
        )

    async def on_mentor_application_submitted(
        self,
        session: AsyncSession,
        application: MentorApplicationEntity,
        applicant: ProfileEntity,
        admins: list[ProfileEntity],
    ):
        """Alert every admin, in-app and by email, that a mentor application awaits review."""
        applicant = _Party.of(applicant)
        admins = [_Party.of(admin) for admin in admins]
        application_id = str(application.id)
        expertise_areas = list(application.expertise_areas or [])
        headline = application.headline

        try:
            await self.notification_service.notify_admins(
                session=session,
                title="New mentor application",
                message=f"{applicant.full_name} has applied to become a mentor.",
                type=NotificationType.INFO,
                link=MENTOR_APPLICATIONS_LINK,
                metadata={"application_id": application_id},
            )
        except Exception as e:
            await session.rollback()
            self.logger.warning(
                "[MentorshipSideEffects] admin notification for application %s failed: %s",
                application_id,
                e,
            )

        if not admins:
            return
        if not self.email_service.is_configured():
            self.logger.info(
                "[MentorshipSideEffects] email not configured, skipping admin alert for application %s",
                application_id,
            )
            return

        try:
            rendered = self.email_template_renderer.render_mentor_application_received(
                applicant_name=applicant.full_name,
                applicant_email=applicant.email,
                expertise_areas=expertise_areas,
                headline=headline,
            )
            result = await self.email_service.send_bulk(
                [
                    EmailMessageDto(
                        to=admin.email,
                        to_name=admin.full_name,
                        subject=rendered.subject,
                        html=rendered.html,
                        text=rendered.text,
                        reply_to=applicant.email,
                    )
                    for admin in admins
                ]
            )
        except Exception as e:
            self.logger.warning(
                "[MentorshipSideEffects] admin emails for application %s failed: %s",
                application_id,
                e,
            )
            return

        if result.failed:
            self.logger.warning(
                "[MentorshipSideEffects] %d of %d admin emails for application %s not sent: %s",
                result.failed,
                result.sent + result.failed,
                application_id,
                result.errors,
            )

    async def on_mentor_application_reviewed(
        self,
        session: AsyncSession,
        application: MentorApplicationEntity,
        applicant: ProfileEntity,
    ):
        applicant = _Party.of(applicant)
        approved = application.status == MentorApplicationStatus.APPROVED
        admin_notes = application.admin_notes

        if approved:
            title = "Mentor application approved"
            message = "Congratulations! You are now a mentor and can receive mentorship requests."
        else:
            title = "Mentor application update"
            message = "Your mentor application was not approved at this time."

        await self._notify(
            session,
            recipient=applicant,
            title=title,
            message=message,
            type=NotificationType.SUCCESS if approved else NotificationType.INFO,
            link=MENTORSHIP_LINK,
            metadata={"application_id": str(application.id)},
        )
        await self._email(
            applicant,
            lambda: self.email_template_renderer.render_mentor_application_reviewed(
                applicant_name=applicant.full_name,
                approved=approved,
                admin_notes=admin_notes,
            ),
        )
