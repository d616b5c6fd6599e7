import os
from mentorhub.common.logger import get_logger
from mentorhub.common.database import Database
from mentorhub.common.sendgrid_client import SendGridClient
from mentorhub.common.environment_constants import (
    SQL_DEBUG,
    EMAIL_FROM_ADDRESS,
    EMAIL_FROM_NAME,
    APP_NAME,
    APP_URL,
)
from mentorhub.utils.retry_utils import RetryUtils
from mentorhub.utils.fast_app_factory import FastAppFactory
from mentorhub.authentication.authentication_controller import AuthenticationController
from mentorhub.authentication.authentication_service import AuthenticationService
from mentorhub.repository.profile_repository import ProfileRepository
from mentorhub.repository.mentor_profile_repository import MentorProfileRepository
from mentorhub.repository.mentor_application_repository import (
    MentorApplicationRepository,
)
from mentorhub.repository.mentorship_match_repository import MentorshipMatchRepository
from mentorhub.repository.mentorship_session_repository import (
    MentorshipSessionRepository,
)
from mentorhub.repository.notification_repository import NotificationRepository
from mentorhub.profile.profile_identity_service import ProfileIdentityService
from mentorhub.notification.notification_mapper import NotificationMapper
from mentorhub.notification.notification_service import NotificationService
from mentorhub.notification.notification_controller import NotificationController
from mentorhub.email.email_service import EmailService
from mentorhub.email.email_template_renderer import EmailTemplateRenderer
from mentorhub.mentorship.mentorship_mapper import MentorshipMapper
from mentorhub.mentorship.mentorship_side_effects import MentorshipSideEffects
from mentorhub.mentorship.mentor_directory_service import MentorDirectoryService
from mentorhub.mentorship.match_service import MatchService
from mentorhub.mentorship.session_service import SessionService
from mentorhub.mentorship.mentor_onboarding_service import MentorOnboardingService
from mentorhub.mentorship.mentorship_controller import MentorshipController
from mentorhub.mentorship.mentor_onboarding_controller import (
    MentorOnboardingController,
)

DEFAULT_APP_NAME = "Mentorship Portal"
DEFAULT_APP_URL = "http://localhost:3000"


class AppDependencyBuilder:
    """
    A builder class responsible for constructing all service and controller dependencies
    used throughout the application.

    This class acts as a centralized place for wiring together core infrastructure such as:
    - Logging
    - Database engine and sessions
    - SendGrid email client
    - Mentorship and notification services
    - HTTP API controllers

    Example:
        builder = AppDependencyBuilder()
        app = builder.fast_app_factory.create_app()
    """

    def __init__(self):
        sql_debug = os.getenv(SQL_DEBUG, "false").lower() == "true"

        self.logger = get_logger()
        self.retry_utils = RetryUtils()
        self.database = Database(echo=sql_debug)

        self.sendgrid_client = SendGridClient(logger=self.logger).get_sendgrid_client()

        self.profile_repository = ProfileRepository()
        self.mentor_profile_repository = MentorProfileRepository()
        self.mentor_application_repository = MentorApplicationRepository()
        self.mentorship_match_repository = MentorshipMatchRepository()
        self.mentorship_session_repository = MentorshipSessionRepository()
        self.notification_repository = NotificationRepository()

        self.mentorship_mapper = MentorshipMapper()
        self.notification_mapper = NotificationMapper()

        self.profile_identity_service = ProfileIdentityService(
            logger=self.logger, profile_repository=self.profile_repository
        )
        self.notification_service = NotificationService(
            logger=self.logger,
            notification_repository=self.notification_repository,
            profile_repository=self.profile_repository,
            notification_mapper=self.notification_mapper,
        )
        self.email_service = EmailService(
            logger=self.logger,
            retry_utils=self.retry_utils,
            sendgrid_client=self.sendgrid_client,
            from_address=os.getenv(EMAIL_FROM_ADDRESS),
            from_name=os.getenv(EMAIL_FROM_NAME),
        )
        self.email_template_renderer = EmailTemplateRenderer(
            app_name=os.getenv(APP_NAME, DEFAULT_APP_NAME),
            app_url=os.getenv(APP_URL, DEFAULT_APP_URL),
        )
        self.mentorship_side_effects = MentorshipSideEffects(
            logger=self.logger,
            notification_service=self.notification_service,
            email_service=self.email_service,
            email_template_renderer=self.email_template_renderer,
        )
        self.mentor_directory_service = MentorDirectoryService(
            logger=self.logger,
            mentor_profile_repository=self.mentor_profile_repository,
            profile_repository=self.profile_repository,
            mentorship_mapper=self.mentorship_mapper,
        )
        self.match_service = MatchService(
            logger=self.logger,
            profile_repository=self.profile_repository,
            mentor_profile_repository=self.mentor_profile_repository,
            mentorship_match_repository=self.mentorship_match_repository,
            mentorship_mapper=self.mentorship_mapper,
            profile_identity_service=self.profile_identity_service,
            mentorship_side_effects=self.mentorship_side_effects,
        )
        self.session_service = SessionService(
            logger=self.logger,
            profile_repository=self.profile_repository,
            mentorship_match_repository=self.mentorship_match_repository,
            mentorship_session_repository=self.mentorship_session_repository,
            mentorship_mapper=self.mentorship_mapper,
            profile_identity_service=self.profile_identity_service,
            mentorship_side_effects=self.mentorship_side_effects,
        )

        self.mentor_onboarding_service = MentorOnboardingService(
            logger=self.logger,
            profile_repository=self.profile_repository,
            mentor_profile_repository=self.mentor_profile_repository,
            mentor_application_repository=self.mentor_application_repository,
            mentorship_mapper=self.mentorship_mapper,
            profile_identity_service=self.profile_identity_service,
            mentorship_side_effects=self.mentorship_side_effects,
        )

        self.mentorship_controller = MentorshipController(
            mentor_directory_service=self.mentor_directory_service,
            match_service=self.match_service,
            session_service=self.session_service,
            database=self.database,
        )
        self.mentor_onboarding_controller = MentorOnboardingController(
            mentor_onboarding_service=self.mentor_onboarding_service,
            database=self.database,
        )
        self.notification_controller = NotificationController(
            notification_service=self.notification_service,
            profile_identity_service=self.profile_identity_service,
            database=self.database,
        )
        self.authentication_service = AuthenticationService(logger=self.logger)
        self.authentication_controller = AuthenticationController(
            profile_identity_service=self.profile_identity_service,
            database=self.database,
        )
        self.fast_app_factory = FastAppFactory(
            authentication_controller=self.authentication_controller,
            authentication_service=self.authentication_service,
            mentorship_controller=self.mentorship_controller,
            mentor_onboarding_controller=self.mentor_onboarding_controller,
            notification_controller=self.notification_controller,
            database=self.database,
        )
