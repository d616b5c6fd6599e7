import uuid
from http import HTTPStatus
from fastapi import APIRouter, Query
from mentorhub.common.api_endpoints import (
    MENTOR_APPLICATIONS_ENDPOINT,
    MENTOR_APPLICATION_REVIEW_ENDPOINT,
    MENTOR_AVAILABILITY_ENDPOINT,
)
from mentorhub.common.fast_api_response_wrapper import api_response
from mentorhub.common.mentorship_enums import MentorApplicationStatus
from mentorhub.dto.mentor_application_dto import (
    MentorApplicationCreateDto,
    MentorApplicationDto,
    MentorApplicationReviewDto,
    MentorAvailabilityUpdateDto,
)
from mentorhub.dto.mentor_dto import MentorProfileDto
from mentorhub.dto.user_context_dto import UserContextDto
from mentorhub.utils.permission_decorators import authenticate


class MentorOnboardingController:
    """
    FastAPI controller for mentor applications, their admin review and
    mentor availability.
    """

    def __init__(self, mentor_onboarding_service, database):
        """
        Initialize the MentorOnboardingController and register routes.

        Args:
            mentor_onboarding_service (MentorOnboardingService): Runs applications and reviews.
            database (Database): Database access object providing async session management.
        """
        if not mentor_onboarding_service:
            raise ValueError("MentorOnboardingService instance is required.")

        self.mentor_onboarding_service = mentor_onboarding_service
        self.database = database

        self.router = APIRouter(tags=["mentor onboarding"])

        self.router.add_api_route(
            MENTOR_APPLICATIONS_ENDPOINT,
            endpoint=authenticate()(self.apply_as_mentor),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTOR_APPLICATIONS_ENDPOINT,
            endpoint=authenticate()(self.get_applications),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTOR_APPLICATION_REVIEW_ENDPOINT,
            endpoint=authenticate()(self.review_application),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTOR_AVAILABILITY_ENDPOINT,
            endpoint=authenticate()(self.update_availability),
            methods=["PUT"],
            response_model=None,
        )

    async def apply_as_mentor(
        self, current_user: UserContextDto, body: MentorApplicationCreateDto
    ):
        """Submit the caller's application to become a mentor."""
        async with self.database.session() as session:
            application: MentorApplicationDto = (
                await self.mentor_onboarding_service.apply_as_mentor(
                    session=session,
                    user_context=current_user,
                    bio=body.bio,
                    expertise_areas=body.expertise_areas,
                    headline=body.headline,
                    years_of_experience=body.years_of_experience,
                    linkedin_url=body.linkedin_url,
                )
            )

        return api_response(
            message="Mentor application submitted successfully.",
            data={"application": application},
            status_code=HTTPStatus.CREATED,
        )

    async def get_applications(
        self,
        current_user: UserContextDto,
        status: MentorApplicationStatus | None = Query(None),
    ):
        """List mentor applications for review (admin only)."""
        async with self.database.session() as session:
            applications: list[MentorApplicationDto] = (
                await self.mentor_onboarding_service.list_mentor_applications(
                    session=session, user_context=current_user, status=status
                )
            )

        return api_response(
            message="Successfully fetched mentor applications.",
            data={"applications": applications},
        )

    async def review_application(
        self,
        current_user: UserContextDto,
        application_id: uuid.UUID,
        body: MentorApplicationReviewDto,
    ):
        """Approve or reject a pending mentor application (admin only)."""
        async with self.database.session() as session:
            application: MentorApplicationDto = (
                await self.mentor_onboarding_service.review_mentor_application(
                    session=session,
                    user_context=current_user,
                    application_id=application_id,
                    decision=body.status,
                    admin_notes=body.admin_notes,
                    max_mentees=body.max_mentees,
                )
            )

        return api_response(
            message=f"Mentor application {application.status.value}.",
            data={"application": application},
        )

    async def update_availability(
        self, current_user: UserContextDto, body: MentorAvailabilityUpdateDto
    ):
        """Change the caller's availability for new mentees (mentor only)."""
        async with self.database.session() as session:
            mentor_profile: MentorProfileDto = (
                await self.mentor_onboarding_service.update_availability(
                    session=session,
                    user_context=current_user,
                    availability_status=body.availability_status,
                )
            )

        return api_response(
            message="Availability updated.",
            data={"mentor": mentor_profile},
        )
