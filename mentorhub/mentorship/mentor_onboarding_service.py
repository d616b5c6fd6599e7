import uuid
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from mentorhub.common.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from mentorhub.common.mentorship_enums import (
    AvailabilityStatus,
    MentorApplicationStatus,
    ProfileRole,
)
from mentorhub.dto.mentor_application_dto import MentorApplicationDto
from mentorhub.dto.mentor_dto import MentorProfileDto
from mentorhub.dto.user_context_dto import UserContextDto
from mentorhub.entity.mentor_application_entity import MentorApplicationEntity
from mentorhub.entity.mentor_profile_entity import MentorProfileEntity
from mentorhub.mentorship.match_service import DEFAULT_MAX_MENTEES

REVIEW_DECISIONS = (MentorApplicationStatus.APPROVED, MentorApplicationStatus.REJECTED)


class MentorOnboardingService:
    """
    Service for turning applicants into mentors.

    An applicant submits a mentor application, an admin approves or rejects
    it once, and approval creates the mentor record (available, with the
    default capacity unless the admin grants another) and gives the profile
    the mentor role. Mentors then manage their own availability.
    """

    def __init__(
        self,
        logger,
        profile_repository,
        mentor_profile_repository,
        mentor_application_repository,
        mentorship_mapper,
        profile_identity_service,
        mentorship_side_effects,
    ):
        """
        Initializes the MentorOnboardingService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            profile_repository (ProfileRepository):
                The repository for reading profiles and changing their role.
            mentor_profile_repository (MentorProfileRepository):
                The repository for creating and updating mentor records.
            mentor_application_repository (MentorApplicationRepository):
                The repository for accessing mentor applications.
            mentorship_mapper (MentorshipMapper):
                The mapper for converting entities to DTOs.
            profile_identity_service (ProfileIdentityService):
                Resolves the caller's profile from the authenticated identity.
            mentorship_side_effects (MentorshipSideEffects):
                Sends the best-effort notifications and emails.
        """
        self.logger = logger
        self.profile_repository = profile_repository
        self.mentor_profile_repository = mentor_profile_repository
        self.mentor_application_repository = mentor_application_repository
        self.mentorship_mapper = mentorship_mapper
        self.profile_identity_service = profile_identity_service
        self.mentorship_side_effects = mentorship_side_effects

    async def apply_as_mentor(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        bio: str,
        expertise_areas: list[str],
        headline: str | None = None,
        years_of_experience: int | None = None,
        linkedin_url: str | None = None,
    ) -> MentorApplicationDto:
        """
        Submit the caller's application to become a mentor.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): Authenticated user context.
            bio (str): Background shown to mentees once approved.
            expertise_areas (list[str]): At least one non-blank area.
            headline (str | None): One-line description.
            years_of_experience (int | None): Professional experience.
            linkedin_url (str | None): Public profile link.

        Returns:
            MentorApplicationDto: The new pending application.

        Raises:
            ForbiddenError: If the caller is not an applicant.
            ValidationError: If the bio or expertise areas are missing.
            ConflictError: If the caller is already a mentor or has an open application.
        """
        caller = await self.profile_identity_service.get_profile(
            session=session, user_context=user_context
        )
        if caller.role == ProfileRole.MENTOR:
            raise ConflictError("You are already a mentor")
        if caller.role != ProfileRole.APPLICANT:
            raise ForbiddenError("Only applicants can apply to become mentors")

        bio = (bio or "").strip()
        expertise_areas = [area.strip() for area in expertise_areas or [] if area.strip()]
        if not bio:
            raise ValidationError("bio is required")
        if not expertise_areas:
            raise ValidationError("At least one expertise area is required")
        if years_of_experience is not None and years_of_experience < 0:
            raise ValidationError("years_of_experience must not be negative")

        existing = await self.mentor_application_repository.get_latest_for_profile(
            session=session,
            profile_id=caller.id,
            statuses=[MentorApplicationStatus.PENDING],
        )
        if existing:
            raise ConflictError("Mentor application already exists")

        application = MentorApplicationEntity(
            profile_id=caller.id,
            bio=bio,
            headline=headline,
            expertise_areas=expertise_areas,
            years_of_experience=years_of_experience,
            linkedin_url=linkedin_url,
            status=MentorApplicationStatus.PENDING,
        )
        application = await self.mentor_application_repository.insert_application(
            session=session, entity=application
        )
        await session.commit()

        self.logger.info(
            "[MentorOnboardingService] profile %s submitted mentor application %s",
            caller.id,
            application.id,
        )
        application_dto = self.mentorship_mapper.map_to_mentor_application_dto(
            application, caller
        )

        admins = await self.profile_repository.get_all_by_role(
            session=session, role=ProfileRole.ADMIN
        )
        await self.mentorship_side_effects.on_mentor_application_submitted(
            session=session, application=application, applicant=caller, admins=admins
        )
        return application_dto

    async def list_mentor_applications(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        status: MentorApplicationStatus | None = None,
    ) -> list[MentorApplicationDto]:
        """
        List mentor applications with their applicants, oldest first (admin only).

        Raises:
            ForbiddenError: If the caller is not an admin.
        """
        await self.profile_identity_service.require_role(
            session=session, user_context=user_context, roles=(ProfileRole.ADMIN,)
        )

        applications = await self.mentor_application_repository.list_applications(
            session=session, status=status
        )
        if not applications:
            return []

        profiles = await self.profile_repository.get_all_by_ids(
            session=session,
            profile_ids=list({application.profile_id for application in applications}),
        )
        profiles_by_id = {profile.id: profile for profile in profiles}

        return [
            self.mentorship_mapper.map_to_mentor_application_dto(
                application, profiles_by_id.get(application.profile_id)
            )
            for application in applications
        ]

    async def review_mentor_application(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        application_id: uuid.UUID,
        decision: MentorApplicationStatus,
        admin_notes: str | None = None,
        max_mentees: int | None = None,
    ) -> MentorApplicationDto:
        """
        Approve or reject a pending mentor application (admin only).

        The decision, the mentor record and the role change are committed
        together; notifications follow once they are stored.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): Authenticated user context.
            application_id (uuid.UUID): The application to review.
            decision (MentorApplicationStatus): `approved` or `rejected`.
            admin_notes (str | None): Optional note for the applicant.
            max_mentees (int | None): Capacity of the new mentor when approving.

        Returns:
            MentorApplicationDto: The reviewed application.

        Raises:
            ForbiddenError: If the caller is not an admin.
            ValidationError: If the decision or capacity is invalid.
            NotFoundError: If the application or its applicant does not exist.
            ConflictError: If the application was already reviewed or the
                applicant already has a mentor record.
        """
        admin = await self.profile_identity_service.require_role(
            session=session, user_context=user_context, roles=(ProfileRole.ADMIN,)
        )

        if decision not in REVIEW_DECISIONS:
            raise ValidationError('Invalid status. Must be "approved" or "rejected"')
        decision = MentorApplicationStatus(decision)
        if max_mentees is not None and max_mentees < 1:
            raise ValidationError("max_mentees must be at least 1")

        application = await self.mentor_application_repository.get_by_id(
            session=session, application_id=application_id
        )
        if not application:
            raise NotFoundError("Application not found")
        if application.status != MentorApplicationStatus.PENDING:
            raise ConflictError(
                f"Mentor application is already {MentorApplicationStatus(application.status).value}"
            )

        applicant = await self.profile_repository.get_by_id(
            session=session, profile_id=application.profile_id
        )
        if not applicant:
            raise NotFoundError("Applicant profile not found")

        if decision == MentorApplicationStatus.APPROVED:
            existing_mentor = await self.mentor_profile_repository.get_by_user_id(
                session=session, user_id=applicant.id
            )
            if existing_mentor:
                raise ConflictError("Applicant already has a mentor profile")

        reviewed = await self.mentor_application_repository.review(
            session=session,
            application_id=application_id,
            to_status=decision,
            reviewed_by=admin.id,
            reviewed_at=datetime.now(timezone.utc),
            admin_notes=admin_notes,
        )
        if reviewed is None:
            await session.rollback()
            raise ConflictError("Mentor application has already been reviewed")

        if decision == MentorApplicationStatus.APPROVED:
            await self.mentor_profile_repository.insert_mentor_profile(
                session=session,
                entity=MentorProfileEntity(
                    user_id=applicant.id,
                    bio=reviewed.bio,
                    headline=reviewed.headline,
                    expertise_areas=list(reviewed.expertise_areas or []),
                    years_of_experience=reviewed.years_of_experience,
                    linkedin_url=reviewed.linkedin_url,
                    availability_status=AvailabilityStatus.AVAILABLE,
                    max_mentees=max_mentees or DEFAULT_MAX_MENTEES,
                ),
            )
            applicant = (
                await self.profile_repository.update_role(
                    session=session, profile_id=applicant.id, role=ProfileRole.MENTOR
                )
                or applicant
            )

        await session.commit()
        self.logger.info(
            "[MentorOnboardingService] admin %s %s mentor application %s",
            admin.id,
            decision.value,
            application_id,
        )

        application_dto = self.mentorship_mapper.map_to_mentor_application_dto(
            reviewed, applicant
        )
        await self.mentorship_side_effects.on_mentor_application_reviewed(
            session=session, application=reviewed, applicant=applicant
        )
        return application_dto

    async def update_availability(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        availability_status: AvailabilityStatus,
    ) -> MentorProfileDto:
        """
        Change the caller's availability for new mentees (mentor only).

        Raises:
            ForbiddenError: If the caller is not a mentor.
            NotFoundError: If the mentor has no mentor record.
        """
        mentor = await self.profile_identity_service.require_role(
            session=session, user_context=user_context, roles=(ProfileRole.MENTOR,)
        )

        availability_status = AvailabilityStatus(availability_status)
        updated = await self.mentor_profile_repository.update_availability(
            session=session, user_id=mentor.id, availability_status=availability_status
        )
        if updated is None:
            await session.rollback()
            raise NotFoundError("Mentor profile not found")

        await session.commit()
        self.logger.info(
            "[MentorOnboardingService] mentor %s is now %s",
            mentor.id,
            availability_status.value,
        )
        return self.mentorship_mapper.map_to_mentor_profile_dto(updated)
