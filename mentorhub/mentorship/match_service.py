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
    MatchStatus,
    ProfileRole,
    OPEN_MATCH_STATUSES,
)
from mentorhub.dto.match_dto import MatchDto, MentorshipStatusDto
from mentorhub.dto.user_context_dto import UserContextDto
from mentorhub.entity.mentor_profile_entity import MentorProfileEntity
from mentorhub.entity.mentorship_match_entity import MentorshipMatchEntity
from mentorhub.entity.profile_entity import ProfileEntity

DEFAULT_MAX_MENTEES = 3
UNKNOWN_MENTOR_NAME = "Unknown"


class MatchService:
    """
    Service for creating mentorship matches and moving them through their lifecycle.

    A match starts as `pending` (mentee request) or `active` (admin pairing).
    A pending match moves exactly once to `active`, `rejected` or `withdrawn`;
    none of those states has an outgoing transition.
    """

    def __init__(
        self,
        logger,
        profile_repository,
        mentor_profile_repository,
        mentorship_match_repository,
        mentorship_mapper,
        profile_identity_service,
        mentorship_side_effects,
    ):
        """
        Initializes the MatchService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            profile_repository (ProfileRepository):
                The repository for accessing profile data.
            mentor_profile_repository (MentorProfileRepository):
                The repository for accessing mentor profile data.
            mentorship_match_repository (MentorshipMatchRepository):
                The repository for accessing match data.
            mentorship_mapper (MentorshipMapper):
                The mapper for converting match entities to DTOs.
            profile_identity_service (ProfileIdentityService):
                Resolves the caller's profile from the authenticated identity.
            mentorship_side_effects (MentorshipSideEffects):
                Sends the best-effort notifications and emails.
        """
        self.logger = logger
        self.profile_repository = profile_repository
        self.mentor_profile_repository = mentor_profile_repository
        self.mentorship_match_repository = mentorship_match_repository
        self.mentorship_mapper = mentorship_mapper
        self.profile_identity_service = profile_identity_service
        self.mentorship_side_effects = mentorship_side_effects

    async def _get_profile_or_raise(
        self, session: AsyncSession, profile_id: uuid.UUID, label: str
    ) -> ProfileEntity:
        profile = await self.profile_repository.get_by_id(
            session=session, profile_id=profile_id
        )
        if not profile:
            raise NotFoundError(f"{label} not found")
        return profile

    async def _get_mentor_or_raise(
        self, session: AsyncSession, mentor_id: uuid.UUID
    ) -> tuple[ProfileEntity, MentorProfileEntity]:
        mentor = await self._get_profile_or_raise(session, mentor_id, "Mentor")
        mentor_profile = await self.mentor_profile_repository.get_by_user_id(
            session=session, user_id=mentor.id
        )
        if not mentor_profile:
            raise NotFoundError("Mentor not found")
        return mentor, mentor_profile

    async def _create_match(
        self,
        session: AsyncSession,
        mentor_id: uuid.UUID,
        mentee_id: uuid.UUID,
        initial_status: MatchStatus,
        goals: str | None = None,
        program_id: uuid.UUID | None = None,
        skip_duplicate_check: bool = False,
    ) -> MentorshipMatchEntity:
        """
        Insert a new match and commit it.

        Both creation paths go through here so they share the duplicate check:
        a pair may hold at most one `pending` or `active` match. The check is a
        read before the insert, so two concurrent creations can still race past it.

        Args:
            session (AsyncSession): Active database async session.
            mentor_id (uuid.UUID): The mentor's profile ID.
            mentee_id (uuid.UUID): The mentee's profile ID.
            initial_status (MatchStatus): `pending` or `active`.
            goals (str | None): The mentee's stated goals.
            program_id (uuid.UUID | None): Optional program reference.
            skip_duplicate_check (bool): Skip the open-match lookup.

        Returns:
            MentorshipMatchEntity: The committed match.

        Raises:
            ValidationError: If mentor and mentee are the same profile.
            ConflictError: If the pair already has an open match.
        """
        if mentor_id == mentee_id:
            raise ValidationError("Mentor and mentee must be different users")

        if not skip_duplicate_check:
            existing = await self.mentorship_match_repository.get_match_for_pair(
                session=session,
                mentor_id=mentor_id,
                mentee_id=mentee_id,
                statuses=list(OPEN_MATCH_STATUSES),
            )
            if existing:
                raise ConflictError(
                    f"A {MatchStatus(existing.status).value} mentorship already exists "
                    "between this mentor and mentee"
                )

        match = MentorshipMatchEntity(
            mentor_id=mentor_id,
            mentee_id=mentee_id,
            status=initial_status,
            goals=goals,
            program_id=program_id,
            start_date=datetime.now(timezone.utc),
        )
        match = await self.mentorship_match_repository.insert_match(
            session=session, entity=match
        )
        await session.commit()

        self.logger.info(
            "[MatchService] created %s match %s (mentor=%s, mentee=%s)",
            initial_status.value,
            match.id,
            mentor_id,
            mentee_id,
        )
        return match

    async def request_mentorship(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentee_id: uuid.UUID,
        mentor_id: uuid.UUID,
        goals: str | None = None,
    ) -> MatchDto:
        """
        Create a pending mentorship request from a mentee to a mentor.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): Authenticated user context.
            mentee_id (uuid.UUID): The requesting mentee's profile ID.
            mentor_id (uuid.UUID): The requested mentor's profile ID.
            goals (str | None): What the mentee hopes to achieve.

        Returns:
            MatchDto: The new pending match.

        Raises:
            ForbiddenError: If a non-admin requests on behalf of someone else.
            NotFoundError: If the mentor or mentee does not exist.
            ValidationError: If the target is not an available mentor.
            ConflictError: If the mentee already has a pending or active match,
                or the mentor is full.
        """
        caller = await self.profile_identity_service.get_profile(
            session=session, user_context=user_context
        )
        if caller.role != ProfileRole.ADMIN and caller.id != mentee_id:
            raise ForbiddenError("You can only request mentorship for yourself")

        mentor, mentor_profile = await self._get_mentor_or_raise(session, mentor_id)
        mentee = await self._get_profile_or_raise(session, mentee_id, "Mentee")

        if mentor.role != ProfileRole.MENTOR:
            raise ValidationError("Selected user is not a mentor")

        if mentor_profile.availability_status == AvailabilityStatus.UNAVAILABLE:
            raise ValidationError("Mentor is not currently accepting new mentees")

        # A mentee holds at most one open mentorship, with any mentor.
        open_match = await self.mentorship_match_repository.get_latest_for_mentee(
            session=session, mentee_id=mentee.id, statuses=list(OPEN_MATCH_STATUSES)
        )
        if open_match:
            if open_match.status == MatchStatus.ACTIVE:
                raise ConflictError("You already have an active mentor")
            raise ConflictError(
                "You have a pending mentorship request. Please wait for a response."
            )

        max_mentees = (
            mentor_profile.max_mentees
            if mentor_profile.max_mentees is not None
            else DEFAULT_MAX_MENTEES
        )
        active_count = await self.mentorship_match_repository.count_by_mentor_and_status(
            session=session, mentor_id=mentor.id, status=MatchStatus.ACTIVE
        )
        if active_count >= max_mentees:
            raise ConflictError("Mentor has reached their maximum number of mentees")

        match = await self._create_match(
            session=session,
            mentor_id=mentor.id,
            mentee_id=mentee.id,
            initial_status=MatchStatus.PENDING,
            goals=goals,
        )
        match_dto = self.mentorship_mapper.map_to_match_dto(
            match, {mentor.id: mentor, mentee.id: mentee}
        )

        await self.mentorship_side_effects.on_request_created(
            session=session, match=match, mentor=mentor, mentee=mentee
        )
        return match_dto

    async def create_admin_match(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentor_id: uuid.UUID,
        mentee_id: uuid.UUID,
        program_id: uuid.UUID | None = None,
        goals: str | None = None,
    ) -> MatchDto:
        """
        Pair a mentor and a mentee directly as an active match (admin only).

        Raises:
            ForbiddenError: If the caller is not an admin.
            NotFoundError: If the mentor or mentee does not exist.
            ConflictError: If the pair already has an open match.
        """
        await self.profile_identity_service.require_role(
            session=session, user_context=user_context, roles=(ProfileRole.ADMIN,)
        )

        mentor, _ = await self._get_mentor_or_raise(session, mentor_id)
        mentee = await self._get_profile_or_raise(session, mentee_id, "Mentee")

        match = await self._create_match(
            session=session,
            mentor_id=mentor.id,
            mentee_id=mentee.id,
            initial_status=MatchStatus.ACTIVE,
            goals=goals,
            program_id=program_id,
        )
        match_dto = self.mentorship_mapper.map_to_match_dto(
            match, {mentor.id: mentor, mentee.id: mentee}
        )

        await self.mentorship_side_effects.on_admin_match_created(
            session=session, match=match, mentor=mentor, mentee=mentee
        )
        return match_dto

    async def _transition(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        match_id: uuid.UUID,
        to_status: MatchStatus,
        by_mentor: bool,
    ) -> tuple[MentorshipMatchEntity, dict[uuid.UUID, ProfileEntity]]:
        caller = await self.profile_identity_service.get_profile(
            session=session, user_context=user_context
        )
        match = await self.mentorship_match_repository.get_by_id(
            session=session, match_id=match_id
        )
        if not match:
            raise NotFoundError("Mentorship match not found")

        owner_id = match.mentor_id if by_mentor else match.mentee_id
        if caller.id != owner_id:
            self.logger.warning(
                "[MatchService] profile %s may not set match %s to %s",
                caller.id,
                match_id,
                to_status.value,
            )
            raise ForbiddenError("Forbidden: you are not a party allowed to do this")

        if match.status != MatchStatus.PENDING:
            raise ConflictError(
                f"Mentorship request is already {MatchStatus(match.status).value}"
            )

        updated = await self.mentorship_match_repository.transition_status(
            session=session,
            match_id=match_id,
            from_status=MatchStatus.PENDING,
            to_status=to_status,
            mentor_id=caller.id if by_mentor else None,
            mentee_id=None if by_mentor else caller.id,
        )
        if updated is None:
            await session.rollback()
            raise ConflictError("Mentorship request has already been processed")

        await session.commit()
        self.logger.info(
            "[MatchService] match %s moved to %s by profile %s",
            match_id,
            to_status.value,
            caller.id,
        )

        profiles = await self.profile_repository.get_all_by_ids(
            session=session, profile_ids=[updated.mentor_id, updated.mentee_id]
        )
        return updated, {profile.id: profile for profile in profiles}

    async def _finish_transition(
        self,
        session: AsyncSession,
        match: MentorshipMatchEntity,
        profiles_by_id: dict[uuid.UUID, ProfileEntity],
        side_effect,
    ) -> MatchDto:
        match_dto = self.mentorship_mapper.map_to_match_dto(match, profiles_by_id)

        mentor = profiles_by_id.get(match_dto.mentor_id)
        mentee = profiles_by_id.get(match_dto.mentee_id)
        if mentor is None or mentee is None:
            self.logger.warning(
                "[MatchService] skipping notifications for match %s, profile missing",
                match_dto.id,
            )
            return match_dto

        await side_effect(session=session, match=match, mentor=mentor, mentee=mentee)
        return match_dto

    async def accept_request(
        self, session: AsyncSession, user_context: UserContextDto, match_id: uuid.UUID
    ) -> MatchDto:
        """
        Accept a pending request as its mentor.

        Raises:
            NotFoundError: If the match does not exist.
            ForbiddenError: If the caller is not the match's mentor.
            ConflictError: If the match is no longer pending.
        """
        match, profiles_by_id = await self._transition(
            session, user_context, match_id, MatchStatus.ACTIVE, by_mentor=True
        )
        return await self._finish_transition(
            session,
            match,
            profiles_by_id,
            self.mentorship_side_effects.on_request_accepted,
        )

    async def reject_request(
        self, session: AsyncSession, user_context: UserContextDto, match_id: uuid.UUID
    ) -> MatchDto:
        """
        Decline a pending request as its mentor.

        Raises:
            NotFoundError: If the match does not exist.
            ForbiddenError: If the caller is not the match's mentor.
            ConflictError: If the match is no longer pending.
        """
        match, profiles_by_id = await self._transition(
            session, user_context, match_id, MatchStatus.REJECTED, by_mentor=True
        )
        return await self._finish_transition(
            session,
            match,
            profiles_by_id,
            self.mentorship_side_effects.on_request_rejected,
        )

    async def withdraw_request(
        self, session: AsyncSession, user_context: UserContextDto, match_id: uuid.UUID
    ) -> MatchDto:
        """
        Withdraw a pending request as its mentee.

        Raises:
            NotFoundError: If the match does not exist.
            ForbiddenError: If the caller is not the match's mentee.
            ConflictError: If the match is no longer pending.
        """
        match, profiles_by_id = await self._transition(
            session, user_context, match_id, MatchStatus.WITHDRAWN, by_mentor=False
        )
        return await self._finish_transition(
            session,
            match,
            profiles_by_id,
            self.mentorship_side_effects.on_request_withdrawn,
        )

    async def list_matches(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        status: MatchStatus | None = None,
    ) -> list[MatchDto]:
        """
        List the matches visible to the caller.

        Mentors see the matches where they mentor, applicants the ones where
        they are the mentee, admins see every match. Partners may not list matches.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): Authenticated user context.
            status (MatchStatus | None): Optional status filter.

        Returns:
            list[MatchDto]: Matches with embedded party summaries, newest first.
        """
        caller = await self.profile_identity_service.get_profile(
            session=session, user_context=user_context
        )

        match caller.role:
            case ProfileRole.MENTOR:
                scope = {"mentor_id": caller.id}
            case ProfileRole.APPLICANT:
                scope = {"mentee_id": caller.id}
            case ProfileRole.ADMIN:
                scope = {}
            case _:
                raise ForbiddenError("Forbidden: Insufficient permissions")

        matches = await self.mentorship_match_repository.list_matches(
            session=session, status=status, **scope
        )
        if not matches:
            return []

        profile_ids = {m.mentor_id for m in matches} | {m.mentee_id for m in matches}
        profiles = await self.profile_repository.get_all_by_ids(
            session=session, profile_ids=list(profile_ids)
        )
        profiles_by_id = {profile.id: profile for profile in profiles}

        return [
            self.mentorship_mapper.map_to_match_dto(m, profiles_by_id) for m in matches
        ]

    async def get_mentorship_status(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> MentorshipStatusDto:
        """
        Report the caller's current pending or active match as a mentee.

        Returns:
            MentorshipStatusDto: `has_mentor=False` when the caller has no open match.
        """
        caller = await self.profile_identity_service.get_profile(
            session=session, user_context=user_context
        )
        match = await self.mentorship_match_repository.get_latest_for_mentee(
            session=session, mentee_id=caller.id, statuses=list(OPEN_MATCH_STATUSES)
        )
        if not match:
            return MentorshipStatusDto(has_mentor=False)

        mentor = await self.profile_repository.get_by_id(
            session=session, profile_id=match.mentor_id
        )
        if not mentor:
            self.logger.warning(
                "[MatchService] mentor profile %s of match %s not found",
                match.mentor_id,
                match.id,
            )

        return MentorshipStatusDto(
            has_mentor=True,
            status=match.status,
            match_id=match.id,
            mentor_name=mentor.full_name if mentor else UNKNOWN_MENTOR_NAME,
            mentor_email=mentor.email if mentor else None,
            goals=match.goals,
            created_at=match.created_at,
        )
