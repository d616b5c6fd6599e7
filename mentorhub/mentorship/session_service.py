import uuid
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from mentorhub.common.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from mentorhub.common.mentorship_enums import (
    MatchStatus,
    ProfileRole,
    SessionMode,
    SessionStatus,
)
from mentorhub.dto.session_dto import SessionDto
from mentorhub.dto.user_context_dto import UserContextDto
from mentorhub.entity.mentorship_session_entity import MentorshipSessionEntity


class SessionService:
    """Service for logging mentorship sessions against active matches."""

    def __init__(
        self,
        logger,
        profile_repository,
        mentorship_match_repository,
        mentorship_session_repository,
        mentorship_mapper,
        profile_identity_service,
        mentorship_side_effects,
    ):
        """
        Initializes the SessionService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            profile_repository (ProfileRepository):
                The repository for accessing profile data.
            mentorship_match_repository (MentorshipMatchRepository):
                The repository for accessing match data.
            mentorship_session_repository (MentorshipSessionRepository):
                The repository for accessing session log data.
            mentorship_mapper (MentorshipMapper):
                The mapper for converting session entities to DTOs.
            profile_identity_service (ProfileIdentityService):
                Resolves the caller's profile from the authenticated identity.
            mentorship_side_effects (MentorshipSideEffects):
                Sends the best-effort notification to the mentee.
        """
        self.logger = logger
        self.profile_repository = profile_repository
        self.mentorship_match_repository = mentorship_match_repository
        self.mentorship_session_repository = mentorship_session_repository
        self.mentorship_mapper = mentorship_mapper
        self.profile_identity_service = profile_identity_service
        self.mentorship_side_effects = mentorship_side_effects

    async def log_session(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        match_id: uuid.UUID,
        session_date: datetime,
        duration_minutes: int,
        mode: SessionMode,
        notes: str | None = None,
        status: SessionStatus = SessionStatus.COMPLETED,
    ) -> SessionDto:
        """
        Record a mentorship session held under an active match.

        Only the match's mentor may log sessions. The mentee receives a
        best-effort notification once the session is stored.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): Authenticated user context.
            match_id (uuid.UUID): The match the session belongs to.
            session_date (datetime): When the session took place.
            duration_minutes (int): Session length, must be positive.
            mode (SessionMode): How the session was held.
            notes (str | None): Free-form notes.
            status (SessionStatus): Defaults to `completed`.

        Returns:
            SessionDto: The stored session.

        Raises:
            ValidationError: If a required field is missing or the duration is not positive.
            NotFoundError: If the match does not exist.
            ForbiddenError: If the caller is not the match's mentor.
            ConflictError: If the match is not active.
        """
        if not match_id or not session_date or duration_minutes is None or not mode:
            raise ValidationError(
                "match_id, session_date, duration_minutes and mode are required"
            )
        if duration_minutes <= 0:
            raise ValidationError("duration_minutes must be greater than 0")

        caller = await self.profile_identity_service.get_profile(
            session=session, user_context=user_context
        )
        match = await self.mentorship_match_repository.get_by_id(
            session=session, match_id=match_id
        )
        if not match:
            raise NotFoundError("Mentorship match not found")

        if match.mentor_id != caller.id:
            raise ForbiddenError("Only the mentor of this match can log sessions")

        if match.status != MatchStatus.ACTIVE:
            raise ConflictError("Sessions can only be logged for active mentorships")

        entity = MentorshipSessionEntity(
            match_id=match.id,
            session_date=session_date,
            duration_minutes=duration_minutes,
            mode=SessionMode(mode),
            notes=notes,
            status=SessionStatus(status or SessionStatus.COMPLETED),
        )
        entity = await self.mentorship_session_repository.insert_session(
            session=session, entity=entity
        )
        await session.commit()

        self.logger.info(
            "[SessionService] logged session %s for match %s (%d minutes)",
            entity.id,
            match.id,
            duration_minutes,
        )
        session_dto = self.mentorship_mapper.map_to_session_dto(entity)

        mentee = await self.profile_repository.get_by_id(
            session=session, profile_id=match.mentee_id
        )
        if mentee:
            await self.mentorship_side_effects.on_session_logged(
                session=session, logged_session=entity, mentor=caller, mentee=mentee
            )
        else:
            self.logger.warning(
                "[SessionService] mentee profile %s of match %s not found",
                match.mentee_id,
                match.id,
            )

        return session_dto

    async def list_sessions(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        match_id: uuid.UUID | None = None,
    ) -> list[SessionDto]:
        """
        List the sessions visible to the caller, newest first.

        Mentors see sessions of the matches they mentor, applicants those of
        their own matches, admins see every session.
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

        entities = await self.mentorship_session_repository.list_sessions(
            session=session, match_id=match_id, **scope
        )
        return [self.mentorship_mapper.map_to_session_dto(e) for e in entities]
