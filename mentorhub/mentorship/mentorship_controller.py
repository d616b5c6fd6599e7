import uuid
from http import HTTPStatus
from fastapi import APIRouter, Query
from mentorhub.common.api_endpoints import (
    MENTORS_ENDPOINT,
    MENTORSHIP_REQUEST_ENDPOINT,
    MENTORSHIP_MATCH_ENDPOINT,
    MENTORSHIP_MATCH_ACCEPT_ENDPOINT,
    MENTORSHIP_MATCH_REJECT_ENDPOINT,
    MENTORSHIP_MATCH_WITHDRAW_ENDPOINT,
    MENTORSHIP_STATUS_ENDPOINT,
    MENTORSHIP_SESSIONS_ENDPOINT,
)
from mentorhub.common.fast_api_response_wrapper import api_response
from mentorhub.common.mentorship_enums import MatchStatus
from mentorhub.dto.match_dto import MatchDto, MentorshipStatusDto
from mentorhub.dto.match_request_dto import AdminMatchRequestDto, MentorshipRequestDto
from mentorhub.dto.mentor_dto import MentorSummaryDto
from mentorhub.dto.session_dto import SessionCreateDto, SessionDto
from mentorhub.dto.user_context_dto import UserContextDto
from mentorhub.utils.permission_decorators import authenticate


class MentorshipController:
    """
    FastAPI controller exposing the mentor directory, the request and match
    lifecycle, and session logging.

    Handles authentication, request parsing, and transaction boundaries,
    delegating all business logic to the mentorship services.
    """

    def __init__(
        self, mentor_directory_service, match_service, session_service, database
    ):
        """
        Initialize the MentorshipController with required dependencies and register routes.

        Args:
            mentor_directory_service (MentorDirectoryService): Lists available mentors.
            match_service (MatchService): Creates matches and runs their lifecycle.
            session_service (SessionService): Logs and lists mentorship sessions.
            database (Database): Database access object providing async session management.
        """
        if not mentor_directory_service or not match_service or not session_service:
            raise ValueError(
                "MentorDirectoryService, MatchService and SessionService instances are required."
            )

        self.mentor_directory_service = mentor_directory_service
        self.match_service = match_service
        self.session_service = session_service
        self.database = database

        self.router = APIRouter(tags=["mentorship"])

        self.router.add_api_route(
            MENTORS_ENDPOINT,
            endpoint=authenticate()(self.get_mentors),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_REQUEST_ENDPOINT,
            endpoint=authenticate()(self.request_mentorship),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_MATCH_ENDPOINT,
            endpoint=authenticate()(self.create_match),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_MATCH_ENDPOINT,
            endpoint=authenticate()(self.get_matches),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_MATCH_ACCEPT_ENDPOINT,
            endpoint=authenticate()(self.accept_request),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_MATCH_REJECT_ENDPOINT,
            endpoint=authenticate()(self.reject_request),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_MATCH_WITHDRAW_ENDPOINT,
            endpoint=authenticate()(self.withdraw_request),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_STATUS_ENDPOINT,
            endpoint=authenticate()(self.get_status),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_SESSIONS_ENDPOINT,
            endpoint=authenticate()(self.log_session),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_SESSIONS_ENDPOINT,
            endpoint=authenticate()(self.get_sessions),
            methods=["GET"],
            response_model=None,
        )

    async def get_mentors(self, query: str | None = Query(None)):
        """
        List available mentors, optionally filtered by a free-text query.

        Query Parameters:
            query (str | None): Matched case-insensitively against name,
                expertise areas and bio.
        """
        async with self.database.session() as session:
            mentors: list[MentorSummaryDto] = (
                await self.mentor_directory_service.search_mentors(session, query)
            )

        return api_response(
            message="Successfully fetched available mentors.",
            data={"mentors": mentors},
        )

    async def request_mentorship(
        self, current_user: UserContextDto, body: MentorshipRequestDto
    ):
        """Send a mentorship request from a mentee to a mentor."""
        async with self.database.session() as session:
            match: MatchDto = await self.match_service.request_mentorship(
                session=session,
                user_context=current_user,
                mentee_id=body.mentee_id,
                mentor_id=body.mentor_id,
                goals=body.goals,
            )

        return api_response(
            message="Mentorship request sent successfully!",
            data={"match": match},
            status_code=HTTPStatus.CREATED,
        )

    async def create_match(
        self, current_user: UserContextDto, body: AdminMatchRequestDto
    ):
        """Pair a mentor and a mentee as an active match (admin only)."""
        async with self.database.session() as session:
            match: MatchDto = await self.match_service.create_admin_match(
                session=session,
                user_context=current_user,
                mentor_id=body.mentor_id,
                mentee_id=body.mentee_id,
                program_id=body.program_id,
                goals=body.goals,
            )

        return api_response(
            message="Mentorship match created successfully.",
            data={"match": match},
            status_code=HTTPStatus.CREATED,
        )

    async def get_matches(
        self,
        current_user: UserContextDto,
        status: MatchStatus | None = Query(None),
    ):
        """List the matches visible to the caller, optionally filtered by status."""
        async with self.database.session() as session:
            matches: list[MatchDto] = await self.match_service.list_matches(
                session=session, user_context=current_user, status=status
            )

        return api_response(
            message="Successfully fetched mentorship matches.",
            data={"matches": matches},
        )

    async def accept_request(self, current_user: UserContextDto, match_id: uuid.UUID):
        """Accept a pending request as its mentor."""
        async with self.database.session() as session:
            match: MatchDto = await self.match_service.accept_request(
                session=session, user_context=current_user, match_id=match_id
            )

        return api_response(message="Mentorship request accepted.", data={"match": match})

    async def reject_request(self, current_user: UserContextDto, match_id: uuid.UUID):
        """Decline a pending request as its mentor."""
        async with self.database.session() as session:
            match: MatchDto = await self.match_service.reject_request(
                session=session, user_context=current_user, match_id=match_id
            )

        return api_response(message="Mentorship request rejected.", data={"match": match})

    async def withdraw_request(
        self, current_user: UserContextDto, match_id: uuid.UUID
    ):
        """Withdraw a pending request as its mentee."""
        async with self.database.session() as session:
            match: MatchDto = await self.match_service.withdraw_request(
                session=session, user_context=current_user, match_id=match_id
            )

        return api_response(
            message="Mentorship request withdrawn.", data={"match": match}
        )

    async def get_status(self, current_user: UserContextDto):
        """Report the caller's current mentorship as a mentee."""
        async with self.database.session() as session:
            status: MentorshipStatusDto = (
                await self.match_service.get_mentorship_status(
                    session=session, user_context=current_user
                )
            )

        return api_response(
            message="Successfully fetched mentorship status.", data=status
        )

    async def log_session(self, current_user: UserContextDto, body: SessionCreateDto):
        """Log a session held under an active match (mentor only)."""
        async with self.database.session() as session:
            logged: SessionDto = await self.session_service.log_session(
                session=session,
                user_context=current_user,
                match_id=body.match_id,
                session_date=body.session_date,
                duration_minutes=body.duration_minutes,
                mode=body.mode,
                notes=body.notes,
                status=body.status,
            )

        return api_response(
            message="Session logged successfully.",
            data={"session": logged},
            status_code=HTTPStatus.CREATED,
        )

    async def get_sessions(
        self,
        current_user: UserContextDto,
        match_id: uuid.UUID | None = Query(None, alias="matchId"),
    ):
        """List sessions visible to the caller, optionally for one match."""
        async with self.database.session() as session:
            sessions: list[SessionDto] = await self.session_service.list_sessions(
                session=session, user_context=current_user, match_id=match_id
            )

        return api_response(
            message="Successfully fetched mentorship sessions.",
            data={"sessions": sessions},
        )
