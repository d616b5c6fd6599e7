from fastapi import APIRouter
from mentorhub.common.api_endpoints import MY_PROFILE
from mentorhub.common.fast_api_response_wrapper import api_response
from mentorhub.dto.profile_dto import ProfileDto
from mentorhub.dto.user_context_dto import UserContextDto
from mentorhub.utils.permission_decorators import authenticate


class AuthenticationController:
    """
    Controller for identity-related endpoints.

    It relies on `AuthMiddleware` to inject the user context into
    `request.state.user` and resolves the caller's profile, whose role drives
    every authorization decision.

    Endpoints:
        GET /profiles/me: Returns the profile and role of the current user.
    """

    def __init__(self, profile_identity_service, database):
        self.profile_identity_service = profile_identity_service
        self.database = database

        self.router = APIRouter(tags=["Authentication"])

        self.router.add_api_route(
            MY_PROFILE,
            endpoint=authenticate()(self.get_my_profile),
            methods=["GET"],
            response_model=None,
        )

    async def get_my_profile(self, current_user: UserContextDto):
        """
        Get the current authenticated user's profile.

        Example:
            {
                "success": True,
                "message": "Successfully",
                "data": {
                    "profile": {"id": "...", "role": "mentor", "fullName": "Ada Obi", ...}
                }
            }
        """
        async with self.database.session() as session:
            profile = await self.profile_identity_service.get_profile(
                session=session, user_context=current_user
            )
            profile_dto = ProfileDto.model_validate(profile)

        return api_response(data={"profile": profile_dto}, message="Successfully")
