from sqlalchemy.ext.asyncio import AsyncSession
from mentorhub.common.errors import ForbiddenError, NotFoundError, UnauthorizedError
from mentorhub.common.mentorship_enums import ProfileRole
from mentorhub.dto.user_context_dto import UserContextDto
from mentorhub.entity.profile_entity import ProfileEntity


class ProfileIdentityService:
    """
    Service responsible for resolving the caller's profile (and therefore role)
    from the authenticated identity.
    """

    def __init__(self, logger, profile_repository):
        self.logger = logger
        self.profile_repository = profile_repository

    async def get_profile(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> ProfileEntity:
        """
        Resolve the profile that belongs to the authenticated user.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto): Authenticated user context.

        Returns:
            ProfileEntity: The caller's profile.

        Raises:
            UnauthorizedError: If the user context carries no subject.
            NotFoundError: If no profile exists for the subject.
        """
        if not user_context or not user_context.sub:
            raise UnauthorizedError("Unauthorized")

        profile = await self.profile_repository.get_by_user_id(
            session=session, user_id=user_context.sub
        )
        if not profile:
            self.logger.warning(
                "[ProfileIdentityService] profile not found for subject %s",
                user_context.sub,
            )
            raise NotFoundError("Profile not found")

        return profile

    async def require_role(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        roles: tuple[ProfileRole, ...],
    ) -> ProfileEntity:
        """
        Resolve the caller's profile and ensure it holds one of `roles`.

        Raises:
            ForbiddenError: If the caller's role is not allowed.
        """
        profile = await self.get_profile(session=session, user_context=user_context)
        if profile.role not in roles:
            self.logger.warning(
                "[ProfileIdentityService] profile %s with role %s denied, requires %s",
                profile.id,
                profile.role,
                [role.value for role in roles],
            )
            raise ForbiddenError("Forbidden: Insufficient permissions")

        return profile
