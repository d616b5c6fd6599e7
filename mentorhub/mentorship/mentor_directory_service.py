from sqlalchemy.ext.asyncio import AsyncSession
from mentorhub.common.mentorship_enums import AvailabilityStatus
from mentorhub.dto.mentor_dto import MentorSummaryDto


def filter_mentors(
    mentors: list[MentorSummaryDto], query: str | None
) -> list[MentorSummaryDto]:
    """
    Filter mentor summaries by a free-text query.

    A mentor matches when the query is a case-insensitive substring of the
    full name, of any expertise area, or of the bio. A blank query returns the
    input list unchanged.

    Args:
        mentors (list[MentorSummaryDto]): The mentors to filter.
        query (str | None): The search text.

    Returns:
        list[MentorSummaryDto]: Matching mentors, in input order.
    """
    if not query or not query.strip():
        return mentors

    needle = query.strip().lower()

    def _matches(mentor: MentorSummaryDto) -> bool:
        haystacks = (
            mentor.full_name or "",
            " ".join(mentor.expertise_areas or []),
            mentor.bio or "",
        )
        return any(needle in haystack.lower() for haystack in haystacks)

    return [mentor for mentor in mentors if _matches(mentor)]


class MentorDirectoryService:
    """Service to browse the mentors currently accepting mentees."""

    def __init__(
        self,
        logger,
        mentor_profile_repository,
        profile_repository,
        mentorship_mapper,
    ):
        """
        Initializes the MentorDirectoryService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            mentor_profile_repository (MentorProfileRepository):
                The repository for accessing mentor profile data.
            profile_repository (ProfileRepository):
                The repository for accessing base profile data.
            mentorship_mapper (MentorshipMapper):
                The mapper for building mentor summaries.
        """
        self.logger = logger
        self.mentor_profile_repository = mentor_profile_repository
        self.profile_repository = profile_repository
        self.mentorship_mapper = mentorship_mapper

    async def list_available_mentors(
        self, session: AsyncSession
    ) -> list[MentorSummaryDto]:
        """
        Retrieve every available mentor with their profile information.

        Mentors are ordered by years of experience (most first, unknown last),
        then by how long they have been registered. Mentor records without a
        matching profile are dropped.

        Args:
            session (AsyncSession): Active database async session.

        Returns:
            list[MentorSummaryDto]: The available mentors, possibly empty.
        """
        mentor_profiles = await self.mentor_profile_repository.get_all_by_availability(
            session=session, availability_status=AvailabilityStatus.AVAILABLE
        )
        if not mentor_profiles:
            self.logger.info("[MentorDirectoryService] no available mentors found")
            return []

        profiles = await self.profile_repository.get_all_by_ids(
            session=session,
            profile_ids=[mentor.user_id for mentor in mentor_profiles],
        )
        profiles_by_id = {profile.id: profile for profile in profiles}

        missing = [
            mentor.user_id
            for mentor in mentor_profiles
            if mentor.user_id not in profiles_by_id
        ]
        if missing:
            self.logger.warning(
                "[MentorDirectoryService] mentor records without a profile: %s",
                missing,
            )

        return self.mentorship_mapper.map_to_mentor_summary_dtos(
            mentor_profiles=mentor_profiles, profiles_by_id=profiles_by_id
        )

    async def search_mentors(
        self, session: AsyncSession, query: str | None = None
    ) -> list[MentorSummaryDto]:
        """List available mentors, narrowed by `query` when one is given."""
        mentors = await self.list_available_mentors(session)
        return filter_mentors(mentors, query)
