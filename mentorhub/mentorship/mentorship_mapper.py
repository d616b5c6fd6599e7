import uuid
from mentorhub.dto.match_dto import MatchDto
from mentorhub.dto.mentor_application_dto import MentorApplicationDto
from mentorhub.dto.mentor_dto import MentorProfileDto, MentorSummaryDto
from mentorhub.dto.profile_dto import ProfileSummaryDto
from mentorhub.dto.session_dto import SessionDto
from mentorhub.entity.mentor_application_entity import MentorApplicationEntity
from mentorhub.entity.mentor_profile_entity import MentorProfileEntity
from mentorhub.entity.mentorship_match_entity import MentorshipMatchEntity
from mentorhub.entity.mentorship_session_entity import MentorshipSessionEntity
from mentorhub.entity.profile_entity import ProfileEntity


class MentorshipMapper:
    """
    Mapper for converting mentorship entities to DTOs.
    """

    def map_to_profile_summary_dto(
        self, profile: ProfileEntity | None
    ) -> ProfileSummaryDto | None:
        """Maps a ProfileEntity to the short form embedded in match payloads."""
        if profile is None:
            return None

        return ProfileSummaryDto(
            full_name=profile.full_name,
            email=profile.email,
            avatar_url=profile.avatar_url,
        )

    def map_to_match_dto(
        self,
        match: MentorshipMatchEntity,
        profiles_by_id: dict[uuid.UUID, ProfileEntity] | None = None,
    ) -> MatchDto:
        """
        Maps a MentorshipMatchEntity to a MatchDto.

        When `profiles_by_id` is given, the mentor and mentee summaries are embedded.
        """
        profiles_by_id = profiles_by_id or {}

        return MatchDto(
            id=match.id,
            mentor_id=match.mentor_id,
            mentee_id=match.mentee_id,
            status=match.status,
            goals=match.goals,
            program_id=match.program_id,
            start_date=match.start_date,
            created_at=match.created_at,
            mentor=self.map_to_profile_summary_dto(profiles_by_id.get(match.mentor_id)),
            mentee=self.map_to_profile_summary_dto(profiles_by_id.get(match.mentee_id)),
        )

    def map_to_session_dto(self, entity: MentorshipSessionEntity) -> SessionDto:
        """Maps a MentorshipSessionEntity to a SessionDto."""
        return SessionDto(
            id=entity.id,
            match_id=entity.match_id,
            session_date=entity.session_date,
            duration_minutes=entity.duration_minutes,
            mode=entity.mode,
            notes=entity.notes,
            status=entity.status,
            created_at=entity.created_at,
        )

    def map_to_mentor_summary_dtos(
        self,
        mentor_profiles: list[MentorProfileEntity],
        profiles_by_id: dict[uuid.UUID, ProfileEntity],
    ) -> list[MentorSummaryDto]:
        """
        Combine mentor records with their profiles, keeping the mentor record order.

        Mentor records whose profile is missing are skipped.
        """
        return [
            MentorSummaryDto(
                id=profile.id,
                full_name=profile.full_name,
                email=profile.email,
                avatar_url=profile.avatar_url,
                headline=mentor.headline,
                expertise_areas=list(mentor.expertise_areas or []),
                bio=mentor.bio,
                years_of_experience=mentor.years_of_experience,
                linkedin_url=mentor.linkedin_url,
            )
            for mentor in mentor_profiles
            if (profile := profiles_by_id.get(mentor.user_id)) is not None
        ]

    def map_to_mentor_profile_dto(self, entity: MentorProfileEntity) -> MentorProfileDto:
        """Maps a MentorProfileEntity to a MentorProfileDto."""
        return MentorProfileDto(
            id=entity.id,
            user_id=entity.user_id,
            availability_status=entity.availability_status,
            max_mentees=entity.max_mentees,
            headline=entity.headline,
            expertise_areas=list(entity.expertise_areas or []),
            bio=entity.bio,
            years_of_experience=entity.years_of_experience,
            linkedin_url=entity.linkedin_url,
        )

    def map_to_mentor_application_dto(
        self,
        entity: MentorApplicationEntity,
        applicant: ProfileEntity | None = None,
    ) -> MentorApplicationDto:
        """Maps a MentorApplicationEntity to a MentorApplicationDto, embedding the applicant when given."""
        return MentorApplicationDto(
            id=entity.id,
            profile_id=entity.profile_id,
            status=entity.status,
            bio=entity.bio,
            headline=entity.headline,
            expertise_areas=list(entity.expertise_areas or []),
            years_of_experience=entity.years_of_experience,
            linkedin_url=entity.linkedin_url,
            admin_notes=entity.admin_notes,
            reviewed_at=entity.reviewed_at,
            created_at=entity.created_at,
            applicant=self.map_to_profile_summary_dto(applicant),
        )
