import uuid
import unittest
from datetime import datetime, timezone
from mentorhub.common.mentorship_enums import (
    AvailabilityStatus,
    MatchStatus,
    MentorApplicationStatus,
    ProfileRole,
    SessionMode,
    SessionStatus,
)
from mentorhub.entity.mentor_application_entity import MentorApplicationEntity
from mentorhub.entity.mentor_profile_entity import MentorProfileEntity
from mentorhub.entity.mentorship_match_entity import MentorshipMatchEntity
from mentorhub.entity.mentorship_session_entity import MentorshipSessionEntity
from mentorhub.entity.profile_entity import ProfileEntity
from mentorhub.mentorship.mentorship_mapper import MentorshipMapper


class TestMentorshipMapper(unittest.TestCase):
    def setUp(self):
        self.mapper = MentorshipMapper()
        self.mentor = ProfileEntity(
            id=uuid.uuid4(),
            role=ProfileRole.MENTOR,
            full_name="Ada Obi",
            email="ada@example.org",
            avatar_url="https://cdn.example.org/ada.png",
        )
        self.mentee = ProfileEntity(
            id=uuid.uuid4(),
            role=ProfileRole.APPLICANT,
            full_name="Tunde Bello",
            email="tunde@example.org",
        )
        self.match = MentorshipMatchEntity(
            id=uuid.uuid4(),
            mentor_id=self.mentor.id,
            mentee_id=self.mentee.id,
            status=MatchStatus.ACTIVE,
            goals="Grow my NGO",
            start_date=datetime(2025, 3, 1, tzinfo=timezone.utc),
        )

    def test_map_to_match_dto_with_profiles(self):
        """Test embed mentor and mentee summaries when profiles are given."""
        dto = self.mapper.map_to_match_dto(
            self.match, {self.mentor.id: self.mentor, self.mentee.id: self.mentee}
        )

        self.assertEqual(dto.status, MatchStatus.ACTIVE)
        self.assertEqual(dto.mentor.full_name, "Ada Obi")
        self.assertEqual(dto.mentor.avatar_url, "https://cdn.example.org/ada.png")
        self.assertEqual(dto.mentee.email, "tunde@example.org")
        self.assertIn("mentorId", dto.model_dump(by_alias=True))

    def test_map_to_match_dto_without_profiles(self):
        """Test leave summaries empty when no profiles are given."""
        dto = self.mapper.map_to_match_dto(self.match)

        self.assertIsNone(dto.mentor)
        self.assertIsNone(dto.mentee)

    def test_map_to_session_dto(self):
        """Test map a session entity."""
        entity = MentorshipSessionEntity(
            id=uuid.uuid4(),
            match_id=self.match.id,
            session_date=datetime(2025, 3, 10, tzinfo=timezone.utc),
            duration_minutes=45,
            mode=SessionMode.IN_PERSON,
            status=SessionStatus.COMPLETED,
        )

        dto = self.mapper.map_to_session_dto(entity)

        self.assertEqual(dto.duration_minutes, 45)
        self.assertEqual(dto.mode, SessionMode.IN_PERSON)

    def test_map_to_mentor_summary_dtos_skips_missing_profiles(self):
        """Test mentor records without a profile are skipped."""
        records = [
            MentorProfileEntity(
                user_id=self.mentor.id, expertise_areas=None, headline="Grants"
            ),
            MentorProfileEntity(user_id=uuid.uuid4(), expertise_areas=["x"]),
        ]

        result = self.mapper.map_to_mentor_summary_dtos(
            records, {self.mentor.id: self.mentor}
        )

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].expertise_areas, [])
        self.assertEqual(result[0].headline, "Grants")

    def test_map_to_mentor_profile_dto(self):
        entity = MentorProfileEntity(
            id=uuid.uuid4(),
            user_id=self.mentor.id,
            availability_status=AvailabilityStatus.LIMITED,
            max_mentees=2,
            expertise_areas=None,
        )

        dto = self.mapper.map_to_mentor_profile_dto(entity)

        self.assertEqual(dto.user_id, self.mentor.id)
        self.assertEqual(dto.availability_status, AvailabilityStatus.LIMITED)
        self.assertEqual(dto.expertise_areas, [])
        self.assertIn("availabilityStatus", dto.model_dump(by_alias=True))

    def test_map_to_mentor_application_dto(self):
        """Test embed the applicant summary when the profile is given."""
        entity = MentorApplicationEntity(
            id=uuid.uuid4(),
            profile_id=self.mentee.id,
            bio="Program officer",
            expertise_areas=["grant writing"],
            status=MentorApplicationStatus.PENDING,
        )

        with_applicant = self.mapper.map_to_mentor_application_dto(entity, self.mentee)
        without_applicant = self.mapper.map_to_mentor_application_dto(entity)

        self.assertEqual(with_applicant.applicant.full_name, "Tunde Bello")
        self.assertEqual(with_applicant.expertise_areas, ["grant writing"])
        self.assertIsNone(without_applicant.applicant)


if __name__ == "__main__":
    unittest.main()
