from enum import Enum


class ProfileRole(str, Enum):
    APPLICANT = "applicant"
    MENTOR = "mentor"
    PARTNER = "partner"
    ADMIN = "admin"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    LIMITED = "limited"
    UNAVAILABLE = "unavailable"


class MatchStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class MentorApplicationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SessionMode(str, Enum):
    VIRTUAL = "virtual"
    IN_PERSON = "in-person"
    PHONE = "phone"


class SessionStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


# Statuses of a match that is still open: a mentee may hold one, a pair at most one.
OPEN_MATCH_STATUSES = (MatchStatus.PENDING, MatchStatus.ACTIVE)
