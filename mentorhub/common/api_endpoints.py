MY_PROFILE = "/profiles/me"

MENTORS_ENDPOINT = "/mentors"

MENTORSHIP_REQUEST_ENDPOINT = "/mentorship/request"
MENTORSHIP_MATCH_ENDPOINT = "/mentorship/match"
MENTORSHIP_MATCH_ACCEPT_ENDPOINT = "/mentorship/match/{match_id}/accept"
MENTORSHIP_MATCH_REJECT_ENDPOINT = "/mentorship/match/{match_id}/reject"
MENTORSHIP_MATCH_WITHDRAW_ENDPOINT = "/mentorship/match/{match_id}/withdraw"
MENTORSHIP_STATUS_ENDPOINT = "/mentorship/status"
MENTORSHIP_SESSIONS_ENDPOINT = "/mentorship/sessions"

NOTIFICATIONS_ENDPOINT = "/notifications"

MENTOR_APPLICATIONS_ENDPOINT = "/mentors/applications"
MENTOR_APPLICATION_REVIEW_ENDPOINT = "/mentors/applications/{application_id}/review"
MENTOR_AVAILABILITY_ENDPOINT = "/mentors/me/availability"
