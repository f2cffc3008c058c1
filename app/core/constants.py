"""Application constants.

Table names, calendar export defaults and notification copy.
"""

# ---------------------------------------------------------------------------
# Supabase tables
# ---------------------------------------------------------------------------
APPLICATIONS_TABLE: str = "applications"
CANDIDATES_TABLE: str = "candidates"
NOTIFICATIONS_TABLE: str = "notifications"

# Columns fetched for an application, including the embedded job summary
APPLICATION_SELECT: str = "*, job:jobs(title, company_name)"

# ---------------------------------------------------------------------------
# Calendar export
# ---------------------------------------------------------------------------
GOOGLE_CALENDAR_RENDER_URL: str = "https://calendar.google.com/calendar/render"
CALENDAR_DATE_FORMAT: str = "%Y%m%dT%H%M%SZ"

PHONE_LOCATION: str = "Phone Interview"
VIDEO_LOCATION_FALLBACK: str = "Video Call"
IN_PERSON_LOCATION_FALLBACK: str = "Office"

DEFAULT_JOB_TITLE: str = "Job Interview"
DEFAULT_POSITION: str = "position"
DEFAULT_COMPANY_NAME: str = "Company"

# ---------------------------------------------------------------------------
# Notification copy
# ---------------------------------------------------------------------------
NOTIFICATION_TITLE_SCHEDULED: str = "\U0001f389 Interview Scheduled!"
NOTIFICATION_TITLE_RESCHEDULED: str = "\U0001f4c5 Interview Rescheduled"
NOTIFICATION_SIGN_OFF: str = "Good luck! \U0001f340"

# ---------------------------------------------------------------------------
# Validation messages (user-facing)
# ---------------------------------------------------------------------------
MSG_DATE_TIME_REQUIRED: str = "Please fill in date and time"
MSG_DATE_IN_PAST: str = "Interview date cannot be in the past"
MSG_TIME_INVALID: str = "Interview time must be in HH:MM format"
MSG_VENUE_REQUIRED: str = "Please enter venue for in-person interview"
MSG_LINK_REQUIRED: str = "Please enter meeting link for video interview"
