"""Enum types mirroring the ``applications`` table's text enums."""

from enum import Enum


class ApplicationStatus(str, Enum):
    """Lifecycle status of a job application."""
    applied = "applied"
    under_review = "under_review"
    interview_scheduled = "interview_scheduled"
    missed_interview = "missed_interview"
    rejected = "rejected"
    hired = "hired"


class InterviewMode(str, Enum):
    """How the interview takes place."""
    video = "video"
    in_person = "in-person"
    phone = "phone"


class WorkflowEvent(str, Enum):
    """Actions that move an application through the status workflow."""
    review = "review"
    schedule = "schedule"
    reschedule = "reschedule"
    miss = "miss"
    reject = "reject"
    hire = "hire"


class NotificationType(str, Enum):
    """``notifications.type`` values written for interview events."""
    interview_scheduled = "interview_scheduled"
    interview_rescheduled = "interview_rescheduled"
