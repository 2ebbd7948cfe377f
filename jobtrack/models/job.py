"""
Job application record and the stage status / progress model.

A job application moves through five independent stages. Each stage carries
one of four statuses, and the overall progress of the application is the
average weight of its stages expressed as a percentage.
"""

from typing import Literal, Mapping, Optional, Sequence, Union, get_args
from datetime import datetime

from pydantic import BaseModel, Field

StageStatus = Literal["Not Started", "In Progress", "Completed", "Rejected"]

STAGE_STATUSES = get_args(StageStatus)
DEFAULT_STATUS = "Not Started"

# Stage field names as stored (snake_case) paired with their API names
STAGE_FIELDS = {
    "recruiter_status": "recruiterStatus",
    "referral_status": "referralStatus",
    "assessment_status": "assessmentStatus",
    "interview_status": "interviewStatus",
    "application_status": "applicationStatus",
}

# Rejected is a terminal state and counts as a finished stage, same as Completed
STATUS_WEIGHTS = {
    "Not Started": 0.0,
    "In Progress": 0.5,
    "Completed": 1.0,
    "Rejected": 1.0,
}


def status_weight(status: Optional[str]) -> float:
    """Weight of a single stage status; unknown values weigh nothing."""
    return STATUS_WEIGHTS.get(status, 0.0)


def stage_statuses(job: Mapping) -> list:
    """Pull the five stage statuses out of a record, whichever key style it uses."""
    statuses = []
    for stored_name, api_name in STAGE_FIELDS.items():
        if stored_name in job:
            statuses.append(job[stored_name])
        else:
            statuses.append(job.get(api_name))
    return statuses


def calculate_progress(statuses: Union[Mapping, Sequence[str]]) -> float:
    """
    Overall completion percentage of an application.

    Args:
        statuses: either a job record / mapping holding the five stage fields,
            or a sequence of the five status values.

    Returns:
        Float in [0, 100]. Callers round for display.
    """
    if isinstance(statuses, Mapping):
        values = stage_statuses(statuses)
    else:
        values = list(statuses)

    total = sum(status_weight(s) for s in values)
    return total / len(STAGE_FIELDS) * 100


class JobApplication(BaseModel):
    """A stored job application document."""
    id: Optional[str] = None
    user_id: str
    company_name: str = Field(min_length=1)
    job_title: str = Field(min_length=1)
    location: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    application_date: datetime
    interview_date: Optional[datetime] = None
    job_description: Optional[str] = None
    notes: Optional[str] = None
    next_steps: Optional[str] = None
    recruiter_status: StageStatus = DEFAULT_STATUS
    referral_status: StageStatus = DEFAULT_STATUS
    assessment_status: StageStatus = DEFAULT_STATUS
    interview_status: StageStatus = DEFAULT_STATUS
    application_status: StageStatus = DEFAULT_STATUS
    created_at: datetime
    updated_at: datetime
