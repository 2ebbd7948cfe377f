# ========================================
# jobtrack/schemas/job.py
# ========================================

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

from jobtrack.models.job import StageStatus, DEFAULT_STATUS
from jobtrack.utils.dates import normalize_date

# MongoDB stores integers in at most 8 bytes
MAX_SALARY = 2**63 - 1

# Request and response bodies use camelCase keys; Python code uses snake_case
CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)

REQUIRED_TEXT_FIELDS = ("company_name", "job_title")
OPTIONAL_TEXT_FIELDS = ("location", "job_description", "notes", "next_steps")
SALARY_FIELDS = ("salary_min", "salary_max")
DATE_FIELDS = ("application_date", "interview_date")
STATUS_FIELDS = (
    "recruiter_status",
    "referral_status",
    "assessment_status",
    "interview_status",
    "application_status",
)


# 1. Input: Update an application (every field optional)
class JobUpdate(BaseModel):
    model_config = CAMEL_CONFIG

    company_name: Optional[str] = None
    job_title: Optional[str] = None
    location: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    application_date: Optional[datetime] = None
    interview_date: Optional[datetime] = None
    job_description: Optional[str] = None
    notes: Optional[str] = None
    next_steps: Optional[str] = None
    recruiter_status: Optional[StageStatus] = None
    referral_status: Optional[StageStatus] = None
    assessment_status: Optional[StageStatus] = None
    interview_status: Optional[StageStatus] = None
    application_status: Optional[StageStatus] = None

    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def require_text(cls, value):
        if value is None or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator(*SALARY_FIELDS, mode="before")
    @classmethod
    def blank_salary_is_none(cls, value):
        # Forms send "" for an untouched salary input
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(*SALARY_FIELDS)
    @classmethod
    def salary_not_negative(cls, value):
        if value is not None and value < 0:
            raise ValueError("must not be negative")
        if value is not None and value > MAX_SALARY:
            raise ValueError("is too large")
        return value

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def normalize_dates(cls, value):
        return normalize_date(value)

    @field_validator("application_date", *STATUS_FIELDS)
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    @model_validator(mode="after")
    def check_salary_range(self):
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError("salaryMin must not be greater than salaryMax")
        return self


# 2. Input: Add a new application
class JobCreate(JobUpdate):
    company_name: str
    job_title: str
    application_date: datetime
    recruiter_status: StageStatus = DEFAULT_STATUS
    referral_status: StageStatus = DEFAULT_STATUS
    assessment_status: StageStatus = DEFAULT_STATUS
    interview_status: StageStatus = DEFAULT_STATUS
    application_status: StageStatus = DEFAULT_STATUS


# 3. Output: Stored application with derived progress
class JobResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: str
    user_id: str
    company_name: str
    job_title: str
    location: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    application_date: datetime
    interview_date: Optional[datetime] = None
    job_description: Optional[str] = None
    notes: Optional[str] = None
    next_steps: Optional[str] = None
    recruiter_status: StageStatus
    referral_status: StageStatus
    assessment_status: StageStatus
    interview_status: StageStatus
    application_status: StageStatus
    progress: float
    created_at: datetime
    updated_at: datetime
