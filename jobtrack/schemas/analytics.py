# ========================================
# jobtrack/schemas/analytics.py
# ========================================

from pydantic import BaseModel
from typing import Dict, List
from datetime import datetime

from jobtrack.schemas.job import CAMEL_CONFIG


class StatusCount(BaseModel):
    name: str
    value: int


class GroupCount(BaseModel):
    name: str
    count: int


class JobAnalytics(BaseModel):
    """Summary of the caller's applications for the analytics panel"""
    model_config = CAMEL_CONFIG

    total: int
    average_progress: float
    status_counts: List[StatusCount]
    groups: List[GroupCount]


class CalendarEvent(BaseModel):
    model_config = CAMEL_CONFIG

    type: str
    job_id: str
    company_name: str
    job_title: str
    date: datetime


class JobCalendar(BaseModel):
    """Upcoming events keyed by day, plus the events of the selected day"""
    events: Dict[str, List[CalendarEvent]]
    selected: List[CalendarEvent]
