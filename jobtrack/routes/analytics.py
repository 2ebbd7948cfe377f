# ========================================
# jobtrack/routes/analytics.py
# ========================================

from fastapi import APIRouter, Depends, Query
from datetime import date
from typing import Literal, Optional

from jobtrack.database import get_db
from jobtrack.schemas.analytics import JobAnalytics, JobCalendar
from jobtrack.utils.analytics import summarize, interview_events
from jobtrack.utils.auth import get_current_user_id
from jobtrack.utils.dates import utcnow

router = APIRouter(prefix="/api/jobs")


async def load_user_jobs(user_id: str) -> list:
    db = get_db()
    return await db.jobs.find({"user_id": user_id}).sort("updated_at", -1).to_list(None)


# ✅ 1. ANALYTICS SUMMARY
@router.get("/analytics", response_model=JobAnalytics)
async def get_job_analytics(
    filter_type: Literal["role", "company", "location"] = Query("role", alias="filterType"),
    search: Optional[str] = Query(None, description="Case-insensitive match on the filter field"),
    user_id: str = Depends(get_current_user_id)
):
    """Application outcome counts and per-role/company/location breakdown."""

    jobs = await load_user_jobs(user_id)
    return summarize(jobs, filter_type, search)


# ✅ 2. INTERVIEW CALENDAR
@router.get("/calendar", response_model=JobCalendar)
async def get_job_calendar(
    selected_date: Optional[date] = Query(None, alias="date", description="Day to list events for, YYYY-MM-DD"),
    user_id: str = Depends(get_current_user_id)
):
    """Upcoming interviews grouped by day."""

    now = utcnow()
    jobs = await load_user_jobs(user_id)
    events = interview_events(jobs, now)

    day = (selected_date or now.date()).isoformat()
    return {"events": events, "selected": events.get(day, [])}
