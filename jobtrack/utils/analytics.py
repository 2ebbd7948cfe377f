"""
Derived views over a user's applications: the analytics summary and the
interview calendar.

All functions take stored job documents (snake_case keys) and are pure, so
the routes only have to load the caller's jobs and pass them through.
"""

from collections import OrderedDict
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from jobtrack.models.job import calculate_progress

FILTER_FIELDS = {
    "role": "job_title",
    "company": "company_name",
    "location": "location",
}

NOT_SPECIFIED = "Not Specified"

# Only these application outcomes are charted
CHARTED_STATUSES = ("Completed", "Rejected", "In Progress")


def filter_value(job: dict, filter_type: str) -> str:
    return job.get(FILTER_FIELDS[filter_type]) or NOT_SPECIFIED


def filter_jobs(jobs: Iterable[dict], filter_type: str, search: Optional[str] = None) -> List[dict]:
    """Case-insensitive substring match on the field selected by `filter_type`."""
    jobs = list(jobs)
    if not search:
        return jobs

    needle = search.lower()
    return [job for job in jobs if needle in filter_value(job, filter_type).lower()]


def status_counts(jobs: Iterable[dict]) -> List[dict]:
    jobs = list(jobs)
    return [
        {"name": status, "value": sum(1 for job in jobs if job.get("application_status") == status)}
        for status in CHARTED_STATUSES
    ]


def group_counts(jobs: Iterable[dict], filter_type: str) -> List[dict]:
    """Applications per distinct value of the filter field, in first-seen order."""
    counts = OrderedDict()
    for job in jobs:
        value = filter_value(job, filter_type)
        counts[value] = counts.get(value, 0) + 1
    return [{"name": name, "count": count} for name, count in counts.items()]


def summarize(jobs: Iterable[dict], filter_type: str = "role", search: Optional[str] = None) -> dict:
    filtered = filter_jobs(jobs, filter_type, search)

    if filtered:
        average = sum(calculate_progress(job) for job in filtered) / len(filtered)
    else:
        average = 0.0

    return {
        "total": len(filtered),
        "average_progress": average,
        "status_counts": status_counts(filtered),
        "groups": group_counts(filtered, filter_type),
    }


def interview_events(jobs: Iterable[dict], now: datetime) -> Dict[str, List[dict]]:
    """Upcoming interviews keyed by `YYYY-MM-DD`. Past interviews are left out."""
    events = OrderedDict()
    for job in sorted(jobs, key=lambda j: j.get("interview_date") or now):
        interview_date = job.get("interview_date")
        if not interview_date or interview_date <= now:
            continue

        key = interview_date.strftime("%Y-%m-%d")
        events.setdefault(key, []).append({
            "type": "Interview",
            "job_id": str(job["_id"]),
            "company_name": job.get("company_name"),
            "job_title": job.get("job_title"),
            "date": interview_date,
        })
    return events
