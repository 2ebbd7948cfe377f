# ========================================
# jobtrack/routes/job.py
# ========================================

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from bson import ObjectId
from typing import List

from jobtrack.database import get_db
from jobtrack.models.job import JobApplication, calculate_progress
from jobtrack.schemas.job import JobCreate, JobUpdate, JobResponse
from jobtrack.utils.auth import get_current_user_id
from jobtrack.utils.dates import next_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs")


def serialize_job(job: dict) -> dict:
    """Stored document -> response body fields, with derived progress."""
    result = {key: value for key, value in job.items() if key != "_id"}
    result["id"] = str(job["_id"])
    result["progress"] = calculate_progress(job)
    return result


def parse_job_id(job_id: str) -> ObjectId:
    if not ObjectId.is_valid(job_id):
        raise HTTPException(status_code=400, detail="Invalid job ID")
    return ObjectId(job_id)


async def find_owned_job(job_id: str, user_id: str) -> dict:
    """Load a job, treating other users' jobs the same as missing ones."""
    db = get_db()
    job = await db.jobs.find_one({"_id": parse_job_id(job_id), "user_id": user_id})
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


# ✅ 1. LIST MY APPLICATIONS
@router.get("", response_model=List[JobResponse])
async def list_jobs(user_id: str = Depends(get_current_user_id)):
    """All applications owned by the caller, most recently updated first."""

    db = get_db()
    jobs = await db.jobs.find({"user_id": user_id}).sort("updated_at", -1).to_list(None)

    return [serialize_job(job) for job in jobs]


# ✅ 2. ADD AN APPLICATION
@router.post("", response_model=JobResponse)
async def create_job(job: JobCreate, user_id: str = Depends(get_current_user_id)):
    """Record a new application. Stage statuses default to "Not Started"."""

    db = get_db()

    now = next_timestamp()
    record = JobApplication(
        user_id=user_id,
        created_at=now,
        updated_at=now,
        **job.model_dump(),
    )
    new_job = record.model_dump(exclude={"id"})

    result = await db.jobs.insert_one(new_job)
    new_job["_id"] = result.inserted_id

    logger.info("User %s added job %s", user_id, result.inserted_id)
    return serialize_job(new_job)


# ✅ 3. GET ONE APPLICATION
@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, user_id: str = Depends(get_current_user_id)):
    job = await find_owned_job(job_id, user_id)
    return serialize_job(job)


# ✅ 4. EDIT AN APPLICATION
@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    job_update: JobUpdate,
    user_id: str = Depends(get_current_user_id)
):
    """Update any subset of fields. Only the owner can edit."""

    job = await find_owned_job(job_id, user_id)

    update_data = job_update.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=400, detail="No fields to update")

    # The range check must also hold against the values already stored
    salary_min = update_data.get("salary_min", job.get("salary_min"))
    salary_max = update_data.get("salary_max", job.get("salary_max"))
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise HTTPException(
            status_code=400,
            detail="salaryMin must not be greater than salaryMax"
        )

    update_data["updated_at"] = next_timestamp(job.get("updated_at"))

    db = get_db()
    result = await db.jobs.update_one(
        {"_id": job["_id"], "user_id": user_id},
        {"$set": update_data}
    )
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Job not found")

    updated_job = await db.jobs.find_one({"_id": job["_id"]})

    logger.info("User %s updated job %s: %s", user_id, job_id, sorted(update_data))
    return serialize_job(updated_job)


# ✅ 5. DELETE AN APPLICATION
@router.delete("/{job_id}")
async def delete_job(job_id: str, user_id: str = Depends(get_current_user_id)):
    """Delete an application. Only the owner can delete."""

    db = get_db()

    result = await db.jobs.delete_one({"_id": parse_job_id(job_id), "user_id": user_id})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Job not found")

    logger.info("User %s deleted job %s", user_id, job_id)
    return Response(status_code=200)
