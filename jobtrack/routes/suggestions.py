# ========================================
# jobtrack/routes/suggestions.py
# ========================================

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List

from jobtrack.schemas.suggestion import CompanySuggestion, JobTitleSuggestion
from jobtrack.utils.http import get_http_client
from jobtrack.utils.suggestions import search_companies, search_job_titles, SuggestionError

router = APIRouter(prefix="/api/suggestions")


# ✅ 1. COMPANY NAMES
@router.get("/companies", response_model=List[CompanySuggestion])
async def suggest_companies(
    q: str = Query("", description="Partial company name"),
    http: httpx.AsyncClient = Depends(get_http_client)
):
    try:
        return await search_companies(q, http)
    except SuggestionError as e:
        raise HTTPException(status_code=502, detail=str(e))


# ✅ 2. JOB TITLES
@router.get("/job-titles", response_model=List[JobTitleSuggestion])
async def suggest_job_titles(
    q: str = Query("", description="Partial job title"),
    http: httpx.AsyncClient = Depends(get_http_client)
):
    try:
        return await search_job_titles(q, http)
    except SuggestionError as e:
        raise HTTPException(status_code=502, detail=str(e))
