# ========================================
# jobtrack/routes/analysis.py
# ========================================

from fastapi import APIRouter, Depends, HTTPException
from openai import AsyncOpenAI
from typing import Optional

from jobtrack.schemas.analysis import AnalysisRequest, ATSAnalysis
from jobtrack.utils.auth import get_current_user_id
from jobtrack.utils.analyzer import (
    analyze_job_description,
    get_openai_client,
    AnalysisInputError,
    AnalysisError,
)

router = APIRouter(prefix="/api")


# ✅ 1. ANALYZE A JOB DESCRIPTION
@router.post("/analyze-job", response_model=ATSAnalysis)
async def analyze_job(
    request: AnalysisRequest,
    user_id: str = Depends(get_current_user_id),
    client: Optional[AsyncOpenAI] = Depends(get_openai_client)
):
    """ATS keywords, missing skills and recommendations for a job description."""

    try:
        return await analyze_job_description(request.description, client)
    except AnalysisInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AnalysisError as e:
        raise HTTPException(status_code=500, detail=str(e))
