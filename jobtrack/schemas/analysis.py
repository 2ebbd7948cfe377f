# ========================================
# jobtrack/schemas/analysis.py
# ========================================

from pydantic import BaseModel
from typing import List, Literal

from jobtrack.schemas.job import CAMEL_CONFIG


# 1. Input: Job description to analyze
class AnalysisRequest(BaseModel):
    description: str


class Keyword(BaseModel):
    text: str
    importance: Literal["high", "medium", "low"]


# 2. Output: ATS keyword analysis
class ATSAnalysis(BaseModel):
    model_config = CAMEL_CONFIG

    keywords: List[Keyword] = []
    missing_skills: List[str] = []
    recommendations: List[str] = []
