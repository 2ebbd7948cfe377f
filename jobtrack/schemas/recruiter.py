# ========================================
# jobtrack/schemas/recruiter.py
# ========================================

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional


# 1. Input: either a company name to resolve, or a resolved domain to search
class RecruiterSearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company_name: Optional[str] = Field(None, alias="companyName")
    domain: Optional[str] = None
    type: Optional[Literal["companies", "recruiters"]] = None


class Company(BaseModel):
    id: Optional[str] = None
    name: str
    domain: Optional[str] = None
    website_url: Optional[str] = None
    linkedin_url: Optional[str] = None


class Recruiter(BaseModel):
    name: str
    title: Optional[str] = None
    email: Optional[str] = None
    linkedin_url: Optional[str] = None
    organization: Optional[str] = None


# 2. Output: a message plus whichever list the phase produced
class RecruiterSearchResponse(BaseModel):
    message: str
    companies: Optional[List[Company]] = None
    recruiters: Optional[List[Recruiter]] = None
