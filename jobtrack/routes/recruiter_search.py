# ========================================
# jobtrack/routes/recruiter_search.py
# ========================================

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException

from jobtrack.config import get_apollo_api_key
from jobtrack.schemas.recruiter import RecruiterSearchRequest, RecruiterSearchResponse
from jobtrack.utils.http import get_http_client
from jobtrack.utils.recruiters import ApolloClient, RecruiterSearchError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# ✅ 1. SEARCH COMPANIES / RECRUITERS
@router.post(
    "/search-recruiters",
    response_model=RecruiterSearchResponse,
    response_model_exclude_none=True
)
async def search_recruiters(
    search: RecruiterSearchRequest,
    http: httpx.AsyncClient = Depends(get_http_client)
):
    """
    Two-step recruiter lookup.

    Send `{companyName}` to resolve matching companies, then
    `{domain, type: "recruiters"}` with a chosen company's domain to list
    its recruiters. An empty result is a normal answer with a message.
    """

    company_name = (search.company_name or "").strip()
    domain = (search.domain or "").strip()

    if not company_name and not domain:
        raise HTTPException(status_code=400, detail="Company name or domain is required")

    try:
        apollo = ApolloClient(get_apollo_api_key(), http)

        if domain and search.type != "companies":
            recruiters = await apollo.search_recruiters(domain)
            if not recruiters:
                return {"message": f"No recruiters found at {domain}", "recruiters": []}
            return {
                "message": f"Found {len(recruiters)} recruiters at {domain}",
                "recruiters": recruiters,
            }

        query = company_name or domain
        companies = await apollo.search_companies(query)
        if not companies:
            return {"message": f"No companies found matching '{query}'", "companies": []}
        return {
            "message": f"Found {len(companies)} companies matching '{query}'",
            "companies": companies,
        }

    except RecruiterSearchError as e:
        logger.error("Recruiter search failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
