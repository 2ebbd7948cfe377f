"""
Recruiter lookup against the Apollo people-data API.

The search runs in two phases. First a company name is resolved to Apollo
organizations (and their domains); then people at a chosen domain are
searched once per recruiting-related title. People Apollo knows nothing
contactable about are dropped, and the passes are merged by email.
"""

import logging
from typing import List, Optional

import httpx

from jobtrack.config import APOLLO_BASE_URL

logger = logging.getLogger(__name__)

RECRUITER_TITLES = [
    "recruiter",
    "talent acquisition",
    "recruiting",
    "technical recruiter",
]

# Apollo returns this placeholder instead of an address it has not unlocked
LOCKED_EMAIL_PREFIX = "email_not_unlocked"

PER_PAGE = 25


class RecruiterSearchError(Exception):
    """Base class for recruiter search failures."""


class RecruiterSearchConfigError(RecruiterSearchError):
    """No Apollo API key is configured."""


class RecruiterSearchUpstreamError(RecruiterSearchError):
    """Apollo answered with an error or could not be reached."""


def _usable_email(email: Optional[str]) -> Optional[str]:
    if not email or email.startswith(LOCKED_EMAIL_PREFIX):
        return None
    return email


def normalize_company(org: dict) -> dict:
    return {
        "id": org.get("id"),
        "name": org.get("name") or "",
        "domain": org.get("primary_domain") or org.get("domain"),
        "website_url": org.get("website_url"),
        "linkedin_url": org.get("linkedin_url"),
    }


def normalize_person(person: dict) -> dict:
    name = person.get("name")
    if not name:
        name = " ".join(p for p in (person.get("first_name"), person.get("last_name")) if p)

    organization = person.get("organization") or {}
    return {
        "name": name,
        "title": person.get("title"),
        "email": _usable_email(person.get("email")),
        "linkedin_url": person.get("linkedin_url"),
        "organization": organization.get("name") or person.get("organization_name"),
    }


def merge_recruiters(passes: List[List[dict]]) -> List[dict]:
    """
    Flatten several result pages into one list.

    People with neither email nor LinkedIn URL are dropped. Duplicates are
    detected by email, or by LinkedIn URL for people without an email.
    """
    seen = set()
    merged = []
    for people in passes:
        for person in people:
            if not person["email"] and not person["linkedin_url"]:
                continue

            key = (person["email"] or person["linkedin_url"]).lower()
            if key in seen:
                continue

            seen.add(key)
            merged.append(person)
    return merged


class ApolloClient:
    """Thin async wrapper over the two Apollo search endpoints."""

    def __init__(self, api_key: Optional[str], http: httpx.AsyncClient, base_url: str = APOLLO_BASE_URL):
        if not api_key:
            raise RecruiterSearchConfigError(
                "Apollo API key is not configured. Set APOLLO_API_KEY in your environment."
            )
        self.api_key = api_key
        self.http = http
        self.base_url = base_url.rstrip("/")

    async def _post(self, path: str, body: dict) -> dict:
        url = f"{self.base_url}{path}"
        headers = {
            "Content-Type": "application/json",
            "Cache-Control": "no-cache",
            "X-Api-Key": self.api_key,
        }

        try:
            response = await self.http.post(url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Apollo request to %s failed: %s", path, e)
            raise RecruiterSearchUpstreamError(f"Could not reach Apollo API: {e}") from e

        if response.status_code >= 400:
            logger.error("Apollo %s returned %s: %s", path, response.status_code, response.text)
            raise RecruiterSearchUpstreamError(
                f"Apollo API error: {response.status_code} {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Apollo %s returned a non-JSON body: %s", path, response.text[:200])
            raise RecruiterSearchUpstreamError(
                f"Apollo API returned an unreadable response: {response.text[:200]}"
            ) from e
        if not isinstance(data, dict):
            raise RecruiterSearchUpstreamError("Apollo API returned an unexpected response")
        return data

    async def search_companies(self, company_name: str) -> List[dict]:
        data = await self._post("/mixed_companies/search", {
            "q_organization_name": company_name,
            "page": 1,
            "per_page": 10,
        })
        organizations = data.get("organizations") or data.get("accounts") or []
        return [normalize_company(org) for org in organizations]

    async def search_recruiters(self, domain: str) -> List[dict]:
        passes = []
        for title in RECRUITER_TITLES:
            data = await self._post("/mixed_people/search", {
                "q_organization_domains": [domain],
                "person_titles": [title],
                "page": 1,
                "per_page": PER_PAGE,
            })
            people = (data.get("people") or []) + (data.get("contacts") or [])
            logger.debug("Apollo title pass %r at %s: %d people", title, domain, len(people))
            passes.append([normalize_person(p) for p in people])

        return merge_recruiters(passes)
