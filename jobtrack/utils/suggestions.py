"""Autocomplete suggestions for the company and job title inputs."""

import logging
from typing import List

import httpx

from jobtrack.config import DATAMUSE_URL, ONET_SEARCH_URL

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class SuggestionError(Exception):
    """A suggestion service failed or answered with an error."""


async def _get_json(http: httpx.AsyncClient, url: str, error: str, expect: type, **kwargs):
    try:
        response = await http.get(url, **kwargs)
    except httpx.HTTPError as e:
        logger.warning("Request to %s failed: %s", url, e)
        raise SuggestionError(error) from e

    if response.status_code >= 400:
        logger.warning("%s returned %s", url, response.status_code)
        raise SuggestionError(error)

    try:
        data = response.json()
    except ValueError as e:
        logger.warning("%s returned a non-JSON body", url)
        raise SuggestionError(error) from e

    if not isinstance(data, expect):
        logger.warning("%s returned an unexpected %s", url, type(data).__name__)
        raise SuggestionError(error)
    return data


async def search_companies(query: str, http: httpx.AsyncClient) -> List[dict]:
    """Company-like words related to `query`, from Datamuse."""
    if not query or len(query) < MIN_QUERY_LENGTH:
        return []

    data = await _get_json(
        http,
        DATAMUSE_URL,
        "Failed to fetch companies",
        list,
        params={"ml": query, "topics": "business,company,corporation"},
    )
    return [{"word": item["word"], "score": item.get("score", 0)} for item in data]


async def search_job_titles(query: str, http: httpx.AsyncClient) -> List[dict]:
    """Occupation titles matching `query`, from the O*NET keyword search."""
    if not query or len(query) < MIN_QUERY_LENGTH:
        return []

    data = await _get_json(
        http,
        ONET_SEARCH_URL,
        "Failed to fetch job titles",
        dict,
        params={"keyword": query},
        headers={"Accept": "application/json"},
    )
    occupations = data.get("occupation") or []
    return [{"title": occ["title"], "code": occ["code"]} for occ in occupations]
