"""
Python client for the JobTrack API.

`JobTrackClient` sends the caller's identity on every request and keeps the
last job list in a `QueryCache` keyed by resource path. Any successful write
to a job invalidates the cached list (and the views derived from it) before
returning, so the next read always goes back to the server.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from jobtrack.utils.auth import USER_ID_HEADER

logger = logging.getLogger(__name__)

JOBS_PATH = "/api/jobs"


class ApiError(Exception):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class QueryCache:
    """Last-known response per resource path."""

    def __init__(self):
        self._entries: Dict[str, Any] = {}

    def get(self, key: str, default=None):
        return self._entries.get(key, default)

    def set(self, key: str, value: Any):
        self._entries[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def invalidate(self, prefix: str):
        """Drop `prefix` and every key below it (`/api/jobs` also drops `/api/jobs/analytics`)."""
        for key in list(self._entries):
            if key == prefix or key.startswith(prefix + "/") or key.startswith(prefix + "?"):
                del self._entries[key]

    def clear(self):
        self._entries.clear()


class JobTrackClient:
    def __init__(
        self,
        user_id: str,
        http: Optional[httpx.Client] = None,
        base_url: str = "http://localhost:8000",
    ):
        self.user_id = user_id
        # Only close the HTTP client if it was created here
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url)
        self.cache = QueryCache()

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        headers[USER_ID_HEADER] = self.user_id

        response = self.http.request(method, path, headers=headers, **kwargs)
        if response.status_code >= 400:
            try:
                message = response.json().get("detail", response.text)
            except ValueError:
                message = response.text
            logger.debug("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, str(message))

        if not response.content:
            return None
        return response.json()

    def _cached_get(self, key: str, path: str, refresh: bool = False, **kwargs):
        if not refresh and key in self.cache:
            return self.cache.get(key)

        data = self._request("GET", path, **kwargs)
        self.cache.set(key, data)
        return data

    # ===========================
    # JOBS
    # ===========================

    def list_jobs(self, refresh: bool = False) -> List[dict]:
        return self._cached_get(JOBS_PATH, JOBS_PATH, refresh=refresh)

    def get_job(self, job_id: str) -> dict:
        return self._request("GET", f"{JOBS_PATH}/{job_id}")

    def create_job(self, job: dict) -> dict:
        created = self._request("POST", JOBS_PATH, json=job)
        self.cache.invalidate(JOBS_PATH)
        return created

    def update_job(self, job_id: str, changes: dict) -> dict:
        updated = self._request("PUT", f"{JOBS_PATH}/{job_id}", json=changes)
        self.cache.invalidate(JOBS_PATH)
        return updated

    def delete_job(self, job_id: str):
        self._request("DELETE", f"{JOBS_PATH}/{job_id}")
        self.cache.invalidate(JOBS_PATH)

    def job_analytics(self, filter_type: str = "role", search: Optional[str] = None) -> dict:
        params = {"filterType": filter_type}
        if search:
            params["search"] = search
        key = f"{JOBS_PATH}/analytics?" + str(httpx.QueryParams(params))
        return self._cached_get(key, f"{JOBS_PATH}/analytics", params=params)

    def job_calendar(self, date: Optional[str] = None) -> dict:
        params = {"date": date} if date else {}
        return self._request("GET", f"{JOBS_PATH}/calendar", params=params)

    # ===========================
    # LOOKUPS
    # ===========================

    def search_companies(self, company_name: str) -> dict:
        return self._request("POST", "/api/search-recruiters", json={"companyName": company_name})

    def search_recruiters(self, domain: str) -> dict:
        return self._request(
            "POST", "/api/search-recruiters", json={"domain": domain, "type": "recruiters"}
        )

    def analyze_job(self, description: str) -> dict:
        return self._request("POST", "/api/analyze-job", json={"description": description})

    def suggest_companies(self, query: str) -> List[dict]:
        return self._request("GET", "/api/suggestions/companies", params={"q": query})

    def suggest_job_titles(self, query: str) -> List[dict]:
        return self._request("GET", "/api/suggestions/job-titles", params={"q": query})

    def close(self):
        if self._owns_http:
            self.http.close()
