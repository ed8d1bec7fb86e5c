"""
Job Search Service

Turns a parsed resume into a list of job listings:

1. build a search query from the top two skills,
2. fetch one page of results from JSearch (RapidAPI),
3. map each raw result onto JobResult with fixed fallbacks,
4. drop duplicate (title, company) pairs, first occurrence wins,
5. fill in missing coordinates through the geocoder, one job at a time.

Upstream failures never fail the caller: a broken search yields [] and a
failed lookup leaves that job without coordinates.
"""

import asyncio
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import pydantic
import requests

from app.core.config import settings
from app.core.exceptions import UpstreamUnavailableError
from app.schemas.JobSchemas import JobResult, ParsedResume
from app.services.geocoding_service import GeocodeCache, NominatimGeocoder

logger = logging.getLogger(__name__)

FALLBACK_QUERY = "software engineer"
FALLBACK_TITLE = "Unknown Title"
FALLBACK_COMPANY = "Unknown Company"
FALLBACK_LOGO = "https://via.placeholder.com/80x80?text=Company"
FALLBACK_APPLY_LINK = "#"


def build_search_query(parsed: ParsedResume) -> str:
    query = " ".join(s.strip() for s in parsed.skills[:2] if s and s.strip())
    return query or FALLBACK_QUERY


class JSearchClient:
    def __init__(
        self,
        api_key: str = None,
        host: str = None,
        timeout: float = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.RAPIDAPI_KEY
        self.host = host or settings.JSEARCH_HOST
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _get(self, query: str) -> Dict[str, Any]:
        r = self.session.get(
            f"https://{self.host}/search",
            params={"query": query, "page": "1", "num_pages": "1", "date_posted": "month"},
            headers={"x-rapidapi-key": self.api_key, "x-rapidapi-host": self.host},
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    async def search(self, query: str) -> List[Dict[str, Any]]:
        """Return the raw `data` list for one page of results."""
        try:
            payload = await asyncio.to_thread(self._get, query)
        except (requests.RequestException, ValueError) as e:
            raise UpstreamUnavailableError(f"Job search failed: {e}") from e
        data = payload.get("data") if isinstance(payload, dict) else None
        return data if isinstance(data, list) else []


def map_job(raw: Dict[str, Any]) -> JobResult:
    location = " ".join(
        str(part).strip() for part in (raw.get("job_city"), raw.get("job_state"), raw.get("job_country"))
        if part and str(part).strip()
    )
    return JobResult(
        jobTitle=raw.get("job_title") or FALLBACK_TITLE,
        companyName=raw.get("employer_name") or FALLBACK_COMPANY,
        companyImage=raw.get("employer_logo") or FALLBACK_LOGO,
        applicationUrl=raw.get("job_apply_link") or FALLBACK_APPLY_LINK,
        location=location,
        datePosted=raw.get("job_posted_at_datetime_utc") or "",
        # 0 is what the API sends for "unknown"
        latitude=raw.get("job_latitude") or None,
        longitude=raw.get("job_longitude") or None,
    )


def map_jobs(raw_jobs: List[Any]) -> List[JobResult]:
    """Map raw results, skipping any record that does not fit JobResult."""
    jobs = []
    for raw in raw_jobs:
        if not isinstance(raw, dict):
            continue
        try:
            jobs.append(map_job(raw))
        except pydantic.ValidationError as e:
            logger.warning("Skipping malformed job record %r: %s", raw.get("job_id"), e)
    return jobs


def deduplicate_jobs(jobs: List[JobResult]) -> List[JobResult]:
    """Keep the first job for each case-insensitive (title, company) pair."""
    seen = set()
    unique = []
    for job in jobs:
        key = (job.jobTitle.lower(), job.companyName.lower())
        if key in seen:
            continue
        seen.add(key)
        unique.append(job)
    return unique


async def enrich_with_coordinates(
    jobs: List[JobResult], geocoder: NominatimGeocoder, cache: GeocodeCache
) -> List[JobResult]:
    """Fill in missing coordinates in place, geocoding each distinct location once."""
    for job in jobs:
        if job.has_coordinates() or not job.location:
            continue

        if job.location in cache:
            coords = cache.get(job.location)
        else:
            coords = await geocoder.geocode(job.location)
            cache.set(job.location, coords)

        if coords:
            job.latitude = coords.lat
            job.longitude = coords.lon
    return jobs


async def fetch_jobs_for_resume(
    parsed: ParsedResume,
    client: JSearchClient,
    geocoder: NominatimGeocoder,
    cache: Optional[GeocodeCache] = None,
) -> List[JobResult]:
    query = build_search_query(parsed)
    try:
        raw_jobs = await client.search(query)
    except UpstreamUnavailableError as e:
        logger.warning("Job API error for query %r: %s", query, e)
        return []

    jobs = deduplicate_jobs(map_jobs(raw_jobs))
    await enrich_with_coordinates(jobs, geocoder, cache if cache is not None else GeocodeCache())
    logger.info("Fetched %d unique jobs for query %r", len(jobs), query)
    return jobs


@lru_cache
def get_job_search_client() -> JSearchClient:
    return JSearchClient()
