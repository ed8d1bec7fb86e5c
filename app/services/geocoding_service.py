"""
Geocoding Service

Resolves free-text job locations to coordinates through OpenStreetMap's
Nominatim API. Every outbound call passes through a RateLimiter; a per-request
GeocodeCache keeps repeated locations from being looked up twice.
"""

import asyncio
import logging
from functools import lru_cache
from typing import Dict, Iterator, Optional

import requests

from app.core.config import settings
from app.schemas.JobSchemas import Coordinates
from app.tools.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class GeocodeCache:
    """Location string -> coordinates, or None for a location that did not resolve.

    A cached None is a real entry: the location is not looked up again.
    """

    def __init__(self):
        self._entries: Dict[str, Optional[Coordinates]] = {}

    def __contains__(self, location: str) -> bool:
        return location in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, location: str) -> Optional[Coordinates]:
        return self._entries.get(location)

    def set(self, location: str, coords: Optional[Coordinates]) -> None:
        self._entries[location] = coords


class NominatimGeocoder:
    def __init__(
        self,
        rate_limiter: RateLimiter,
        url: str = None,
        user_agent: str = None,
        timeout: float = None,
        session: Optional[requests.Session] = None,
    ):
        self.rate_limiter = rate_limiter
        self.url = url or settings.NOMINATIM_URL
        self.user_agent = user_agent or settings.NOMINATIM_USER_AGENT
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _search(self, location: str) -> list:
        r = self.session.get(
            self.url,
            params={"q": location, "format": "json", "limit": 1},
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    async def geocode(self, location: str) -> Optional[Coordinates]:
        """Look up `location`. Network errors and misses both return None."""
        if not location or not location.strip():
            return None

        await self.rate_limiter.acquire()
        try:
            results = await asyncio.to_thread(self._search, location)
        except (requests.RequestException, ValueError) as e:
            logger.warning("Geocoding error for %r: %s", location, e)
            return None

        if not results:
            return None
        try:
            first = results[0]
            return Coordinates(lat=float(first["lat"]), lon=float(first["lon"]))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("Unexpected geocoding payload for %r: %s", location, e)
            return None


@lru_cache
def get_geocoder() -> NominatimGeocoder:
    # one limiter per process so concurrent requests share the rate budget
    return NominatimGeocoder(RateLimiter(settings.GEOCODE_INTERVAL_SECONDS))
