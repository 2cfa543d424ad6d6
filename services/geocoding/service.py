"""Reverse geocoding service using the Nominatim XML API"""

import asyncio
import logging
import ssl
from collections.abc import Mapping
from typing import Any, Optional, Sequence
from xml.parsers.expat import ExpatError

import aiohttp
import certifi
import xmltodict

from core.config import settings
from services.timeline.models import Point

from .models import EnrichedPoint, LocalityData

logger = logging.getLogger(__name__)


def get_ssl_context():
    """Get SSL context for aiohttp requests"""
    return ssl.create_default_context(cafile=certifi.where())


def _text(value: Any) -> Optional[str]:
    """Text content of a parsed XML element (elements with attributes parse to dicts)"""
    if isinstance(value, Mapping):
        value = value.get("#text")
    return value or None


def parse_locality(xml_text: str) -> LocalityData | None:
    """
    Pull district and country out of a Nominatim reverse geocode XML body.

    Raises:
        ExpatError: body is not well-formed XML
    """
    data = xmltodict.parse(xml_text)
    reverse = data.get("reversegeocode") if isinstance(data, Mapping) else None
    addressparts = reverse.get("addressparts") if isinstance(reverse, Mapping) else None

    if not isinstance(addressparts, Mapping):
        return None

    return LocalityData(
        district_name=_text(addressparts.get("city_district")),
        country_name=_text(addressparts.get("country")),
    )


class NominatimService:
    """
    Enriches timeline points with locality data from Nominatim.

    Every point gets its own request and its own timeout. A failed lookup
    only leaves that point's locality_data as None.
    """

    def __init__(
        self,
        timeout: float = settings.GEOCODE_TIMEOUT_SECONDS,
        user_agent: str = settings.NOMINATIM_USER_AGENT,
    ):
        """
        Initialize Nominatim service

        Args:
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header sent to Nominatim
        """
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch_locality(self, session: aiohttp.ClientSession, url: str) -> LocalityData | None:
        """
        Fetch one reverse geocode URL and parse its locality data.

        Returns:
            LocalityData, or None on timeout, HTTP error or unparseable body
        """
        try:
            async with session.get(url, timeout=aiohttp.ClientTimeout(total=self.timeout)) as response:
                if not response.ok:
                    logger.error(f"[Nominatim Fetch] HTTP error for {url}: {response.status} {response.reason}")
                    return None
                xml_text = await response.text()
        except asyncio.TimeoutError:
            logger.error(f"[Nominatim Fetch] Request timeout for {url}")
            return None
        except aiohttp.ClientError as e:
            logger.error(f"[Nominatim Fetch] Error fetching {url}: {e}")
            return None

        try:
            locality = parse_locality(xml_text)
        except (ExpatError, ValueError) as e:
            logger.error(f"[Nominatim Parse] Error parsing response for {url}: {e}")
            return None

        if locality is None:
            logger.error(f"[Nominatim Parse] No addressparts found in response for {url}")
        return locality

    async def enrich_points(
        self,
        points: Sequence[Point],
        session: Optional[aiohttp.ClientSession] = None,
    ) -> list[EnrichedPoint]:
        """
        Look up locality data for all points in parallel.

        Waits for every lookup to settle. The result has the same length and
        order as points.

        Args:
            points: Points to enrich
            session: Optional session to reuse (a new one is created otherwise)
        """
        if not points:
            return []

        if session is None:
            async with self._create_session() as own_session:
                results = await self._gather(own_session, points)
        else:
            results = await self._gather(session, points)

        enriched = []
        for point, result in zip(points, results):
            if isinstance(result, BaseException):
                logger.error(f"[Nominatim] Lookup failed for {point.geocode_request_url}: {result!r}")
                result = None
            enriched.append(EnrichedPoint(**point.model_dump(), locality_data=result))

        found = sum(1 for p in enriched if p.locality_data is not None)
        logger.info(f"Enriched {found}/{len(enriched)} points with locality data")
        return enriched

    def _create_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(ssl=get_ssl_context(), limit=0),
            headers={"User-Agent": self.user_agent},
        )

    async def _gather(self, session: aiohttp.ClientSession, points: Sequence[Point]) -> list:
        tasks = [self.fetch_locality(session, point.geocode_request_url) for point in points]
        return await asyncio.gather(*tasks, return_exceptions=True)
