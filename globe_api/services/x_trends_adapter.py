"""
XTrendsAdapter — Trends-by-location via the X (Twitter) API v2.

Used by the hotspot aggregator to pull the current trend list for each
registry location:

    GET {X_API_BASE_URL}/trends/by/woeid/{woeid}?max_trends=20
    Authorization: Bearer <X_API_KEY>

Graceful degradation: if X_API_KEY is not set the adapter reports itself
disabled and the snapshot cache serves the embedded fallback dataset.
Any per-location problem (network error, timeout, non-2xx status,
malformed or empty body) returns None so that location is simply skipped
for this refresh cycle.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from globe_api.core.config import settings
from globe_api.models.hotspot import Location, TrendSample, XTrend, XTrendsResponse
from globe_api.services.trend_scorer import score_trends

logger = logging.getLogger(__name__)


class XTrendsAdapter:
    """
    Thin async wrapper around the X trends-by-woeid endpoint.

    One httpx.AsyncClient is meant to be shared across a whole refresh
    (see open_client); fetch_trend_sample opens a private one when called
    without a client.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_trends: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = settings.x_api_key if api_key is None else api_key
        self.base_url = base_url or settings.x_api_base_url
        self.max_trends = max_trends or settings.x_max_trends
        self.timeout = timeout or settings.x_request_timeout_seconds
        self._transport = transport
        self.enabled = bool(self.api_key)

    def open_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Authorization": f"Bearer {self.api_key}"},
            transport=self._transport,
        )

    async def fetch_trends(self, location_id: int, client: httpx.AsyncClient) -> Optional[list[XTrend]]:
        """
        Fetch the current trend list for one WOEID, in API rank order.

        Returns:
            Non-empty list of XTrend, or None on any failure.
        """
        try:
            response = await client.get(
                f"/trends/by/woeid/{location_id}",
                params={"max_trends": self.max_trends},
            )
            response.raise_for_status()
            payload = XTrendsResponse.model_validate(response.json())

        except httpx.HTTPStatusError as exc:
            logger.error(
                "X trends API error for WOEID %s: %s — %s",
                location_id,
                exc.response.status_code,
                exc.response.text[:200],
            )
            return None
        except httpx.HTTPError as exc:
            logger.warning("X trends request failed for WOEID %s: %r", location_id, exc)
            return None
        except (ValidationError, ValueError) as exc:
            logger.warning("Malformed X trends payload for WOEID %s: %s", location_id, exc)
            return None

        if not payload.data:
            logger.info("No trends returned for WOEID %s", location_id)
            return None
        return payload.data

    async def fetch_trend_sample(
        self,
        location: Location,
        client: Optional[httpx.AsyncClient] = None,
    ) -> Optional[TrendSample]:
        """Fetch and score one location. None means skip it this cycle."""
        if client is None:
            async with self.open_client() as own_client:
                trends = await self.fetch_trends(location.location_id, own_client)
        else:
            trends = await self.fetch_trends(location.location_id, client)

        if trends is None:
            return None
        return score_trends(location.location_id, trends)
