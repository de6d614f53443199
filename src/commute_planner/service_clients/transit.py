"""
commute_planner.service_clients.transit

Transit directions client (Google Directions JSON, optionally via the pass-through relay).

Responsibilities:
- Request `mode=transit` directions for an origin/destination pair.
- Parse routes → legs → steps into `TransitItinerary` values.
"""

from __future__ import annotations

from typing import Any

import httpx

from commute_planner.domain.errors import ServiceUnavailable
from commute_planner.domain.models import Coordinate
from commute_planner.service_clients.base import TransitItinerary, TransitLeg, TransitStep


class TransitDirectionsClient:
    """
    `url` is either the Directions endpoint itself or the relay in front of it. The relay
    injects the key server-side, so `api_key` is optional.
    """

    service = "transit-directions"

    def __init__(self, *, http: httpx.AsyncClient, url: str, api_key: str = "") -> None:
        self._http = http
        self._url = url
        self._api_key = api_key

    async def query(self, origin: Coordinate, destination: Coordinate) -> list[TransitItinerary]:
        params = {
            "origin": origin.as_lat_lng(),
            "destination": destination.as_lat_lng(),
            "mode": "transit",
        }
        if self._api_key:
            params["key"] = self._api_key

        try:
            r = await self._http.get(self._url, params=params)
            r.raise_for_status()
            body = r.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ServiceUnavailable(self.service, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ServiceUnavailable(self.service, "response is not JSON") from e
        if not isinstance(body, dict):
            raise ServiceUnavailable(self.service, "unexpected response shape")

        status = body.get("status", "OK")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            raise ServiceUnavailable(self.service, f"status={status}")

        try:
            return [_itinerary(route) for route in body.get("routes") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise ServiceUnavailable(self.service, f"malformed route: {e}") from e


def _itinerary(route: dict[str, Any]) -> TransitItinerary:
    return TransitItinerary(legs=tuple(_leg(leg) for leg in route.get("legs") or []))


def _leg(leg: dict[str, Any]) -> TransitLeg:
    return TransitLeg(
        duration_seconds=float(leg["duration"]["value"]),
        distance_meters=float(leg["distance"]["value"]),
        steps=tuple(_step(step) for step in leg.get("steps") or []),
    )


def _step(step: dict[str, Any]) -> TransitStep:
    details = step.get("transit_details") or {}
    line = details.get("line") or {}
    return TransitStep(
        travel_mode=str(step.get("travel_mode", "")),
        line=line.get("short_name") or line.get("name"),
        departure_stop=(details.get("departure_stop") or {}).get("name"),
        arrival_stop=(details.get("arrival_stop") or {}).get("name"),
    )


# --- Module Notes -----------------------------------------------------------
# Directions answers 200 for logical failures; the `status` field decides between
# "no itinerary" (empty list) and a service error.
