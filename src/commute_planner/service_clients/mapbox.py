"""
commute_planner.service_clients.mapbox

Mapbox HTTP clients (geocoding + driving directions).

Responsibilities:
- Call Mapbox Geocoding v5 and Directions v5 through a shared `httpx.AsyncClient`.
- Translate transport errors, non-2xx statuses and malformed payloads into
  `ServiceUnavailable`.
- Parse responses into the typed payloads from `service_clients.base`.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from commute_planner.domain.errors import ServiceUnavailable
from commute_planner.domain.models import Coordinate
from commute_planner.service_clients.base import DrivingRoute, GeocodeCandidate


class _MapboxClient:
    service = "mapbox"

    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        access_token: str,
        base_url: str = "https://api.mapbox.com",
    ) -> None:
        self._http = http
        self._token = access_token
        self._base_url = base_url.rstrip("/")

    async def _get_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            r = await self._http.get(
                f"{self._base_url}{path}",
                params={"access_token": self._token, **params},
            )
            r.raise_for_status()
            body = r.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ServiceUnavailable(self.service, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ServiceUnavailable(self.service, "response is not JSON") from e
        if not isinstance(body, dict):
            raise ServiceUnavailable(self.service, "unexpected response shape")
        return body


class MapboxGeocodingClient(_MapboxClient):
    service = "mapbox-geocoding"

    async def query(self, text: str) -> list[GeocodeCandidate]:
        body = await self._get_json(
            f"/geocoding/v5/mapbox.places/{quote(text, safe='')}.json",
            {"limit": 1},
        )
        out: list[GeocodeCandidate] = []
        for feature in body.get("features") or []:
            try:
                # Mapbox centers are [lng, lat].
                lng, lat = feature["center"][:2]
                out.append(
                    GeocodeCandidate(
                        coordinate=Coordinate(float(lat), float(lng)),
                        confidence=float(feature.get("relevance", 1.0)),
                        label=feature.get("place_name"),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ServiceUnavailable(self.service, f"malformed feature: {e}") from e
        out.sort(key=lambda c: c.confidence, reverse=True)
        return out


class MapboxDrivingClient(_MapboxClient):
    service = "mapbox-directions"

    async def query(self, origin: Coordinate, destination: Coordinate) -> list[DrivingRoute]:
        body = await self._get_json(
            f"/directions/v5/mapbox/driving/{origin.as_lng_lat()};{destination.as_lng_lat()}",
            {"overview": "false"},
        )
        code = body.get("code", "Ok")
        if code in ("NoRoute", "NoSegment"):
            return []
        if code != "Ok":
            raise ServiceUnavailable(self.service, f"code={code}")
        try:
            return [
                DrivingRoute(
                    duration_seconds=float(route["duration"]),
                    distance_meters=float(route["distance"]),
                )
                for route in body.get("routes") or []
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise ServiceUnavailable(self.service, f"malformed route: {e}") from e


# --- Module Notes -----------------------------------------------------------
# The access token travels as a query parameter, as Mapbox requires; never log request URLs.
