"""
commute_planner.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide provider credentials from repr/logging.
- Derive engine configuration objects (region bounds, throttle budgets).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from commute_planner.domain.models import Coordinate, RegionBounds


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `COMMUTE_`).
    Defaults target the Sydney metro area and are safe for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="COMMUTE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "commute-planner"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Providers
    mapbox_access_token: str = Field(default="", repr=False)
    mapbox_base_url: str = "https://api.mapbox.com"
    # Either Google Directions itself or the pass-through relay in front of it.
    transit_directions_url: str = "https://maps.googleapis.com/maps/api/directions/json"
    google_maps_api_key: str = Field(default="", repr=False)
    http_timeout_seconds: float = 10.0

    # Service region
    region_hint: str = "Sydney, Australia"
    region_min_latitude: float = -34.5
    region_max_latitude: float = -33.0
    region_min_longitude: float = 150.0
    region_max_longitude: float = 151.7
    reject_out_of_region: bool = False

    default_office_latitude: float = -33.8688
    default_office_longitude: float = 151.2093

    # Rate limiting
    routing_pool_size: int = Field(default=4, ge=1)
    routing_min_interval_seconds: float = Field(default=0.1, ge=0.0)
    geocoding_pool_size: int = Field(default=2, ge=1)
    geocoding_min_interval_seconds: float = Field(default=0.1, ge=0.0)

    def region_bounds(self) -> RegionBounds:
        return RegionBounds(
            min_latitude=self.region_min_latitude,
            max_latitude=self.region_max_latitude,
            min_longitude=self.region_min_longitude,
            max_longitude=self.region_max_longitude,
        )

    def default_office(self) -> Coordinate:
        return Coordinate(self.default_office_latitude, self.default_office_longitude)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The engine never imports this module; the service layer translates settings into
# explicit arguments (bounds, pool sizes, intervals) so engine code stays testable.
