"""
commute_planner.domain.errors

Error taxonomy for the commute engine.

Responsibilities:
- Exceptions raised at service boundaries (adapters, optimizer, office search).
- The out-of-region warning attached to geocoding outcomes.

Per-leg and per-address failures are absorbed into unresolved data; only
`NoCoordinates` and a total service outage reach the caller as explicit failures.
"""

from __future__ import annotations


class CommutePlannerError(Exception):
    pass


class AddressNotFound(CommutePlannerError):
    def __init__(self, address: str) -> None:
        super().__init__(f"address not found: {address!r}")
        self.address = address


class ServiceUnavailable(CommutePlannerError):
    """
    Network error, timeout, non-2xx status or malformed payload from either service.
    """

    def __init__(self, service: str, detail: str) -> None:
        super().__init__(f"{service} unavailable: {detail}")
        self.service = service
        self.detail = detail


class NoRoute(CommutePlannerError):
    pass


class NoCoordinates(CommutePlannerError):
    def __init__(self) -> None:
        super().__init__("no employee has a resolved home coordinate")


class OutOfServiceRegion(UserWarning):
    """
    Geocoded point outside the configured service region. Attached to outcomes, not raised.
    """


# --- Module Notes -----------------------------------------------------------
# The API layer maps these onto HTTP statuses (404 / 503 / 409); engine code never
# imports FastAPI.
