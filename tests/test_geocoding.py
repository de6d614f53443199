from __future__ import annotations

import pytest
from conftest import REGION, FakeGeocoder

from commute_planner.domain.errors import AddressNotFound, OutOfServiceRegion, ServiceUnavailable
from commute_planner.domain.models import Coordinate, GeocodeFailureReason
from commute_planner.engine.geocoding import GeocodingResolver


@pytest.mark.asyncio
async def test_resolve_appends_region_qualifier(
    resolver: GeocodingResolver, geocoder: FakeGeocoder
) -> None:
    outcome = await resolver.resolve("  1 George St ", REGION)

    assert geocoder.queries == ["1 George St, Sydney, Australia"]
    assert outcome.ok
    assert outcome.coordinate == Coordinate(-33.86, 151.21)
    assert outcome.warnings == ()
    assert outcome.raise_for_failure() == Coordinate(-33.86, 151.21)


@pytest.mark.asyncio
async def test_out_of_region_result_is_kept_with_warning(resolver: GeocodingResolver) -> None:
    outcome = await resolver.resolve("99 Queen St Melbourne", REGION)

    assert outcome.coordinate == Coordinate(-37.8136, 144.9631)
    assert outcome.failure is None
    assert outcome.out_of_region
    assert isinstance(outcome.warnings[0], OutOfServiceRegion)


@pytest.mark.asyncio
async def test_unknown_address_is_not_found_not_an_exception(resolver: GeocodingResolver) -> None:
    outcome = await resolver.resolve("Nowhere Lane", REGION)

    assert not outcome.ok
    assert outcome.failure is GeocodeFailureReason.not_found
    with pytest.raises(AddressNotFound):
        outcome.raise_for_failure()


@pytest.mark.asyncio
async def test_service_error_is_reported_as_failure() -> None:
    resolver = GeocodingResolver(service=FakeGeocoder(failing={"1 George St"}))

    outcome = await resolver.resolve("1 George St", REGION)

    assert outcome.failure is GeocodeFailureReason.service_error
    assert outcome.error
    with pytest.raises(ServiceUnavailable):
        outcome.raise_for_failure()


@pytest.mark.asyncio
async def test_blank_address_skips_the_service(
    resolver: GeocodingResolver, geocoder: FakeGeocoder
) -> None:
    outcome = await resolver.resolve("   ", REGION)

    assert outcome.failure is GeocodeFailureReason.not_found
    assert geocoder.queries == []


@pytest.mark.asyncio
async def test_no_bounds_means_no_region_check() -> None:
    resolver = GeocodingResolver(service=FakeGeocoder())

    outcome = await resolver.resolve("99 Queen St Melbourne")

    assert outcome.ok
    assert not outcome.out_of_region
