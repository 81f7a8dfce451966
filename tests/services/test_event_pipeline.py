"""
Unit tests for the map event pipeline.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from pinboard.schemas.geo import BoundingBox, Coordinates
from pinboard.schemas.geocoding import ReverseGeocodeResult, SearchResult
from pinboard.schemas.location import LocationOrigin, LocationRecord
from pinboard.schemas.map import CircleAnnotation, FitBoundsAnnotation, MarkerAnnotation
from pinboard.services.event_pipeline import (
    UNKNOWN_LOCATION,
    UNNAMED_LOCATION,
    EventPipeline,
)
from pinboard.services.geocoding_service import (
    GeocodingNetworkError,
    GeocodingParseError,
    GeocodingService,
)
from pinboard.services.location_store import LocationStore
from pinboard.services.map_surface import MapSurface


@pytest.fixture
def geocoder():
    geocoder = MagicMock(spec=GeocodingService)
    geocoder.reverse_geocode = AsyncMock()
    return geocoder


@pytest.fixture
def map_surface():
    return MapSurface()


@pytest.fixture
def store():
    return LocationStore()


@pytest.fixture
def pipeline(map_surface, store, geocoder):
    return EventPipeline(map_surface=map_surface, store=store, geocoder=geocoder)


@pytest.fixture
def london():
    return Coordinates(latitude=51.5007, longitude=-0.1246)


@pytest.fixture
def search_result():
    """A selected search result for the Eiffel Tower."""
    return SearchResult(
        center=Coordinates(latitude=48.8582599, longitude=2.2945006),
        name="Eiffel Tower, Paris, France",
        bbox=BoundingBox(south=48.8574753, west=2.2933119, north=48.8590453, east=2.2956897),
    )


def test_search_selection_draws_in_order(pipeline, map_surface, search_result):
    """View fit comes first, then the circle, then the marker."""
    result = pipeline.handle_search_selection(search_result)

    kinds = [a.kind for a in result.annotations]
    assert kinds == ["fit_bounds", "circle", "marker"]
    assert map_surface.annotations() == result.annotations

    fit, circle, marker = result.annotations
    assert isinstance(fit, FitBoundsAnnotation)
    assert fit.bbox == search_result.bbox
    assert fit.padding == 50

    assert isinstance(circle, CircleAnnotation)
    assert circle.center == search_result.center
    assert circle.radius_meters == 500
    assert circle.color == "#3388ff"
    assert circle.fill_opacity == 0.2

    assert isinstance(marker, MarkerAnnotation)
    assert marker.popup_html == (
        "<b>Eiffel Tower, Paris, France</b><br>Lat: 48.8583<br>Lng: 2.2945"
    )


def test_search_selection_saves_record(pipeline, store, search_result):
    """Test that the searched place is saved with search origin."""
    result = pipeline.handle_search_selection(search_result)

    expected = LocationRecord(
        latitude=48.8582599,
        longitude=2.2945006,
        name="Eiffel Tower, Paris, France",
        origin=LocationOrigin.SEARCH,
    )
    assert result.record == expected
    assert store.snapshot() == [expected]


def test_search_selection_keeps_empty_name(pipeline, store, search_result):
    """Search results are saved with their name as-is, even when empty."""
    nameless = search_result.model_copy(update={"name": ""})

    result = pipeline.handle_search_selection(nameless)

    assert result.record.name == ""
    assert store.snapshot()[0].name == ""
    assert result.annotations[-1].title == ""


@pytest.mark.asyncio
async def test_click_success(pipeline, store, geocoder, london):
    """Clicking London saves the reverse-geocoded name."""
    geocoder.reverse_geocode.return_value = ReverseGeocodeResult(display_name="London, UK")

    result = await pipeline.handle_click(london)

    geocoder.reverse_geocode.assert_awaited_once_with(london)
    assert result.record == LocationRecord(
        latitude=51.5007, longitude=-0.1246, name="London, UK", origin=LocationOrigin.CLICK
    )
    assert store.snapshot() == [result.record]

    assert len(result.annotations) == 1
    marker = result.annotations[0]
    assert isinstance(marker, MarkerAnnotation)
    assert marker.title == "London, UK"
    assert marker.popup_html == "<b>London, UK</b><br>Lat: 51.5007<br>Lng: -0.1246"


@pytest.mark.asyncio
@pytest.mark.parametrize("display_name", [None, ""])
async def test_click_without_display_name(pipeline, store, geocoder, london, display_name):
    """A lookup without a name falls back to the unnamed placeholder."""
    geocoder.reverse_geocode.return_value = ReverseGeocodeResult(display_name=display_name)

    result = await pipeline.handle_click(london)

    assert result.record.name == UNNAMED_LOCATION
    assert result.annotations[0].title == UNNAMED_LOCATION
    assert len(store) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [GeocodingNetworkError("Request timed out"), GeocodingParseError("Invalid response body")],
)
async def test_click_geocoding_failure(pipeline, store, map_surface, geocoder, london, error):
    """A failed lookup still draws a marker and saves the point."""
    geocoder.reverse_geocode.side_effect = error

    result = await pipeline.handle_click(london)

    assert result.record == LocationRecord(
        latitude=51.5007,
        longitude=-0.1246,
        name=UNKNOWN_LOCATION,
        origin=LocationOrigin.CLICK,
    )
    assert store.snapshot() == [result.record]

    marker = result.annotations[0]
    assert marker.title == UNNAMED_LOCATION
    assert marker.popup_html == "<b>Unnamed Location</b><br>Lat: 51.5007<br>Lng: -0.1246"
    assert map_surface.annotations() == [marker]


@pytest.mark.asyncio
async def test_concurrent_clicks_saved_in_resolution_order(pipeline, store, geocoder):
    """When the second lookup resolves first, its record is saved first."""
    first = Coordinates(latitude=10.0, longitude=10.0)
    second = Coordinates(latitude=20.0, longitude=20.0)
    release_first = asyncio.Event()

    async def reverse_geocode(coordinates):
        if coordinates == first:
            await release_first.wait()
            return ReverseGeocodeResult(display_name="First")
        release_first.set()
        return ReverseGeocodeResult(display_name="Second")

    geocoder.reverse_geocode.side_effect = reverse_geocode

    await asyncio.gather(pipeline.handle_click(first), pipeline.handle_click(second))

    assert [r.name for r in store.snapshot()] == ["Second", "First"]


@pytest.mark.asyncio
async def test_mixed_events_keep_insertion_order(pipeline, store, geocoder, search_result, london):
    """Records appear in the order their handlers completed."""
    geocoder.reverse_geocode.return_value = ReverseGeocodeResult(display_name="London, UK")

    await pipeline.handle_click(london)
    pipeline.handle_search_selection(search_result)
    await pipeline.handle_click(london)

    origins = [r.origin for r in store.snapshot()]
    assert origins == [LocationOrigin.CLICK, LocationOrigin.SEARCH, LocationOrigin.CLICK]
