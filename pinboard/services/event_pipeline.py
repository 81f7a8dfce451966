"""
Event Pipeline

Turns map interactions into saved locations and map annotations.

- A selected search result fits the view to the place, draws a circle and
  a marker around its center, then saves it.
- A map click reverse-geocodes the point, draws a marker, then saves it.
  Reverse geocoding only enriches the label: when it fails the marker is
  still drawn and the location still saved, under a placeholder name.

Concurrent clicks interleave at the reverse-geocoding await, so the store
holds click records in the order their lookups complete.
"""

import logging

from pinboard.core.config import settings
from pinboard.schemas.geo import Coordinates
from pinboard.schemas.geocoding import SearchResult
from pinboard.schemas.location import LocationOrigin, LocationRecord
from pinboard.schemas.map import MapEventResult
from pinboard.services.geocoding_service import GeocodingService, GeocodingServiceError
from pinboard.services.location_store import LocationStore
from pinboard.services.map_surface import MapSurface

logger = logging.getLogger(__name__)

# Marker label when a point has no name
UNNAMED_LOCATION = "Unnamed Location"
# Saved name when the reverse lookup itself failed
UNKNOWN_LOCATION = "Unknown Location"


class EventPipeline:
    """
    Handles search selections and map clicks for one map session.
    """

    def __init__(self, map_surface: MapSurface, store: LocationStore, geocoder: GeocodingService):
        self._map = map_surface
        self._store = store
        self._geocoder = geocoder

    def handle_search_selection(self, result: SearchResult) -> MapEventResult:
        """
        Mark a place the user picked from the search results.

        The name is saved as given, even when empty.
        """
        logger.info("Search selection: name=%r, center=%s", result.name, result.center)

        annotations = [
            self._map.fit_bounds(result.bbox, padding=settings.SEARCH_FIT_PADDING),
            self._map.draw_circle(
                result.center,
                radius_meters=settings.SEARCH_CIRCLE_RADIUS_METERS,
                color=settings.SEARCH_CIRCLE_COLOR,
                fill_opacity=settings.SEARCH_CIRCLE_FILL_OPACITY,
            ),
            self._map.draw_marker(result.center, result.name),
        ]

        record = LocationRecord(
            latitude=result.center.latitude,
            longitude=result.center.longitude,
            name=result.name,
            origin=LocationOrigin.SEARCH,
        )
        self._store.append(record)

        return MapEventResult(record=record, annotations=annotations)

    async def handle_click(self, coordinates: Coordinates) -> MapEventResult:
        """
        Mark a clicked point, labelled with its reverse-geocoded name.

        Never raises on geocoding failure: the point is marked as
        "Unnamed Location" and saved as "Unknown Location" instead.
        """
        logger.info("Map click at %s", coordinates)

        try:
            lookup = await self._geocoder.reverse_geocode(coordinates)
        except GeocodingServiceError as e:
            logger.warning("Reverse geocode failed for %s: %s", coordinates, str(e))
            marker = self._map.draw_marker(coordinates, UNNAMED_LOCATION)
            name = UNKNOWN_LOCATION
        else:
            name = lookup.display_name or UNNAMED_LOCATION
            marker = self._map.draw_marker(coordinates, name)

        record = LocationRecord(
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
            name=name,
            origin=LocationOrigin.CLICK,
        )
        self._store.append(record)

        return MapEventResult(record=record, annotations=[marker])
