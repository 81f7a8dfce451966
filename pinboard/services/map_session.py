"""
Map Session

Groups the state of the single map session served by this process: the
location store, the map surface and the event pipeline working on them.
"""

from typing import Optional

from pinboard.services.event_pipeline import EventPipeline
from pinboard.services.geocoding_service import GeocodingService, geocoding_service
from pinboard.services.location_store import LocationStore
from pinboard.services.map_surface import MapSurface


class MapSession:
    """State of one map session. Lives as long as the process."""

    def __init__(self, geocoder: Optional[GeocodingService] = None):
        self.store = LocationStore()
        self.map_surface = MapSurface()
        self.pipeline = EventPipeline(
            map_surface=self.map_surface,
            store=self.store,
            geocoder=geocoder if geocoder is not None else geocoding_service,
        )


map_session = MapSession()


def get_map_session() -> MapSession:
    return map_session
