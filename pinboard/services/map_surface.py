"""
Map Surface

Records the draw commands issued against the map during a session. Each
command is returned to the caller as its handle and kept in draw order so
the map page can be rendered again with every annotation in place.
"""

import html
import threading
from typing import List

from pinboard.schemas.geo import BoundingBox, Coordinates
from pinboard.schemas.map import (
    CircleAnnotation,
    FitBoundsAnnotation,
    MapAnnotation,
    MarkerAnnotation,
)


def format_popup_html(title: str, coordinates: Coordinates) -> str:
    """
    Build the marker popup: bold title, then latitude and longitude to
    4 decimal places.
    """
    return (
        f"<b>{html.escape(title)}</b><br>"
        f"Lat: {coordinates.latitude:.4f}<br>"
        f"Lng: {coordinates.longitude:.4f}"
    )


class MapSurface:
    """Ordered log of annotations drawn on the session map."""

    def __init__(self):
        self._annotations: List[MapAnnotation] = []
        self._lock = threading.Lock()

    def _record(self, annotation):
        with self._lock:
            self._annotations.append(annotation)
        return annotation

    def fit_bounds(self, bbox: BoundingBox, padding: int) -> FitBoundsAnnotation:
        return self._record(FitBoundsAnnotation(bbox=bbox, padding=padding))

    def draw_circle(
        self, center: Coordinates, radius_meters: float, color: str, fill_opacity: float
    ) -> CircleAnnotation:
        return self._record(
            CircleAnnotation(
                center=center,
                radius_meters=radius_meters,
                color=color,
                fill_opacity=fill_opacity,
            )
        )

    def draw_marker(self, coordinates: Coordinates, title: str) -> MarkerAnnotation:
        return self._record(
            MarkerAnnotation(
                coordinates=coordinates,
                title=title,
                popup_html=format_popup_html(title, coordinates),
            )
        )

    def annotations(self) -> List[MapAnnotation]:
        """Return a copy of all annotations in draw order."""
        with self._lock:
            return list(self._annotations)
