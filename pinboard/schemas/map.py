"""
Map Annotation Schemas

Draw commands recorded by the map surface and applied by the map page,
plus the result returned for each handled map event.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field

from pinboard.schemas.geo import BoundingBox, Coordinates
from pinboard.schemas.location import LocationRecord


class FitBoundsAnnotation(BaseModel):
    """Adjust the view so that the bounding box is visible."""

    kind: Literal["fit_bounds"] = "fit_bounds"
    bbox: BoundingBox
    padding: int = Field(..., ge=0, description="Padding in pixels on each side")


class CircleAnnotation(BaseModel):
    """A semi-transparent circle of fixed ground radius."""

    kind: Literal["circle"] = "circle"
    center: Coordinates
    radius_meters: float = Field(..., gt=0)
    color: str
    fill_opacity: float = Field(..., ge=0.0, le=1.0)


class MarkerAnnotation(BaseModel):
    """A point marker with a popup label."""

    kind: Literal["marker"] = "marker"
    coordinates: Coordinates
    title: str
    popup_html: str


MapAnnotation = Annotated[
    Union[FitBoundsAnnotation, CircleAnnotation, MarkerAnnotation],
    Field(discriminator="kind"),
]


class MapEventResult(BaseModel):
    """Saved record and draw commands produced by one map event."""

    record: LocationRecord
    annotations: List[MapAnnotation]
