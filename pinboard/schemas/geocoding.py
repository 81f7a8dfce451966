"""
Geocoding Schemas

Pydantic models for forward (search) and reverse geocoding results.
"""

from typing import Optional

from pydantic import BaseModel, Field

from pinboard.schemas.geo import BoundingBox, Coordinates


class SearchResult(BaseModel):
    """A place candidate returned by a forward search."""

    center: Coordinates = Field(..., description="Center point of the place")
    name: str = Field(default="", description="Display name of the place, may be empty")
    bbox: BoundingBox = Field(..., description="Extent of the place, used to fit the view")


class ReverseGeocodeResult(BaseModel):
    """Outcome of a reverse lookup."""

    display_name: Optional[str] = None
