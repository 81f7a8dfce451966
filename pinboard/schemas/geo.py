"""
Location and Coordinate Type Definitions

Pydantic models for representing geographic coordinates and bounding boxes
used throughout the application.
"""

from pydantic import BaseModel, Field, field_validator, model_validator


class Coordinates(BaseModel):
    """
    Geographic coordinates (latitude and longitude).
    """

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Longitude in decimal degrees")

    @field_validator("latitude")
    @classmethod
    def validate_latitude(cls, v: float) -> float:
        """Ensure latitude is within valid range."""
        if not -90.0 <= v <= 90.0:
            raise ValueError("Latitude must be between -90 and 90 degrees")
        return v

    @field_validator("longitude")
    @classmethod
    def validate_longitude(cls, v: float) -> float:
        """Ensure longitude is within valid range."""
        if not -180.0 <= v <= 180.0:
            raise ValueError("Longitude must be between -180 and 180 degrees")
        return v

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


class BoundingBox(BaseModel):
    """
    Rectangular region expressed as coordinate extremes.

    West may be greater than east when the box crosses the antimeridian.
    """

    south: float = Field(..., ge=-90.0, le=90.0, description="Southern latitude edge")
    west: float = Field(..., ge=-180.0, le=180.0, description="Western longitude edge")
    north: float = Field(..., ge=-90.0, le=90.0, description="Northern latitude edge")
    east: float = Field(..., ge=-180.0, le=180.0, description="Eastern longitude edge")

    @model_validator(mode="after")
    def validate_latitude_order(self) -> "BoundingBox":
        """Ensure the southern edge does not lie north of the northern edge."""
        if self.south > self.north:
            raise ValueError("South edge must not be greater than north edge")
        return self

    def corners(self) -> list[list[float]]:
        """Return [[south, west], [north, east]] as Leaflet expects for fitBounds."""
        return [[self.south, self.west], [self.north, self.east]]
