"""
Location Schema

Pydantic models for the saved location records of a map session.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LocationOrigin(str, Enum):
    """How a location record was created."""

    SEARCH = "search"
    CLICK = "click"


class LocationRecord(BaseModel):
    """A saved location. Records are never modified once created."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Longitude in decimal degrees")
    name: str = Field(..., description="Human-readable label of the location")
    origin: LocationOrigin = Field(..., description="Whether the location was searched or clicked")
