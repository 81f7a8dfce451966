"""
Export Service

Serializes the saved locations of a session to a downloadable JSON file.
"""

import logging
from typing import List

from pydantic import BaseModel, TypeAdapter

from pinboard.core.config import settings
from pinboard.schemas.location import LocationRecord
from pinboard.services.location_store import LocationStore

logger = logging.getLogger(__name__)

locations_adapter = TypeAdapter(List[LocationRecord])


class EmptyExportError(Exception):
    """Raised when there are no saved locations to export."""


class ExportFile(BaseModel):
    """A file ready to be delivered to the user."""

    filename: str
    media_type: str
    content: str


def serialize_locations(records: List[LocationRecord]) -> str:
    """
    Serialize records to a 2-space indented JSON array. Keys are
    latitude, longitude, name and origin, in that order.
    """
    return locations_adapter.dump_json(records, indent=2).decode("utf-8")


def export_locations(store: LocationStore) -> ExportFile:
    """
    Export every saved location in insertion order.

    Raises:
        EmptyExportError: If nothing has been saved yet; no file is produced
    """
    records = store.snapshot()
    if not records:
        raise EmptyExportError("No locations to export!")

    logger.info("Exporting %d locations to %s", len(records), settings.EXPORT_FILENAME)

    return ExportFile(
        filename=settings.EXPORT_FILENAME,
        media_type="application/json",
        content=serialize_locations(records),
    )
