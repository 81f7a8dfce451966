"""
Location Store

In-memory, append-only, insertion-ordered list of the session's saved
locations.
"""

import logging
import threading
from typing import List

from pinboard.schemas.location import LocationRecord

logger = logging.getLogger(__name__)


class LocationStore:
    """
    Session-lifetime list of location records.

    Appends are serialized so insertion order holds even if records arrive
    from more than one thread.
    """

    def __init__(self):
        self._records: List[LocationRecord] = []
        self._lock = threading.Lock()

    def append(self, record: LocationRecord) -> None:
        """Add a record to the end of the store. Duplicates are kept."""
        with self._lock:
            self._records.append(record)
            count = len(self._records)
        logger.debug("Saved %s location #%d: %s", record.origin.value, count, record.name)

    def snapshot(self) -> List[LocationRecord]:
        """Return a copy of all records in insertion order."""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
