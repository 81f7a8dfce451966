import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from pinboard.main import app
from pinboard.services.geocoding_service import GeocodingService
from pinboard.services.map_session import MapSession, get_map_session

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(scope="function")
def mock_geocoder():
    """Geocoding service double whose lookups never touch the network."""
    geocoder = MagicMock(spec=GeocodingService)
    geocoder.reverse_geocode = AsyncMock()
    geocoder.search = AsyncMock(return_value=[])
    return geocoder


@pytest.fixture(scope="function")
def map_session(mock_geocoder):
    """A fresh, empty map session using the mocked geocoder."""
    return MapSession(geocoder=mock_geocoder)


@pytest.fixture(scope="function")
def client(map_session):
    """Provides a FastAPI test client bound to a fresh map session."""
    app.dependency_overrides[get_map_session] = lambda: map_session

    with TestClient(app) as c:
        yield c

    # Clean up overrides after test
    app.dependency_overrides.clear()
