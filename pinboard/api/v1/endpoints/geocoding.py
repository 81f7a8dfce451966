"""
Geocoding API Endpoint

Provides REST API for searching places through Nominatim.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from pinboard.schemas.geocoding import SearchResult
from pinboard.services.geocoding_service import (
    GeocodingAPIError,
    GeocodingNetworkError,
    GeocodingParseError,
    GeocodingServiceError,
    geocoding_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search", response_model=List[SearchResult])
async def search_places(
    q: str = Query(..., min_length=1, description="Free-text place query"),
    limit: Optional[int] = Query(None, ge=1, le=50, description="Maximum number of results"),
    countrycodes: Optional[str] = Query(
        None, description="Comma-separated country codes restricting the search"
    ),
):
    """
    Search for places matching a free-text query.

    Raises:
        HTTPException: If Nominatim is unreachable or returns invalid data
    """
    logger.info("Place search request: q=%r, limit=%s, countrycodes=%r", q, limit, countrycodes)

    try:
        results = await geocoding_service.search(q, limit=limit, country_codes=countrycodes)
        logger.info("Place search successful: found %d places", len(results))
        return results

    except GeocodingAPIError as e:
        logger.error("Nominatim API error: %s", str(e))
        raise HTTPException(status_code=502, detail=f"Nominatim API error: {str(e)}") from e

    except GeocodingNetworkError as e:
        logger.error("Network error: %s", str(e))
        raise HTTPException(
            status_code=503,
            detail=f"Network error connecting to Nominatim: {str(e)}",
        ) from e

    except GeocodingParseError as e:
        logger.error("Data parsing error: %s", str(e))
        raise HTTPException(
            status_code=502,
            detail=f"Failed to parse Nominatim response: {str(e)}",
        ) from e

    except GeocodingServiceError as e:
        logger.error("Geocoding service error: %s", str(e))
        raise HTTPException(status_code=500, detail=f"Geocoding service error: {str(e)}") from e
