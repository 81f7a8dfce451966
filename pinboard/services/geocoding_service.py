"""
Geocoding Service

This service interfaces with the OpenStreetMap Nominatim API to turn
free-text queries into places (forward search) and coordinates into
display names (reverse lookup).

API Endpoint: https://nominatim.openstreetmap.org
Documentation: https://nominatim.org/release-docs/latest/api/Overview/
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from pinboard.core.config import settings
from pinboard.schemas.geo import BoundingBox, Coordinates
from pinboard.schemas.geocoding import ReverseGeocodeResult, SearchResult
from pinboard.schemas.health import ServiceHealth

logger = logging.getLogger(__name__)


class GeocodingServiceError(Exception):
    """Base exception for geocoding service errors."""


class GeocodingAPIError(GeocodingServiceError):
    """Raised when Nominatim answers with a non-success status."""


class GeocodingNetworkError(GeocodingServiceError):
    """Raised when network communication fails or times out."""


class GeocodingParseError(GeocodingServiceError):
    """Raised when response data cannot be parsed."""


class GeocodingService:
    """
    Service for interacting with the Nominatim geocoding API.
    """

    def __init__(self):
        self._api_url = settings.NOMINATIM_API_URL
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create the HTTP client for Nominatim.

        The client timeout bounds the worst-case latency of every lookup.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._api_url,
                timeout=settings.GEOCODING_TIMEOUT_SECONDS,
                headers={"User-Agent": settings.NOMINATIM_USER_AGENT},
            )
        return self._client

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        """
        Issue a GET request and decode its JSON body, translating failures
        into the service's exception hierarchy.
        """
        try:
            client = self._get_client()
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            logger.error("Request to Nominatim %s timed out", path)
            raise GeocodingNetworkError("Request timed out") from e

        except httpx.HTTPStatusError as e:
            logger.error("Nominatim %s returned status %s", path, e.response.status_code)
            raise GeocodingAPIError(
                f"Nominatim returned status {e.response.status_code}"
            ) from e

        except httpx.HTTPError as e:
            logger.error("Network error while contacting Nominatim: %s", str(e))
            raise GeocodingNetworkError(f"Network error: {str(e)}") from e

        except ValueError as e:
            logger.error("Nominatim %s returned a malformed body: %s", path, str(e))
            raise GeocodingParseError(f"Invalid response body: {str(e)}") from e

        except Exception as e:
            logger.exception("Unexpected error in geocoding service")
            raise GeocodingServiceError(f"Unexpected error: {str(e)}") from e

    async def search(
        self,
        query: str,
        limit: Optional[int] = None,
        country_codes: Optional[str] = None,
    ) -> List[SearchResult]:
        """
        Search for places matching a free-text query.

        Args:
            query: Free-text place query, e.g. "Eiffel Tower"
            limit: Maximum number of results (defaults to SEARCH_RESULT_LIMIT)
            country_codes: Comma-separated ISO 3166-1 alpha-2 codes restricting
                the search; empty searches globally

        Returns:
            Ranked list of SearchResult objects, best match first

        Raises:
            GeocodingNetworkError: If the request fails or times out
            GeocodingAPIError: If Nominatim returns a non-success status
            GeocodingParseError: If the response cannot be parsed
        """
        params: Dict[str, Any] = {
            "format": "json",
            "q": query,
            "limit": limit if limit is not None else settings.SEARCH_RESULT_LIMIT,
        }
        codes = country_codes if country_codes is not None else settings.SEARCH_COUNTRY_CODES
        if codes:
            params["countrycodes"] = codes

        data = await self._get_json("/search", params)

        try:
            return self._parse_search_results(data)
        except (KeyError, IndexError, ValueError, TypeError) as e:
            logger.error("Failed to parse Nominatim search response: %s", str(e))
            raise GeocodingParseError(f"Invalid search response: {str(e)}") from e

    async def reverse_geocode(self, coordinates: Coordinates) -> ReverseGeocodeResult:
        """
        Look up the display name of a point.

        A successful response without a display name (Nominatim answers
        {"error": "Unable to geocode"} for open sea) yields display_name=None.

        Raises:
            GeocodingNetworkError: If the request fails or times out
            GeocodingAPIError: If Nominatim returns a non-success status
            GeocodingParseError: If the response cannot be parsed
        """
        data = await self._get_json(
            "/reverse",
            {"format": "json", "lat": coordinates.latitude, "lon": coordinates.longitude},
        )

        if not isinstance(data, dict):
            logger.error("Nominatim reverse response is not an object: %r", data)
            raise GeocodingParseError("Reverse response is not a JSON object")

        display_name = data.get("display_name")
        if display_name is not None and not isinstance(display_name, str):
            raise GeocodingParseError("display_name is not a string")

        return ReverseGeocodeResult(display_name=display_name)

    def _parse_search_results(self, data: Any) -> List[SearchResult]:
        """
        Parse a Nominatim search response into SearchResult objects.
        """
        if not isinstance(data, list):
            raise TypeError("Search response is not a JSON array")
        return [self._parse_search_result(item) for item in data]

    def _parse_search_result(self, data: Dict) -> SearchResult:
        """
        Parse a single place. Nominatim's boundingbox is
        [south, north, west, east] as strings.
        """
        south, north, west, east = (float(v) for v in data["boundingbox"])
        return SearchResult(
            center=Coordinates(latitude=float(data["lat"]), longitude=float(data["lon"])),
            name=data.get("display_name") or "",
            bbox=BoundingBox(south=south, west=west, north=north, east=east),
        )

    async def health_check(self) -> ServiceHealth:
        """
        Perform a health check of the Nominatim API.
        """
        try:
            client = self._get_client()
            response = await client.get("/status", params={"format": "json"})

            if response.status_code == 200:
                return ServiceHealth(healthy=True, message="Nominatim API is responding")
            return ServiceHealth(
                healthy=False,
                message=f"Nominatim API returned status code: {response.status_code}",
            )

        except httpx.TimeoutException:
            return ServiceHealth(healthy=False, message="Nominatim API request timed out")
        except Exception as e:  # pylint: disable=broad-except
            return ServiceHealth(healthy=False, message=f"Nominatim API check failed: {str(e)}")

    async def close(self):
        """
        Close the HTTP client and cleanup resources.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Singleton instance for dependency injection
geocoding_service = GeocodingService()
