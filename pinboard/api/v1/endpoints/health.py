from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from pinboard.core.config import settings
from pinboard.schemas.health import HealthCheckResponse
from pinboard.services import geocoding_service
from pinboard.services.map_session import MapSession, get_map_session

router = APIRouter()


@router.get("/health")
async def health_check(session: MapSession = Depends(get_map_session)) -> HealthCheckResponse:
    """
    Health check endpoint that verifies Nominatim availability and reports
    how many locations the session has saved.

    Returns 200 if the geocoding service is healthy, 503 otherwise.
    """
    geocoding_health = await geocoding_service.geocoding_service.health_check()

    response = HealthCheckResponse(
        service="pinboard-map",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        healthy=geocoding_health.healthy,
        saved_locations=len(session.store),
        geocoding_service=geocoding_health,
    )

    if response.healthy:
        return response
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=response.model_dump()
    )
