from fastapi import APIRouter

from pinboard.api.v1.endpoints import geocoding, health, locations

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(locations.router, prefix="/locations", tags=["locations"])
api_router.include_router(geocoding.router, prefix="/geocoding", tags=["geocoding"])
