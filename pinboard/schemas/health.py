from pydantic import BaseModel


class ServiceHealth(BaseModel):
    healthy: bool
    message: str


class HealthCheckResponse(BaseModel):
    service: str
    version: str
    timestamp: str
    healthy: bool
    saved_locations: int
    geocoding_service: ServiceHealth
