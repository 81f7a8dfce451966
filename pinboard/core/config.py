from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Pinboard Map"
    PROJECT_DESCRIPTION: str = "Search, pin and export places on an interactive map"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    LOG_LEVEL: str = "INFO"

    # Nominatim (OpenStreetMap) geocoding settings
    NOMINATIM_API_URL: str = "https://nominatim.openstreetmap.org"
    NOMINATIM_USER_AGENT: str = "pinboard-map/0.1.0"
    GEOCODING_TIMEOUT_SECONDS: float = 10.0
    SEARCH_RESULT_LIMIT: int = 5
    SEARCH_COUNTRY_CODES: str = ""  # Empty string searches globally

    # Map view settings
    MAP_INITIAL_LATITUDE: float = 30.0
    MAP_INITIAL_LONGITUDE: float = 0.0
    MAP_INITIAL_ZOOM: int = 2
    MAP_MIN_ZOOM: int = 1
    MAP_MAX_ZOOM: int = 18
    MAP_TILE_URL: str = (
        "https://server.arcgisonline.com/ArcGIS/rest/services/"
        "World_Street_Map/MapServer/tile/{z}/{y}/{x}"
    )
    MAP_TILE_ATTRIBUTION: str = "© Esri"

    # Search result annotation settings
    SEARCH_FIT_PADDING: int = 50
    SEARCH_CIRCLE_RADIUS_METERS: float = 500.0
    SEARCH_CIRCLE_COLOR: str = "#3388ff"
    SEARCH_CIRCLE_FILL_OPACITY: float = 0.2

    # Export settings
    EXPORT_FILENAME: str = "locations.json"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
