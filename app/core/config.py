from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./travel_routes.db"
    project_name: str = "Travel Route API"
    api_v1_prefix: str = "/api/v1"

    # Debug flag (SQL echo)
    debug: bool = Field(default=False, alias="DEBUG")

    # Geocoding collaborator (Nominatim-compatible search endpoint)
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    # Nominatim usage policy requires an identifying User-Agent
    geocode_user_agent: str = "TravelRouteAPI/1.0"
    geocode_result_limit: int = 5
    geocode_min_query_length: int = 3
    # At most one upstream lookup per interval, process-wide
    geocode_min_interval_seconds: float = 1.0
    # Wait applied by GeocodeSearchSession before issuing a lookup
    geocode_debounce_seconds: float = 0.3
    geocode_timeout_seconds: float = 10.0

    # Road distance (OSRM); falls back to great-circle on failure
    osrm_base_url: str = "https://router.project-osrm.org"
    road_distance_timeout_seconds: float = 3.0

    # Max memoized travel-map results
    route_cache_size: int = 128

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
