from functools import lru_cache

import requests
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from src.common.settings import SettingsMeta

from .geocoding import GeocodingClient, GeocodingConfig
from .route_service import RouteService
from .routing import RoutingClient, RoutingConfig
from .throttle import RateGate


class Settings(BaseSettings, metaclass=SettingsMeta):
    geocoding_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEOCODING_API_KEY", "API_KEY"),
    )
    geocoding_url: str = "https://api.opencagedata.com/geocode/v1/json"
    geocoding_region: str = "São Paulo - SP"
    geocoding_language: str = "pt"
    routing_url: str = "http://router.project-osrm.org/route/v1/driving"
    user_agent: str = "ViagemApp/1.0"
    rate_limit_interval_s: float = 2.0
    http_timeout_s: float | None = 10.0

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
        "case_sensitive": False,
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_rate_gate() -> RateGate:
    """One gate for the whole process, shared by both providers."""

    return RateGate(get_settings().rate_limit_interval_s)


@lru_cache
def get_http_session() -> requests.Session:
    return requests.Session()


def get_route_service() -> RouteService:
    settings = get_settings()
    gate = get_rate_gate()
    session = get_http_session()
    geocoder = GeocodingClient(
        GeocodingConfig(
            url=settings.geocoding_url,
            api_key=settings.geocoding_api_key,
            region=settings.geocoding_region,
            language=settings.geocoding_language,
            user_agent=settings.user_agent,
            timeout=settings.http_timeout_s,
        ),
        gate,
        session,
    )
    router = RoutingClient(
        RoutingConfig(
            url=settings.routing_url,
            user_agent=settings.user_agent,
            timeout=settings.http_timeout_s,
        ),
        gate,
        session,
    )
    return RouteService(geocoder, router)
