from __future__ import annotations

import threading
from typing import Any

import pytest
import requests

from services.trip_pricing.app.geocoding import GeocodingClient, GeocodingConfig
from services.trip_pricing.app.route_service import RouteService
from services.trip_pricing.app.routing import RoutingClient, RoutingConfig
from services.trip_pricing.app.throttle import RateGate

GEOCODING_URL = "https://geocode.test/v1/json"
ROUTING_URL = "http://osrm.test/route/v1/driving"


class FakeClock:
    """Monotonic clock that only moves when the gate waits."""

    def __init__(self) -> None:
        self.now = 0.0
        self.waits: list[float] = []

    def __call__(self) -> float:
        return self.now

    def wait(self, cancel_event: threading.Event, seconds: float) -> bool:
        self.waits.append(seconds)
        self.now += seconds
        return cancel_event.is_set()


class DummyResponse:
    def __init__(self, payload: Any = None, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class DummySession:
    """Stands in for ``requests.Session`` and replays canned responses."""

    def __init__(self, *responses: Any, clock: FakeClock | None = None) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []
        self.clock = clock

    def get(self, url: str, params=None, headers=None, timeout=None) -> DummyResponse:
        self.calls.append(
            {
                "url": url,
                "params": params,
                "headers": headers,
                "timeout": timeout,
                "at": self.clock() if self.clock else None,
            }
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def geocode_payload(lat: float, lng: float) -> dict[str, Any]:
    return {"results": [{"geometry": {"lat": lat, "lng": lng}, "confidence": 9}]}


def route_payload(meters: float) -> dict[str, Any]:
    return {"code": "Ok", "routes": [{"distance": meters, "duration": 900.0}]}


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def gate(clock: FakeClock) -> RateGate:
    return RateGate(2.0, clock=clock, wait=clock.wait)


def make_service(
    session: DummySession, gate: RateGate, api_key: str | None = "test-key"
) -> RouteService:
    geocoder = GeocodingClient(
        GeocodingConfig(url=GEOCODING_URL, api_key=api_key), gate, session
    )
    router = RoutingClient(RoutingConfig(url=ROUTING_URL), gate, session)
    return RouteService(geocoder, router)
