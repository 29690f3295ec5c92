"""Road distance between two points through an OSRM route endpoint."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass

import requests
from opentelemetry import trace

from src.common.logging import get_logger
from src.common.metrics import UPSTREAM_LATENCY, UPSTREAM_REQUESTS

from .errors import RouteNotFound, UpstreamError
from .models import Coordinates
from .throttle import RateGate

logger = get_logger(__name__)

PROVIDER = "routing"


@dataclass(frozen=True)
class RoutingConfig:
    url: str
    user_agent: str = "ViagemApp/1.0"
    timeout: float | None = 10.0


def format_coordinates(origin: Coordinates, destination: Coordinates) -> str:
    """OSRM wants ``lon,lat;lon,lat`` with a dot decimal separator."""

    return (
        f"{origin.longitude:.6f},{origin.latitude:.6f};"
        f"{destination.longitude:.6f},{destination.latitude:.6f}"
    )


class RoutingClient:
    """Ask the routing provider for the driving distance of a single leg."""

    def __init__(
        self,
        config: RoutingConfig,
        gate: RateGate,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._gate = gate
        self._session = session or requests.Session()
        self._tracer = trace.get_tracer(__name__)

    def route_url(self, origin: Coordinates, destination: Coordinates) -> str:
        base = self._config.url.rstrip("/")
        return f"{base}/{format_coordinates(origin, destination)}"

    def distance_between(
        self,
        origin: Coordinates,
        destination: Coordinates,
        cancel_event: threading.Event | None = None,
    ) -> float:
        """Return the first route's distance in kilometers."""

        self._gate.acquire(cancel_event)
        url = self.route_url(origin, destination)
        logger.info("routing.request", url=url)
        with self._tracer.start_as_current_span("routing.distance") as span:
            span.set_attribute("routing.url", url)
            payload = self._get(url)
        routes = payload.get("routes") if isinstance(payload, dict) else None
        if not routes:
            UPSTREAM_REQUESTS.labels(PROVIDER, "not_found").inc()
            logger.error("routing.not_found", url=url)
            raise RouteNotFound(origin, destination)

        try:
            meters = float(routes[0]["distance"])
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            UPSTREAM_REQUESTS.labels(PROVIDER, "error").inc()
            raise UpstreamError(PROVIDER, "rota sem distância válida") from exc

        UPSTREAM_REQUESTS.labels(PROVIDER, "ok").inc()
        distance_km = meters / 1000.0
        logger.info("routing.distance", distance_km=distance_km)
        return distance_km

    def _get(self, url: str) -> object:
        start = time.perf_counter()
        try:
            response = self._session.get(
                url,
                params={"overview": "false"},
                headers={"User-Agent": self._config.user_agent},
                timeout=self._config.timeout,
            )
            response.raise_for_status()
            return response.json()
        except (requests.JSONDecodeError, json.JSONDecodeError) as exc:
            UPSTREAM_REQUESTS.labels(PROVIDER, "error").inc()
            logger.error("routing.bad_json", error=str(exc))
            raise UpstreamError(PROVIDER, "resposta JSON inválida") from exc
        except requests.RequestException as exc:
            UPSTREAM_REQUESTS.labels(PROVIDER, "error").inc()
            logger.error("routing.failed", error=str(exc))
            raise UpstreamError(PROVIDER, "falha ao calcular distância") from exc
        finally:
            UPSTREAM_LATENCY.labels(PROVIDER).observe(time.perf_counter() - start)
