"""Route computation: geocode both ends, route, then price the trip."""

from __future__ import annotations

import threading

from opentelemetry import trace

from src.common.logging import get_logger

from . import pricing
from .errors import RouteError, ValidationError
from .geocoding import GeocodingClient
from .models import RouteResult, TripRequest
from .routing import RoutingClient

logger = get_logger(__name__)


class RouteService:
    """Runs the whole pipeline for one trip request at a time.

    The steps are strictly sequential and any failure aborts the run; the
    service holds no per-call state and can be shared between threads.
    """

    def __init__(
        self,
        geocoder: GeocodingClient,
        router: RoutingClient,
        tariff: pricing.Tariff = pricing.DEFAULT_TARIFF,
    ) -> None:
        self._geocoder = geocoder
        self._router = router
        self._tariff = tariff
        self._tracer = trace.get_tracer(__name__)

    def compute_route(
        self, trip: TripRequest, cancel_event: threading.Event | None = None
    ) -> RouteResult:
        """Price ``trip``. Setting ``cancel_event`` aborts the run at its next wait."""

        for field, value in (("partida", trip.partida), ("destino", trip.destino)):
            if not value or not value.strip():
                raise ValidationError(f"O campo {field} é obrigatório")

        log = logger.bind(partida=trip.partida, destino=trip.destino)
        log.info("route.compute.start")
        with self._tracer.start_as_current_span("route.compute"):
            try:
                origin = self._geocoder.resolve(trip.partida, cancel_event)
                destination = self._geocoder.resolve(trip.destino, cancel_event)
                distance_km = self._router.distance_between(
                    origin, destination, cancel_event
                )
            except RouteError as exc:
                log.error("route.compute.failed", error=str(exc), kind=type(exc).__name__)
                raise

            speed = pricing.average_speed(trip.departure)
            minutes = pricing.estimated_minutes(distance_km, speed)
            amount = pricing.fare(distance_km, minutes, self._tariff)

        log.info(
            "route.compute.done",
            distance_km=distance_km,
            minutes=minutes,
            fare=str(amount),
        )
        return RouteResult(
            origin=origin,
            destination=destination,
            distance_km=distance_km,
            average_speed_kmh=speed,
            estimated_minutes=minutes,
            fare=amount,
        )
