"""Value objects passed through the route pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class Coordinates:
    """Latitude/longitude pair in decimal degrees. (0, 0) is a valid point."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class TripRequest:
    """What the caller wants priced. Naive local time, no time zone."""

    partida: str
    destino: str
    departure: datetime | None = None


@dataclass(frozen=True)
class RouteResult:
    """Everything computed for one trip request."""

    origin: Coordinates
    destination: Coordinates
    distance_km: float
    average_speed_kmh: float
    estimated_minutes: float
    fare: Decimal

    def as_trip_fields(self) -> dict[str, Any]:
        """Flatten into the field names a stored trip carries."""

        return {
            "latitude_partida": self.origin.latitude,
            "longitude_partida": self.origin.longitude,
            "latitude_destino": self.destination.latitude,
            "longitude_destino": self.destination.longitude,
            "distancia": self.distance_km,
            "velocidade_media": self.average_speed_kmh,
            "tempo_estimado": self.estimated_minutes,
            "valor": self.fare,
        }
