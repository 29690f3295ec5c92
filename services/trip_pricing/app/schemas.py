from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

DATA_PARTIDA_FORMAT = "%Y-%m-%d %H:%M:%S"


class TripRouteRequest(BaseModel):
    partida: str
    destino: str
    data_partida: Optional[datetime] = Field(
        default=None,
        description="Local departure time, 'YYYY-MM-DD HH:MM:SS' or ISO-8601",
    )

    @field_validator("data_partida", mode="before")
    @classmethod
    def _parse_data_partida(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return datetime.strptime(value, DATA_PARTIDA_FORMAT)
            except ValueError:
                return value
        return value


class TripRouteResponse(BaseModel):
    partida: str
    destino: str
    data_partida: Optional[datetime]
    latitude_partida: float
    longitude_partida: float
    latitude_destino: float
    longitude_destino: float
    distancia: float
    velocidade_media: float
    tempo_estimado: float
    valor: Decimal
