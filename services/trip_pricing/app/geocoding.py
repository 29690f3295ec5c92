"""Address to coordinates through the OpenCage geocoding API."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass

import requests
from opentelemetry import trace

from src.common.logging import get_logger
from src.common.metrics import UPSTREAM_LATENCY, UPSTREAM_REQUESTS

from .address import normalize
from .errors import AddressNotFound, UpstreamError, ValidationError
from .models import Coordinates
from .throttle import RateGate

logger = get_logger(__name__)

PROVIDER = "geocoding"


@dataclass(frozen=True)
class GeocodingConfig:
    """Everything the client needs to know about the provider."""

    url: str
    api_key: str | None
    region: str = "São Paulo - SP"
    language: str = "pt"
    user_agent: str = "ViagemApp/1.0"
    timeout: float | None = 10.0


class GeocodingClient:
    """Resolve free-text addresses to a single coordinate pair.

    One attempt per call, no retries and no caching. The shared
    :class:`RateGate` is acquired before every request.
    """

    def __init__(
        self,
        config: GeocodingConfig,
        gate: RateGate,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._gate = gate
        self._session = session or requests.Session()
        self._tracer = trace.get_tracer(__name__)

    def build_query(self, address: str) -> str:
        return f"{normalize(address)}, {self._config.region}"

    def resolve(
        self, address: str, cancel_event: threading.Event | None = None
    ) -> Coordinates:
        """Return the first candidate's geometry for ``address``."""

        if not address or not address.strip():
            raise ValidationError("Endereço não pode ser vazio")
        if not self._config.api_key:
            UPSTREAM_REQUESTS.labels(PROVIDER, "error").inc()
            raise UpstreamError(PROVIDER, "chave da API de geocodificação ausente")
        self._gate.acquire(cancel_event)

        query = self.build_query(address)
        params = {
            "q": query,
            "key": self._config.api_key,
            "language": self._config.language,
            "format": "json",
        }
        logger.info("geocoding.request", address=address, query=query)
        with self._tracer.start_as_current_span("geocoding.resolve") as span:
            span.set_attribute("geocoding.query", query)
            payload = self._get(params)
        results = payload.get("results") if isinstance(payload, dict) else None
        if not results:
            UPSTREAM_REQUESTS.labels(PROVIDER, "not_found").inc()
            logger.error("geocoding.not_found", address=address)
            raise AddressNotFound(address)

        try:
            geometry = results[0]["geometry"]
            coordinates = Coordinates(
                latitude=float(geometry["lat"]),
                longitude=float(geometry["lng"]),
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            UPSTREAM_REQUESTS.labels(PROVIDER, "error").inc()
            raise UpstreamError(PROVIDER, "resposta sem geometria válida") from exc

        UPSTREAM_REQUESTS.labels(PROVIDER, "ok").inc()
        logger.info(
            "geocoding.resolved",
            address=address,
            lat=coordinates.latitude,
            lng=coordinates.longitude,
        )
        return coordinates

    def _get(self, params: dict[str, str]) -> object:
        start = time.perf_counter()
        try:
            response = self._session.get(
                self._config.url,
                params=params,
                headers={"User-Agent": self._config.user_agent},
                timeout=self._config.timeout,
            )
            response.raise_for_status()
            return response.json()
        except (requests.JSONDecodeError, json.JSONDecodeError) as exc:
            UPSTREAM_REQUESTS.labels(PROVIDER, "error").inc()
            logger.error("geocoding.bad_json", error=str(exc))
            raise UpstreamError(PROVIDER, "resposta JSON inválida") from exc
        except requests.RequestException as exc:
            UPSTREAM_REQUESTS.labels(PROVIDER, "error").inc()
            logger.error("geocoding.failed", error=str(exc))
            raise UpstreamError(PROVIDER, "falha ao buscar coordenadas") from exc
        finally:
            UPSTREAM_LATENCY.labels(PROVIDER).observe(time.perf_counter() - start)
