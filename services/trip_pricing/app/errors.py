"""Errors raised by the route pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .models import Coordinates


class RouteError(Exception):
    """Base class for every failure of the route pipeline."""


class ValidationError(RouteError):
    """The trip request is unusable, nothing was sent upstream."""


class NotFoundError(RouteError):
    """A provider answered but had nothing for the query."""


class AddressNotFound(NotFoundError):
    """The geocoding provider returned no candidates for an address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Endereço não encontrado: {address}")
        self.address = address


class RouteNotFound(NotFoundError):
    """The routing provider returned no route between two points."""

    def __init__(self, origin: Coordinates, destination: Coordinates) -> None:
        super().__init__(
            "Rota não encontrada entre "
            f"({origin.latitude}, {origin.longitude}) e "
            f"({destination.latitude}, {destination.longitude})"
        )
        self.origin = origin
        self.destination = destination


class UpstreamError(RouteError):
    """Transport failure, bad status or unreadable body from a provider."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class CancellationError(RouteError):
    """The wait before an outbound call was cancelled."""
