"""Average speed by departure time and the trip tariff."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal

from src.common.logging import get_logger

logger = get_logger(__name__)

# Rush hour windows, both ends exclusive.
MORNING_PEAK = (time(6, 0), time(9, 0))
EVENING_PEAK = (time(16, 0), time(19, 0))

SPEED_KMH = {
    "normal": 50.0,
    "morning_peak": 30.0,
    "evening_peak": 35.0,
    "weekend": 60.0,
}

_WEEKEND = (5, 6)  # Saturday, Sunday
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Tariff:
    base: float = 5.00
    per_km: float = 1.50
    per_minute: float = 0.50
    insurance: float = 2.00


DEFAULT_TARIFF = Tariff()


def _within(moment: time, window: tuple[time, time]) -> bool:
    start, end = window
    return start < moment < end


def speed_bucket(departure: datetime | None) -> str:
    """Name of the traffic period a departure falls into."""

    if departure is None:
        return "normal"
    if departure.weekday() in _WEEKEND:
        return "weekend"
    moment = departure.time()
    if _within(moment, MORNING_PEAK):
        return "morning_peak"
    if _within(moment, EVENING_PEAK):
        return "evening_peak"
    return "normal"


def average_speed(departure: datetime | None) -> float:
    """Average speed in km/h for a departure time.

    No departure time means normal traffic. Weekends beat rush hour.
    """

    bucket = speed_bucket(departure)
    speed = SPEED_KMH[bucket]
    logger.info("pricing.speed", period=bucket, speed_kmh=speed)
    return speed


def estimated_minutes(distance_km: float, speed_kmh: float) -> float:
    assert speed_kmh > 0, "average speed must be positive"
    return distance_km / speed_kmh * 60


def fare(distance_km: float, minutes: float, tariff: Tariff = DEFAULT_TARIFF) -> Decimal:
    """Trip price rounded half-up to cents.

    The sum is taken in floating point and the shortest decimal string of
    the result is what gets rounded, so ``fare(10.0, 12.0) == Decimal("28.00")``.
    """

    total = (
        tariff.base
        + distance_km * tariff.per_km
        + minutes * tariff.per_minute
        + tariff.insurance
    )
    return Decimal(repr(total)).quantize(_CENTS, rounding=ROUND_HALF_UP)
