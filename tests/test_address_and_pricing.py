from datetime import datetime
from decimal import Decimal

import pytest

from services.trip_pricing.app import pricing
from services.trip_pricing.app.address import normalize


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Rua das Flores, 123", "Rua das Flores"),
        ("Avenida Central", "Avenida Central"),
        ("  Avenida Paulista 1578  ", "Avenida Paulista"),
        ("Rua 25 de Março, 100", "Rua 25 de Março"),
        ("Rua Augusta,,  42", "Rua Augusta"),
        ("Praça da Sé", "Praça da Sé"),
    ],
)
def test_normalize_strips_trailing_number(raw: str, expected: str) -> None:
    assert normalize(raw) == expected


# 2024-06-01 is a Saturday, 2024-06-03 a Monday.
@pytest.mark.parametrize(
    ("departure", "speed"),
    [
        (None, 50.0),
        (datetime(2024, 6, 1, 7, 30), 60.0),
        (datetime(2024, 6, 2, 17, 0), 60.0),
        (datetime(2024, 6, 3, 7, 0), 30.0),
        (datetime(2024, 6, 3, 6, 0, 0), 50.0),
        (datetime(2024, 6, 3, 6, 0, 0, 1), 30.0),
        (datetime(2024, 6, 3, 9, 0, 0), 50.0),
        (datetime(2024, 6, 3, 17, 30), 35.0),
        (datetime(2024, 6, 3, 16, 0), 50.0),
        (datetime(2024, 6, 3, 19, 0), 50.0),
        (datetime(2024, 6, 3, 12, 0), 50.0),
        (datetime(2024, 6, 7, 18, 59, 59), 35.0),
    ],
)
def test_average_speed(departure: datetime | None, speed: float) -> None:
    assert pricing.average_speed(departure) == speed


def test_estimated_minutes() -> None:
    assert pricing.estimated_minutes(10.0, 50.0) == 12.0
    assert pricing.estimated_minutes(0.0, 30.0) == 0.0


def test_estimated_minutes_rejects_non_positive_speed() -> None:
    with pytest.raises(AssertionError):
        pricing.estimated_minutes(10.0, 0.0)


def test_fare_formula() -> None:
    assert pricing.fare(10.0, 12.0) == Decimal("28.00")
    assert pricing.fare(0.0, 0.0) == Decimal("7.00")


def test_fare_rounds_half_up() -> None:
    # 7.0225 -> 7.02, 7.005 -> 7.01, 7.045 -> 7.05
    assert pricing.fare(0.015, 0.0) == Decimal("7.02")
    assert pricing.fare(0.0, 0.01) == Decimal("7.01")
    assert pricing.fare(0.03, 0.0) == Decimal("7.05")


def test_fare_uses_custom_tariff() -> None:
    tariff = pricing.Tariff(base=0.0, per_km=1.0, per_minute=0.0, insurance=0.0)
    assert pricing.fare(12.345, 99.0, tariff) == Decimal("12.35")
