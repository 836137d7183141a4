"""Daily aggregation of 3-hour forecast samples."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from weather_proxy.api.schemas import ForecastDay
from weather_proxy.services.openweather import ForecastSample

_TWO_PLACES = Decimal("0.01")


def round_temperature(value: float) -> float:
    """Round half-up to two decimal places."""
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def aggregate(samples: Iterable[ForecastSample]) -> list[ForecastDay]:
    """Reduce forecast samples to one record per calendar day.

    Days appear in the order their first sample appears. Each day's
    temperature is the mean of its samples and its description is the
    description of its first sample.
    """
    temperatures: dict[str, list[float]] = {}
    descriptions: dict[str, str] = {}

    for sample in samples:
        day = sample.timestamp.date().isoformat()
        if day not in temperatures:
            temperatures[day] = []
            descriptions[day] = sample.description
        temperatures[day].append(sample.temperature)

    return [
        ForecastDay(
            date=day,
            temperature=round_temperature(sum(temps) / len(temps)),
            description=descriptions[day],
        )
        for day, temps in temperatures.items()
    ]
