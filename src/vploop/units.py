"""Imperial to metric conversion of a Reading."""

import dataclasses

from vploop.reading import Reading, UnitSystem

HPA_PER_INHG = 33.86389
KMH_PER_MPH = 1.609
MM_PER_RAIN_CLICK = 0.2


def f_to_c(f: float) -> float:
    """Convert degrees Fahrenheit to Celsius (1 dp)."""
    return round((f - 32) * 5 / 9, 1)


def inhg_to_hpa(inhg: float, digits: int = 1) -> float:
    """Convert inches of mercury to hectopascals."""
    return round(inhg * HPA_PER_INHG, digits)


def mph_to_kmh(mph: float, digits: int = 1) -> float:
    """Convert miles per hour to kilometres per hour."""
    return round(mph * KMH_PER_MPH, digits)


def rain_clicks_to_mm(clicks: int) -> float:
    """Convert the raw rain-rate field to mm/h (0.2 mm per click)."""
    return round(clicks * MM_PER_RAIN_CLICK, 1)


def _opt(fn, value, *args):
    return None if value is None else fn(value, *args)


def to_metric(reading: Reading, pressure_digits: int = 1, wind_digits: int = 1) -> Reading:
    """Return a metric copy of an imperial *reading*.

    Rain rate is derived from ``rain_rate_raw`` rather than the scaled
    imperial value.  Humidity and wind direction carry over unchanged.
    The input is left untouched.

    Raises:
        ValueError: If *reading* is already metric.
    """
    if reading.unit_system is not UnitSystem.IMPERIAL:
        raise ValueError(
            "expected an imperial reading, got {}".format(reading.unit_system.value)
        )

    return dataclasses.replace(
        reading,
        unit_system=UnitSystem.METRIC,
        inside_temperature=_opt(f_to_c, reading.inside_temperature),
        outside_temperature=_opt(f_to_c, reading.outside_temperature),
        wind_speed=_opt(mph_to_kmh, reading.wind_speed, wind_digits),
        barometric_pressure=_opt(inhg_to_hpa, reading.barometric_pressure, pressure_digits),
        rain_rate=_opt(rain_clicks_to_mm, reading.rain_rate_raw),
    )
