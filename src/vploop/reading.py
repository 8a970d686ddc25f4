"""Decoded current-conditions reading.

A Reading is produced exactly once per client run: either a decoded
LOOP frame or a failure value with every telemetry field set to None.

Example:
    >>> from vploop.reading import Reading, UnitSystem
    >>> r = Reading.failure(UnitSystem.METRIC)
    >>> r.success, r.inside_temperature
    (False, None)
"""

import enum
from dataclasses import dataclass


class UnitSystem(enum.Enum):
    """Unit system of the telemetry fields."""

    IMPERIAL = "imperial"
    METRIC = "metric"


class WindSource(enum.Enum):
    """Which LOOP byte supplies the wind speed.

    The value is the frame offset.
    """

    CURRENT = 14
    AVERAGE = 15

    @property
    def label(self) -> str:
        """Field name used by the output formats."""
        if self is WindSource.AVERAGE:
            return "AvgWindSpeed"
        return "WindSpeed"


@dataclass(frozen=True)
class Reading:
    """One snapshot of console telemetry.

    Imperial units: degF, %, mph, degrees, inHg, in/h.
    Metric units: degC, %, km/h, degrees, hPa, mm/h.
    ``rain_rate_raw`` is the undecoded rain-rate field (clicks/h).
    """

    success: bool
    unit_system: UnitSystem
    inside_temperature: float | None = None
    inside_humidity: int | None = None
    outside_temperature: float | None = None
    outside_humidity: int | None = None
    wind_speed: float | None = None
    wind_direction: int | None = None
    barometric_pressure: float | None = None
    rain_rate: float | None = None
    rain_rate_raw: int | None = None
    wind_source: WindSource = WindSource.CURRENT

    @classmethod
    def failure(
        cls,
        unit_system: UnitSystem = UnitSystem.IMPERIAL,
        wind_source: WindSource = WindSource.CURRENT,
    ) -> "Reading":
        """Build the value returned when no frame could be obtained."""
        return cls(success=False, unit_system=unit_system, wind_source=wind_source)


def fmt_value(value: float | int | None, digits: int = 1) -> str:
    """Format a telemetry value for display.

    Example:
        >>> fmt_value(68.04)
        '68.0'
        >>> fmt_value(45, 0)
        '45'
        >>> fmt_value(None)
        '--'
    """
    if value is None:
        return "--"
    return "{:.{}f}".format(value, digits)
