"""Output formats for a Reading.

All formatters are pure functions.  A failed Reading still renders,
so a monitoring system always receives a well-formed record.

Example:
    >>> from vploop.render import render
    >>> print(render(reading, "csv"))
    True,imperial,68.0,45,54.3,80,5.0,270,29.921,0.0
"""

import csv
import io
import json
import xml.etree.ElementTree as ET

from vploop.reading import Reading, UnitSystem

_UNITS = {
    UnitSystem.IMPERIAL: {
        "temperature": "°F",
        "speed": "mph",
        "pressure": "inHg",
        "rain": "in/h",
    },
    UnitSystem.METRIC: {
        "temperature": "°C",
        "speed": "km/h",
        "pressure": "hPa",
        "rain": "mm/h",
    },
}


def _channels(reading: Reading) -> list[tuple[str, object, str]]:
    """Return (name, value, unit) for every telemetry field, in output order."""
    units = _UNITS[reading.unit_system]
    return [
        ("InsideTemperature", reading.inside_temperature, units["temperature"]),
        ("InsideHumidity", reading.inside_humidity, "%"),
        ("OutsideTemperature", reading.outside_temperature, units["temperature"]),
        ("OutsideHumidity", reading.outside_humidity, "%"),
        (reading.wind_source.label, reading.wind_speed, units["speed"]),
        ("WindDirection", reading.wind_direction, "°"),
        ("BarometricPressure", reading.barometric_pressure, units["pressure"]),
        ("RainRate", reading.rain_rate, units["rain"]),
    ]


def to_dict(reading: Reading) -> dict:
    """Flatten *reading* into a dict keyed by field label."""
    result = {"Success": reading.success, "Units": reading.unit_system.value}
    for name, value, _ in _channels(reading):
        result[name] = value
    return result


def to_csv(reading: Reading, header: bool = False) -> str:
    """Render *reading* as one CSV line, optionally preceded by a header."""
    row = to_dict(reading)
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    if header:
        writer.writerow(row.keys())
    writer.writerow("" if v is None else v for v in row.values())
    return buf.getvalue().rstrip("\n")


def to_plain(reading: Reading) -> str:
    """Render *reading* as aligned ``Name : value unit`` lines."""
    lines = [
        "{:<20}: {}".format("Success", reading.success),
        "{:<20}: {}".format("Units", reading.unit_system.value),
    ]
    for name, value, unit in _channels(reading):
        text = "--" if value is None else "{} {}".format(value, unit)
        lines.append("{:<20}: {}".format(name, text))
    return "\n".join(lines)


def to_json(reading: Reading) -> str:
    """Render *reading* as a JSON object."""
    return json.dumps(to_dict(reading), ensure_ascii=False)


def to_prtg(reading: Reading) -> str:
    """Render *reading* as PRTG advanced-sensor XML.

    A failed reading becomes ``<prtg><error>1</error>...`` so PRTG
    marks the sensor as down.
    """
    root = ET.Element("prtg")
    if not reading.success:
        ET.SubElement(root, "error").text = "1"
        ET.SubElement(root, "text").text = "no valid reply from weather console"
        return ET.tostring(root, encoding="unicode")

    for name, value, unit in _channels(reading):
        result = ET.SubElement(root, "result")
        ET.SubElement(result, "channel").text = name
        ET.SubElement(result, "value").text = str(value)
        ET.SubElement(result, "float").text = "1"
        ET.SubElement(result, "unit").text = "Custom"
        ET.SubElement(result, "customunit").text = unit
    return ET.tostring(root, encoding="unicode")


_FORMATTERS = {
    "csv": to_csv,
    "plain": to_plain,
    "prtg": to_prtg,
    "json": to_json,
}


def render(reading: Reading, fmt: str) -> str:
    """Render *reading* in output format *fmt*.

    Raises:
        ValueError: If *fmt* is not a known format.
    """
    try:
        formatter = _FORMATTERS[fmt]
    except KeyError:
        raise ValueError(
            "unknown format '%s' (expected one of %s)" % (fmt, ", ".join(_FORMATTERS))
        ) from None
    return formatter(reading)
