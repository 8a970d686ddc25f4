"""Fixed-offset decoding of a validated LOOP payload.

All multi-byte fields are little-endian.  Offsets count from the
first byte of the 99-byte payload (the ``L`` of ``LOO``).
"""

import struct

from vploop.protocol import LOOP_FRAME_LEN
from vploop.reading import Reading, UnitSystem, WindSource

OFFSET_BAROMETER = 7
OFFSET_INSIDE_TEMP = 9
OFFSET_INSIDE_HUMIDITY = 11
OFFSET_OUTSIDE_TEMP = 12
OFFSET_WIND_DIRECTION = 16
OFFSET_OUTSIDE_HUMIDITY = 33
OFFSET_RAIN_RATE = 41


def decode(payload: bytes, wind_source: WindSource = WindSource.CURRENT) -> Reading:
    """Decode a validated payload into an imperial Reading.

    Raises:
        ValueError: If *payload* is not exactly 99 bytes.
    """
    if len(payload) != LOOP_FRAME_LEN:
        raise ValueError(
            "LOOP payload must be {} bytes, got {}".format(
                LOOP_FRAME_LEN, len(payload)
            )
        )

    barometer = struct.unpack_from("<h", payload, OFFSET_BAROMETER)[0]
    inside_temp = struct.unpack_from("<h", payload, OFFSET_INSIDE_TEMP)[0]
    outside_temp = struct.unpack_from("<h", payload, OFFSET_OUTSIDE_TEMP)[0]
    wind_dir = struct.unpack_from("<h", payload, OFFSET_WIND_DIRECTION)[0]
    rain_raw = struct.unpack_from("<h", payload, OFFSET_RAIN_RATE)[0]

    return Reading(
        success=True,
        unit_system=UnitSystem.IMPERIAL,
        inside_temperature=inside_temp / 10,
        inside_humidity=payload[OFFSET_INSIDE_HUMIDITY],
        outside_temperature=outside_temp / 10,
        outside_humidity=payload[OFFSET_OUTSIDE_HUMIDITY],
        wind_speed=float(payload[wind_source.value]),
        wind_direction=wind_dir,
        barometric_pressure=barometer / 1000,
        rain_rate=round(rain_raw * 0.01, 2),
        rain_rate_raw=rain_raw,
        wind_source=wind_source,
    )
