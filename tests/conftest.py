"""Shared pytest fixtures for vploop tests."""

import struct

from vploop.crc import append_crc
from vploop.protocol import ACK, LOOP_FRAME_LEN

# Field values encoded by make_frame() unless overridden.
FIXTURE = {
    "barometer": 29921,
    "inside_temp": 680,
    "inside_humidity": 45,
    "outside_temp": 543,
    "wind_speed": 5,
    "avg_wind_speed": 3,
    "wind_direction": 270,
    "outside_humidity": 80,
    "rain_rate": 12,
}


def make_frame(**fields) -> bytes:
    """Build a valid 99-byte LOOP payload (CRC included)."""
    values = dict(FIXTURE, **fields)
    body = bytearray(LOOP_FRAME_LEN - 2)
    body[0:3] = b"LOO"
    struct.pack_into("<h", body, 7, values["barometer"])
    struct.pack_into("<h", body, 9, values["inside_temp"])
    body[11] = values["inside_humidity"]
    struct.pack_into("<h", body, 12, values["outside_temp"])
    body[14] = values["wind_speed"]
    body[15] = values["avg_wind_speed"]
    struct.pack_into("<h", body, 16, values["wind_direction"])
    body[33] = values["outside_humidity"]
    struct.pack_into("<h", body, 41, values["rain_rate"])
    body[95] = 0x0A
    body[96] = 0x0D
    return append_crc(bytes(body))


def make_reply(**fields) -> bytes:
    """Build an ACK-prefixed 100-byte reply."""
    return bytes([ACK]) + make_frame(**fields)


def corrupt(frame: bytes, index: int = 20, mask: int = 0x01) -> bytes:
    """Return *frame* with one byte XORed by *mask*."""
    data = bytearray(frame)
    data[index] ^= mask
    return bytes(data)


class FakeConnection:
    """Test double for Connection: scripted replies, counts fetches.

    Each scripted item is either bytes to return or an exception
    instance to raise.  Once the script runs out, returns b"".
    """

    def __init__(self, responses: list):
        """Initialize with scripted responses."""
        self._responses = list(responses)
        self.calls = 0

    def fetch(self) -> bytes:
        """Return or raise the next scripted response."""
        self.calls += 1
        if not self._responses:
            return b""
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item
