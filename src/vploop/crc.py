"""CRC-16/CCITT used by the console to protect LOOP frames.

Polynomial 0x1021, initial value 0, MSB-first, no reflection.  The
console appends the CRC big-endian, so running the CRC over a whole
frame (CRC bytes included) leaves a residue of zero.

Example:
    >>> from vploop.crc import crc16_ccitt, append_crc
    >>> crc16_ccitt(b"123456789")
    12739
    >>> crc16_ccitt(append_crc(b"LOO"))
    0
"""

POLYNOMIAL = 0x1021


def _generate_table() -> tuple[int, ...]:
    """Build the 256-entry lookup table bit by bit from POLYNOMIAL."""
    table = []
    for i in range(256):
        crc = i << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ POLYNOMIAL) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
        table.append(crc)
    return tuple(table)


CRC_TABLE = _generate_table()


def crc16_ccitt(data: bytes, crc: int = 0) -> int:
    """Compute CRC-16/CCITT over *data*, starting from *crc*."""
    for byte in data:
        crc = CRC_TABLE[(crc >> 8) ^ byte] ^ ((crc << 8) & 0xFFFF)
    return crc


def append_crc(body: bytes) -> bytes:
    """Return *body* followed by its CRC, high byte first."""
    return bytes(body) + crc16_ccitt(body).to_bytes(2, "big")
