"""LOOP frame validation for the console's current-conditions query.

The console answers ``LOOP 1`` with a 99-byte frame, usually preceded
by an ACK byte.  There is no terminator, so a reply is recognised by
its length alone and accepted only if the CRC residue is zero.

Example:
    >>> from vploop.protocol import validate, Accepted
    >>> result = validate(raw)
    >>> isinstance(result, Accepted)
    True
"""

import enum
from dataclasses import dataclass

from vploop.crc import crc16_ccitt

# -- Protocol constants ------------------------------------------------------

LOOP_COMMAND = "LOOP 1"
DEFAULT_PORT = 22222

ACK = 0x06
NAK = 0x21

LOOP_FRAME_LEN = 99


class Rejection(enum.Enum):
    """Reasons a raw reply is refused."""

    BAD_LENGTH = "bad length"
    BAD_FRAMING = "bad framing"
    NAK_RECEIVED = "NAK received"
    BAD_CRC = "bad CRC"


@dataclass(frozen=True)
class Accepted:
    """A reply whose 99-byte payload passed the CRC residue check."""

    payload: bytes


@dataclass(frozen=True)
class Rejected:
    """A reply that must be discarded."""

    kind: Rejection
    detail: str = ""


def encode_command(command: str = LOOP_COMMAND) -> bytes:
    """Encode *command* as the ASCII line sent to the console."""
    return command.encode("ascii") + b"\n"


def validate(raw: bytes) -> Accepted | Rejected:
    """Check one raw reply and return the payload or the reason for refusal.

    A 99-byte reply is taken as a bare frame.  A 100-byte reply must
    start with ACK, which is stripped; NAK or any other lead byte is
    refused.  Anything else is the wrong length.  The CRC is computed
    over the full 99 bytes, including the frame's own CRC, and must
    come out as zero.
    """
    if len(raw) == LOOP_FRAME_LEN + 1:
        lead = raw[0]
        if lead == NAK:
            return Rejected(Rejection.NAK_RECEIVED)
        if lead != ACK:
            return Rejected(
                Rejection.BAD_FRAMING,
                "unexpected lead byte 0x{:02X}".format(lead),
            )
        payload = bytes(raw[1:])
    elif len(raw) == LOOP_FRAME_LEN:
        payload = bytes(raw)
    else:
        return Rejected(
            Rejection.BAD_LENGTH,
            "got {} bytes, expected {} or {}".format(
                len(raw), LOOP_FRAME_LEN, LOOP_FRAME_LEN + 1
            ),
        )

    residue = crc16_ccitt(payload)
    if residue != 0:
        return Rejected(Rejection.BAD_CRC, "residue 0x{:04X}".format(residue))

    return Accepted(payload)
