#!/usr/bin/env python3
"""TCP weather console simulator for vploop.

Listens on a TCP port and answers each ``LOOP 1`` line with an ACK and
a 99-byte LOOP frame carrying synthetic readings.  With ``--bad-rate``
a share of replies is corrupted, NAK'd or truncated, which exercises
the client's retry loop.

Usage:
    python console_simulator.py <port> [--bad-rate RATE]

Args:
    port: TCP port to listen on (e.g. 22222).
"""

import argparse
import random
import socket
import struct
import sys

# Add parent src to path so we can import vploop
sys.path.insert(0, str(__import__("pathlib").Path(__file__).resolve().parents[1] / "src"))

from vploop.crc import append_crc
from vploop.protocol import ACK, LOOP_COMMAND, LOOP_FRAME_LEN, NAK


def make_frame() -> bytes:
    """Build a valid LOOP frame with random plausible values."""
    body = bytearray(LOOP_FRAME_LEN - 2)
    body[0:3] = b"LOO"
    struct.pack_into("<h", body, 7, random.randint(29500, 30500))
    struct.pack_into("<h", body, 9, random.randint(650, 750))
    body[11] = random.randint(30, 60)
    struct.pack_into("<h", body, 12, random.randint(-100, 950))
    body[14] = random.randint(0, 30)
    body[15] = random.randint(0, 20)
    struct.pack_into("<h", body, 16, random.randint(1, 360))
    body[33] = random.randint(20, 100)
    struct.pack_into("<h", body, 41, random.choice([0, 0, 0, 5, 120]))
    body[95] = 0x0A
    body[96] = 0x0D
    return append_crc(bytes(body))


def make_reply(bad_rate: float) -> bytes:
    """Return an ACK-prefixed frame, or a faulty reply at *bad_rate*."""
    frame = make_frame()
    if random.random() >= bad_rate:
        return bytes([ACK]) + frame
    fault = random.choice(("crc", "nak", "short"))
    if fault == "nak":
        return bytes([NAK]) + frame
    if fault == "short":
        return bytes([ACK]) + frame[: random.randint(10, 90)]
    corrupted = bytearray(frame)
    corrupted[random.randrange(LOOP_FRAME_LEN)] ^= 1 << random.randrange(8)
    return bytes([ACK]) + bytes(corrupted)


def run(port: int, bad_rate: float) -> None:
    """Serve LOOP replies on *port* until interrupted."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server.bind(("0.0.0.0", port))
    server.listen(1)

    print("console_simulator: listening on port {}".format(port), flush=True)

    try:
        while True:
            conn, peer = server.accept()
            with conn:
                line = conn.recv(64).strip().decode("ascii", "replace")
                if line != LOOP_COMMAND:
                    print("ignoring {!r} from {}".format(line, peer[0]), flush=True)
                    continue
                conn.sendall(make_reply(bad_rate))
    except KeyboardInterrupt:
        pass
    finally:
        server.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="vploop console simulator")
    parser.add_argument("port", type=int, help="TCP port to listen on")
    parser.add_argument(
        "--bad-rate", type=float, default=0.0,
        help="fraction of replies to corrupt (0.0-1.0)",
    )
    args = parser.parse_args()
    run(args.port, args.bad_rate)
