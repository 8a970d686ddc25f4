"""TCP connection to the console.

Each fetch opens a fresh socket, sends one command line, waits for the
console to assemble its reply and then takes whatever bytes have
arrived.  The console sends no terminator, so framing relies entirely
on the settle time.

Example:
    >>> from vploop.connection import Connection
    >>> conn = Connection("192.168.1.50", 22222)
    >>> raw = conn.fetch()
    >>> len(raw)
    100
"""

import logging
import socket
import time

from vploop.config import CONNECT_TIMEOUT_S, DEFAULT_WAIT_MS
from vploop.protocol import DEFAULT_PORT, LOOP_COMMAND, encode_command

log = logging.getLogger(__name__)

_RECV_CHUNK = 4096


def _drain(sock: socket.socket) -> bytes:
    """Read everything currently pending on *sock* without blocking."""
    sock.setblocking(False)
    buf = bytearray()
    while True:
        try:
            chunk = sock.recv(_RECV_CHUNK)
        except (BlockingIOError, InterruptedError):
            break
        if not chunk:
            # Peer closed after sending.
            break
        buf.extend(chunk)
    return bytes(buf)


def fetch(
    host: str,
    port: int = DEFAULT_PORT,
    command: str = LOOP_COMMAND,
    wait_ms: int = DEFAULT_WAIT_MS,
    connect_timeout: float = CONNECT_TIMEOUT_S,
) -> bytes:
    """Send *command* to the console and return the raw reply bytes.

    Sleeps *wait_ms* after sending and again before reading.  The
    socket is always closed before returning.

    Raises:
        ConnectionError: If the console cannot be reached or the
            connection fails while sending or reading.
    """
    try:
        with socket.create_connection((host, port), timeout=connect_timeout) as sock:
            sock.sendall(encode_command(command))
            # One window for reply assembly, one for transmission.
            time.sleep(wait_ms / 1000.0)
            time.sleep(wait_ms / 1000.0)
            raw = _drain(sock)
    except (OSError, UnicodeError) as exc:
        # UnicodeError: host name the idna codec cannot encode.
        raise ConnectionError(
            "cannot reach console at {}:{}: {}".format(host, port, exc)
        ) from exc

    log.debug("received %d bytes from %s:%d", len(raw), host, port)
    return raw


class Connection:
    """Connection settings for one console.

    Duck-typed -- the retry loop only needs an object with a
    ``fetch()`` method, so tests can substitute a scripted fake.

    Args:
        host: Console host name or address.
        port: TCP port (default 22222).
        command: Command line to send (default ``"LOOP 1"``).
        wait_ms: Settle time in milliseconds, applied twice.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        command: str = LOOP_COMMAND,
        wait_ms: int = DEFAULT_WAIT_MS,
    ):
        self.host = host
        self.port = port
        self.command = command
        self.wait_ms = wait_ms

    def fetch(self) -> bytes:
        """Fetch one raw reply.  See :func:`fetch`."""
        return fetch(self.host, self.port, self.command, self.wait_ms)
