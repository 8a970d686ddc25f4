"""Retry loop that turns an unreliable link into exactly one Reading.

The loop is a small state machine::

    IDLE -> ATTEMPTING -> SUCCESS
                       -> EXHAUSTED

Each attempt fetches one raw reply and validates it.  The first
accepted payload ends the loop; otherwise it runs until the attempt
budget is spent.  Link and frame errors never escape -- exhaustion is
reported as a failure Reading.

Example:
    >>> from vploop.client import run_client
    >>> from vploop.connection import Connection
    >>> reading = run_client(Connection("192.168.1.50"), max_attempts=4)
    >>> reading.success
    True
"""

import enum
import logging

from vploop.decoder import decode
from vploop.protocol import Accepted, validate
from vploop.reading import Reading, UnitSystem, WindSource, fmt_value
from vploop.units import to_metric

log = logging.getLogger(__name__)


class State(enum.Enum):
    """Retry loop states."""

    IDLE = "idle"
    ATTEMPTING = "attempting"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


def next_state(state: State, accepted: bool, attempts: int, max_attempts: int) -> State:
    """Return the state that follows an attempt outcome.

    From IDLE the loop always starts ATTEMPTING.  From ATTEMPTING,
    *accepted* means SUCCESS; a refusal with *attempts* already equal
    to *max_attempts* means EXHAUSTED; otherwise it keeps ATTEMPTING.
    SUCCESS and EXHAUSTED are final.
    """
    if state is State.IDLE:
        return State.ATTEMPTING
    if state is not State.ATTEMPTING:
        return state
    if accepted:
        return State.SUCCESS
    if attempts >= max_attempts:
        return State.EXHAUSTED
    return State.ATTEMPTING


def acquire(connection, max_attempts: int) -> bytes | None:
    """Fetch and validate replies until one is accepted.

    Args:
        connection: Object with a ``fetch()`` method returning bytes or
            raising ``ConnectionError``.
        max_attempts: Total number of fetches allowed (>= 1).

    Returns:
        bytes: The validated 99-byte payload, or None if every attempt
            was refused.

    Raises:
        ValueError: If *max_attempts* is less than 1.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1, got %d" % max_attempts)

    state = next_state(State.IDLE, False, 0, max_attempts)
    attempts = 0
    payload = None

    while state is State.ATTEMPTING:
        attempts += 1
        try:
            raw = connection.fetch()
        except ConnectionError as exc:
            log.debug("attempt %d/%d: %s", attempts, max_attempts, exc)
            state = next_state(state, False, attempts, max_attempts)
            continue

        result = validate(raw)
        if isinstance(result, Accepted):
            payload = result.payload
            state = next_state(state, True, attempts, max_attempts)
        else:
            log.debug(
                "attempt %d/%d: %s %s",
                attempts, max_attempts, result.kind.value, result.detail,
            )
            state = next_state(state, False, attempts, max_attempts)

    if state is State.EXHAUSTED:
        log.warning("no valid LOOP frame after %d attempts", attempts)
        return None

    log.debug("LOOP frame accepted on attempt %d", attempts)
    return payload


def run_client(
    connection,
    max_attempts: int = 4,
    metric: bool = False,
    wind_source: WindSource = WindSource.CURRENT,
    pressure_digits: int = 1,
    wind_digits: int = 1,
) -> Reading:
    """Query the console and return one Reading.

    On success the payload is decoded and, if *metric*, converted.  On
    exhaustion a failure Reading in the requested unit system is
    returned.
    """
    unit_system = UnitSystem.METRIC if metric else UnitSystem.IMPERIAL
    payload = acquire(connection, max_attempts)
    if payload is None:
        return Reading.failure(unit_system, wind_source)

    reading = decode(payload, wind_source)
    if metric:
        reading = to_metric(reading, pressure_digits, wind_digits)

    log.info(
        "inside=%s outside=%s %s=%s baro=%s (%s)",
        fmt_value(reading.inside_temperature),
        fmt_value(reading.outside_temperature),
        wind_source.label,
        fmt_value(reading.wind_speed),
        reading.barometric_pressure,
        unit_system.value,
    )
    return reading
