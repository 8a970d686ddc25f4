"""Project-wide configuration constants and config-file loading.

Central place for tuneable parameters shared across modules.
Import individual names where needed.

Example:
    >>> from vploop.config import load_config
    >>> cfg = load_config("vploop.toml")
    >>> cfg["port"]
    22222
"""

import tomllib

from vploop.protocol import DEFAULT_PORT, LOOP_COMMAND

# Bound on the TCP connect attempt, in seconds.
CONNECT_TIMEOUT_S = 5

# Settle time after sending a command, in milliseconds.  Applied twice.
DEFAULT_WAIT_MS = 500

# Retries after the first attempt.
DEFAULT_RETRIES = 3

UNIT_CHOICES = ("imperial", "metric")
WIND_CHOICES = ("current", "average")
FORMAT_CHOICES = ("csv", "plain", "prtg", "json")

DEFAULTS = {
    "host": None,
    "port": DEFAULT_PORT,
    "command": LOOP_COMMAND,
    "wait_ms": DEFAULT_WAIT_MS,
    "retries": DEFAULT_RETRIES,
    "units": "imperial",
    "format": "plain",
    "wind": "current",
    "pressure_digits": 1,
    "wind_digits": 1,
    "log": None,
}


def max_attempts(cfg: dict) -> int:
    """Total attempt budget: the first try plus ``cfg["retries"]``."""
    return cfg["retries"] + 1


def load_config(path: str) -> dict:
    """Read a TOML config file, validate it, and fill in defaults.

    ``[console]``: ``host`` (str, required), ``port`` (int),
    ``command`` (str), ``wait_ms`` (int), ``retries`` (int).

    ``[output]``: ``units`` ("imperial" or "metric"), ``format``
    ("csv", "plain", "prtg" or "json"), ``wind`` ("current" or
    "average"), ``pressure_digits`` (int), ``wind_digits`` (int),
    ``log`` (str, log file name).

    Raises:
        ValueError: If a key is missing, has the wrong type, or is
            outside its allowed choices.
    """
    with open(path, "rb") as f:
        raw = tomllib.load(f)

    console = _require_table(raw, "console")
    output = raw.get("output", {})
    if not isinstance(output, dict):
        raise ValueError("[output] must be a table")

    _require_str(console, "host", "console")

    result = dict(DEFAULTS)
    result["host"] = console["host"]

    for key in ("port", "wait_ms", "retries"):
        if key in console:
            _require_int(console, key, "console")
            result[key] = console[key]
    if "command" in console:
        _require_str(console, "command", "console")
        result["command"] = console["command"]

    for key, choices in (
        ("units", UNIT_CHOICES),
        ("format", FORMAT_CHOICES),
        ("wind", WIND_CHOICES),
    ):
        if key in output:
            _require_choice(output, key, choices, "output")
            result[key] = output[key]
    for key in ("pressure_digits", "wind_digits"):
        if key in output:
            _require_int(output, key, "output")
            result[key] = output[key]
    if "log" in output:
        _require_str(output, "log", "output")
        result["log"] = output["log"]

    check_config(result)
    return result


def check_config(cfg: dict) -> None:
    """Validate ranges on a merged config dict.

    Raises:
        ValueError: On an out-of-range value.
    """
    if not cfg.get("host"):
        raise ValueError("missing required key: console.host")
    if not 1 <= cfg["port"] <= 65535:
        raise ValueError("port must be 1-65535, got %d" % cfg["port"])
    command = cfg["command"]
    if not command or not command.isascii() or "\n" in command or "\r" in command:
        raise ValueError(
            "console.command must be a single line of ASCII, got %r" % command
        )
    if cfg["wait_ms"] < 0:
        raise ValueError("wait_ms must not be negative, got %d" % cfg["wait_ms"])
    if cfg["retries"] < 0:
        raise ValueError("retries must not be negative, got %d" % cfg["retries"])
    for key in ("pressure_digits", "wind_digits"):
        if not 0 <= cfg[key] <= 3:
            raise ValueError("%s must be 0-3, got %d" % (key, cfg[key]))


def _require_table(raw: dict[str, object], key: str) -> dict:
    """Validate that section *key* exists and is a table."""
    if key not in raw:
        raise ValueError("missing required section: [%s]" % key)
    if not isinstance(raw[key], dict):
        raise ValueError("[%s] must be a table" % key)
    return raw[key]


def _require_str(raw: dict[str, object], key: str, section: str) -> None:
    """Validate that *key* exists in *raw* and is a str."""
    if key not in raw:
        raise ValueError("missing required key: %s.%s" % (section, key))
    if not isinstance(raw[key], str):
        raise ValueError(
            "%s.%s must be str, got %s" % (section, key, type(raw[key]).__name__)
        )


def _require_int(raw: dict[str, object], key: str, section: str) -> None:
    """Validate that *key* exists in *raw* and is an int."""
    if key not in raw:
        raise ValueError("missing required key: %s.%s" % (section, key))
    # bool is an int subclass; TOML true/false must not pass as a number.
    if isinstance(raw[key], bool) or not isinstance(raw[key], int):
        raise ValueError(
            "%s.%s must be int, got %s" % (section, key, type(raw[key]).__name__)
        )


def _require_choice(
    raw: dict[str, object], key: str, choices: tuple[str, ...], section: str
) -> None:
    """Validate that *key* is a str and one of *choices*."""
    _require_str(raw, key, section)
    if raw[key] not in choices:
        raise ValueError(
            "%s.%s must be one of %s, got '%s'"
            % (section, key, ", ".join(choices), raw[key])
        )
