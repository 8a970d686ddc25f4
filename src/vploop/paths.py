"""Path resolution for config and log files.

A checkout keeps its config and logs side by side; an installed
console poller uses the system directories:

  Dev:        ./vploop.toml         -> ./logs/vploop.log
  Production: /etc/vploop/vploop.toml -> /var/log/vploop/vploop.log
"""

import os

ETC_DIR = "/etc/vploop"
LOG_DIR = "/var/log/vploop"


def resolve_config(name: str) -> str:
    """Locate the console config file named on the command line.

    A *name* with a directory part must exist exactly where it points.
    A bare name is looked up in the working directory, then in the
    system config directory (``/etc/vploop``).

    Raises:
        FileNotFoundError: If no candidate file exists.
    """
    if os.sep in name or "/" in name:
        candidates = [name]
    else:
        candidates = [name, os.path.join(ETC_DIR, name)]

    for candidate in candidates:
        if os.path.isfile(candidate):
            return os.path.abspath(candidate)

    if len(candidates) == 1:
        raise FileNotFoundError("config file not found: %s" % os.path.abspath(name))
    raise FileNotFoundError(
        "no config '%s' in the working directory or %s" % (name, ETC_DIR)
    )


def resolve_log(config_path: str | None, log_name: str) -> str:
    """Resolve the log file path.

    A *log_name* containing ``/`` is used as given.  Otherwise, if
    *config_path* is under ``/etc/vploop/`` the log goes in
    ``/var/log/vploop/``; else in a ``logs/`` directory next to the
    config file, or next to the current directory when there is no
    config file.
    """
    if "/" in log_name:
        return os.path.abspath(log_name)
    if config_path is None:
        return os.path.abspath(os.path.join("logs", log_name))
    config_dir = os.path.dirname(config_path)
    if config_dir.startswith(ETC_DIR):
        return os.path.join(LOG_DIR, log_name)
    return os.path.join(config_dir, "logs", log_name)
