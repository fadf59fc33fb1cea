"""Logging setup.

Console output always; a daily-rotated file (``bindauth.log``) in ``log_dir``
when one is configured. Rotated files older than ``retention_days`` are
removed on setup.
"""
from __future__ import annotations

import glob
import logging
import os
import time
from logging.handlers import TimedRotatingFileHandler

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILE = "bindauth.log"

# Installed handlers, removed again on reconfiguration.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def setup_logging(
    level: str = "INFO",
    log_dir: str = "",
    retention_days: int = 30,
) -> None:
    global _file_handler, _console_handler

    level_str = (level or "INFO").strip().upper()
    if level_str not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_str = "INFO"
    log_level = getattr(logging, level_str, logging.INFO)

    retention_days = max(1, min(365, int(retention_days or 30)))

    root = logging.getLogger()

    if _file_handler and _file_handler in root.handlers:
        root.removeHandler(_file_handler)
        _file_handler.close()
    _file_handler = None
    if _console_handler and _console_handler in root.handlers:
        root.removeHandler(_console_handler)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    _console_handler = ch
    root.addHandler(ch)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = TimedRotatingFileHandler(
            os.path.join(log_dir, _LOG_FILE),
            when="midnight",
            interval=1,
            backupCount=retention_days,
            encoding="utf-8",
            utc=True,
        )
        fh.suffix = "%Y-%m-%d"
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        _file_handler = fh
        root.addHandler(fh)
        _cleanup_old_logs(log_dir, retention_days)

    root.setLevel(log_level)

    # ldap3 is chatty at DEBUG and may echo request contents.
    logging.getLogger("ldap3").setLevel(max(log_level, logging.WARNING))
    logging.getLogger("uvicorn.access").setLevel(max(log_level, logging.WARNING))

    logging.getLogger("bindauth").debug(
        "Logging configured: level=%s, dir=%s, retention=%d days",
        level_str, log_dir or "-", retention_days,
    )


def setup_logging_from_env() -> None:
    from .env_settings import get_env

    env = get_env()
    setup_logging(level=env.log_level, log_dir=env.log_dir, retention_days=env.log_retention_days)


def _cleanup_old_logs(log_dir: str, retention_days: int) -> None:
    cutoff = time.time() - (retention_days * 86400)
    for f in glob.glob(os.path.join(log_dir, _LOG_FILE + ".*")):
        try:
            if os.path.getmtime(f) < cutoff:
                os.remove(f)
        except OSError:
            pass
