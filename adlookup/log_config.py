"""Logging setup.

Log files live under `data/logs/` (relative to CWD) and rotate daily through
TimedRotatingFileHandler; `retention_days` rotated files are kept.
"""
from __future__ import annotations

import glob
import logging
import os
import time
from logging.handlers import TimedRotatingFileHandler

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Track our handlers so reconfiguration replaces them instead of stacking.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def get_log_dir() -> str:
    return os.path.join(os.getcwd(), "data", "logs")


def _ensure_log_dir() -> str:
    log_dir = get_log_dir()
    os.makedirs(log_dir, exist_ok=True)
    return log_dir


def setup_logging(
    level: str = "INFO",
    retention_days: int = 30,
    max_size_mb: int = 50,
    log_to_file: bool = True,
) -> None:
    """Configure the root logger: console handler plus a rotating file handler."""
    global _file_handler, _console_handler

    level_str = (level or "INFO").strip().upper()
    if level_str not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_str = "INFO"
    log_level = getattr(logging, level_str, logging.INFO)

    retention_days = max(1, min(365, int(retention_days or 30)))
    max_size_mb = max(5, min(500, int(max_size_mb or 50)))

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

    if log_to_file:
        log_dir = _ensure_log_dir()
        fh = TimedRotatingFileHandler(
            os.path.join(log_dir, "adlookup.log"),
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
        _cleanup_old_logs(log_dir, retention_days, max_size_mb)

    root.setLevel(log_level)

    # ldap3 is chatty at DEBUG
    logging.getLogger("ldap3").setLevel(max(log_level, logging.WARNING))

    logging.getLogger("adlookup").debug(
        "Logging configured: level=%s, retention=%d days", level_str, retention_days,
    )


def _cleanup_old_logs(log_dir: str, retention_days: int, max_size_mb: int) -> None:
    """Drop rotated files older than retention_days, then oldest-first beyond max_size_mb."""
    cutoff = time.time() - (retention_days * 86400)
    files = sorted(glob.glob(os.path.join(log_dir, "adlookup.log.*")), key=os.path.getmtime)
    kept: list[str] = []
    for f in files:
        try:
            if os.path.getmtime(f) < cutoff:
                os.remove(f)
            else:
                kept.append(f)
        except OSError:
            continue

    budget = max_size_mb * 1024 * 1024
    total = sum(os.path.getsize(f) for f in kept if os.path.exists(f))
    for f in kept:
        if total <= budget:
            break
        try:
            size = os.path.getsize(f)
            os.remove(f)
            total -= size
        except OSError:
            continue
