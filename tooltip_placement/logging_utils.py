from __future__ import annotations

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "TooltipPlacement"
LOG_DIR_ENV_VAR = "TOOLTIP_PLACEMENT_LOG_DIR"
LOG_FILENAME = "tooltip-placement.log"
PROPAGATE_ENV_VAR = "TOOLTIP_PLACEMENT_PROPAGATE_LOGS"


def resolve_logs_dir(log_dir_name: str = "TooltipPlacement") -> Path:
    """
    Resolve the directory to store tooltip placement logs.

    Strategy:
    - Use TOOLTIP_PLACEMENT_LOG_DIR if set.
    - Fall back to XDG state/cache locations, then `cwd/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        candidates.append(Path(env_override).expanduser())

    state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
    cache_home = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    candidates.append(state_home / "logs")
    candidates.append(cache_home / "logs")
    candidates.append(Path.cwd() / "logs")

    for base in candidates:
        target = base / log_dir_name
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return target

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level(debug_enabled: bool) -> int:
    return logging.DEBUG if debug_enabled else logging.INFO


def configure_logging(
    *,
    debug_enabled: bool = False,
    log_dir: Optional[Path] = None,
    retention: int = 5,
) -> logging.Logger:
    """Attach a stderr handler (and optionally a rotating file) to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_log_level(debug_enabled))
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    installed = [handler for handler in logger.handlers if getattr(handler, "_tooltip_placement", False)]
    if not any(not isinstance(handler, RotatingFileHandler) for handler in installed):
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        stream._tooltip_placement = True  # type: ignore[attr-defined]
        logger.addHandler(stream)
    if log_dir is not None:
        log_path = os.path.abspath(log_dir / LOG_FILENAME)
        if not any(getattr(handler, "baseFilename", None) == log_path for handler in installed):
            file_handler = build_rotating_file_handler(
                log_dir,
                LOG_FILENAME,
                retention=retention,
                formatter=formatter,
            )
            file_handler._tooltip_placement = True  # type: ignore[attr-defined]
            logger.addHandler(file_handler)
    logger.propagate = os.environ.get(PROPAGATE_ENV_VAR) == "1"
    return logger
