from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path


def _project_root() -> Path | None:
    """Repository root when running from a checkout, else None (installed package)."""
    root = Path(__file__).resolve().parents[1]
    if (root / "pyproject.toml").exists():
        return root
    return None


def _resolve_log_dir(settings: object) -> Path:
    """Resolve the log directory.

    - If METANAV_LOG_DIR is absolute, use it directly.
    - From a checkout, treat it as relative to the project root.
    - Otherwise, relative to the current working directory.
    """

    raw = getattr(settings, "METANAV_LOG_DIR", Path("_logs"))
    p = raw if isinstance(raw, Path) else Path(str(raw))
    if p.is_absolute():
        return p

    return (_project_root() or Path.cwd()) / p


def setup_logging(settings: object) -> Path | None:
    """Configure Python logging for metanav.

    Returns the log file path when file logging is enabled, else None.

    Rotation:
      - Daily rotation at midnight.
      - Keep the last `METANAV_LOG_BACKUP_COUNT` rotated files.

    Safe to call multiple times (it resets handlers).
    """

    level_name = str(getattr(settings, "METANAV_LOG_LEVEL", "INFO") or "INFO").upper().strip()
    level = getattr(logging, level_name, logging.INFO)

    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(fmt)
    handlers.append(console_handler)

    log_file: Path | None = None
    if bool(getattr(settings, "METANAV_LOG_TO_FILE", False)):
        log_dir = _resolve_log_dir(settings)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "metanav.log"

        file_handler = TimedRotatingFileHandler(
            filename=str(log_file),
            when="midnight",
            interval=1,
            backupCount=max(0, int(getattr(settings, "METANAV_LOG_BACKUP_COUNT", 14) or 0)),
            encoding="utf-8",
            utc=False,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)

    # Reset handlers so repeated setup does not duplicate output.
    logger = logging.getLogger("metanav")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False

    logger.debug("metanav logging enabled (file=%s, level=%s)", log_file, level_name)
    return log_file
