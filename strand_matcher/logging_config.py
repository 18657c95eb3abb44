"""
Logging configuration for the strand matcher.

Provides:
- Console handler: warnings only, or INFO progress when verbose
- File handler: full DEBUG detail with rotation, when a log directory is given
"""

import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

_logging_initialized = False
_log_file_path: Path | None = None


def setup_logging(
    verbose: bool = False,
    log_dir: Path | None = None,
    job_name: str = "strand_matcher",
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> Path | None:
    """
    Initialize logging for the strand_matcher package.

    Args:
        verbose: Show INFO messages (per-candidate progress) on the console.
        log_dir: Directory for a rotating log file. None disables file logging.
        job_name: Name prefix for the log file.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of backup files to keep.

    Returns:
        Path to the log file, or None when logging to console only.
    """
    global _logging_initialized, _log_file_path

    if _logging_initialized:
        return _log_file_path

    logger = logging.getLogger("strand_matcher")
    logger.setLevel(logging.DEBUG)  # Capture everything, handlers filter
    logger.handlers.clear()
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        _log_file_path = log_dir / f"{job_name}_{timestamp}.log"

        file_handler = RotatingFileHandler(
            _log_file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    _logging_initialized = True
    return _log_file_path


def reset_logging() -> None:
    """Reset logging state. Useful for testing."""
    global _logging_initialized, _log_file_path
    _logging_initialized = False
    _log_file_path = None

    logger = logging.getLogger("strand_matcher")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
