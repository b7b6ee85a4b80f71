"""
Logging configuration using loguru.

Provides a simple setup function that configures loguru with sensible defaults.
Swallowed storage failures are reported through this channel, so consumers
that want to see them should call setup_logging() at startup.
"""

import os
import sys

from loguru import logger


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru with console and optional file output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        fmt: Loguru format string.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=fmt)

    if log_file:
        logger.add(
            log_file,
            level=level.upper(),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            rotation=rotation,
            retention=retention,
        )


def setup_logging_from_config(config) -> None:
    """Apply the ``logging.*`` section of a daybook Config.

    Creates the log directory when ``logging.file`` is set so the file sink
    can open on first write.
    """
    log_file = config.get("logging.file") or None
    if log_file:
        log_file = os.path.expanduser(log_file)
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
    setup_logging(level=str(config.get("logging.level", "WARNING")), log_file=log_file)
