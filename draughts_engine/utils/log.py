"""
Logging setup for the engine.

Library modules only create loggers; handlers are attached here, once, by
whatever program runs the engine.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_DIR = Path.home() / ".draughts_engine"
LOG_FILE = LOG_DIR / "engine.log"


def setup_logger(debug: bool = False, log_file: Optional[Union[str, Path]] = LOG_FILE):
    """
    Setup the engine logger.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_file: File to write to (truncated), or None to log to stderr

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("draughts_engine")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode='w')
    else:
        handler = logging.StreamHandler()

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
