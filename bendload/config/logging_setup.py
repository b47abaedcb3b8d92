"""
Logging setup for bendload

Called once from the CLI entry point. Library modules only create loggers.
"""

import logging
from pathlib import Path
from typing import Optional

from bendload.config.settings import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_dir: Optional[Path] = None, level: str = LOG_LEVEL) -> Path:
    """
    Configure root logging with a file handler and a console handler

    Args:
        log_dir: Directory for the log file (defaults to LOG_DIR)
        level: Log level name

    Returns:
        Path of the log file
    """
    log_dir = Path(log_dir or LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "bendload.log"

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(),
        ],
        force=True,
    )
    return log_file
