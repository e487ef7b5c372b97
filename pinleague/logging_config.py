"""Logging setup for league commands."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import get_log_dir

ROOT_LOGGER = 'pinleague'

FILE_FORMAT = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
CONSOLE_FORMAT = logging.Formatter('%(levelname)s: %(message)s')


def setup_logging(
    command: str = 'league',
    verbose: bool = False,
    log_to_file: bool = False,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure the pinleague logger for one command run.

    The console shows warnings only, or everything down to DEBUG with
    verbose. The optional log file always records INFO and up (DEBUG when
    verbose) so a season's score saves and finalizations can be audited.

    Args:
        command: Command being run; names the log file
        verbose: Log debug detail to both handlers
        log_to_file: Also write pinleague_<command>_<timestamp>.log
        log_dir: Directory for the log file (default: configured log_dir)

    Returns:
        The configured 'pinleague' logger

    Example:
        from pinleague.logging_config import setup_logging
        logger = setup_logging('save-scores', log_to_file=True)
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Replace handlers from any earlier run in this process
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(CONSOLE_FORMAT)
    logger.addHandler(console_handler)

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        file_handler = logging.FileHandler(log_dir / f'{ROOT_LOGGER}_{command}_{stamp}.log')
        file_handler.setLevel(logger.level)
        file_handler.setFormatter(FILE_FORMAT)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the pinleague hierarchy ('cli' -> 'pinleague.cli')."""
    if name != ROOT_LOGGER and not name.startswith(f'{ROOT_LOGGER}.'):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)
