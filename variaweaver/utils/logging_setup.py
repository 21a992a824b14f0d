"""
VariaWeaver v0.1.0

Logging configuration shared by the command-line entry points.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
VALID_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def resolve_level(level: str, verbose: bool = False, quiet: bool = False) -> int:
    """
    Turn a configured level name plus CLI flags into a logging level.

    ``verbose`` wins over ``quiet``; both win over the configured name.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    name = str(level).upper()
    if name not in VALID_LEVELS:
        raise ValueError(f"Unknown logging level: {level}")
    return getattr(logging, name)


def configure_logging(level: int = logging.INFO,
                      log_file: Optional[Union[str, Path]] = None):
    """
    Install a stderr handler (and optionally a file handler) on the root logger.

    Replaces handlers from any previous call so repeated CLI invocations in one
    process do not duplicate output.
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
