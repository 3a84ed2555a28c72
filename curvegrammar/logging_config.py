"""
Logging for scripts and demos.

Library modules only create child loggers (``logging.getLogger(__name__)``)
under the ``curvegrammar`` namespace and never attach handlers themselves.
A script that wants to see evaluator progress calls ``setup_logging()`` once.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .config import CONFIG, EvaluatorConfig

PACKAGE_LOGGER = "curvegrammar"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Union[str, Path]] = None,
    config: EvaluatorConfig = CONFIG,
) -> logging.Logger:
    """
    Route the package's log records to stdout and, optionally, a file.

    Calling it again replaces the handlers from the previous call.

    Args:
        level: Logging level; defaults to ``config.log_level``
        log_file: Optional path; the file is truncated on each call
        config: Evaluator settings supplying the default level

    Returns:
        The ``curvegrammar`` package logger.
    """
    if level is None:
        level = config.log_level

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(str(log_file), mode='w', encoding='utf-8'), level)

    logger.debug(f"Logging initialized at {logging.getLevelName(level)} (file: {log_file})")
    return logger
