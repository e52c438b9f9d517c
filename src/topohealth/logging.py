"""Centralized logging configuration for topohealth."""

import logging
import sys

_ROOT_LOGGER_NAME = "topohealth"

_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(level: int = logging.INFO) -> None:
    """Attach a single stderr handler to the package root logger, once."""
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees records
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package root, configuring the root on first use."""
    setup_root_logger()
    return logging.getLogger(name)


def set_global_log_level(level: int | str) -> None:
    """Set the log level for all topohealth loggers."""
    setup_root_logger()

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)
