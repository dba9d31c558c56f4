# src/stockroom/utils/logger.py

"""
Project Logger
==============

Builds the "STOCKROOM" logger used by the planning pipeline and the
advice CLI. Library modules log through logging.getLogger(__name__).

Handlers created here carry a ``_stockroom`` marker. Only marked
handlers count as "already configured", so handlers attached by a host
process (pytest's capture plugin, an embedding service) never stop the
console and file handlers from being installed.
"""

import os
import logging
from typing import Dict, List


PROJECT_LOGGER_NAME = "STOCKROOM"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def project_handlers(logger: logging.Logger) -> List[logging.Handler]:
    """Handlers installed by get_logger."""
    return [h for h in logger.handlers if getattr(h, "_stockroom", False)]


def _resolve_level(logging_cfg: Dict) -> int:

    if "level" not in logging_cfg:
        raise ValueError("Missing 'logging.level' in configuration.")

    name = str(logging_cfg["level"]).upper()

    if name not in _VALID_LEVELS:
        raise ValueError(
            f"Invalid log level '{name}'. Valid options: {sorted(_VALID_LEVELS)}"
        )

    return _VALID_LEVELS[name]


def _build_handlers(config: Dict) -> List[logging.Handler]:

    logging_cfg = config["logging"]
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if logging_cfg.get("log_to_file", False):

        filename = logging_cfg.get("filename")
        if not isinstance(filename, str) or not filename.strip():
            raise ValueError("logging.filename must be a non-empty string.")

        log_dir = config["paths"]["logs"]
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.FileHandler(os.path.join(log_dir, filename), encoding="utf-8")
        )

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._stockroom = True

    return handlers


def get_logger(config: Dict) -> logging.Logger:
    """
    Return the project logger, configuring it on first use.

    Parameters
    ----------
    config : dict
        Loaded configuration; reads ``logging`` and ``paths.logs``.

    Raises
    ------
    ValueError
        If the logging section is missing or invalid.
    """

    if not isinstance(config, dict):
        raise ValueError("config must be a dictionary.")

    if "logging" not in config:
        raise ValueError("Missing 'logging' section in configuration.")

    if "paths" not in config or "logs" not in config["paths"]:
        raise ValueError("Missing 'paths.logs' configuration.")

    logger = logging.getLogger(PROJECT_LOGGER_NAME)

    if project_handlers(logger):
        return logger

    level = _resolve_level(config["logging"])
    handlers = _build_handlers(config)

    logger.setLevel(level)
    logger.propagate = False
    for handler in handlers:
        logger.addHandler(handler)

    return logger
