# -*- coding: utf-8 -*-
"""
    logsink.core
    ~~~~~~~~~~~~

    Core component utilities (diagnostics logger, etc.).

    The diagnostics logger reports registry events and failed adapter writes.
    It is a plain standard library logger with a `NullHandler`, the application decides where it goes.
"""

import logging

COMPONENT_NAME = "logsink"

_LOGGER: logging.Logger | None = None


def get_component_logger() -> logging.Logger:
    if _LOGGER is None:
        raise RuntimeError("Logger not initialized")
    return _LOGGER


def set_component_logger(logger: logging.Logger):
    global _LOGGER
    _LOGGER = logger


def setup_component_logger(log_level: str | int = logging.WARNING) -> logging.Logger:
    """Set up the `logsink` diagnostics logger (safe to call again, the level is updated)."""

    logger_ = logging.getLogger(COMPONENT_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in logger_.handlers):
        logger_.addHandler(logging.NullHandler())
    logger_.setLevel(log_level)

    set_component_logger(logger_)
    return logger_
