# -*- coding: utf-8 -*-
"""
    logsink.models.enums
    ~~~~~~~~~~~~~~~~~~~~

    Enums used throughout the project.
"""

import logging
from enum import Enum, IntEnum, unique


@unique
class Level(IntEnum):
    """
    Severity levels (RFC 5424).

    Lower value means more severe, a sink with threshold N drops every message with level > N.
    """

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7

    @property
    def tag(self) -> str:
        return LEVEL_TAGS[self]

    @classmethod
    def from_logging(cls, levelno: int) -> "Level":
        """Map a standard library logging level to the closest severity level."""

        if levelno >= logging.CRITICAL:
            return cls.CRITICAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFORMATIONAL
        return cls.DEBUG


LEVEL_TAGS = {
    Level.EMERGENCY: "[M]",
    Level.ALERT: "[A]",
    Level.CRITICAL: "[C]",
    Level.ERROR: "[E]",
    Level.WARNING: "[W]",
    Level.NOTICE: "[N]",
    Level.INFORMATIONAL: "[I]",
    Level.DEBUG: "[D]",
}


@unique
class LogFormat(str, Enum):
    """Logging formats (also the names of the built-in formatters)."""

    json = "json"
    plain = "plain"


@unique
class AdapterName(str, Enum):
    """Names of the built-in adapters in the adapter registry."""

    CONSOLE = "console"
    ES = "es"
