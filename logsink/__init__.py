# -*- coding: utf-8 -*-
"""
    logsink
    ~~~~~~~

    Pluggable logging dispatcher with console and Elasticsearch adapters.

    Adapters and formatters are looked up by name in process-wide registries.
    Call `register_builtins()` at program start before attaching adapters by name.
"""

from logsink.config import CONFIG
from logsink.core import setup_component_logger

__version__ = "0.1.0"

# Set up the diagnostics logger before the core modules ask for it
setup_component_logger(CONFIG.LOGSINK_LOG_LEVEL)

from logsink.core.logger import Logger, default_logger, get_logger  # noqa: E402
from logsink.core.registry import register_builtins  # noqa: E402
from logsink.models.enums import Level  # noqa: E402
from logsink.models.log import LogMsg  # noqa: E402

__all__ = [
    "CONFIG",
    "Level",
    "LogMsg",
    "Logger",
    "default_logger",
    "get_logger",
    "register_builtins",
]
