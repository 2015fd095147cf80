# -*- coding: utf-8 -*-
"""
    logsink.core.logger_console
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Console adapter, the default output of the dispatcher.
"""

import sys
from threading import Lock
from typing import TextIO

from pydantic import ValidationError as PydanticValidationError

from logsink.config import CONFIG
from logsink.core.base import LogFormatter, Sink
from logsink.core.registry import get_formatter, register_adapter
from logsink.models.enums import AdapterName
from logsink.models.log import ConsoleSinkConfig, LogMsg
from logsink.models.validation import describe_errors
from logsink.utils.exceptions import ConfigError, FormatterNotFoundError


class ConsoleSink(Sink):
    """
    Write formatted messages to a text stream, one per line.

    :param formatter: formatter used for every message (defaults to the sink itself)
    :param stream: output stream, `sys.stdout` at the time of the write if not set
    """

    name = AdapterName.CONSOLE.value

    def __init__(self, formatter: LogFormatter | None = None, stream: TextIO | None = None):
        super().__init__(formatter)
        self.config = ConsoleSinkConfig(level=int(CONFIG.LOGSINK_CONSOLE_LEVEL))
        self.stream = stream
        self._lock = Lock()

    def init(self, config: str = "") -> None:
        """Empty config keeps the defaults, otherwise `{"level": 6, "formatter": "json"}`."""

        if not config:
            return

        try:
            cfg = ConsoleSinkConfig.model_validate_json(config)
        except PydanticValidationError as e:
            raise ConfigError(describe_errors(e)) from e

        if cfg.formatter:
            if (formatter := get_formatter(cfg.formatter)) is None:
                raise FormatterNotFoundError(cfg.formatter)
            self._formatter = formatter

        if "level" not in cfg.model_fields_set:
            cfg = cfg.model_copy(update={"level": self.config.level})

        self.config = cfg

    def format(self, lm: LogMsg) -> str:
        return f"{lm.level.tag} {lm.render()}"

    def write_msg(self, lm: LogMsg) -> None:
        if lm.level > self.config.level:
            return

        text = self._formatter.format(lm)
        with self._lock:
            stream = self.stream or sys.stdout
            stream.write(text + "\n")

    def flush(self) -> None:
        with self._lock:
            (self.stream or sys.stdout).flush()

    def destroy(self) -> None:
        """The stream is not owned by the sink, nothing to close."""


def new_console() -> ConsoleSink:
    return ConsoleSink(formatter=get_formatter(CONFIG.LOGSINK_LOG_FORMAT.value))


def register():
    register_adapter(AdapterName.CONSOLE.value, new_console, exist_ok=True)
