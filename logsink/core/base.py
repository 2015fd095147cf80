# -*- coding: utf-8 -*-
"""
    logsink.core.base
    ~~~~~~~~~~~~~~~~~

    Sink (adapter) interface definition.
"""

from abc import ABC, abstractmethod
from typing import Callable, Protocol, runtime_checkable

from logsink.models.log import LogMsg


@runtime_checkable
class LogFormatter(Protocol):
    """Anything that can turn a log message into the text a sink writes."""

    def format(self, lm: LogMsg) -> str:
        ...


class Sink(ABC):
    """
    Adapter contract expected by the dispatcher.

    Lifecycle: built by a factory, `init` once, any number of `write_msg` calls, `destroy` on teardown.
    A sink is its own fallback formatter until `set_formatter` or a named formatter replaces it.

    :param formatter: formatter used by `write_msg` (defaults to the sink itself)
    """

    name: str = ""

    def __init__(self, formatter: LogFormatter | None = None):
        self._formatter: LogFormatter = formatter or self

    @property
    def formatter(self) -> LogFormatter:
        return self._formatter

    def set_formatter(self, formatter: LogFormatter) -> None:
        self._formatter = formatter

    @abstractmethod
    def init(self, config: str) -> None:
        pass

    @abstractmethod
    def format(self, lm: LogMsg) -> str:
        pass

    @abstractmethod
    def write_msg(self, lm: LogMsg) -> None:
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def destroy(self) -> None:
        pass


SinkFactory = Callable[[], Sink]
