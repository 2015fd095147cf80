# -*- coding: utf-8 -*-
"""
    logsink.core.registry
    ~~~~~~~~~~~~~~~~~~~~~

    Process-wide adapter and formatter registries.

    Nothing registers itself on import, call `register_builtins` (or the `register` function of an adapter module)
    at program start before building loggers.
"""

from threading import Lock
from typing import Generic, TypeVar

from logsink.core import get_component_logger
from logsink.core.base import LogFormatter, SinkFactory
from logsink.utils.exceptions import AdapterAlreadyRegisteredError, FormatterAlreadyRegisteredError, LogSinkError

logger = get_component_logger()

T = TypeVar("T")


class Registry(Generic[T]):
    """Thread-safe name -> item mapping, a name can be registered only once."""

    kind = "item"
    already_registered_exc: type[LogSinkError] = LogSinkError

    def __init__(self):
        self._items: dict[str, T] = {}
        self._lock = Lock()

    def check_item(self, item: T):
        pass

    def register(self, name: str, item: T, exist_ok: bool = False) -> None:
        if not name:
            raise ValueError(f"Cannot register {self.kind} with an empty name")
        self.check_item(item)

        with self._lock:
            if name in self._items:
                if exist_ok:
                    return
                raise self.already_registered_exc(name)
            self._items[name] = item

        logger.debug("Registered %s %s", self.kind, name)

    def unregister(self, name: str) -> T | None:
        with self._lock:
            return self._items.pop(name, None)

    def get(self, name: str) -> T | None:
        with self._lock:
            return self._items.get(name)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._items)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._items


class AdapterRegistry(Registry[SinkFactory]):
    kind = "adapter"
    already_registered_exc = AdapterAlreadyRegisteredError

    def check_item(self, item: SinkFactory):
        if not callable(item):
            raise ValueError("Adapter factory must be callable")


class FormatterRegistry(Registry[LogFormatter]):
    kind = "formatter"
    already_registered_exc = FormatterAlreadyRegisteredError

    def check_item(self, item: LogFormatter):
        if not isinstance(item, LogFormatter):
            raise ValueError("Formatter must implement format(lm)")


ADAPTERS = AdapterRegistry()
FORMATTERS = FormatterRegistry()


##############
## ADAPTERS ##
##############

def register_adapter(name: str, factory: SinkFactory, exist_ok: bool = False) -> None:
    ADAPTERS.register(name, factory, exist_ok=exist_ok)


def unregister_adapter(name: str) -> SinkFactory | None:
    return ADAPTERS.unregister(name)


def get_adapter(name: str) -> SinkFactory | None:
    return ADAPTERS.get(name)


def registered_adapters() -> list[str]:
    return ADAPTERS.names()


################
## FORMATTERS ##
################

def register_formatter(name: str, formatter: LogFormatter, exist_ok: bool = False) -> None:
    FORMATTERS.register(name, formatter, exist_ok=exist_ok)


def unregister_formatter(name: str) -> LogFormatter | None:
    return FORMATTERS.unregister(name)


def get_formatter(name: str) -> LogFormatter | None:
    return FORMATTERS.get(name)


def registered_formatters() -> list[str]:
    return FORMATTERS.names()


def register_builtins() -> None:
    """Register the built-in formatters and adapters (safe to call more than once)."""

    from logsink.core import logger_console, logger_elastic, logger_fmt

    logger_fmt.register()
    logger_console.register()
    logger_elastic.register()
