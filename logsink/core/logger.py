# -*- coding: utf-8 -*-
"""
    logsink.core.logger
    ~~~~~~~~~~~~~~~~~~~

    Dispatcher sending log messages to the attached adapters, plus the standard library logging bridge.
"""

import logging
import sys
from datetime import datetime
from threading import Lock

from dateutil import tz

from logsink.core import COMPONENT_NAME, get_component_logger
from logsink.core.base import Sink
from logsink.core.registry import get_adapter, register_builtins
from logsink.models.enums import AdapterName, Level
from logsink.models.log import LogMsg
from logsink.utils.exceptions import AdapterAlreadySetError, AdapterNotFoundError

logger = get_component_logger()

BRIDGE_LOGGER_NAME = "logsink_bridge"


class Logger:
    """
    Dispatcher holding adapters by name.

    A failing adapter is reported on the package diagnostics logger and does not stop the others.

    :param prefix: prefix stamped on every message without one
    :param level: messages less severe than this are dropped before reaching any adapter
    """

    def __init__(self, prefix: str = "", level: Level = Level.DEBUG):
        self.prefix = prefix
        self.level = level
        self.enable_func_call_depth = False
        self.call_depth = 2
        self._outputs: dict[str, Sink] = {}
        self._lock = Lock()

    def set_logger(self, adapter_name: str, config: str = "") -> "Logger":
        """Build the adapter from the registry, initialize it with config and attach it."""

        if (factory := get_adapter(adapter_name)) is None:
            raise AdapterNotFoundError(adapter_name)

        with self._lock:
            if adapter_name in self._outputs:
                raise AdapterAlreadySetError(adapter_name)

            sink = factory()
            sink.init(config)
            self._outputs[adapter_name] = sink

        logger.debug("Adapter %s attached", adapter_name)
        return self

    def del_logger(self, adapter_name: str) -> None:
        with self._lock:
            sink = self._outputs.pop(adapter_name, None)

        if sink is None:
            raise AdapterNotFoundError(adapter_name)
        sink.destroy()

    def get_sink(self, adapter_name: str) -> Sink | None:
        with self._lock:
            return self._outputs.get(adapter_name)

    def set_level(self, level: Level | int):
        self.level = Level(level)

    def set_prefix(self, prefix: str):
        self.prefix = prefix

    def set_func_call_depth(self, enabled: bool, depth: int | None = None):
        self.enable_func_call_depth = enabled
        if depth is not None:
            self.call_depth = depth

    def write_msg(self, lm: LogMsg) -> None:
        if lm.level > self.level:
            return

        if self.prefix and not lm.prefix:
            lm = lm.model_copy(update={"prefix": self.prefix})

        with self._lock:
            outputs = list(self._outputs.items())

        for name, sink in outputs:
            try:
                sink.write_msg(lm)
            except Exception as e:
                logger.error("Unable to write message to adapter %s: %s", name, e)

    def log(self, level: Level, msg: str, *args, depth: int = 0):
        if level > self.level:
            return

        caller = {}
        if self.enable_func_call_depth:
            frame = sys._getframe(self.call_depth + depth)
            caller = {
                "file_path": frame.f_code.co_filename,
                "line_number": frame.f_lineno,
                "enable_func_call_depth": True,
            }

        self.write_msg(LogMsg(level=level, msg=msg, args=args, **caller))

    def emergency(self, msg: str, *args):
        self.log(Level.EMERGENCY, msg, *args)

    def alert(self, msg: str, *args):
        self.log(Level.ALERT, msg, *args)

    def critical(self, msg: str, *args):
        self.log(Level.CRITICAL, msg, *args)

    def error(self, msg: str, *args):
        self.log(Level.ERROR, msg, *args)

    def warning(self, msg: str, *args):
        self.log(Level.WARNING, msg, *args)

    def notice(self, msg: str, *args):
        self.log(Level.NOTICE, msg, *args)

    def info(self, msg: str, *args):
        self.log(Level.INFORMATIONAL, msg, *args)

    def debug(self, msg: str, *args):
        self.log(Level.DEBUG, msg, *args)

    def flush(self) -> None:
        with self._lock:
            outputs = list(self._outputs.values())

        for sink in outputs:
            sink.flush()

    def close(self) -> None:
        """Flush and destroy every adapter, the logger is empty afterwards."""

        with self._lock:
            outputs = list(self._outputs.values())
            self._outputs.clear()

        for sink in outputs:
            sink.flush()
            sink.destroy()


#############################
## DEFAULT LOGGER & BRIDGE ##
#############################

_DEFAULT: Logger | None = None
_DEFAULT_LOCK = Lock()


def default_logger() -> Logger:
    """Process-wide dispatcher, built on first use with the console adapter attached."""

    global _DEFAULT

    if _DEFAULT is None:
        with _DEFAULT_LOCK:
            if _DEFAULT is None:
                register_builtins()
                _DEFAULT = Logger().set_logger(AdapterName.CONSOLE.value)

    return _DEFAULT


def reset_default_logger() -> None:
    """Close the default dispatcher, the next use builds a fresh one."""

    global _DEFAULT

    with _DEFAULT_LOCK:
        old, _DEFAULT = _DEFAULT, None

    if old is not None:
        old.close()


def set_prefix(prefix: str):
    default_logger().set_prefix(prefix)


def set_level(level: Level | int):
    default_logger().set_level(level)


def set_logger(adapter_name: str, config: str = "") -> Logger:
    return default_logger().set_logger(adapter_name, config)


def emergency(msg: str, *args):
    default_logger().log(Level.EMERGENCY, msg, *args)


def alert(msg: str, *args):
    default_logger().log(Level.ALERT, msg, *args)


def critical(msg: str, *args):
    default_logger().log(Level.CRITICAL, msg, *args)


def error(msg: str, *args):
    default_logger().log(Level.ERROR, msg, *args)


def warning(msg: str, *args):
    default_logger().log(Level.WARNING, msg, *args)


def notice(msg: str, *args):
    default_logger().log(Level.NOTICE, msg, *args)


def info(msg: str, *args):
    default_logger().log(Level.INFORMATIONAL, msg, *args)


def debug(msg: str, *args):
    default_logger().log(Level.DEBUG, msg, *args)


class TransportLogFilter(logging.Filter):
    """
    Drop records of the Elasticsearch client and of this package.

    Their logs can be emitted while a sink is writing, feeding them back would loop.
    """

    ignored = ("elasticsearch", "elastic_transport", "urllib3", COMPONENT_NAME)

    def filter(self, record: logging.LogRecord) -> bool:
        return not any(record.name == n or record.name.startswith(f"{n}.") for n in self.ignored)


class SinkHandler(logging.Handler):
    """
    Standard library logging handler forwarding records to a dispatcher.

    :param target: dispatcher, the default one if not set
    :param prefix: text put in front of every message, e.g. `[API] `
    """

    def __init__(self, target: Logger | None = None, prefix: str = "", level: int = logging.NOTSET):
        super().__init__(level)
        self.target = target
        self.prefix = prefix
        self.addFilter(TransportLogFilter())

    def to_log_msg(self, record: logging.LogRecord, enable_func_call_depth: bool = False) -> LogMsg:
        return LogMsg(
            level=Level.from_logging(record.levelno),
            msg=f"{self.prefix}{record.getMessage()}",
            when=datetime.fromtimestamp(record.created, tz=tz.tzlocal()),
            file_path=record.pathname,
            line_number=record.lineno,
            enable_func_call_depth=enable_func_call_depth,
        )

    def emit(self, record: logging.LogRecord) -> None:
        try:
            target = self.target or default_logger()
            target.write_msg(self.to_log_msg(record, target.enable_func_call_depth))
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


_BRIDGE_LOCK = Lock()


def get_logger(*prefixes: str) -> logging.Logger:
    """
    Standard library logger writing into the default dispatcher.

    The first prefix is upper-cased and shown as `[PREFIX] ` in front of each message.
    The same logger is returned for the same prefix.
    """

    prefix = prefixes[0].upper() if prefixes and prefixes[0] else ""
    logger_ = logging.getLogger(f"{BRIDGE_LOGGER_NAME}.{prefix}" if prefix else BRIDGE_LOGGER_NAME)

    with _BRIDGE_LOCK:
        if not any(isinstance(h, SinkHandler) for h in logger_.handlers):
            logger_.addHandler(SinkHandler(prefix=f"[{prefix}] " if prefix else ""))
            logger_.setLevel(logging.DEBUG)
            logger_.propagate = False

    return logger_
