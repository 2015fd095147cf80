# -*- coding: utf-8 -*-
"""
    logsink.core.logger_fmt
    ~~~~~~~~~~~~~~~~~~~~~~~

    Logging formatters.
"""

import json
import os
import socket

from dateutil import tz

from logsink.core.registry import register_formatter
from logsink.models.enums import LogFormat
from logsink.models.log import LogMsg


class PlainFormatter:
    """Single line text formatter: `2026/10/19 08:30:15.123 [I] message`."""

    def format(self, lm: LogMsg) -> str:
        when = f"{lm.when:%Y/%m/%d %H:%M:%S}.{lm.when.microsecond // 1000:03d}"
        return f"{when} {lm.level.tag} {lm.render()}"


class JSONFormatter:
    """
    JSON logging formatter.

    :param component_log: static attributes added to every log (e.g. component name and version)
    """

    def __init__(self, component_log: dict[str, str] | None = None):
        self.host = socket.gethostname()
        self.component_log = component_log

    @staticmethod
    def add_caller(lm: LogMsg) -> dict:
        """Add the call site if the dispatcher recorded it."""

        if not lm.enable_func_call_depth:
            return {}

        return {
            "filename": lm.file_path if lm.enable_full_file_path else os.path.basename(lm.file_path),
            "lineno": lm.line_number,
        }

    def prepare_log(self, lm: LogMsg) -> dict:

        # create log dict
        d_log = {
            "@timestamp": lm.when.astimezone(tz.UTC).isoformat(),
            "@version": "1",
            "host": self.host,
            "level": lm.level.name,
            "level_value": lm.level.value,
            "message": lm.msg % lm.args if lm.args else lm.msg,
            "prefix": lm.prefix,
        }

        # add component-specific attributes
        if self.component_log:
            d_log.update(self.component_log)

        d_log.update(self.add_caller(lm))

        return d_log

    def format(self, lm: LogMsg) -> str:
        d_log = self.prepare_log(lm)
        return json.dumps(d_log)


def register():
    register_formatter(LogFormat.plain.value, PlainFormatter(), exist_ok=True)
    register_formatter(LogFormat.json.value, JSONFormatter(), exist_ok=True)
