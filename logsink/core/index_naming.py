# -*- coding: utf-8 -*-
"""
    logsink.core.index_naming
    ~~~~~~~~~~~~~~~~~~~~~~~~~

    Index naming policies of the Elasticsearch sink.
"""

from typing import Protocol

from logsink.config import CONFIG
from logsink.models.log import LogMsg


class IndexNaming(Protocol):
    """Computes the destination index of a log message, must be a pure function of the message."""

    def index_name(self, lm: LogMsg) -> str:
        ...


class DateIndexNaming:
    """
    One index per day of the message timestamp, e.g. `2026.10.19`.

    :param prefix: prepended to the date, e.g. `app-logs-`
    :param date_format: strftime format of the date part
    """

    def __init__(self, prefix: str = CONFIG.ES_INDEX_PREFIX, date_format: str = CONFIG.ES_INDEX_DATE_FORMAT):
        self.prefix = prefix
        self.date_format = date_format

    def index_name(self, lm: LogMsg) -> str:
        return f"{self.prefix}{lm.when.strftime(self.date_format)}"


_INDEX_NAMING: IndexNaming = DateIndexNaming()


def get_index_naming() -> IndexNaming:
    return _INDEX_NAMING


def set_index_naming(naming: IndexNaming):
    """Change the policy given to sinks built from now on (existing sinks keep theirs)."""

    global _INDEX_NAMING
    _INDEX_NAMING = naming
