# -*- coding: utf-8 -*-
"""
    logsink.models.log
    ~~~~~~~~~~~~~~~~~~

    Log message, log document and sink configuration models.
"""

import os
from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field, StrictInt

from logsink.models.base import CustomBaseModel
from logsink.models.enums import Level
from logsink.models.validation import local_now


class LogMsg(CustomBaseModel):
    """
    One log call as seen by the adapters.

    Owned by the caller, adapters only read it.
    """

    level: Level
    msg: str
    args: tuple[Any, ...] = ()
    when: datetime = Field(default_factory=local_now)
    prefix: str = ""

    file_path: str = ""
    line_number: int = 0
    enable_func_call_depth: bool = False
    enable_full_file_path: bool = False

    def render(self) -> str:
        msg = self.msg % self.args if self.args else self.msg

        if self.prefix:
            msg = f"{self.prefix} {msg}"

        if self.enable_func_call_depth:
            file_path = self.file_path if self.enable_full_file_path else os.path.basename(self.file_path)
            msg = f"[{file_path}:{self.line_number}] {msg}"

        return msg


class LogDocument(CustomBaseModel):
    timestamp: str
    msg: str


def encode_document(doc: LogDocument) -> str:
    return doc.model_dump_json()


#################
## SINK CONFIG ##
#################

class SinkConfig(CustomBaseModel):
    model_config = ConfigDict(frozen=True)

    level: StrictInt = Level.DEBUG.value
    formatter: str | None = None


class ConsoleSinkConfig(SinkConfig):
    pass


class ESSinkConfig(SinkConfig):
    """
    Configuration of the Elasticsearch sink, e.g. `{"dsn": "http://localhost:9200/", "level": 1}`.

    A missing dsn is left empty here and rejected later by `validate_dsn`.
    """

    dsn: str = ""
    level: StrictInt
