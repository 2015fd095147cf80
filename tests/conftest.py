import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest
from dateutil import tz

from logsink.core import logger as core_logger
from logsink.core.base import Sink
from logsink.core.logger_elastic import new_es
from logsink.core.registry import (
    register_adapter,
    register_builtins,
    register_formatter,
    unregister_adapter,
    unregister_formatter,
)
from logsink.models.log import LogMsg
from logsink.services import elastic

ES_CONFIG = json.dumps({"dsn": "http://localhost:9200/logs", "level": 3})


class RecordingSink(Sink):
    """Keeps every message it is asked to write."""

    def __init__(self, fail_with: Exception | None = None):
        super().__init__()
        self.config = None
        self.fail_with = fail_with
        self.messages: list[LogMsg] = []
        self.flushed = 0
        self.destroyed = False

    def init(self, config: str) -> None:
        self.config = config

    def format(self, lm: LogMsg) -> str:
        return lm.render()

    def write_msg(self, lm: LogMsg) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.messages.append(lm)

    def flush(self) -> None:
        self.flushed += 1

    def destroy(self) -> None:
        self.destroyed = True


class UpperFormatter:
    def format(self, lm: LogMsg) -> str:
        return json.dumps({"msg": lm.render().upper()})


@pytest.fixture(autouse=True)
def builtins():
    register_builtins()


@pytest.fixture(autouse=True)
def fresh_default_logger():
    yield
    core_logger.reset_default_logger()


@pytest.fixture
def when() -> datetime:
    return datetime(2026, 10, 19, 8, 30, 15, 123456, tzinfo=tz.UTC)


@pytest.fixture
def es_client(monkeypatch):
    client = MagicMock(name="Elasticsearch")
    client.dsns = []

    def fake_get_client(dsn: str):
        client.dsns.append(dsn)
        return client

    monkeypatch.setattr(elastic, "get_client", fake_get_client)
    return client


@pytest.fixture
def es_sink(es_client):
    sink = new_es()
    sink.init(ES_CONFIG)
    return sink


@pytest.fixture
def adapters():
    """Register test adapters, removed again after the test."""

    names = []

    def register(name: str, factory):
        register_adapter(name, factory)
        names.append(name)

    yield register

    for name in names:
        unregister_adapter(name)


@pytest.fixture
def formatters():
    """Register test formatters, removed again after the test."""

    names = []

    def register(name: str, formatter):
        register_formatter(name, formatter)
        names.append(name)

    yield register

    for name in names:
        unregister_formatter(name)
