import json
from unittest.mock import MagicMock

import elastic_transport
import pytest
from elasticsearch import Elasticsearch

from logsink.core import logger_elastic
from logsink.core.index_naming import DateIndexNaming
from logsink.core.logger_elastic import ElasticSink, new_es
from logsink.core.registry import get_adapter
from logsink.models.enums import Level
from logsink.models.log import LogMsg
from logsink.services import elastic
from logsink.utils.exceptions import (
    ES_WRITE_ERRORS,
    ClientInitError,
    ConfigError,
    DocumentEncodingError,
    FormatterNotFoundError,
    SinkNotInitializedError,
    ValidationError,
)
from tests.conftest import ES_CONFIG, UpperFormatter


def test_registered_under_es():
    assert get_adapter("es") is new_es


def test_init_valid_config(es_sink, es_client):
    assert es_sink.initialized
    assert es_sink.config.dsn == "http://localhost:9200/logs"
    assert es_sink.config.level == 3
    assert es_sink.config.formatter is None
    assert es_client.dsns == ["http://localhost:9200/logs"]


def test_init_sample_config_with_real_client():
    sink = new_es()
    sink.init('{"dsn":"http://localhost:9200/","level":1}')

    assert sink.initialized
    assert isinstance(sink._client, Elasticsearch)


@pytest.mark.parametrize("config", [
    "",
    "not json",
    "[]",
    '{"dsn": "http://localhost:9200/logs"}',
    '{"dsn": "http://localhost:9200/logs", "level": "3"}',
    '{"dsn": 9200, "level": 3}',
    '{"dsn": "http://localhost:9200/logs", "level": 3, "formatter": 1}',
])
def test_init_malformed_config(config, es_client):
    sink = new_es()
    with pytest.raises(ConfigError):
        sink.init(config)

    assert not sink.initialized
    assert es_client.dsns == []


@pytest.mark.parametrize("dsn", [
    "",
    "not a url",
    "http://localhost:9200",
    "localhost",
    "localhost:9200/logs",
    "mailto:ops@example.com",
    "file:///var/log/x",
])
def test_init_invalid_dsn(dsn, es_client):
    sink = new_es()
    with pytest.raises(ValidationError):
        sink.init(json.dumps({"dsn": dsn, "level": 3}))

    assert not sink.initialized
    assert es_client.dsns == []


def test_init_missing_dsn_is_validation_error(es_client):
    with pytest.raises(ValidationError, match="empty dsn"):
        new_es().init('{"level": 3}')


def test_init_unknown_formatter(es_client):
    sink = new_es()
    with pytest.raises(FormatterNotFoundError, match="missing-fmt"):
        sink.init('{"dsn": "http://localhost:9200/logs", "level": 3, "formatter": "missing-fmt"}')

    assert not sink.initialized


def test_init_client_failure(monkeypatch):
    def broken_client(dsn: str):
        raise ValueError("URL scheme must be http or https")

    monkeypatch.setattr(elastic, "get_client", broken_client)

    sink = new_es()
    with pytest.raises(ClientInitError) as exc_info:
        sink.init(ES_CONFIG)

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert not sink.initialized


def test_write_before_init_is_refused():
    with pytest.raises(SinkNotInitializedError):
        new_es().write_msg(LogMsg(level=Level.ERROR, msg="too early"))


def test_write_indexes_one_document(es_sink, es_client, when):
    es_sink.write_msg(LogMsg(level=2, msg="boot complete", when=when))

    es_client.index.assert_called_once()
    kwargs = es_client.index.call_args.kwargs
    assert kwargs["index"] == "2026.10.19"
    assert json.loads(kwargs["document"]) == {"timestamp": "2026-10-19T08:30:15Z", "msg": "boot complete"}


def test_write_at_threshold(es_sink, es_client, when):
    es_sink.write_msg(LogMsg(level=3, msg="disk %s full", args=("/var",), when=when))

    es_client.index.assert_called_once()
    assert json.loads(es_client.index.call_args.kwargs["document"])["msg"] == "disk /var full"


def test_write_below_threshold_is_dropped(es_sink, es_client, when):
    assert es_sink.write_msg(LogMsg(level=5, msg="boot complete", when=when)) is None
    es_client.index.assert_not_called()


def test_write_error_propagates_unchanged(es_sink, es_client, when):
    error = ConnectionError("connection refused")
    es_client.index.side_effect = error

    with pytest.raises(ConnectionError) as exc_info:
        es_sink.write_msg(LogMsg(level=Level.ERROR, msg="boot complete", when=when))

    assert exc_info.value is error
    es_client.index.assert_called_once()


def test_named_formatter_is_used(es_client, formatters, when):
    formatters("upper", UpperFormatter())

    sink = new_es()
    sink.init('{"dsn": "http://localhost:9200/logs", "level": 7, "formatter": "upper"}')
    sink.write_msg(LogMsg(level=Level.DEBUG, msg="boot complete", when=when))

    assert json.loads(es_client.index.call_args.kwargs["document"]) == {"msg": "BOOT COMPLETE"}


def test_caller_supplied_formatter(es_client, when):
    sink = new_es(formatter=UpperFormatter())
    sink.init(ES_CONFIG)
    sink.write_msg(LogMsg(level=Level.ERROR, msg="boot", when=when))

    assert es_client.index.call_args.kwargs["document"] == '{"msg": "BOOT"}'


def test_injected_index_naming(es_client, when):
    sink = new_es(index_naming=DateIndexNaming(prefix="app-logs-", date_format="%Y.%m"))
    sink.init(ES_CONFIG)
    sink.write_msg(LogMsg(level=Level.ERROR, msg="boot", when=when))

    assert es_client.index.call_args.kwargs["index"] == "app-logs-2026.10"


def test_format_round_trip(when):
    lm = LogMsg(level=Level.INFORMATIONAL, msg="user %s logged in", args=("alice",), when=when, prefix="[API]")

    doc = json.loads(ElasticSink().format(lm))

    assert doc == {"timestamp": "2026-10-19T08:30:15Z", "msg": "[API] user alice logged in"}


def test_format_falls_back_to_message(monkeypatch, when):
    monkeypatch.setattr(logger_elastic, "encode_document", MagicMock(side_effect=ValueError("surrogates not allowed")))

    lm = LogMsg(level=Level.INFORMATIONAL, msg="boot complete", when=when)

    assert ElasticSink().format(lm) == "boot complete"


def test_format_strict_raises(monkeypatch, when):
    monkeypatch.setattr(logger_elastic, "encode_document", MagicMock(side_effect=ValueError("surrogates not allowed")))

    with pytest.raises(DocumentEncodingError, match="surrogates"):
        ElasticSink(strict_format=True).format(LogMsg(level=Level.INFORMATIONAL, msg="boot", when=when))


def test_flush_and_destroy_are_noops(es_sink, es_client):
    es_sink.flush()
    es_sink.destroy()

    assert es_client.mock_calls == []
    assert es_sink.initialized


def test_client_errors_are_catchable_as_write_errors(es_sink, es_client, when):
    es_client.index.side_effect = elastic_transport.ConnectionError("connection refused")

    with pytest.raises(ES_WRITE_ERRORS):
        es_sink.write_msg(LogMsg(level=Level.ERROR, msg="boot complete", when=when))


def test_format_with_mismatched_args_returns_raw_message(when):
    lm = LogMsg(level=Level.WARNING, msg="50% of %s", args=("disk",), when=when)

    assert ElasticSink().format(lm) == "50% of %s"

    with pytest.raises(DocumentEncodingError):
        ElasticSink(strict_format=True).format(lm)


def test_write_with_mismatched_args_still_indexes(es_sink, es_client, when):
    es_sink.write_msg(LogMsg(level=Level.ERROR, msg="50% of %s", args=("disk",), when=when))

    es_client.index.assert_called_once()
    assert es_client.index.call_args.kwargs["document"] == "50% of %s"
