# -*- coding: utf-8 -*-
"""
    logsink.core.logger_elastic
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~

    ElasticSearch adapter.

    Every accepted message is one blocking index request on the caller's thread.
    There is no buffering and no retry, errors of the client reach the caller unchanged.
    The adapter never logs, it is itself part of the logging pipeline.
"""

from elasticsearch import Elasticsearch
from pydantic import ValidationError as PydanticValidationError

from logsink.core.base import LogFormatter, Sink
from logsink.core.index_naming import IndexNaming, get_index_naming
from logsink.core.registry import get_formatter, register_adapter
from logsink.models.enums import AdapterName
from logsink.models.log import ESSinkConfig, LogDocument, LogMsg, encode_document
from logsink.models.validation import describe_errors, rfc3339, validate_dsn
from logsink.services import elastic
from logsink.utils.exceptions import (
    ClientInitError,
    ConfigError,
    DocumentEncodingError,
    FormatterNotFoundError,
    SinkNotInitializedError,
)


class ElasticSink(Sink):
    """
    Sink writing log documents into Elasticsearch.

    :param index_naming: policy computing the destination index of each message
    :param formatter: formatter used when the config does not name one (defaults to `format`)
    :param strict_format: raise `DocumentEncodingError` from `format` instead of returning the bare message
    """

    name = AdapterName.ES.value

    def __init__(
            self,
            index_naming: IndexNaming | None = None,
            formatter: LogFormatter | None = None,
            strict_format: bool = False,
    ):
        super().__init__(formatter)
        self.index_naming = index_naming or get_index_naming()
        self.strict_format = strict_format
        self.config: ESSinkConfig | None = None
        self._client: Elasticsearch | None = None

    @property
    def initialized(self) -> bool:
        return self._client is not None

    def init(self, config: str) -> None:
        """
        Parse the JSON config, e.g. `{"dsn": "http://localhost:9200/", "level": 1}`, and create the client.

        Nothing is kept unless every step succeeds.
        """

        try:
            cfg = ESSinkConfig.model_validate_json(config)
        except PydanticValidationError as e:
            raise ConfigError(describe_errors(e)) from e

        validate_dsn(cfg.dsn)

        formatter = self._formatter
        if cfg.formatter:
            if (formatter := get_formatter(cfg.formatter)) is None:
                raise FormatterNotFoundError(cfg.formatter)

        try:
            client = elastic.get_client(cfg.dsn)
        except Exception as e:
            raise ClientInitError(cfg.dsn, str(e)) from e

        self.config = cfg
        self._formatter = formatter
        self._client = client

    def format(self, lm: LogMsg) -> str:
        """
        Fallback formatter: `{"timestamp": "<RFC 3339>", "msg": "<rendered message>"}`.

        Degrades to the rendered message if encoding fails, or to the raw message if the args do not fit it.
        """

        msg = lm.msg
        try:
            msg = lm.render()
            return encode_document(LogDocument(timestamp=rfc3339(lm.when), msg=msg))
        except (TypeError, ValueError) as e:
            if self.strict_format:
                raise DocumentEncodingError(str(e)) from e
            return msg

    def write_msg(self, lm: LogMsg) -> None:
        if not self.initialized:
            raise SinkNotInitializedError(self.name)

        if lm.level > self.config.level:
            return

        body = self._formatter.format(lm)
        self._client.index(index=self.index_naming.index_name(lm), document=body)

    def flush(self) -> None:
        """Nothing is buffered."""

    def destroy(self) -> None:
        """The client is left to the client library (it may be shared with other sinks of the same DSN)."""


def new_es(
        index_naming: IndexNaming | None = None,
        formatter: LogFormatter | None = None,
        strict_format: bool = False,
) -> ElasticSink:
    return ElasticSink(index_naming=index_naming, formatter=formatter, strict_format=strict_format)


def register():
    register_adapter(AdapterName.ES.value, new_es, exist_ok=True)
