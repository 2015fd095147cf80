# -*- coding: utf-8 -*-
"""
    logsink.utils.exceptions
    ~~~~~~~~~~~~~~~~~~~~~~~~

    Custom exceptions used throughout the project.

    Errors of the Elasticsearch index call are not wrapped, they reach the caller as raised by the client.
    ``ES_WRITE_ERRORS`` groups them for callers that want to catch them.
"""

from elastic_transport import TransportError
from elasticsearch import ApiError, SerializationError


class LogSinkError(Exception):

    def __init__(self):
        self.detail = "Unknown exception occurred"

    def __str__(self):
        return self.detail


############
## CONFIG ##
############

class ConfigError(LogSinkError):
    def __init__(self, reason: str):
        self.detail = f"Malformed sink configuration: {reason}"


class ValidationError(LogSinkError):
    def __init__(self, reason: str):
        self.detail = f"Invalid sink configuration: {reason}"


class FormatterNotFoundError(LogSinkError):
    def __init__(self, name: str):
        self.name = name
        self.detail = f"The formatter with name: {name} not found"


class ClientInitError(LogSinkError):
    def __init__(self, dsn: str, reason: str):
        self.detail = f"Failed to create Elasticsearch client for {dsn}: {reason}"


##########
## SINK ##
##########

class SinkNotInitializedError(LogSinkError):
    def __init__(self, adapter_name: str):
        self.detail = f"Adapter {adapter_name} used before successful initialization"


class DocumentEncodingError(LogSinkError):
    def __init__(self, reason: str):
        self.detail = f"Failed to encode log document: {reason}"


ES_WRITE_ERRORS = (ApiError, TransportError, SerializationError)


##############
## REGISTRY ##
##############

class AdapterNotFoundError(LogSinkError):
    def __init__(self, name: str):
        self.name = name
        self.detail = f"Unknown adapter name {name} (forgot to register it?)"


class AdapterAlreadyRegisteredError(LogSinkError):
    def __init__(self, name: str):
        self.name = name
        self.detail = f"Adapter {name} is already registered"


class AdapterAlreadySetError(LogSinkError):
    def __init__(self, name: str):
        self.name = name
        self.detail = f"Adapter {name} is already attached to this logger"


class FormatterAlreadyRegisteredError(LogSinkError):
    def __init__(self, name: str):
        self.name = name
        self.detail = f"Formatter {name} is already registered"
