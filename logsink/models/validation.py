# -*- coding: utf-8 -*-
"""
    logsink.models.validation
    ~~~~~~~~~~~~~~~~~~~~~~~~~

    Helper functions and type definitions used for validation of pydantic models.
"""

from datetime import datetime
from urllib.parse import urlsplit

from dateutil import tz
from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from logsink.utils.exceptions import ValidationError

_URL_ADAPTER = TypeAdapter(AnyUrl)


#######################
## DEFAULT FACTORIES ##
#######################

def local_now() -> datetime:
    return datetime.now(tz=tz.tzlocal())


#################
## DATE & TIME ##
#################

def rfc3339(when: datetime) -> str:
    """Format a datetime as RFC 3339 with second precision (naive datetimes are taken as local time)."""

    if when.tzinfo is None:
        when = when.replace(tzinfo=tz.tzlocal())

    s = when.replace(microsecond=0).isoformat()
    if when.utcoffset().total_seconds() == 0:
        s = s[:-len("+00:00")] + "Z"
    return s


######################
## FIELD VALIDATORS ##
######################

def validate_dsn(dsn: str) -> str:
    """
    Check the connection string of the Elasticsearch sink.

    The URL needs a scheme, a host and a non-empty path, the path is used as the index namespace.
    `http://localhost:9200/` is fine, `http://localhost:9200` is not.
    """

    if not dsn:
        raise ValidationError("empty dsn")

    try:
        url = _URL_ADAPTER.validate_python(dsn)
    except PydanticValidationError as e:
        raise ValidationError(f"dsn {dsn!r} is not a valid URL ({e.errors()[0]['msg']})") from e

    # AnyUrl accepts host-less URLs such as `mailto:` or `file:///`
    if not url.host:
        raise ValidationError(f"dsn {dsn!r} is not a valid URL (missing host)")

    if not urlsplit(dsn).path:
        raise ValidationError("missing prefix")

    return dsn


def describe_errors(e: PydanticValidationError) -> str:
    """One line summary of a pydantic validation error, e.g. `level: Input should be a valid integer`."""

    return "; ".join(f"{'.'.join(map(str, err['loc'])) or 'config'}: {err['msg']}" for err in e.errors())
