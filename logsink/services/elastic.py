# -*- coding: utf-8 -*-
"""
    logsink.services.elastic
    ~~~~~~~~~~~~~~~~~~~~~~~~

    ElasticSearch service utilities.
"""

from cachetools.func import ttl_cache
from elastic_transport.client_utils import DEFAULT
from elasticsearch import Elasticsearch

from logsink.config import CONFIG


@ttl_cache(ttl=600)
def get_client(dsn: str) -> Elasticsearch:
    """
    Create a client for the DSN (no request is sent here, connectivity shows on the first write).

    The path of the DSN is kept by the client as the path prefix of every request.
    """

    kwargs = {}
    if CONFIG.ES_API_KEY:
        kwargs["api_key"] = CONFIG.ES_API_KEY.get_secret_value()
    elif CONFIG.ES_USER:
        kwargs["basic_auth"] = (CONFIG.ES_USER, CONFIG.ES_PASSWORD.get_secret_value())

    # TLS options are only accepted for https nodes
    if dsn.startswith("https://"):
        kwargs["ca_certs"] = str(CONFIG.ES_CA_CERTS) if CONFIG.ES_CA_CERTS.exists() else DEFAULT

    return Elasticsearch(hosts=[dsn], request_timeout=CONFIG.ES_REQUEST_TIMEOUT, **kwargs)
