"""
Builders for Elasticsearch clients.

Both builders share option handling and differ only in the client class
they instantiate. Construction errors of the client library propagate
unchanged.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Dict, List, Optional, Union
from urllib.parse import urlsplit, urlunsplit

from elasticsearch import AsyncElasticsearch, Elasticsearch
from pydantic import Field, field_validator

from logforge.builder import Builder, BuilderOptions, ServiceLookup
from logforge.defaults import (
    DEFAULT_CLIENT_METADATA,
    DEFAULT_CLIENT_PORT,
    DEFAULT_CLIENT_SCHEME,
)
from logforge.exceptions import ConfigurationError


def filter_hosts(hosts: Any) -> List[Union[str, Mapping]]:
    """
    Keep the usable host entries.

    An entry is usable when it is a string, or a mapping carrying a
    ``host`` key. For a mapping of hosts its values are considered.
    """
    entries = hosts.values() if isinstance(hosts, Mapping) else hosts
    return [
        host
        for host in entries
        if isinstance(host, str) or (isinstance(host, Mapping) and "host" in host)
    ]


def normalize_host(host: Union[str, Mapping]) -> Union[str, Dict[str, Any]]:
    """
    Complete a host entry with the default scheme and port.

    Strings become URLs (``localhost`` -> ``http://localhost:9200``);
    mappings get ``scheme`` and ``port`` defaults and a string ``host``.

    Raises:
        ValueError: If a port is not a number
    """
    if isinstance(host, str):
        url = host if "://" in host else f"{DEFAULT_CLIENT_SCHEME}://{host}"
        parts = urlsplit(url)
        if parts.port is None:
            parts = parts._replace(netloc=f"{parts.netloc}:{DEFAULT_CLIENT_PORT}")
        return urlunsplit(parts)

    node = dict(host)
    node["host"] = str(node["host"])
    node["scheme"] = node.get("scheme") or DEFAULT_CLIENT_SCHEME
    node["port"] = int(node.get("port") or DEFAULT_CLIENT_PORT)
    return node


class ClientOptions(BuilderOptions):
    hosts: List[Any]
    retries: Optional[int] = None
    api_id: Optional[str] = Field(default=None, alias="api-id")
    api_key: Optional[str] = Field(default=None, alias="api-key")
    username: Optional[str] = None
    password: Optional[str] = None
    metadata: bool = DEFAULT_CLIENT_METADATA

    @field_validator("hosts", mode="before")
    @classmethod
    def validate_hosts(cls, v: Any) -> List[Any]:
        # ConfigurationError is not a ValueError, so pydantic lets it through unwrapped
        if isinstance(v, (str, bytes)) or not isinstance(v, (Mapping, Sequence)):
            raise ConfigurationError(
                message="No Host data provided",
                error_code="CFG_002",
                details={"hosts_type": type(v).__name__},
            )
        return [normalize_host(host) for host in filter_hosts(v)]


class ElasticsearchClientBuilder(Builder[Elasticsearch, ClientOptions]):
    """
    Builds an ``elasticsearch.Elasticsearch`` client.

    Recognised keys: ``hosts`` (required), ``retries``, ``api-id`` +
    ``api-key`` (preferred) or ``username`` + ``password``, ``metadata``.

    Example:
        >>> client = ElasticsearchClientBuilder()(
        ...     container, "elasticsearch", {"hosts": ["localhost"]}
        ... )
    """

    client_class: ClassVar[type] = Elasticsearch
    options_model = ClientOptions
    requires_options = True
    required_keys = (("hosts", "No Hosts provided"),)

    def assemble(self, lookup: ServiceLookup, options: ClientOptions) -> Any:
        return self.client_class(**self.client_kwargs(options))

    def client_kwargs(self, options: ClientOptions) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"hosts": options.hosts}

        if options.retries is not None:
            kwargs["max_retries"] = options.retries

        if options.api_id is not None and options.api_key is not None:
            kwargs["api_key"] = (options.api_id, options.api_key)
        elif options.username is not None and options.password is not None:
            kwargs["basic_auth"] = (options.username, options.password)

        kwargs["meta_header"] = options.metadata
        return kwargs


class AsyncElasticsearchClientBuilder(ElasticsearchClientBuilder):
    """Builds an ``elasticsearch.AsyncElasticsearch`` client."""

    client_class: ClassVar[type] = AsyncElasticsearch
