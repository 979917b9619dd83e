"""
Search-engine client builders.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from logforge.clients.builders import (
    AsyncElasticsearchClientBuilder,
    ElasticsearchClientBuilder,
    filter_hosts,
    normalize_host,
)

__all__ = [
    "AsyncElasticsearchClientBuilder",
    "ElasticsearchClientBuilder",
    "filter_hosts",
    "normalize_host",
]
