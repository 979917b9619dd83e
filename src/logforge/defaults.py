"""
Default values applied by builders when an optional key is absent.

Every builder that needs one of these values imports it from here; none
re-declares it.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Final

# Normalization limits shared by the normalizing formatters
DEFAULT_NORMALIZER_DEPTH: Final[int] = 9
DEFAULT_NORMALIZER_ITEM_COUNT: Final[int] = 1000
DEFAULT_PRETTY_PRINT: Final[bool] = False

# Level used by processors, handlers and activation strategies
DEFAULT_LEVEL: Final[str] = "DEBUG"

# JSON batch modes
BATCH_MODE_JSON: Final[int] = 1
BATCH_MODE_NEWLINES: Final[int] = 2

# Formatter specifics
DEFAULT_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%f%z"
DEFAULT_LINE_FORMAT: Final[str] = "[%datetime%] %channel%.%level_name%: %message% %context% %extra%\n"
DEFAULT_CONTEXT_PREFIX: Final[str] = "ctxt_"
DEFAULT_GELF_MAX_LENGTH: Final[int] = 32766
DEFAULT_LOGSTASH_EXTRA_KEY: Final[str] = "extra"
DEFAULT_LOGSTASH_CONTEXT_KEY: Final[str] = "context"
DEFAULT_MONGODB_NESTING_LEVEL: Final[int] = 3
DEFAULT_TABLE_STYLE: Final[str] = "box"

# Processor specifics
DEFAULT_UID_LENGTH: Final[int] = 7
MIN_UID_LENGTH: Final[int] = 1
MAX_UID_LENGTH: Final[int] = 32

# Search clients
DEFAULT_CLIENT_METADATA: Final[bool] = True
DEFAULT_CLIENT_SCHEME: Final[str] = "http"
DEFAULT_CLIENT_PORT: Final[int] = 9200

# Handlers
DEFAULT_BUFFER_LIMIT: Final[int] = 0
DEFAULT_MAX_FILES: Final[int] = 0
