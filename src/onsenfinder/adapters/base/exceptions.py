"""Store-specific exceptions.

Each class carries a ``kind`` tag so the HTTP layer can report the cause
even though every store failure maps to the same status code.
"""


class AdapterError(Exception):
    """Base exception for document store errors."""

    kind = "adapter_error"


class EngineUnavailableError(AdapterError):
    """Raised when the store cannot reach the search engine or the transport fails."""

    kind = "engine_unavailable"


class DocumentNotFoundError(AdapterError):
    """Raised when a requested document (or its index) does not exist."""

    kind = "not_found"


class QueryError(AdapterError):
    """Raised when the engine rejects a request."""

    kind = "query_error"


class DecodeError(AdapterError):
    """Raised when an engine payload does not have the expected document shape."""

    kind = "decode_error"


class ConfigurationError(AdapterError):
    """Raised when store configuration is invalid."""

    kind = "configuration_error"
