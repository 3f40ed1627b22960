"""
Exception hierarchy for the archiver query pipeline.

ConfigError is fatal to a whole batch. Every other error is scoped to a
single query and ends up attached to that query's result.
"""


class ArchiverError(Exception):
    """Base class for all archiver pipeline errors."""


class ConfigError(ArchiverError):
    """Connection settings are missing or malformed."""


class QueryError(ArchiverError):
    """A query payload could not be interpreted."""


class UnknownEnumError(QueryError):
    """Unrecognized unit conversion or transform code."""

    def __init__(self, kind: str, code: object):
        self.kind = kind
        self.code = code
        super().__init__(f"Unknown {kind}: {code}")


class NetworkError(ArchiverError):
    """The archiver could not be reached or the reply could not be read."""


class QueryCancelledError(NetworkError):
    """The caller cancelled an in-flight request."""


class DecodeError(ArchiverError):
    """The reply matched neither the numeric nor the string sample schema."""
