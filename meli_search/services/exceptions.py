"""Domain-specific exceptions."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_QUERY = "invalid_query"
    TRANSPORT_FAILURE = "transport_failure"
    EMPTY_BODY = "empty_body"
    DECODE_FAILURE = "decode_failure"


class ServiceError(Exception):
    kind: ErrorKind = ErrorKind.TRANSPORT_FAILURE


class SearchError(ServiceError):
    """Base class for failures on the search path."""


class InvalidQuery(SearchError):
    kind = ErrorKind.INVALID_QUERY


class TransportFailure(SearchError):
    kind = ErrorKind.TRANSPORT_FAILURE


class EmptyBody(SearchError):
    kind = ErrorKind.EMPTY_BODY


class DecodeFailure(SearchError):
    kind = ErrorKind.DECODE_FAILURE


class ThumbnailError(ServiceError):
    """Raised when a thumbnail download fails at the transport level."""

    kind = ErrorKind.TRANSPORT_FAILURE


__all__ = [
    "DecodeFailure",
    "EmptyBody",
    "ErrorKind",
    "InvalidQuery",
    "SearchError",
    "ServiceError",
    "ThumbnailError",
    "TransportFailure",
]
