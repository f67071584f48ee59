"""Client exception hierarchy.

All custom exceptions inherit from MochowError.
Each exception has an error code for structured error handling.
"""

from enum import Enum, IntEnum
from typing import Any


class ErrorCode(str, Enum):
    """Client-side error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "MCW-1000"
    CONFIGURATION_ERROR = "MCW-1001"
    VALIDATION_ERROR = "MCW-1002"

    # Request construction errors (2xxx)
    INVALID_REQUEST = "MCW-2000"
    INVALID_VECTOR = "MCW-2001"
    INVALID_ITERATOR_CONFIG = "MCW-2002"
    UNSUPPORTED_REQUEST_TYPE = "MCW-2003"
    RANK_WEIGHT_MISMATCH = "MCW-2004"

    # Transport errors (3xxx)
    TRANSPORT_ERROR = "MCW-3000"
    TRANSPORT_TIMEOUT = "MCW-3001"

    # Service errors (4xxx)
    SERVICE_ERROR = "MCW-4000"

    # Protocol errors (5xxx)
    DECODE_ERROR = "MCW-5000"
    FEATURE_NOT_SUPPORTED = "MCW-5001"


class ServerErrorCode(IntEnum):
    """Numeric error codes returned by the Mochow service."""

    OK = 0
    INTERNAL_ERROR = 1
    INVALID_PARAMETER = 2
    INVALID_HTTP_URL = 10
    INVALID_HTTP_HEADER = 11
    INVALID_HTTP_BODY = 12
    MISS_SSL_CERTIFICATES = 13
    USER_NOT_EXIST = 20
    USER_ALREADY_EXIST = 21
    ROLE_NOT_EXIST = 22
    ROLE_ALREADY_EXIST = 23
    AUTHENTICATION_FAILED = 24
    PERMISSION_DENIED = 25
    DB_NOT_EXIST = 50
    DB_ALREADY_EXIST = 51
    DB_TOO_MANY_TABLES = 52
    DB_NOT_EMPTY = 53
    INVALID_TABLE_SCHEMA = 60
    INVALID_PARTITION_PARAMETERS = 61
    TABLE_TOO_MANY_FIELDS = 62
    TABLE_TOO_MANY_FAMILIES = 63
    TABLE_TOO_MANY_PRIMARY_KEYS = 64
    TABLE_TOO_MANY_PARTITION_KEYS = 65
    TABLE_TOO_MANY_VECTOR_FIELDS = 66
    TABLE_TOO_MANY_INDEXES = 67
    DYNAMIC_SCHEMA_ERROR = 68
    TABLE_NOT_EXIST = 69
    TABLE_ALREADY_EXIST = 70
    INVALID_TABLE_STATE = 71
    TABLE_NOT_READY = 72
    ALIAS_NOT_EXIST = 73
    ALIAS_ALREADY_EXIST = 74
    FIELD_NOT_EXIST = 80
    FIELD_ALREADY_EXIST = 81
    VECTOR_FIELD_NOT_EXIST = 82
    INVALID_INDEX_SCHEMA = 90
    INDEX_NOT_EXIST = 91
    INDEX_ALREADY_EXIST = 92
    INDEX_DUPLICATED = 93
    INVALID_INDEX_STATE = 94
    PRIMARY_KEY_DUPLICATED = 100


class MochowError(Exception):
    """Base exception for all Mochow client errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a plain dictionary."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(MochowError):
    """Invalid client configuration."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(MochowError):
    """Client-side request construction error.

    Raised eagerly while building requests, argument envelopes and
    iterators. No network call is involved.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class TransportError(MochowError):
    """Connectivity or timeout failure while talking to the service."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TRANSPORT_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ServiceError(MochowError):
    """Non-success status returned by the service.

    Attributes:
        status_code: HTTP status of the response.
        server_code: Numeric code from the response body. A
            ServerErrorCode when the value is known, otherwise a plain int.
        server_message: Message from the response body.
        request_id: Request id echoed by the service, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        server_code: ServerErrorCode | int,
        request_id: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.server_code = server_code
        self.server_message = message
        self.request_id = request_id
        super().__init__(
            f"[Code: {int(server_code)}; HTTP Status: {status_code}] {message}",
            ErrorCode.SERVICE_ERROR,
            {
                "status_code": status_code,
                "server_code": int(server_code),
                "request_id": request_id,
            },
        )


class DecodeError(MochowError):
    """Malformed or schema-mismatched response body."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.DECODE_ERROR, details)


class UnsupportedFeatureError(MochowError):
    """The server does not support a requested feature."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.FEATURE_NOT_SUPPORTED, details)


def to_server_code(value: int) -> ServerErrorCode | int:
    """Map a raw numeric code onto ServerErrorCode when it is known."""
    try:
        return ServerErrorCode(value)
    except ValueError:
        return value
