"""
TV Systems Error Model

This module provides the error handling framework for the TV Systems Python SDK.
Local precondition failures (missing keys, bad addresses, unencodable records)
and collaborator failures (transport, decoding, node-reported errors) share a
single base class so callers can catch everything the SDK raises in one place.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """SDK error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    UNSUPPORTED = 3

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    INVALID_JSON = 101
    SERIALIZATION_ERROR = 102
    UNMARSHAL_ERROR = 104

    # Network errors (200-299)
    NETWORK_ERROR = 200
    API_ERROR = 201

    # Validation errors (300-399)
    VALIDATION_ERROR = 300
    INVALID_ADDRESS = 301

    # Transaction errors (400-499)
    TRANSACTION_FAILED = 400
    UNSUPPORTED_TRANSACTION = 401

    # Key errors (700-799)
    KEY_NOT_FOUND = 701


class TVSystemsError(Exception):
    """
    Base class for all TV Systems SDK errors.

    Provides structured error information: a message, an error code,
    optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an SDK error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TVSystemsError':
        """Create error from dictionary representation."""
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return cls(message, code, details)


class AccountKeyError(TVSystemsError):
    """An operation needed a private or public key the account does not hold."""

    def __init__(self, message: str = "Key not found in account",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.KEY_NOT_FOUND, details, cause)


class ValidationError(TVSystemsError):
    """Input validation errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class AddressFormatError(ValidationError):
    """Address failed length, version, network or checksum validation."""

    def __init__(self, message: str = "Invalid address",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_ADDRESS, details, cause)


class EncodingError(TVSystemsError):
    """Data encoding/decoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class SerializationError(EncodingError):
    """A declared field could not be located, read or encoded into canonical bytes."""

    def __init__(self, message: str = "Serialization error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.SERIALIZATION_ERROR, details, cause)


class ApiError(TVSystemsError):
    """
    Error reported by, or while talking to, a ledger node.

    ``error`` holds the node's own numeric error code when the response
    carried one; ``raw`` keeps the response text verbatim.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.API_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None,
                 error: Optional[int] = None, raw: Optional[str] = None):
        super().__init__(message, code, details, cause)
        self.error = error
        self.raw = raw

    @classmethod
    def from_text(cls, text: str, cause: Optional[Exception] = None) -> 'ApiError':
        """Wrap a raw response body that could not be interpreted."""
        message = text.strip() or "Empty response"
        return cls(message, cause=cause, raw=text)


class NetworkError(ApiError):
    """The transport failed before a response body was obtained."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)


class UnmarshalError(ApiError):
    """A response could not be decoded into the expected shape."""

    def __init__(self, message: str = "Unmarshal error", details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None, raw: Optional[str] = None):
        super().__init__(message, ErrorCode.UNMARSHAL_ERROR, details, cause, raw=raw)


class TransactionError(ApiError):
    """Node rejected a transaction; ``transaction`` holds the echoed record, if any."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None, error: Optional[int] = None,
                 raw: Optional[str] = None, transaction: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.TRANSACTION_FAILED, details, cause, error=error, raw=raw)
        self.transaction = transaction


class UnsupportedTransactionError(ApiError):
    """The transaction type cannot be broadcast through the node API."""

    def __init__(self, message: str = "Unsupported Transaction Type",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_TRANSACTION, details, cause)


def error_from_response(response: Any, raw: Optional[str] = None) -> Optional[ApiError]:
    """
    Create an appropriate error from a node response.

    The node reports failures as ``{"error": <int>, "message": "..."}``; when the
    failure concerns a submitted transaction the record is echoed under ``tx``.

    Args:
        response: Decoded JSON response
        raw: Original response text

    Returns:
        Appropriate error instance or None if the payload is not an error
    """
    if not isinstance(response, dict) or "error" not in response:
        return None

    error_value = response["error"]
    message = response.get("message")

    if isinstance(error_value, dict):
        message = message or error_value.get("message")
        error_value = error_value.get("code", error_value.get("error"))

    if not isinstance(error_value, int) or isinstance(error_value, bool):
        return ApiError(message or str(error_value), details=response, raw=raw)

    message = message or f"Node error {error_value}"
    transaction = response.get("tx", response.get("transaction"))
    if isinstance(transaction, dict):
        return TransactionError(message, details=response, error=error_value,
                                raw=raw, transaction=transaction)
    return ApiError(message, details=response, error=error_value, raw=raw)


__all__ = [
    "ErrorCode",
    "TVSystemsError",
    "AccountKeyError",
    "ValidationError",
    "AddressFormatError",
    "EncodingError",
    "SerializationError",
    "ApiError",
    "NetworkError",
    "UnmarshalError",
    "TransactionError",
    "UnsupportedTransactionError",
    "error_from_response",
]
