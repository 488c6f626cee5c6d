"""Runtime helpers for the TV Systems Python SDK"""

from .errors import (
    TVSystemsError,
    AccountKeyError,
    AddressFormatError,
    SerializationError,
    ApiError,
    error_from_response,
)

__all__ = [
    "TVSystemsError",
    "AccountKeyError",
    "AddressFormatError",
    "SerializationError",
    "ApiError",
    "error_from_response",
]
