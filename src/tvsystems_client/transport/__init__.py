"""
Transport layer for the TV Systems client.

Provides the transport interface and its HTTP implementation.
"""

from .http import Transport, RequestsTransport

__all__ = [
    "Transport",
    "RequestsTransport",
]
