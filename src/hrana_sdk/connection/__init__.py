"""
Hrana SDK Connection Module.

Provides the HTTP transport pipeline requests are sent with.
"""

from .http import HTTPTransport, RawResponse, Transport

__all__ = [
    "HTTPTransport",
    "RawResponse",
    "Transport",
]
