"""Network clients for the hosted record store."""

from .client import Client
from .exceptions import (
    APIError,
    ClientError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from .store_client import COLLECTIONS, StoreClient

__all__ = [
    "COLLECTIONS",
    "Client",
    "StoreClient",
    "ClientError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "NotFoundError",
    "ValidationError",
]
