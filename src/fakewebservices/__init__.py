"""Client library for the Fake Web Services JSON:API backend."""

from fakewebservices.client import Client
from fakewebservices.errors import (
    ConfigurationError,
    FWSError,
    GenericAPIError,
    InvalidPathError,
    InvalidUsageError,
    MalformedPayloadError,
    ResourceNotFound,
    TransportError,
    Unauthorized,
)
from fakewebservices.schemas.pagination import Page, Pagination
from fakewebservices.serialization import SerializationMode
from fakewebservices.transport import RetryPolicy, RetryTransport

__all__ = [
    "Client",
    "ConfigurationError",
    "FWSError",
    "GenericAPIError",
    "InvalidPathError",
    "InvalidUsageError",
    "MalformedPayloadError",
    "Page",
    "Pagination",
    "ResourceNotFound",
    "RetryPolicy",
    "RetryTransport",
    "SerializationMode",
    "TransportError",
    "Unauthorized",
]
