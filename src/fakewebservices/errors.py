"""Exception taxonomy and HTTP status classification.

Every failure the client surfaces derives from :class:`FWSError`:

- ``TransportError``: the request never produced a usable response
  (network failure or timeout after the transport gave up retrying).
- ``Unauthorized`` / ``ResourceNotFound``: fixed-message status errors
  for 401 and 404.
- ``GenericAPIError``: any other non-2xx status, carrying the JSON:API
  error entries returned by the backend.
- ``MalformedPayloadError``: a 2xx body that does not parse into the
  expected shape.
- ``InvalidUsageError``: the caller passed something the client cannot
  work with (wrong destination, ill-formed model, bad path).
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from fakewebservices.schemas.jsonapi import JSONAPIError, JSONAPIErrorResponse

logger = logging.getLogger(__name__)


class FWSError(Exception):
    """Base class for all client errors."""


class TransportError(FWSError):
    """The request could not be completed at the network level."""


class Unauthorized(FWSError):
    """The backend answered 401."""

    def __init__(self) -> None:
        super().__init__("unauthorized")


class ResourceNotFound(FWSError):
    """The backend answered 404."""

    def __init__(self) -> None:
        super().__init__("resource not found")


class GenericAPIError(FWSError):
    """Any other non-2xx response.

    ``errors`` keeps the backend's error entries in document order; the
    human-readable message is only assembled when the error is rendered.
    When the body held no usable error document, ``errors`` is empty and
    the message is the HTTP status line.
    """

    def __init__(
        self,
        status_code: int,
        errors: list[JSONAPIError] | None = None,
        status_line: str = "",
    ) -> None:
        self.status_code = status_code
        self.errors = list(errors or [])
        self.status_line = status_line or str(status_code)
        super().__init__(self.status_line)

    @property
    def message(self) -> str:
        if not self.errors:
            return self.status_line
        parts: list[str] = []
        for error in self.errors:
            if error.detail:
                parts.append(f"{error.title}\n\n{error.detail}")
            else:
                parts.append(error.title)
        return "\n".join(parts)

    def __str__(self) -> str:
        return self.message


class MalformedPayloadError(FWSError):
    """A successful response body did not match the expected document shape."""


class InvalidUsageError(FWSError, TypeError):
    """The client was called with arguments it cannot handle."""


class InvalidPathError(InvalidUsageError):
    """A request path could not be resolved against the base URL."""


class ConfigurationError(FWSError, ValueError):
    """The client could not be constructed from the given settings."""


def status_line(response: httpx.Response) -> str:
    """Return the ``"<code> <reason>"`` line for a response."""
    reason = response.reason_phrase
    return f"{response.status_code} {reason}" if reason else str(response.status_code)


def check_response(response: httpx.Response) -> None:
    """Raise the classified error for a non-2xx response.

    Must be called on a response whose body has not been consumed yet;
    only as much of the body as the errors document needs is read.

    Raises:
        Unauthorized: On 401.
        ResourceNotFound: On 404.
        GenericAPIError: On every other status outside 200-299.
    """
    if 200 <= response.status_code <= 299:
        return

    if response.status_code == 401:
        raise Unauthorized()
    if response.status_code == 404:
        raise ResourceNotFound()

    line = status_line(response)
    try:
        payload = JSONAPIErrorResponse.model_validate_json(response.read())
    except ValidationError as exc:
        logger.debug("Undecodable error body for %s: %s", line, exc)
        raise GenericAPIError(response.status_code, status_line=line) from None

    if not payload.errors:
        raise GenericAPIError(response.status_code, status_line=line)

    raise GenericAPIError(response.status_code, payload.errors, status_line=line)
