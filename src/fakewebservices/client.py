"""HTTP client for the Fake Web Services JSON:API backend.

``Client.new_request`` builds an authenticated request for a path below
``https://<hostname>/api/fake-resources/``; ``Client.do`` sends it and
decodes the response into whatever destination the caller supplies:

- ``None``: nothing is decoded (e.g. DELETE);
- an object with a ``write`` method: the raw body is copied into it;
- a model with ``items`` and ``pagination`` fields (e.g. ``Page[Server]``):
  the body is decoded as a paginated collection;
- any other model instance: the body is decoded as a single resource.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, get_args, get_origin, runtime_checkable

import httpx
from pydantic import BaseModel

from fakewebservices.errors import (
    ConfigurationError,
    InvalidPathError,
    InvalidUsageError,
    TransportError,
    check_response,
)
from fakewebservices.serialization import (
    parse_pagination,
    serialize_request_body,
    unmarshal_many_payload,
    unmarshal_payload,
)
from fakewebservices.transport import RetryPolicy, RetryTransport

logger = logging.getLogger(__name__)

DEFAULT_HOSTNAME = "app.terraform.io"
API_PATH = "/api/fake-resources/"
JSONAPI_MEDIA_TYPE = "application/vnd.api+json"
WRITE_METHODS = ("DELETE", "PATCH", "POST", "PUT")
READ_METHODS = ("GET", "HEAD")


@runtime_checkable
class SupportsWrite(Protocol):
    """A raw byte sink, such as ``io.BytesIO`` or a file opened with ``"wb"``."""

    def write(self, data: bytes, /) -> Any: ...


def _base_url(hostname: str) -> httpx.URL:
    try:
        url = httpx.URL(f"https://{hostname}{API_PATH}")
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"invalid hostname: {hostname}") from exc
    if (
        not url.host
        or any(char.isspace() for char in hostname)
        or url.userinfo
        or url.path != API_PATH
        or url.query
        or url.fragment
    ):
        raise ConfigurationError(f"invalid hostname: {hostname}")
    return url


class Client:
    """Authenticated client for one Fake Web Services host.

    The configuration is fixed at construction time, so one instance can
    be shared by independent callers.

    Args:
        hostname: Host (optionally with port) serving the API.
        token: Bearer token sent with every request.
        transport: httpx transport to send requests through. Defaults to a
            ``RetryTransport`` over ``httpx.HTTPTransport(proxy=proxy)``.
            When given, ``retry_policy`` and ``proxy`` are not used; wrap
            it in a ``RetryTransport`` to keep retries.
        retry_policy: Retry policy for the default transport.
        proxy: Proxy URL for the default transport. Proxy environment
            variables are not read here; ``Settings.proxy`` picks up
            ``HTTPS_PROXY``.
        timeout: httpx timeout in seconds.

    Raises:
        ConfigurationError: If the hostname does not form a valid base URL
            or the token is empty.
    """

    def __init__(
        self,
        hostname: str,
        token: str,
        *,
        transport: httpx.BaseTransport | None = None,
        retry_policy: RetryPolicy | None = None,
        proxy: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = _base_url(hostname)
        if not token:
            raise ConfigurationError("missing API token")

        self.hostname = hostname
        self.token = token
        if transport is None:
            transport = RetryTransport(httpx.HTTPTransport(proxy=proxy), policy=retry_policy)
        self.http_client = httpx.Client(transport=transport, timeout=timeout)

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def new_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Request:
        """Build a request for ``path`` relative to the API base URL.

        Write methods send ``body`` (a model or list of models) encoded by
        ``serialize_request_body``; GET and HEAD never carry a body.

        Raises:
            InvalidPathError: If ``path`` is not a valid URL reference.
            InvalidUsageError: For an unsupported method or an invalid body.
        """
        method = method.upper()
        try:
            url = self.base_url.join(path)
        except httpx.InvalidURL as exc:
            raise InvalidPathError(f"invalid path {path!r}: {exc}") from exc

        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": JSONAPI_MEDIA_TYPE,
        }
        content: bytes | None = None

        if method in WRITE_METHODS:
            # Fixed even for plain-JSON bodies; the backend expects it.
            headers["Content-Type"] = JSONAPI_MEDIA_TYPE
            if body is not None:
                content = serialize_request_body(body)
        elif method not in READ_METHODS:
            raise InvalidUsageError(f"unsupported request method: {method}")

        return self.http_client.build_request(
            method, url, headers=headers, content=content, params=params
        )

    # ------------------------------------------------------------------
    # Execution and decoding
    # ------------------------------------------------------------------

    def do(self, request: httpx.Request, destination: Any = None) -> None:
        """Send ``request`` and decode the response into ``destination``.

        Raises:
            TransportError: If no response could be obtained or its body
                could not be read in full.
            Unauthorized: On 401.
            ResourceNotFound: On 404.
            GenericAPIError: On any other non-2xx status.
            InvalidUsageError: If ``destination`` has an unsupported shape.
            MalformedPayloadError: If the body does not decode into it.
        """
        logger.debug("%s %s", request.method, request.url)
        try:
            response = self.http_client.send(request, stream=True)
        except httpx.TransportError as exc:
            raise TransportError(f"{request.method} {request.url}: {exc}") from exc

        try:
            check_response(response)

            if destination is None:
                return

            if isinstance(destination, SupportsWrite):
                for chunk in response.iter_bytes():
                    destination.write(chunk)
                return

            self._decode(response, destination)
        except httpx.TransportError as exc:
            raise TransportError(
                f"{request.method} {request.url}: reading response body: {exc}"
            ) from exc
        finally:
            response.close()

    def _decode(self, response: httpx.Response, destination: Any) -> None:
        if not isinstance(destination, BaseModel):
            raise InvalidUsageError(
                "destination must be a model instance or a writable byte sink"
            )
        model = type(destination)
        if model.model_config.get("frozen"):
            raise InvalidUsageError(f"{model.__name__} is frozen and can't be decoded into")
        frozen = [name for name, field in model.model_fields.items() if field.frozen]
        if frozen:
            raise InvalidUsageError(
                f"{model.__name__} has frozen fields ({', '.join(frozen)}) "
                "and can't be decoded into"
            )

        fields = model.model_fields
        if "items" not in fields or "pagination" not in fields:
            unmarshal_payload(response.read(), destination)
            return

        item_model = _item_model(model)

        # Read once, decode twice: the primary data and meta.pagination are
        # independent views of the same document.
        raw = response.read()
        items = unmarshal_many_payload(raw, item_model)
        pagination = parse_pagination(raw)

        destination.items = items
        destination.pagination = pagination


def _item_model(model: type[BaseModel]) -> type[BaseModel]:
    """Return the element model declared by ``model.items``."""
    annotation = model.model_fields["items"].annotation
    if get_origin(annotation) not in (list, Sequence):
        raise InvalidUsageError(f"{model.__name__}.items must be a list")

    args = get_args(annotation)
    if not args or not isinstance(args[0], type) or not issubclass(args[0], BaseModel):
        raise InvalidUsageError(f"{model.__name__}.items must be a list of models")
    return args[0]
