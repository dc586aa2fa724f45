"""Generic CRUD service over one Fake Web Services resource collection.

Subclasses only name the collection path, the resource model, and a
label for log messages::

    class ServerService(ResourceService[Server]):
        path = "servers"
        model = Server
        label = "server"
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from fakewebservices.client import Client
from fakewebservices.errors import ResourceNotFound
from fakewebservices.schemas.pagination import Page

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResourceService(Generic[ModelT]):
    """Create, read, update, delete and list one kind of resource.

    Args:
        client: Client used for every request.
    """

    path: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    label: ClassVar[str]

    def __init__(self, client: Client) -> None:
        self.client = client

    def _resource_path(self, resource_id: str) -> str:
        return f"{self.path}/{resource_id}"

    def create(self, options: BaseModel) -> ModelT:
        """Create a resource and return it as stored by the backend."""
        request = self.client.new_request("POST", self.path, options)
        resource = self.model()

        logger.debug(
            "Creating new %s with name: %s", self.label, getattr(options, "name", None)
        )
        self.client.do(request, resource)
        return resource

    def read(self, resource_id: str) -> ModelT | None:
        """Fetch a resource by id.

        Returns:
            The resource, or None if the backend no longer knows it.
        """
        request = self.client.new_request("GET", self._resource_path(resource_id))
        resource = self.model()

        logger.debug("Reading %s: %s", self.label, resource_id)
        try:
            self.client.do(request, resource)
        except ResourceNotFound:
            logger.debug("%s %s no longer exists", self.label, resource_id)
            return None
        return resource

    def update(self, resource_id: str, options: BaseModel) -> ModelT:
        """Apply ``options`` to an existing resource and return the result."""
        request = self.client.new_request(
            "PATCH", self._resource_path(resource_id), options
        )
        resource = self.model()

        logger.debug("Updating %s: %s", self.label, resource_id)
        self.client.do(request, resource)
        return resource

    def delete(self, resource_id: str) -> None:
        request = self.client.new_request("DELETE", self._resource_path(resource_id))

        logger.debug("Destroying %s: %s", self.label, resource_id)
        self.client.do(request)

    def list_page(
        self,
        page_number: int | None = None,
        page_size: int | None = None,
    ) -> Page[ModelT]:
        """Fetch one page of the collection.

        Args:
            page_number: 1-based page to fetch; the backend default if None.
            page_size: Items per page; the backend default if None.
        """
        params: Mapping[str, Any] = {
            key: value
            for key, value in (("page[number]", page_number), ("page[size]", page_size))
            if value is not None
        }
        request = self.client.new_request("GET", self.path, params=params or None)
        page = Page[self.model]()

        logger.debug("Listing %s page %s", self.label, page_number or 1)
        self.client.do(request, page)
        return page
