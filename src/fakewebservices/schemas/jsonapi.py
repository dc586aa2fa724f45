"""JSON:API envelope models and field markers using Pydantic v2.

The envelope models describe the documents exchanged with the Fake Web
Services backend: ``{ data: { type, id, attributes } }`` for single
resources, ``{ data: [...], meta: {...} }`` for collections and
``{ errors: [...] }`` for failures.

Resource models declare their JSON:API shape through ``Annotated``
markers on their fields::

    class Server(BaseModel):
        id: Annotated[str, Primary("fake-resources-servers")] = ""
        name: Annotated[str, Attr("name", omitempty=True)] = ""

Reference: https://jsonapi.org/format/
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Field markers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Primary:
    """Marks the field holding the resource id; carries the resource type."""

    type: str


@dataclass(frozen=True)
class Attr:
    """Marks a field serialized under ``attributes[name]``."""

    name: str
    omitempty: bool = False


@dataclass(frozen=True)
class ResourceFields:
    """The JSON:API markers found on a model class."""

    primary_field: str | None
    primary: Primary | None
    attributes: dict[str, Attr]

    @property
    def count(self) -> int:
        return len(self.attributes) + (1 if self.primary else 0)


@lru_cache(maxsize=None)
def resource_fields(model: type[BaseModel]) -> ResourceFields:
    """Collect the ``Primary``/``Attr`` markers declared on ``model``."""
    primary_field: str | None = None
    primary: Primary | None = None
    attributes: dict[str, Attr] = {}

    for name, field in model.model_fields.items():
        for marker in field.metadata:
            if isinstance(marker, Primary):
                primary_field, primary = name, marker
            elif isinstance(marker, Attr):
                attributes[name] = marker

    return ResourceFields(primary_field, primary, attributes)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class JSONAPIResource(BaseModel):
    """A single JSON:API resource object with type, id, and attributes."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    type: str
    id: str | None = None
    attributes: dict[str, Any] = {}
    relationships: dict[str, Any] | None = None


class JSONAPISingleResponse(BaseModel):
    """JSON:API document containing a single resource."""

    data: JSONAPIResource


class JSONAPIListResponse(BaseModel):
    """JSON:API document containing a list of resources."""

    data: list[JSONAPIResource]
    meta: dict[str, Any] | None = None
    links: dict[str, Any] | None = None


class JSONAPIError(BaseModel):
    """A single JSON:API error object."""

    status: str | int | None = None
    title: str = ""
    detail: str | None = None
    source: dict[str, Any] | None = None


class JSONAPIErrorResponse(BaseModel):
    """JSON:API document containing a list of errors."""

    errors: list[JSONAPIError] = []
