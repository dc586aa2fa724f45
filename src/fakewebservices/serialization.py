"""Request body encoding and response document decoding.

A request body is either a model instance or a list of instances of one
model class. The model class decides the wire encoding:

- fields marked with ``Primary``/``Attr`` -> JSON:API document;
- fields carrying a pydantic ``alias``/``serialization_alias`` -> plain JSON;
- neither -> JSON:API;
- both -> the model is ill-formed and serialization fails.

A model can also pin its encoding with a ``serialization_mode`` class
variable.
"""

from __future__ import annotations

import enum
import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from fakewebservices.errors import InvalidUsageError, MalformedPayloadError
from fakewebservices.schemas.jsonapi import (
    JSONAPIListResponse,
    JSONAPIResource,
    JSONAPISingleResponse,
    resource_fields,
)
from fakewebservices.schemas.pagination import Pagination, PaginationEnvelope

logger = logging.getLogger(__name__)


class SerializationMode(enum.Enum):
    JSON = "json"
    JSONAPI = "jsonapi"


def resolve_mode(model: type[BaseModel]) -> SerializationMode:
    """Decide how instances of ``model`` are written to a request body.

    Raises:
        InvalidUsageError: If the model mixes JSON:API markers and JSON aliases.
    """
    fields = resource_fields(model)
    jsonapi_fields = fields.count
    json_fields = sum(
        1
        for name, field in model.model_fields.items()
        if (field.alias or field.serialization_alias)
        and name != fields.primary_field
        and name not in fields.attributes
    )

    if jsonapi_fields and json_fields:
        raise InvalidUsageError(
            f"{model.__name__} can't use both json and jsonapi attributes"
        )

    declared = getattr(model, "serialization_mode", None)
    if isinstance(declared, SerializationMode):
        return declared

    return SerializationMode.JSON if json_fields else SerializationMode.JSONAPI


def serialize_request_body(body: Any) -> bytes:
    """Encode a model instance, or a list of them, as a request body.

    Raises:
        InvalidUsageError: If ``body`` is not a model instance or a non-empty
            list of instances of a single model class, or the model is
            ill-formed.
    """
    if isinstance(body, BaseModel):
        model = type(body)
    elif (
        isinstance(body, list)
        and body
        and all(isinstance(item, BaseModel) for item in body)
        and len({type(item) for item in body}) == 1
    ):
        model = type(body[0])
    else:
        raise InvalidUsageError(
            "DELETE/PATCH/POST/PUT body must be None, a model instance, "
            "or a list of instances of one model"
        )

    mode = resolve_mode(model)
    logger.debug("Serializing %s body as %s", model.__name__, mode.value)

    if mode is SerializationMode.JSON:
        if isinstance(body, list):
            return json.dumps(
                [item.model_dump(mode="json", by_alias=True) for item in body]
            ).encode()
        return body.model_dump_json(by_alias=True).encode()

    if isinstance(body, list):
        data: Any = [marshal_resource(item) for item in body]
    else:
        data = marshal_resource(body)
    return json.dumps({"data": data}).encode()


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return not value and isinstance(value, (str, int, float, list, dict))


def marshal_resource(obj: BaseModel) -> dict[str, Any]:
    """Build the JSON:API resource object for one model instance."""
    fields = resource_fields(type(obj))
    values = obj.model_dump(mode="json")

    resource: dict[str, Any] = {"type": fields.primary.type if fields.primary else ""}
    if fields.primary_field is not None and values[fields.primary_field]:
        resource["id"] = str(values[fields.primary_field])

    attributes: dict[str, Any] = {}
    for name, attr in fields.attributes.items():
        value = values[name]
        if attr.omitempty and _is_empty(value):
            continue
        attributes[attr.name] = value
    if attributes:
        resource["attributes"] = attributes

    return resource


def _resource_values(
    resource: JSONAPIResource, model: type[BaseModel]
) -> dict[str, Any]:
    """Map a resource object onto ``model`` field names."""
    fields = resource_fields(model)
    if fields.primary is None:
        raise InvalidUsageError(f"{model.__name__} has no Primary field to decode into")
    if resource.type != fields.primary.type:
        raise MalformedPayloadError(
            f"Trying to unmarshal an object of type {resource.type!r}, "
            f"but {model.__name__} expects {fields.primary.type!r}"
        )

    values: dict[str, Any] = {}
    if resource.id is not None:
        values[fields.primary_field] = resource.id
    for name, attr in fields.attributes.items():
        value = resource.attributes.get(attr.name)
        if value is not None:
            values[name] = value
    return values


def _validate(model: type[BaseModel], values: dict[str, Any]) -> BaseModel:
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise MalformedPayloadError(
            f"Invalid {model.__name__} attributes: {exc}"
        ) from exc


def unmarshal_payload(raw: bytes, destination: BaseModel) -> None:
    """Decode a single-resource document into ``destination`` in place.

    Attributes missing from the document, or sent as null, keep the value
    the destination already holds.
    """
    try:
        document = JSONAPISingleResponse.model_validate_json(raw)
    except ValidationError as exc:
        raise MalformedPayloadError(f"Invalid JSON:API document: {exc}") from exc

    model = type(destination)
    values = _resource_values(document.data, model)
    current = {name: getattr(destination, name) for name in model.model_fields}
    decoded = _validate(model, {**current, **values})

    for name in model.model_fields:
        setattr(destination, name, getattr(decoded, name))


def unmarshal_many_payload(raw: bytes, model: type[BaseModel]) -> list[BaseModel]:
    """Decode a collection document into new ``model`` instances, in order."""
    try:
        document = JSONAPIListResponse.model_validate_json(raw)
    except ValidationError as exc:
        raise MalformedPayloadError(f"Invalid JSON:API document: {exc}") from exc

    return [_validate(model, _resource_values(resource, model)) for resource in document.data]


def parse_pagination(raw: bytes) -> Pagination:
    """Read ``meta.pagination`` from a list document."""
    try:
        return PaginationEnvelope.model_validate_json(raw).pagination
    except ValidationError as exc:
        raise MalformedPayloadError(f"Invalid pagination details: {exc}") from exc
