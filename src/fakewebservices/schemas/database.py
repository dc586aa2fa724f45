"""Pydantic v2 models for database resources."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel

from fakewebservices.schemas.jsonapi import Attr, Primary

DATABASE_TYPE = "fake-resources-databases"


class Database(BaseModel):
    """A database as returned by the backend."""

    id: Annotated[str, Primary(DATABASE_TYPE)] = ""
    name: Annotated[str, Attr("name", omitempty=True)] = ""
    size: Annotated[int, Attr("size", omitempty=True)] = 0


class DatabaseCreateOptions(BaseModel):
    """Request body for creating a database. ``size`` is in GB."""

    id: Annotated[str, Primary(DATABASE_TYPE)] = ""
    name: Annotated[str | None, Attr("name")] = None
    size: Annotated[int | None, Attr("size")] = None


class DatabaseUpdateOptions(DatabaseCreateOptions):
    """Request body for updating a database."""
