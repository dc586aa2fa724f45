"""Pydantic v2 models for server resources."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel

from fakewebservices.schemas.jsonapi import Attr, Primary

SERVER_TYPE = "fake-resources-servers"


class Server(BaseModel):
    """A server as returned by the backend."""

    id: Annotated[str, Primary(SERVER_TYPE)] = ""
    name: Annotated[str, Attr("name", omitempty=True)] = ""
    server_type: Annotated[str, Attr("server-type", omitempty=True)] = ""
    vpc: Annotated[str, Attr("vpc", omitempty=True)] = ""


class ServerCreateOptions(BaseModel):
    """Request body for creating a server."""

    id: Annotated[str, Primary(SERVER_TYPE)] = ""
    name: Annotated[str | None, Attr("name")] = None
    server_type: Annotated[str | None, Attr("server-type")] = None
    vpc: Annotated[str | None, Attr("vpc")] = None


class ServerUpdateOptions(ServerCreateOptions):
    """Request body for updating a server."""
