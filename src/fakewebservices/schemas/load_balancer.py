"""Pydantic v2 models for load balancer resources."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

from fakewebservices.schemas.jsonapi import Attr, Primary

LOAD_BALANCER_TYPE = "fake-resources-load-balancers"


class LoadBalancer(BaseModel):
    """A load balancer and the names of the servers attached to it."""

    id: Annotated[str, Primary(LOAD_BALANCER_TYPE)] = ""
    name: Annotated[str, Attr("name", omitempty=True)] = ""
    servers: Annotated[list[str], Attr("servers", omitempty=True)] = Field(
        default_factory=list
    )


class LoadBalancerCreateOptions(BaseModel):
    """Request body for creating a load balancer."""

    id: Annotated[str, Primary(LOAD_BALANCER_TYPE)] = ""
    name: Annotated[str | None, Attr("name")] = None
    servers: Annotated[list[str] | None, Attr("servers")] = None


class LoadBalancerUpdateOptions(LoadBalancerCreateOptions):
    """Request body for updating a load balancer."""
