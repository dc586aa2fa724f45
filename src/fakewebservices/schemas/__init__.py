"""Pydantic schemas for JSON:API documents and Fake Web Services resources."""

from fakewebservices.schemas.database import (
    Database,
    DatabaseCreateOptions,
    DatabaseUpdateOptions,
)
from fakewebservices.schemas.jsonapi import (
    Attr,
    JSONAPIError,
    JSONAPIErrorResponse,
    JSONAPIListResponse,
    JSONAPIResource,
    JSONAPISingleResponse,
    Primary,
)
from fakewebservices.schemas.load_balancer import (
    LoadBalancer,
    LoadBalancerCreateOptions,
    LoadBalancerUpdateOptions,
)
from fakewebservices.schemas.pagination import Page, Pagination
from fakewebservices.schemas.server import Server, ServerCreateOptions, ServerUpdateOptions
from fakewebservices.schemas.vpc import Vpc, VpcCreateOptions, VpcUpdateOptions

__all__ = [
    "Attr",
    "Database",
    "DatabaseCreateOptions",
    "DatabaseUpdateOptions",
    "JSONAPIError",
    "JSONAPIErrorResponse",
    "JSONAPIListResponse",
    "JSONAPIResource",
    "JSONAPISingleResponse",
    "LoadBalancer",
    "LoadBalancerCreateOptions",
    "LoadBalancerUpdateOptions",
    "Page",
    "Pagination",
    "Primary",
    "Server",
    "ServerCreateOptions",
    "ServerUpdateOptions",
    "Vpc",
    "VpcCreateOptions",
    "VpcUpdateOptions",
]
