"""Pydantic v2 models for VPC resources."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel

from fakewebservices.schemas.jsonapi import Attr, Primary

VPC_TYPE = "fake-resources-vpcs"


class Vpc(BaseModel):
    id: Annotated[str, Primary(VPC_TYPE)] = ""
    name: Annotated[str, Attr("name", omitempty=True)] = ""
    cidr_block: Annotated[str, Attr("cidr_block", omitempty=True)] = ""


class VpcCreateOptions(BaseModel):
    id: Annotated[str, Primary(VPC_TYPE)] = ""
    name: Annotated[str | None, Attr("name")] = None
    cidr_block: Annotated[str | None, Attr("cidr_block")] = None


class VpcUpdateOptions(VpcCreateOptions):
    pass
