"""VPC CRUD service."""

from __future__ import annotations

from fakewebservices.schemas.vpc import Vpc, VpcCreateOptions, VpcUpdateOptions
from fakewebservices.services.base import ResourceService


class VpcService(ResourceService[Vpc]):
    path = "vpcs"
    model = Vpc
    label = "vpc"

    def create_vpc(self, name: str, cidr_block: str) -> Vpc:
        return self.create(VpcCreateOptions(name=name, cidr_block=cidr_block))

    def update_vpc(self, vpc_id: str, name: str, cidr_block: str) -> Vpc:
        return self.update(vpc_id, VpcUpdateOptions(name=name, cidr_block=cidr_block))
