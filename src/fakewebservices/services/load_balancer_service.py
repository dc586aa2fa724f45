"""Load balancer CRUD service."""

from __future__ import annotations

from collections.abc import Iterable

from fakewebservices.schemas.load_balancer import (
    LoadBalancer,
    LoadBalancerCreateOptions,
    LoadBalancerUpdateOptions,
)
from fakewebservices.services.base import ResourceService


def _server_names(servers: Iterable[str]) -> list[str]:
    # Blank names are dropped, like unset entries of a Terraform set.
    return [name for name in servers if name]


class LoadBalancerService(ResourceService[LoadBalancer]):
    """Load balancers reference their servers by name."""

    path = "load_balancers"
    model = LoadBalancer
    label = "load_balancer"

    def create_load_balancer(
        self, name: str, servers: Iterable[str] = ()
    ) -> LoadBalancer:
        return self.create(
            LoadBalancerCreateOptions(name=name, servers=_server_names(servers))
        )

    def update_load_balancer(
        self, load_balancer_id: str, name: str, servers: Iterable[str] = ()
    ) -> LoadBalancer:
        return self.update(
            load_balancer_id,
            LoadBalancerUpdateOptions(name=name, servers=_server_names(servers)),
        )
