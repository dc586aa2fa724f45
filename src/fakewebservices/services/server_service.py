"""Server CRUD service."""

from __future__ import annotations

from fakewebservices.schemas.server import Server, ServerCreateOptions, ServerUpdateOptions
from fakewebservices.services.base import ResourceService


class ServerService(ResourceService[Server]):
    """Servers live under ``servers/`` and may be placed in a VPC by name."""

    path = "servers"
    model = Server
    label = "server"

    def create_server(self, name: str, server_type: str, vpc: str = "") -> Server:
        return self.create(
            ServerCreateOptions(name=name, server_type=server_type, vpc=vpc)
        )

    def update_server(
        self, server_id: str, name: str, server_type: str, vpc: str = ""
    ) -> Server:
        return self.update(
            server_id,
            ServerUpdateOptions(name=name, server_type=server_type, vpc=vpc),
        )
