"""Builds a configured Client and lists the resource services it serves."""

from __future__ import annotations

import logging

import httpx

from fakewebservices.client import Client
from fakewebservices.config import Settings, get_settings
from fakewebservices.credentials import cli_credentials
from fakewebservices.services.base import ResourceService
from fakewebservices.services.database_service import DatabaseService
from fakewebservices.services.load_balancer_service import LoadBalancerService
from fakewebservices.services.server_service import ServerService
from fakewebservices.services.vpc_service import VpcService

logger = logging.getLogger(__name__)

RESOURCES: dict[str, type[ResourceService]] = {
    "fakewebservices_server": ServerService,
    "fakewebservices_database": DatabaseService,
    "fakewebservices_load_balancer": LoadBalancerService,
    "fakewebservices_vpc": VpcService,
}


def configure_client(
    settings: Settings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> Client:
    """Create a Client from settings.

    The token comes from ``settings.token`` when set, otherwise from the
    CLI credentials file entry for the configured hostname.

    Raises:
        ConfigurationError: If the hostname is invalid or no token was found.
    """
    settings = settings or get_settings()

    token = settings.token
    if not token:
        logger.debug("No token configured, reading CLI credentials for %s", settings.hostname)
        credentials = cli_credentials(settings.terraform_config or None)
        token = credentials.token_for(settings.hostname)

    return Client(
        settings.hostname,
        token,
        transport=transport,
        retry_policy=settings.retry_policy(),
        proxy=settings.proxy or None,
        timeout=settings.timeout,
    )


def service_for(client: Client, resource_name: str) -> ResourceService:
    """Instantiate the service handling a provider resource name.

    Raises:
        KeyError: If the resource name is unknown.
    """
    return RESOURCES[resource_name](client)
