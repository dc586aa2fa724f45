"""Client configuration.

Settings are read from ``FWS_``-prefixed environment variables (or a
``.env`` file). The credentials file location also honours Terraform's
own ``TERRAFORM_CONFIG`` variable.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fakewebservices.client import DEFAULT_HOSTNAME
from fakewebservices.transport import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_WAIT_MAX,
    DEFAULT_WAIT_MIN,
    RetryPolicy,
)


class Settings(BaseSettings):
    """Connection settings loaded from environment variables with FWS_ prefix."""

    # API
    hostname: str = DEFAULT_HOSTNAME
    token: str = ""
    timeout: float = 10.0
    # Retries
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_wait_min: float = DEFAULT_WAIT_MIN
    retry_wait_max: float = DEFAULT_WAIT_MAX
    # Proxy for the default transport
    proxy: str | None = Field(
        default=None,
        validation_alias=AliasChoices("FWS_PROXY", "HTTPS_PROXY"),
    )
    # Credentials file override
    terraform_config: str = Field(
        default="",
        validation_alias=AliasChoices("FWS_TERRAFORM_CONFIG", "TERRAFORM_CONFIG"),
    )

    model_config = SettingsConfigDict(
        env_prefix="FWS_", env_file=".env", extra="ignore", populate_by_name=True
    )

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            wait_min=self.retry_wait_min,
            wait_max=self.retry_wait_max,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
