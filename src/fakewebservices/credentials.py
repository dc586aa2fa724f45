"""Terraform CLI credentials file loader.

Reads API tokens from ``credentials.tfrc.json``::

    {"credentials": {"app.terraform.io": {"token": "..."}}}

The file is looked up at ``$TERRAFORM_CONFIG`` if set, otherwise at
``~/.terraform.d/credentials.tfrc.json``. A missing or unreadable file
is not fatal: it is logged and treated as holding no credentials.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class Credential(BaseModel):
    token: str = ""


class Credentials(BaseModel):
    """Tokens keyed by hostname."""

    credentials: dict[str, Credential] = {}

    def token_for(self, hostname: str) -> str:
        credential = self.credentials.get(hostname)
        return credential.token if credential else ""


def home_dir() -> Path:
    """Return the user's home directory, preferring ``$HOME``."""
    home = os.environ.get("HOME")
    if home:
        return Path(home)
    return Path.home()


def config_file() -> Path:
    return home_dir() / ".terraform.d" / "credentials.tfrc.json"


def cli_credentials(path: str | os.PathLike[str] | None = None) -> Credentials:
    """Load the CLI credentials file, returning empty credentials on failure."""
    if path is None:
        path = os.environ.get("TERRAFORM_CONFIG")
    if not path:
        try:
            path = config_file()
        except RuntimeError as exc:
            logger.error("Error detecting default CLI config file path: %s", exc)
            return Credentials()

    config_path = Path(path)
    try:
        content = config_path.read_bytes()
    except OSError as exc:
        logger.error("Error reading the CLI config file %s: %s", config_path, exc)
        return Credentials()

    try:
        return Credentials.model_validate_json(content)
    except ValidationError as exc:
        logger.error("Error unmarshalling the CLI config file %s: %s", config_path, exc)
        return Credentials()
