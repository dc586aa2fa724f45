"""Database CRUD service."""

from __future__ import annotations

from fakewebservices.schemas.database import (
    Database,
    DatabaseCreateOptions,
    DatabaseUpdateOptions,
)
from fakewebservices.services.base import ResourceService


class DatabaseService(ResourceService[Database]):
    path = "databases"
    model = Database
    label = "database"

    def create_database(self, name: str, size: int) -> Database:
        """Create a database of ``size`` GB."""
        return self.create(DatabaseCreateOptions(name=name, size=size))

    def update_database(self, database_id: str, name: str, size: int) -> Database:
        return self.update(database_id, DatabaseUpdateOptions(name=name, size=size))
