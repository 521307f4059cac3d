"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.config import DatabaseConfig
from contactbook.infrastructure.memory_repository import InMemoryContactRepository
from contactbook.infrastructure.persistence.sql_repository import (
    SqlContactRepository,
    create_engine_from_config,
    ensure_schema,
)

__all__ = [
    "DatabaseConfig",
    "InMemoryContactRepository",
    "SqlContactRepository",
    "create_engine_from_config",
    "ensure_schema",
]
