"""Repository adapters - Account directory implementations."""

from .memory import InMemoryAccountDirectory
from .postgres import PostgresAccountDirectory, run_migrations

__all__ = ["InMemoryAccountDirectory", "PostgresAccountDirectory", "run_migrations"]
