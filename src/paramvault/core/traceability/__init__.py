"""Rastreabilidade: log append-only de migrações aplicadas."""

from .migration_log import MigrationLog, make_entry

__all__ = ["MigrationLog", "make_entry"]
