"""Engine de migração: orquestrador e raiz de composição."""

from .engine import STRUCTURED_SINCE, MigrationEngine
from .factory import create_engine

__all__ = ["MigrationEngine", "STRUCTURED_SINCE", "create_engine"]
