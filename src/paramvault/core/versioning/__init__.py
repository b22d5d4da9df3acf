"""
Versionamento de schema de configurações.

Componentes principais:
    - version  → value type `Version` com ordem total e parse defensivo
    - registry → descritores `Migration` e catálogo `MigrationRegistry`
    - planner  → cadeias contíguas de migração (forward e rollback)
    - builtin  → cadeia embutida 0.9.0 → 1.0.0 → 1.1.0 → 1.2.0
"""

from .builtin import builtin_migrations, default_registry
from .planner import plan_path, plan_rollback
from .registry import Migration, MigrationRegistry
from .version import Version, as_version

__all__ = [
    "Migration",
    "MigrationRegistry",
    "Version",
    "as_version",
    "builtin_migrations",
    "default_registry",
    "plan_path",
    "plan_rollback",
]
