# src/paramvault/core/config/defaults.py
"""Settings padrão do engine de migração (v1)."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict


DEFAULT_MAX_EVENTS = 1000

DEFAULT_SETTINGS: Dict[str, Any] = {
    "storage": {
        "migrations_dir": "migrations",
        "log_file": "migration-log.json",
        "backup_prefix": "pre-migration-backup-",
        "max_backups": 10,
    },
    "versions": {
        # versão assumida quando nem metadata nem config declaram versão
        "floor": "0.9.0",
    },
    "migration": {
        "strict_path": True,
    },
    "health": {
        "max_config_bytes": 50000,
        "secret_value_min_length": 20,
    },
    "logging": {
        # eventos retidos no MigrationContext; os mais antigos saem primeiro
        "max_events": DEFAULT_MAX_EVENTS,
    },
}


def default_settings() -> Dict[str, Any]:
    """Retorna uma cópia independente dos settings padrão."""
    return deepcopy(DEFAULT_SETTINGS)
