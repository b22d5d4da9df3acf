"""Raiz de composição do engine de migração.

Monta, a partir dos settings efetivos, todos os colaboradores do engine:
contexto, registry, BlobStore em disco, log de migrações e backups.
Nenhum estado global: cada chamada produz uma instância independente.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from paramvault.core.config.defaults import default_settings
from paramvault.core.config.loader import load_settings
from paramvault.core.config.merge import deep_merge
from paramvault.core.context import MigrationContext
from paramvault.core.traceability.migration_log import MigrationLog
from paramvault.core.versioning.builtin import default_registry
from paramvault.core.versioning.registry import MigrationRegistry
from paramvault.persistence.backup_store import BackupService
from paramvault.persistence.blob_store import BlobStore, FileBlobStore

from .engine import MigrationEngine, _utc_now


def create_engine(
    *,
    root: Union[str, Path],
    settings: Optional[Dict[str, Any]] = None,
    settings_path: Optional[Union[str, Path]] = None,
    registry: Optional[MigrationRegistry] = None,
    blob_store: Optional[BlobStore] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> MigrationEngine:
    """
    Constrói um MigrationEngine pronto para `initialize()`.

    Args:
        root: Diretório raiz dos artefatos (log e backups ficam em `storage.migrations_dir`).
        settings: Overrides em memória, mesclados sobre os defaults.
        settings_path: Arquivo YAML/JSON de settings (deve existir se informado).
        registry: Catálogo de migrações; por padrão a cadeia embutida.
        blob_store: Store alternativa (ex.: fake em testes); por padrão FileBlobStore(root).
        clock: Relógio injetável (UTC).
    """
    effective = load_settings(defaults_path=settings_path) if settings_path is not None else default_settings()
    if settings:
        effective = deep_merge(effective, settings)

    ctx = MigrationContext.create(settings=effective)
    storage = effective.get("storage", {}) or {}
    migrations_dir = str(storage.get("migrations_dir", "migrations")).strip("/")
    log_file = str(storage.get("log_file", "migration-log.json"))

    if registry is None:
        registry = default_registry(floor=ctx.setting("versions", "floor", "0.9.0"))
    if blob_store is None:
        blob_store = FileBlobStore(root=root)
    clock = clock or _utc_now

    log = MigrationLog(
        blob_store=blob_store,
        name=f"{migrations_dir}/{log_file}" if migrations_dir else log_file,
        ctx=ctx,
    )
    backups = BackupService(
        blob_store=blob_store,
        directory=migrations_dir,
        prefix=str(storage.get("backup_prefix", "pre-migration-backup-")),
        max_backups=int(storage.get("max_backups", 10)),
        clock=clock,
        ctx=ctx,
    )
    return MigrationEngine(registry=registry, ctx=ctx, log=log, backups=backups, clock=clock)


__all__ = ["create_engine"]
