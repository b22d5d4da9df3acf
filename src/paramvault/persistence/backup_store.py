"""Snapshots pré-migração das configurações (v1).

Antes de qualquer mutação em lote, o engine grava um snapshot completo do
mapa de configurações. Este módulo implementa a Store desses snapshots,
sem acoplamento com o engine.

Decisões (v1):
- Formato: JSON `{"timestamp", "configurations", "version"}`
- Nome determinístico: `<migrations_dir>/<prefix><timestamp ISO com ':' e '.' → '-'>.json`
- Retenção: mantém apenas os `max_backups` snapshots mais recentes
- Registro via Event Log do contexto (evento explícito)

Limites explícitos:
- Não restaura nada por conta própria (ver `MigrationEngine.restore_from_backup`)
- Falha de escrita aborta o lote (`BackupError`); falha de retenção só gera warning
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from paramvault.core.context import MigrationContext
from paramvault.core.exceptions import BackupError
from paramvault.core.model import StoredConfiguration
from paramvault.persistence.blob_store import BlobStore
from paramvault.persistence.config_store import ConfigurationStore


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def backup_file_name(prefix: str, ts: datetime) -> str:
    stamp = ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"{prefix}{stamp.replace(':', '-').replace('.', '-')}.json"


@dataclass(frozen=True)
class BackupInfo:
    """Metadata mínima (v1) de um snapshot existente."""

    file_name: str
    timestamp: Optional[str]
    size: int
    is_corrupted: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.file_name,
            "timestamp": self.timestamp,
            "size": self.size,
            "isCorrupted": self.is_corrupted,
        }


class BackupService:
    """Store canônica (v1) dos snapshots pré-migração."""

    def __init__(
        self,
        *,
        blob_store: BlobStore,
        directory: str = "migrations",
        prefix: str = "pre-migration-backup-",
        max_backups: int = 10,
        clock: Callable[[], datetime] = _utc_now,
        ctx: Optional[MigrationContext] = None,
    ):
        self.blob_store = blob_store
        self.directory = directory.strip("/")
        self.prefix = prefix
        self.max_backups = max_backups
        self.clock = clock
        self.ctx = ctx

    def _name(self, file_name: str) -> str:
        return f"{self.directory}/{file_name}" if self.directory else file_name

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def snapshot(self, store: ConfigurationStore, target_version: str) -> str:
        """Grava o snapshot de todas as configurações e retorna o caminho do artefato.

        Raises:
            BackupError: se a serialização ou a escrita falhar.
        """
        ts = self.clock()
        name = self._name(backup_file_name(self.prefix, ts))
        try:
            data = {
                "timestamp": ts.astimezone(timezone.utc).isoformat(),
                "configurations": {pid: stored.to_dict() for pid, stored in store.items()},
                "version": target_version,
            }
            raw = json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8")
            path = self.blob_store.write(name, raw)
        except (OSError, TypeError, ValueError) as e:
            raise BackupError(
                message=f"Failed to create backup: {e}",
                details={"name": name, "exc_type": e.__class__.__name__},
                hint="Verifique permissões e espaço do diretório de migrações.",
            ) from e

        if self.ctx is not None:
            self.ctx.log(
                scope="backup",
                level="info",
                message="pre-migration backup saved",
                path=path,
                configurations=len(data["configurations"]),
            )
        self._apply_retention()
        return path

    # ------------------------------------------------------------------
    # Listagem / leitura
    # ------------------------------------------------------------------
    def _backup_names(self) -> List[str]:
        return [n for n in self.blob_store.list(self._name(self.prefix)) if n.endswith(".json")]

    def list_backups(self) -> List[BackupInfo]:
        """Snapshots existentes, do mais recente ao mais antigo."""
        out: List[BackupInfo] = []
        for name in self._backup_names():
            file_name = name.rsplit("/", 1)[-1]
            timestamp: Optional[str] = None
            corrupted = False
            try:
                data = json.loads(self.blob_store.read(name).decode("utf-8"))
                if not isinstance(data, dict) or not isinstance(data.get("configurations"), dict):
                    corrupted = True
                else:
                    timestamp = data.get("timestamp")
            except (OSError, ValueError, UnicodeDecodeError):
                corrupted = True
            out.append(
                BackupInfo(
                    file_name=file_name,
                    timestamp=timestamp,
                    size=self.blob_store.size(name),
                    is_corrupted=corrupted,
                )
            )
        # o nome embute o timestamp ISO: ordem lexicográfica == cronológica
        out.sort(key=lambda b: b.file_name, reverse=True)
        return out

    def load_backup(self, file_name: str) -> Dict[str, StoredConfiguration]:
        """Lê um snapshot (nome do arquivo ou nome relativo) e devolve o mapa de configurações."""
        name = file_name if "/" in file_name else self._name(file_name)
        data = json.loads(self.blob_store.read(name).decode("utf-8"))
        if not isinstance(data, dict) or not isinstance(data.get("configurations"), dict):
            raise ValueError(f"Backup corrompido: {file_name}")
        return {pid: StoredConfiguration.from_dict(raw) for pid, raw in data["configurations"].items()}

    # ------------------------------------------------------------------
    # Retenção
    # ------------------------------------------------------------------
    def _apply_retention(self) -> None:
        if self.max_backups <= 0:
            return
        names = sorted(self._backup_names(), reverse=True)
        for name in names[self.max_backups:]:
            try:
                self.blob_store.delete(name)
            except OSError as e:
                if self.ctx is not None:
                    self.ctx.add_warning(scope="backup", message=f"Failed to delete old backup {name}: {e}")


__all__ = ["BackupInfo", "BackupService", "backup_file_name"]
