"""
Log append-only de migrações aplicadas (v1).

O log é um array JSON de `MigrationInfo` (`{id, version, description, date}`)
persistido como um único blob (por padrão `migrations/migration-log.json`).

Decisões arquiteturais:
    - Leitura tolerante: log inexistente é um log vazio; log ilegível
      gera warning no contexto e também é tratado como vazio
    - Escrita estrita: toda falha de escrita vira `MigrationLogError`
    - Cada `append` reescreve o array completo (indent 2)

Invariantes:
    - Entradas nunca são removidas nem reordenadas
    - `entries()` devolve uma cópia; o estado interno não vaza

Limites explícitos:
    - Não deduplica entradas
    - Não coordena escritores concorrentes
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import List, Optional

from paramvault.core.context import MigrationContext
from paramvault.core.exceptions import MigrationLogError
from paramvault.core.model import MigrationInfo
from paramvault.persistence.blob_store import BlobNotFoundError, BlobStore


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Timestamps sem timezone são assumidos como UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def make_entry(*, version: str, count: int, now: datetime) -> MigrationInfo:
    """Entrada-resumo de um lote: `migration-<epoch ms>`, "Migrated N configurations"."""
    ts = _ensure_tzaware_utc(now)
    return MigrationInfo(
        id=f"migration-{int(ts.timestamp() * 1000)}",
        version=version,
        description=f"Migrated {count} configurations",
        date=_iso(ts),
    )


class MigrationLog:
    """Log persistido de migrações aplicadas."""

    def __init__(self, *, blob_store: BlobStore, name: str, ctx: Optional[MigrationContext] = None):
        self.blob_store = blob_store
        self.name = name
        self.ctx = ctx
        self._entries: List[MigrationInfo] = []

    def load(self) -> List[MigrationInfo]:
        """Carrega o log do blob; nunca levanta."""
        try:
            raw = self.blob_store.read(self.name)
        except BlobNotFoundError:
            self._entries = []
            return []
        except OSError as e:
            self._warn(f"Failed to read migration log: {e}")
            self._entries = []
            return []

        try:
            data = json.loads(raw.decode("utf-8"))
            if not isinstance(data, list):
                raise ValueError(f"expected JSON array, got {type(data).__name__}")
            self._entries = [MigrationInfo.from_dict(item) for item in data if isinstance(item, dict)]
        except (ValueError, UnicodeDecodeError) as e:
            self._warn(f"Failed to read migration log: {e}")
            self._entries = []

        if self.ctx is not None:
            self.ctx.log(
                scope="migration_log",
                level="info",
                message="migration log loaded",
                entries=len(self._entries),
            )
        return list(self._entries)

    def append(self, info: MigrationInfo) -> None:
        """Acrescenta `info` e reescreve o blob; falhas de escrita → MigrationLogError."""
        entries = self._entries + [info]
        payload = json.dumps([e.to_dict() for e in entries], ensure_ascii=False, indent=2)
        try:
            self.blob_store.write(self.name, payload.encode("utf-8"))
        except OSError as e:
            raise MigrationLogError(
                message=f"Failed to save migration log: {e}",
                details={"name": self.name, "entry_id": info.id},
                hint="Verifique permissões do diretório de migrações.",
            ) from e
        # só após a escrita: falha não deixa entrada fantasma em memória
        self._entries = entries

    def entries(self) -> List[MigrationInfo]:
        return list(self._entries)

    def _warn(self, message: str) -> None:
        if self.ctx is not None:
            self.ctx.add_warning(scope="migration_log", message=message)


__all__ = ["MigrationLog", "make_entry"]
