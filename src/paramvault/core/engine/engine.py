# src/paramvault/core/engine/engine.py
"""
Engine de migração de configurações do paramvault.

O engine orquestra registry, planner, backup, log de migrações, auditoria
e reparo sobre um mapa `providerId → StoredConfiguration` que pertence ao
chamador (acessado apenas por `items/get/set`).

Guardrails:
- Migração em lote NUNCA levanta: toda falha vira texto em `errors` e
  `ErrorPayload` serializável em `failures`.
- Backup antes de qualquer mutação; se o backup falhar, nada é alterado.
- Falha em uma entrada não interrompe as demais; a entrada permanece na
  versão original e será tentada de novo na próxima chamada.
- Operações de entrada única (`migrate_configuration`,
  `rollback_configuration`) levantam exceções tipadas.

Limites explícitos:
- Execução sequencial, sem workers nem locks.
- Sem cancelamento no meio do lote.
"""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List

from paramvault.core.audit.health import HealthAuditor
from paramvault.core.context import MigrationContext
from paramvault.core.errors import (
    ErrorPayload,
    backup_failed,
    engine_execution_error,
    migration_log_write_failed,
    migration_path_not_found,
    transform_failed,
)
from paramvault.core.exceptions import (
    BackupError,
    MigrationLogError,
    MigrationPathError,
    NoInverseError,
    TransformError,
)
from paramvault.core.integrity.checksum import compute_checksum, verify_checksum
from paramvault.core.model import (
    HealthReport,
    IntegrityStatus,
    MigrationInfo,
    MigrationResult,
    MigrationStatus,
    ParameterConfig,
    RepairResult,
    StoredConfiguration,
)
from paramvault.core.repair.auto_repair import AutoRepairer
from paramvault.core.traceability.migration_log import MigrationLog, make_entry
from paramvault.core.versioning.builtin import BODY_KEY, HEADER_KEY, TIMESTAMP_KEY, VERSION_KEY
from paramvault.core.versioning.planner import plan_path, plan_rollback
from paramvault.core.versioning.registry import Migration, MigrationRegistry
from paramvault.core.versioning.version import Version, VersionLike, as_version
from paramvault.persistence.backup_store import BackupService
from paramvault.persistence.config_store import StoreLike, as_store


# primeira versão com headerParameters/bodyParameters obrigatórios
STRUCTURED_SINCE = Version(1, 0, 0)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _reason(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class MigrationEngine:
    """Engine canônico de migração (planner + executor + diagnóstico)."""

    def __init__(
        self,
        *,
        registry: MigrationRegistry,
        ctx: MigrationContext,
        log: MigrationLog,
        backups: BackupService,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.registry = registry
        self.ctx = ctx
        self.log = log
        self.backups = backups
        self.clock = clock

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def _strict(self) -> bool:
        return bool(self.ctx.setting("migration", "strict_path", True))

    def floor_version(self) -> Version:
        return as_version(self.ctx.setting("versions", "floor", self.registry.floor))

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------
    def initialize(self) -> None:
        """Carrega o log de migrações aplicadas. Log ilegível vira warning, nunca erro."""
        entries = self.log.load()
        self.ctx.log(
            scope="engine",
            level="info",
            message="migration engine initialized",
            current_version=str(self.current_version()),
            registered=len(self.registry),
            applied=len(entries),
        )

    # ------------------------------------------------------------------
    # Versões
    # ------------------------------------------------------------------
    def current_version(self) -> Version:
        return self.registry.current_version()

    def version_of(self, stored: StoredConfiguration) -> Version:
        """metadata.version, senão config.configVersion, senão a versão piso."""
        if stored.metadata.version:
            return as_version(stored.metadata.version)
        declared = stored.config.get(VERSION_KEY) if isinstance(stored.config, dict) else None
        if isinstance(declared, str) and declared.strip():
            return as_version(declared)
        return self.floor_version()

    def path_for(self, from_version: VersionLike, to_version: VersionLike) -> List[Migration]:
        return plan_path(self.registry, from_version, to_version, strict=self._strict())

    def needs_migration(self, store: StoreLike) -> bool:
        current = self.current_version()
        return any(self.version_of(stored) != current for _, stored in as_store(store).items())

    # ------------------------------------------------------------------
    # Migração de entrada única
    # ------------------------------------------------------------------
    def migrate_configuration(self, stored: StoredConfiguration) -> StoredConfiguration:
        """
        Leva uma configuração até a versão corrente.

        Retorna o MESMO objeto quando já está na versão corrente. Caso
        contrário, aplica a cadeia sobre uma cópia de trabalho, atualizando
        metadata.version/lastModified a cada passo.

        Raises:
            TransformError: se alguma transformação falhar.
            MigrationPathError: em modo estrito, se não houver cadeia contígua.
        """
        source = self.version_of(stored)
        target = self.current_version()
        if source == target:
            return stored

        chain = self.path_for(source, target)
        work = stored.copy()
        for migration in chain:
            work.config = self._apply(migration, migration.transform, work.config, label="Migration")
            work.metadata.version = migration.to_version
            work.metadata.last_modified = self.clock().isoformat()
            self.ctx.log(
                scope="engine",
                level="info",
                message=f"Applied migration {migration.id} to configuration",
                migration_id=migration.id,
            )

        self._refresh_checksum(work)
        return work

    def rollback_configuration(self, stored: StoredConfiguration, target_version: VersionLike) -> StoredConfiguration:
        """
        Desfaz migrações até `target_version`, em ordem descendente.

        Tudo ou nada: as inversas rodam sobre uma cópia de trabalho e o
        resultado só é devolvido se toda a cadeia for aplicada. A entrada
        nunca é mutada.

        Raises:
            NoInverseError: se alguma migração da janela não tiver inversa.
            TransformError: se alguma inversa falhar.
            MigrationPathError: em modo estrito, janela sem cadeia contígua.
        """
        source = self.version_of(stored)
        target = as_version(target_version)
        if source == target:
            return stored

        chain = plan_rollback(self.registry, source, target, strict=self._strict())
        for migration in chain:
            if migration.inverse is None:
                raise NoInverseError(
                    f"Migration {migration.id} does not support rollback",
                    details={"migration_id": migration.id, "from_version": str(source), "to_version": str(target)},
                    hint="Restaure a configuração a partir de um backup pré-migração.",
                )

        work = stored.copy()
        for migration in chain:
            work.config = self._apply(migration, migration.inverse, work.config, label="Rollback")
            work.metadata.version = migration.from_version
            work.metadata.last_modified = self.clock().isoformat()
            self.ctx.log(
                scope="engine",
                level="info",
                message=f"Applied rollback {migration.id} to configuration",
                migration_id=migration.id,
            )

        self._refresh_checksum(work)
        return work

    def _apply(self, migration: Migration, fn: Any, config: Dict[str, Any], *, label: str) -> Dict[str, Any]:
        try:
            out = fn(deepcopy(config))
        except Exception as e:
            raise TransformError(
                f"{label} {migration.id} failed: {_reason(e)}",
                details={"migration_id": migration.id, "exc_type": e.__class__.__name__},
            ) from e
        if not isinstance(out, dict):
            raise TransformError(
                f"{label} {migration.id} failed: transform returned {type(out).__name__}, expected dict",
                details={"migration_id": migration.id},
            )
        return out

    def _refresh_checksum(self, work: StoredConfiguration) -> None:
        # checksum ausente continua ausente ("não verificado")
        if work.metadata.checksum:
            work.metadata.checksum = compute_checksum(work.config)

    # ------------------------------------------------------------------
    # Migração em lote
    # ------------------------------------------------------------------
    def migrate_configurations(self, store: StoreLike) -> MigrationResult:
        """
        Migra todas as configurações do mapa. Nunca levanta.

        Sequência: snapshot → migração por entrada (falhas coletadas) →
        entrada-resumo no log quando ao menos uma configuração foi migrada.
        """
        result = MigrationResult()
        target = str(self.current_version())

        try:
            configurations = as_store(store)
            result.backup_path = self.backups.snapshot(configurations, target)
        except BackupError as e:
            return self._abort(result, e, backup_failed(exc_message=_reason(e)))
        except Exception as e:
            return self._abort(result, e, engine_execution_error(exc_type=e.__class__.__name__, exc_message=_reason(e)))

        try:
            for provider_id, stored in configurations.items():
                try:
                    migrated = self.migrate_configuration(stored)
                except Exception as e:
                    result.success = False
                    result.errors.append(f"Failed to migrate configuration for {provider_id}: {_reason(e)}")
                    result.failures.append(self._exception_to_error(e, provider_id=provider_id, stored=stored))
                    self.ctx.log(
                        scope=provider_id,
                        level="error",
                        message="configuration migration failed",
                        error=_reason(e),
                    )
                    continue

                if migrated is not stored:
                    configurations.set(provider_id, migrated)
                    result.migrations_applied += 1

            if result.migrations_applied > 0:
                self.log.append(make_entry(version=target, count=result.migrations_applied, now=self.clock()))
        except MigrationLogError as e:
            return self._abort(result, e, migration_log_write_failed(exc_message=_reason(e)))
        except Exception as e:
            return self._abort(result, e, engine_execution_error(exc_type=e.__class__.__name__, exc_message=_reason(e)))

        self.ctx.log(
            scope="engine",
            level="info" if result.success else "warning",
            message="batch migration finished",
            migrations_applied=result.migrations_applied,
            errors=len(result.errors),
            backup_path=result.backup_path,
        )
        return result

    def _abort(self, result: MigrationResult, exc: Exception, payload: ErrorPayload) -> MigrationResult:
        result.success = False
        result.errors.append(f"Migration failed: {_reason(exc)}")
        result.failures.append(payload)
        self.ctx.log(scope="engine", level="error", message="batch migration aborted", error=_reason(exc))
        return result

    def _exception_to_error(self, exc: Exception, *, provider_id: str, stored: StoredConfiguration) -> ErrorPayload:
        """Converte a falha de uma entrada em ErrorPayload (serializável, sem stack trace)."""
        if isinstance(exc, TransformError):
            return transform_failed(
                provider_id=provider_id,
                migration_id=exc.details.get("migration_id"),
                exc_message=exc.message,
            )
        if isinstance(exc, MigrationPathError):
            return migration_path_not_found(
                provider_id=provider_id,
                from_version=str(self.version_of(stored)),
                to_version=str(self.current_version()),
            )
        return engine_execution_error(
            provider_id=provider_id,
            exc_type=exc.__class__.__name__,
            exc_message=_reason(exc),
        )

    # ------------------------------------------------------------------
    # Diagnóstico e reparo
    # ------------------------------------------------------------------
    def validate_configuration_health(self, store: StoreLike) -> HealthReport:
        auditor = HealthAuditor(
            current_version=self.current_version(),
            version_of=self.version_of,
            max_config_bytes=int(self.ctx.setting("health", "max_config_bytes", 50000)),
            secret_value_min_length=int(self.ctx.setting("health", "secret_value_min_length", 20)),
        )
        report = auditor.audit(as_store(store).items())
        self.ctx.log(
            scope="health",
            level="info" if report.is_healthy else "warning",
            message="configuration health audited",
            **report.summary.to_dict(),
        )
        return report

    def auto_repair_configuration(self, provider_id: str, stored: StoredConfiguration) -> RepairResult:
        repairer = AutoRepairer(current_version=self.current_version(), version_of=self.version_of, clock=self.clock)
        result = repairer.repair(provider_id, stored)
        if result.success:
            self.ctx.log(scope=provider_id, level="info", message="auto-repair finished", repairs=list(result.repairs_applied))
        else:
            for err in result.errors:
                self.ctx.add_warning(scope=provider_id, message=err)
        return result

    def verify_configuration(self, stored: StoredConfiguration) -> IntegrityStatus:
        return verify_checksum(stored)

    def validate_migrated_configuration(self, config: Dict[str, Any]) -> bool:
        """
        Checagem estrutural mínima, consultada sob demanda (a migração não a aplica).

        A partir de 1.0.0 exige headerParameters/bodyParameters como dict e
        configVersion string; versões anteriores ou desconhecidas passam.
        """
        if not isinstance(config, dict):
            return False
        declared = config.get(VERSION_KEY)
        if not isinstance(declared, str):
            return True
        version = as_version(declared)
        if version < STRUCTURED_SINCE or version > self.current_version():
            return True
        return isinstance(config.get(HEADER_KEY), dict) and isinstance(config.get(BODY_KEY), dict)

    def structured_view(self, stored: StoredConfiguration) -> ParameterConfig:
        """Visão estruturada; disponível apenas na versão corrente."""
        version = self.version_of(stored)
        if version != self.current_version():
            raise MigrationPathError(
                f"Configuration at {version} must be migrated to {self.current_version()} before structured access",
                details={"from_version": str(version), "to_version": str(self.current_version())},
            )
        last_modified = stored.config.get(TIMESTAMP_KEY)
        return ParameterConfig(
            header_parameters=dict(stored.header_parameters()),
            body_parameters=dict(stored.body_parameters()),
            config_version=str(version),
            last_modified=last_modified if isinstance(last_modified, int) else None,
        )

    # ------------------------------------------------------------------
    # Status e introspecção
    # ------------------------------------------------------------------
    def get_migration_status(self, stored: StoredConfiguration) -> MigrationStatus:
        current = self.version_of(stored)
        target = self.current_version()
        available = [m.id for m in self.registry.within(current, target)] if current < target else []
        return MigrationStatus(
            current_version=str(current),
            target_version=str(target),
            needs_migration=current != target,
            available_migrations=available,
        )

    def get_available_migrations(self) -> List[Migration]:
        return self.registry.list()

    def get_applied_migrations(self) -> List[MigrationInfo]:
        return self.log.entries()

    # ------------------------------------------------------------------
    # Backups
    # ------------------------------------------------------------------
    def restore_from_backup(self, file_name: str, store: StoreLike) -> int:
        """Restaura todas as configurações de um snapshot no mapa do chamador."""
        configurations = as_store(store)
        restored = self.backups.load_backup(file_name)
        for provider_id, stored in restored.items():
            configurations.set(provider_id, stored)
        self.ctx.log(
            scope="backup",
            level="info",
            message="configurations restored from backup",
            file_name=file_name,
            restored=len(restored),
        )
        return len(restored)


__all__ = ["MigrationEngine", "STRUCTURED_SINCE"]
