"""
Tipos canônicos do paramvault.

Este módulo define as estruturas e enums que padronizam a comunicação
entre engine, auditoria, reparo, backup e log de migrações.

Componentes principais:
    - StoredConfiguration / ConfigurationMetadata → configuração persistida de um provider
    - ParameterConfig → visão estruturada (apenas na versão corrente)
    - MigrationInfo → registro append-only do log de migrações
    - Severity / HealthIssue / HealthReport → diagnóstico de saúde
    - IntegrityStatus → resultado tri-state da verificação de checksum
    - MigrationResult / RepairResult / MigrationStatus → resultados das operações

Princípios fundamentais:
    - Tipos são estáveis e serializáveis (`to_dict`/`from_dict`)
    - Layout persistido usa as chaves camelCase do formato em disco
    - Nenhuma lógica de migração vive neste módulo

Invariantes:
    - `config` é um mapa aberto: chaves desconhecidas nunca são descartadas
    - Campos de metadata ausentes são omitidos na serialização
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from paramvault.core.errors import ErrorPayload


class Severity(str, Enum):
    """
    Severidade de um problema de saúde.

    Valores ordenados do menos ao mais grave; `rank` permite comparação.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


class IntegrityStatus(str, Enum):
    """Resultado da verificação de checksum: igual, divergente ou ausente (não verificado)."""
    MATCH = "match"
    MISMATCH = "mismatch"
    ABSENT = "absent"


# ---------------------------------------------------------------------------
# Configuração persistida
# ---------------------------------------------------------------------------

@dataclass
class ConfigurationMetadata:
    version: Optional[str] = None
    created_at: Optional[str] = None
    last_modified: Optional[str] = None
    checksum: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.version is not None:
            out["version"] = self.version
        if self.created_at is not None:
            out["createdAt"] = self.created_at
        if self.last_modified is not None:
            out["lastModified"] = self.last_modified
        if self.checksum is not None:
            out["checksum"] = self.checksum
        return out

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ConfigurationMetadata":
        data = data or {}
        return cls(
            version=data.get("version") or None,
            created_at=data.get("createdAt"),
            last_modified=data.get("lastModified"),
            checksum=data.get("checksum") or None,
        )


@dataclass
class StoredConfiguration:
    """
    Conjunto de parâmetros persistido de um provider.

    `config` é mantido como mapa opaco versionado (headerParameters,
    bodyParameters, configVersion, ... ou o formato legado); a visão
    estruturada só existe na versão corrente (`ParameterConfig`).
    """

    config: Dict[str, Any] = field(default_factory=dict)
    metadata: ConfigurationMetadata = field(default_factory=ConfigurationMetadata)

    def copy(self) -> "StoredConfiguration":
        return StoredConfiguration(config=deepcopy(self.config), metadata=deepcopy(self.metadata))

    def header_parameters(self) -> Dict[str, Any]:
        value = self.config.get("headerParameters")
        return value if isinstance(value, dict) else {}

    def body_parameters(self) -> Dict[str, Any]:
        value = self.config.get("bodyParameters")
        return value if isinstance(value, dict) else {}

    def to_dict(self) -> Dict[str, Any]:
        return {"config": deepcopy(self.config), "metadata": self.metadata.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredConfiguration":
        if not isinstance(data, dict):
            raise TypeError(f"StoredConfiguration deve ser dict, recebido: {type(data).__name__}")
        return cls(
            config=deepcopy(data.get("config") or {}),
            metadata=ConfigurationMetadata.from_dict(data.get("metadata")),
        )


@dataclass(frozen=True)
class ParameterConfig:
    """Visão estruturada de uma configuração na versão corrente."""

    header_parameters: Dict[str, Any]
    body_parameters: Dict[str, Any]
    config_version: str
    last_modified: Optional[int] = None


# ---------------------------------------------------------------------------
# Log de migrações
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MigrationInfo:
    id: str
    version: str
    description: str
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "version": self.version,
            "description": self.description,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MigrationInfo":
        return cls(
            id=str(data.get("id", "")),
            version=str(data.get("version", "")),
            description=str(data.get("description", "")),
            date=str(data.get("date", "")),
        )


# ---------------------------------------------------------------------------
# Saúde
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthIssue:
    provider_id: str
    severity: Severity
    issue: str
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "providerId": self.provider_id,
            "severity": self.severity.value,
            "issue": self.issue,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class HealthSummary:
    total_configurations: int = 0
    healthy_configurations: int = 0
    configurations_with_issues: int = 0
    critical_issues: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalConfigurations": self.total_configurations,
            "healthyConfigurations": self.healthy_configurations,
            "configurationsWithIssues": self.configurations_with_issues,
            "criticalIssues": self.critical_issues,
        }


@dataclass(frozen=True)
class HealthReport:
    is_healthy: bool
    issues: List[HealthIssue] = field(default_factory=list)
    summary: HealthSummary = field(default_factory=HealthSummary)

    def issues_for(self, provider_id: str) -> List[HealthIssue]:
        return [i for i in self.issues if i.provider_id == provider_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isHealthy": self.is_healthy,
            "issues": [i.to_dict() for i in self.issues],
            "summary": self.summary.to_dict(),
        }


# ---------------------------------------------------------------------------
# Resultados de operações
# ---------------------------------------------------------------------------

@dataclass
class MigrationResult:
    """Resultado de uma migração em lote; nunca levantado, sempre retornado."""

    success: bool = True
    migrations_applied: int = 0
    errors: List[str] = field(default_factory=list)
    backup_path: Optional[str] = None
    failures: List[ErrorPayload] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "success": self.success,
            "migrationsApplied": self.migrations_applied,
            "errors": list(self.errors),
        }
        if self.backup_path is not None:
            out["backupPath"] = self.backup_path
        return out


@dataclass
class RepairResult:
    success: bool = False
    repaired_config: Optional[StoredConfiguration] = None
    repairs_applied: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class MigrationStatus:
    current_version: str
    target_version: str
    needs_migration: bool
    available_migrations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentVersion": self.current_version,
            "targetVersion": self.target_version,
            "needsMigration": self.needs_migration,
            "availableMigrations": list(self.available_migrations),
        }
