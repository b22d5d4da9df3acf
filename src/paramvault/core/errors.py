"""
paramvault — Canonical Error Structures (v1)

Este módulo define o payload canônico de erro do paramvault. Falhas
coletadas durante uma migração em lote são convertidas neste formato
para que o resultado do lote seja:

- explícito
- serializável
- atribuível a um provider específico
- acionável

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do paramvault.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Migração
TRANSFORM_FAILED = "TRANSFORM_FAILED"
NO_INVERSE_AVAILABLE = "NO_INVERSE_AVAILABLE"
MIGRATION_PATH_NOT_FOUND = "MIGRATION_PATH_NOT_FOUND"

# Persistência
BACKUP_FAILED = "BACKUP_FAILED"
MIGRATION_LOG_WRITE_FAILED = "MIGRATION_LOG_WRITE_FAILED"

# Engine
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def transform_failed(
    *,
    provider_id: Optional[str],
    migration_id: Optional[str],
    exc_message: str,
    hint: str = "Corrija a configuração armazenada ou a migração indicada e reexecute; a entrada permanece na versão original.",
) -> ErrorPayload:
    return ErrorPayload(
        type=TRANSFORM_FAILED,
        message="Transformação de migração falhou",
        details={
            "provider_id": provider_id,
            "migration_id": migration_id,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def migration_path_not_found(
    *,
    provider_id: Optional[str],
    from_version: str,
    to_version: str,
    hint: str = "Registre migrações contíguas cobrindo a janela de versões ou corrija a versão armazenada.",
) -> ErrorPayload:
    return ErrorPayload(
        type=MIGRATION_PATH_NOT_FOUND,
        message="Nenhum caminho de migração contíguo para a janela de versões",
        details={
            "provider_id": provider_id,
            "from_version": from_version,
            "to_version": to_version,
        },
        hint=hint,
    )


def backup_failed(
    *,
    exc_message: str,
    hint: str = "Verifique permissões e espaço do diretório de migrações; nenhuma configuração foi alterada.",
) -> ErrorPayload:
    return ErrorPayload(
        type=BACKUP_FAILED,
        message="Backup pré-migração falhou",
        details={"exc_message": exc_message},
        hint=hint,
    )


def migration_log_write_failed(
    *,
    exc_message: str,
    hint: str = "As configurações foram migradas, mas o registro no log não foi persistido.",
) -> ErrorPayload:
    return ErrorPayload(
        type=MIGRATION_LOG_WRITE_FAILED,
        message="Falha ao persistir o log de migrações",
        details={"exc_message": exc_message},
        hint=hint,
    )


def engine_execution_error(
    *,
    provider_id: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o log estruturado do contexto para diagnosticar a falha.",
) -> ErrorPayload:
    return ErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message="Falha inesperada durante a migração",
        details={
            "provider_id": provider_id,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )
