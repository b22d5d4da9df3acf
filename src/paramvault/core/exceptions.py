"""
paramvault — Canonical Exceptions (v1)

Exceções tipadas internas do engine de migração.

Objetivo:
- Permitir que registry, engine e stores levantem falhas semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload
- Evitar ValueError/RuntimeError genéricos nos caminhos críticos

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Mensagem curta e humana.
- Não são frozen: o interpretador atribui `__traceback__` durante a propagação
  (ex.: ao atravessar um `@contextmanager`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class ParamVaultException(Exception):
    """Base class para exceções internas do paramvault."""

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Registro de migrações
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class InitializationError(ParamVaultException):
    """Registro inválido de migração (id ou par de versões duplicado, faixa invertida)."""


# ---------------------------------------------------------------------------
# Execução de migrações
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class TransformError(ParamVaultException):
    """Transformação (forward ou inversa) falhou para uma configuração."""


@dataclass(eq=False)
class NoInverseError(ParamVaultException):
    """Rollback solicitado através de uma migração sem inversa registrada."""


@dataclass(eq=False)
class MigrationPathError(ParamVaultException):
    """Não existe caminho contíguo de migrações para a janela de versões pedida."""


# ---------------------------------------------------------------------------
# Persistência
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class BackupError(ParamVaultException):
    """Snapshot pré-migração não pôde ser persistido."""


@dataclass(eq=False)
class MigrationLogError(ParamVaultException):
    """Falha de escrita do log de migrações aplicadas."""
