"""
MigrationContext — contexto canônico de execução do engine de migração.

Este módulo define o **MigrationContext**, a estrutura compartilhada por
uma instância do engine e seus colaboradores (log de migrações, backup,
auditoria, reparo).

O MigrationContext é o **único meio permitido** de:
- registro de logs estruturados de execução
- coleta de warnings não fatais (ex.: log de migrações ilegível)
- acesso aos settings efetivos da instância

Princípios fundamentais:
- Isolamento por instância (cada engine possui seu próprio contexto)
- Nenhum estado global: o contexto é criado na raiz de composição
"""

from __future__ import annotations

import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

from paramvault.core.config.defaults import DEFAULT_MAX_EVENTS, default_settings
from paramvault.core.config.hashing import compute_settings_hash


@dataclass
class MigrationContext:
    """
    Contexto de execução de uma instância do engine.

    Campos canônicos:
    - run_id: identificador único da instância
    - created_at: timestamp UTC de criação do contexto
    - settings: settings efetivos (defaults + overrides)
    - settings_hash: identidade SHA-256 dos settings
    - warnings: warnings por escopo (ex.: "migration_log", provider id)
    - events: log estruturado de eventos, limitado a `logging.max_events`
      (os mais antigos são descartados primeiro)
    """

    run_id: str
    created_at: str
    settings: Dict[str, Any]
    settings_hash: str = ""

    warnings: Dict[str, Deque[str]] = field(default_factory=dict)
    events: Deque[Dict[str, Any]] = field(default_factory=deque)

    def __post_init__(self) -> None:
        if not self.settings_hash:
            self.settings_hash = compute_settings_hash(self.settings)
        self.events = deque(self.events, maxlen=self.max_events)

    @classmethod
    def create(cls, *, settings: Optional[Dict[str, Any]] = None, run_id: Optional[str] = None) -> "MigrationContext":
        return cls(
            run_id=run_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc).isoformat(),
            settings=dict(settings) if settings is not None else default_settings(),
        )

    # -----------------------------
    # Settings
    # -----------------------------
    def setting(self, section: str, key: str, default: Any = None) -> Any:
        sect = (self.settings or {}).get(section, {}) or {}
        return sect.get(key, default)

    @property
    def max_events(self) -> int:
        return int(self.setting("logging", "max_events", DEFAULT_MAX_EVENTS))

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "scope": scope,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, scope: str, message: str) -> None:
        if scope not in self.warnings:
            self.warnings[scope] = deque(maxlen=self.max_events)
        self.warnings[scope].append(message)
        self.log(scope=scope, level="warning", message=message)

    def events_for(self, scope: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("scope") == scope]

    def drain_events(self) -> List[Dict[str, Any]]:
        """Retorna os eventos acumulados e esvazia o buffer."""
        drained = list(self.events)
        self.events.clear()
        return drained
