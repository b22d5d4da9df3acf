"""
Reparo automático de configurações (v1).

O AutoRepairer aplica apenas correções estruturais, não semânticas e
idempotentes sobre uma cópia de trabalho da configuração:

    1. versão desatualizada      → metadata.version/lastModified na versão corrente
    2. nomes duplicados          → remove a cópia do body (o header sempre vence;
                                   dentro do body vence a primeira ocorrência)
    3. containers vazios         → remove headerParameters/bodyParameters vazios
    4. checksum ausente          → calcula sobre o config final
       checksum desatualizado    → recalcula quando o reparo alterou o config

Decisões arquiteturais:
    - Nunca executa uma `Migration`: limpeza estrutural e evolução de schema
      são responsabilidades separadas
    - Tudo ou nada: em caso de falha, o original é devolvido intacto e
      `errors` é preenchido

Invariantes:
    - O valor de nenhuma chave sobrevivente é alterado
    - Reparar uma configuração já reparada não aplica nenhuma ação
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Tuple

from paramvault.core.integrity.checksum import compute_checksum
from paramvault.core.model import RepairResult, StoredConfiguration
from paramvault.core.versioning.version import Version


HEADER_KEY = "headerParameters"
BODY_KEY = "bodyParameters"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _body_duplicates(header: Dict[str, Any], body: Dict[str, Any]) -> List[str]:
    """Chaves do body a remover: colidem com o header ou com uma chave anterior do body."""
    seen = {str(k).casefold() for k in header}
    doomed: List[str] = []
    for key in body:
        folded = str(key).casefold()
        if folded in seen:
            doomed.append(key)
        else:
            seen.add(folded)
    return doomed


@dataclass
class AutoRepairer:
    current_version: Version
    version_of: Callable[[StoredConfiguration], Version]
    clock: Callable[[], datetime] = _utc_now

    def repair(self, provider_id: str, stored: StoredConfiguration) -> RepairResult:
        try:
            repaired, actions = self._repair(stored)
        except Exception as e:
            return RepairResult(
                success=False,
                repaired_config=stored,
                repairs_applied=[],
                errors=[f"Auto-repair failed for {provider_id}: {str(e) or e.__class__.__name__}"],
            )
        return RepairResult(success=True, repaired_config=repaired, repairs_applied=actions, errors=[])

    def _repair(self, stored: StoredConfiguration) -> Tuple[StoredConfiguration, List[str]]:
        work = stored.copy()
        config, metadata = work.config, work.metadata
        actions: List[str] = []
        config_changed = False

        version = self.version_of(stored)
        if version < self.current_version:
            metadata.version = str(self.current_version)
            metadata.last_modified = self.clock().isoformat()
            actions.append(f"Updated version from {version} to {self.current_version}")

        header = config.get(HEADER_KEY) if isinstance(config.get(HEADER_KEY), dict) else {}
        body = config.get(BODY_KEY)
        if isinstance(body, dict):
            for dup in _body_duplicates(header, body):
                del body[dup]
                config_changed = True
                actions.append(f"Removed duplicate parameter: {dup}")

        # depois da deduplicação: um body esvaziado também é removido
        for key, label in ((HEADER_KEY, "header"), (BODY_KEY, "body")):
            container = config.get(key)
            if isinstance(container, dict) and not container:
                del config[key]
                config_changed = True
                actions.append(f"Cleaned up empty {label} parameters object")

        if not metadata.checksum:
            metadata.checksum = compute_checksum(config)
            actions.append("Generated missing integrity checksum")
        elif config_changed:
            metadata.checksum = compute_checksum(config)
            actions.append("Refreshed integrity checksum")

        return work, actions
