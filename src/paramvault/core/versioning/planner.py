"""
Planejador de caminhos de migração.

Este módulo valida e produz a sequência ordenada de migrações necessária
para levar uma configuração de uma versão a outra.

O planner opera exclusivamente em nível estrutural, analisando:
    - a janela de versões solicitada
    - a seleção de migrações contidas na janela
    - a contiguidade da cadeia resultante

Princípios fundamentais:
    - A mesma janela sempre produz a mesma cadeia
    - Nenhuma decisão silenciosa: em modo estrito, lacunas são erro

Decisões arquiteturais:
    - A seleção base é "faixa própria contida em [from, to]"
    - Em modo estrito a cadeia deve começar em `from`, terminar em `to`
      e encadear `to_version` → `from_version` sem saltos
    - Em modo não estrito a seleção é retornada como está (possivelmente vazia)

Limites explícitos:
    - Não executa transformações
    - Não interage com stores ou contexto
"""

from __future__ import annotations

from typing import List

from paramvault.core.exceptions import MigrationPathError

from .registry import Migration, MigrationRegistry
from .version import VersionLike, as_version


def _is_contiguous(chain: List[Migration], lo, hi) -> bool:
    if not chain:
        return False
    if chain[0].source != lo or chain[-1].target != hi:
        return False
    for prev, nxt in zip(chain, chain[1:]):
        if prev.target != nxt.source:
            return False
    return True


def plan_path(
    registry: MigrationRegistry,
    from_version: VersionLike,
    to_version: VersionLike,
    *,
    strict: bool = True,
) -> List[Migration]:
    """
    Produz a cadeia ascendente de migrações de `from_version` até `to_version`.

    Args:
        registry: Catálogo de migrações registradas.
        from_version: Versão de origem.
        to_version: Versão de destino.
        strict: Quando True, exige cadeia contígua cobrindo toda a janela.

    Returns:
        List[Migration]: Migrações em ordem ascendente; vazia quando from == to.

    Raises:
        MigrationPathError: Em modo estrito, quando a janela não alinha com
            as fronteiras registradas ou quando `from_version > to_version`.
    """
    lo, hi = as_version(from_version), as_version(to_version)

    if lo == hi:
        return []

    if lo > hi:
        if strict:
            raise MigrationPathError(
                f"No forward migration path from {lo} to {hi}",
                details={"from_version": str(lo), "to_version": str(hi)},
                hint="A versão armazenada é mais nova que a versão alvo",
            )
        return []

    chain = registry.within(lo, hi)

    if strict and not _is_contiguous(chain, lo, hi):
        raise MigrationPathError(
            f"No contiguous migration path from {lo} to {hi}",
            details={
                "from_version": str(lo),
                "to_version": str(hi),
                "selected": [m.id for m in chain],
            },
        )

    return chain


def plan_rollback(
    registry: MigrationRegistry,
    from_version: VersionLike,
    target_version: VersionLike,
    *,
    strict: bool = True,
) -> List[Migration]:
    """
    Cadeia descendente de migrações para voltar de `from_version` a `target_version`.

    As migrações são as mesmas de `plan_path(target, from)`, em ordem reversa.
    """
    lo, hi = as_version(target_version), as_version(from_version)
    if lo > hi:
        if strict:
            raise MigrationPathError(
                f"Rollback target {lo} is newer than {hi}",
                details={"from_version": str(hi), "to_version": str(lo)},
            )
        return []
    return list(reversed(plan_path(registry, lo, hi, strict=strict)))
