"""
Registro estrutural de migrações de schema.

Este módulo define o `Migration` (descritor imutável de uma transformação
entre duas versões adjacentes) e o `MigrationRegistry`, responsável por
registrar migrações e validar a integridade estrutural do catálogo antes
de qualquer execução.

O registry atua como uma camada de proteção antecipada, garantindo que:
    - cada migração possua um identificador válido e único
    - não existam dois registros para o mesmo par (from, to)
    - toda migração avance a versão (from < to)
    - a ordem de registro seja preservada

Decisões arquiteturais:
    - O registry é construído uma vez, na raiz de composição
    - Erros estruturais são falhas fatais (`InitializationError`)
    - O registry não executa transformações

Invariantes:
    - Migrações registradas são imutáveis
    - `list()` reflete exatamente a ordem de registro

Limites explícitos:
    - Não planeja caminhos contíguos (ver `planner`)
    - Não interage com stores ou com o log de migrações
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from paramvault.core.exceptions import InitializationError

from .version import Version, VersionLike, as_version


ConfigDict = Dict[str, Any]
Transform = Callable[[ConfigDict], ConfigDict]


@dataclass(frozen=True)
class Migration:
    """
    Descritor imutável de uma migração de schema.

    Campos:
        - id: identificador estável (ex.: "v1.0.0-to-v1.1.0")
        - from_version / to_version: versões em formato major.minor.patch
        - description: texto humano da mudança de schema
        - transform: função pura config -> config (forward)
        - inverse: função pura config -> config (rollback), opcional
    """

    id: str
    from_version: str
    to_version: str
    description: str
    transform: Transform = field(repr=False, compare=False)
    inverse: Optional[Transform] = field(default=None, repr=False, compare=False)

    @property
    def source(self) -> Version:
        return as_version(self.from_version)

    @property
    def target(self) -> Version:
        return as_version(self.to_version)

    @property
    def reversible(self) -> bool:
        return self.inverse is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fromVersion": self.from_version,
            "toVersion": self.to_version,
            "description": self.description,
            "reversible": self.reversible,
        }


@dataclass
class MigrationRegistry:
    """
    Registro canônico de migrações para validação estrutural pré-execução.

    Exemplo:
        >>> reg = MigrationRegistry(floor="0.9.0")
        >>> reg.add(Migration("v0.9.0-to-v1.0.0", "0.9.0", "1.0.0", "...", transform=dict))
        >>> str(reg.current_version())
        '1.0.0'
    """

    floor: VersionLike = "0.9.0"

    _migrations: Dict[str, Migration] = field(default_factory=dict, init=False, repr=False)
    _pairs: Dict[Tuple[Version, Version], str] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, migration: Migration) -> None:
        mid = getattr(migration, "id", None)
        if not isinstance(mid, str) or not mid.strip():
            raise InitializationError("migration.id must be a non-empty string")

        if mid in self._migrations:
            raise InitializationError(
                f"Duplicate migration id: {mid}",
                details={"migration_id": mid},
            )

        if not callable(migration.transform):
            raise InitializationError(
                f"Migration {mid} has no callable transform",
                details={"migration_id": mid},
            )

        source, target = migration.source, migration.target
        if not source < target:
            raise InitializationError(
                f"Migration {mid} must move forward: {source} -> {target}",
                details={"migration_id": mid, "from": str(source), "to": str(target)},
            )

        pair = (source, target)
        if pair in self._pairs:
            raise InitializationError(
                f"Duplicate migration range {source} -> {target} ({self._pairs[pair]}, {mid})",
                details={"migration_id": mid, "existing": self._pairs[pair], "from": str(source), "to": str(target)},
            )

        self._migrations[mid] = migration
        self._pairs[pair] = mid
        self._order.append(mid)

    def extend(self, migrations: List[Migration]) -> None:
        for m in migrations:
            self.add(m)

    def get(self, migration_id: str) -> Migration:
        return self._migrations[migration_id]

    def list(self) -> List[Migration]:
        return [self._migrations[mid] for mid in self._order]

    def __len__(self) -> int:
        return len(self._order)

    def current_version(self) -> Version:
        """Maior `to_version` registrada; o piso quando o registry está vazio."""
        if not self._order:
            return as_version(self.floor)
        return max(m.target for m in self._migrations.values())

    def within(self, from_version: VersionLike, to_version: VersionLike) -> List[Migration]:
        """
        Migrações cuja faixa própria está contida em [from, to], ordenadas por `from_version`.

        Não garante contiguidade: janelas desalinhadas podem produzir
        lacunas ou lista vazia (ver `planner.plan_path`).
        """
        lo, hi = as_version(from_version), as_version(to_version)
        selected = [m for m in self.list() if m.source >= lo and m.target <= hi]
        return sorted(selected, key=lambda m: (m.source, m.target))
