"""Mapa `providerId → StoredConfiguration` pertencente ao chamador.

O engine nunca é dono desse mapa: lê e escreve exclusivamente por
`items()`, `get()` e `set()`. A durabilidade é responsabilidade do
colaborador que implementa o protocolo.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Protocol, Tuple, Union

from paramvault.core.model import StoredConfiguration


class ConfigurationStore(Protocol):
    def items(self) -> Iterable[Tuple[str, StoredConfiguration]]: ...

    def get(self, provider_id: str) -> Optional[StoredConfiguration]: ...

    def set(self, provider_id: str, stored: StoredConfiguration) -> None: ...


class InMemoryConfigurationStore:
    """Adaptador sobre um `dict` simples (o dict passado é compartilhado, não copiado)."""

    def __init__(self, data: Optional[Dict[str, StoredConfiguration]] = None):
        self.data: Dict[str, StoredConfiguration] = data if data is not None else {}

    def items(self) -> Iterable[Tuple[str, StoredConfiguration]]:
        # snapshot da lista: `set` durante a iteração não invalida o iterador
        return list(self.data.items())

    def get(self, provider_id: str) -> Optional[StoredConfiguration]:
        return self.data.get(provider_id)

    def set(self, provider_id: str, stored: StoredConfiguration) -> None:
        self.data[provider_id] = stored

    def __len__(self) -> int:
        return len(self.data)


StoreLike = Union[ConfigurationStore, Mapping[str, StoredConfiguration]]


def as_store(value: StoreLike) -> ConfigurationStore:
    """Aceita uma store pronta ou um dict simples (que passa a ser compartilhado)."""
    if isinstance(value, dict):
        return InMemoryConfigurationStore(value)
    if hasattr(value, "items") and hasattr(value, "get") and hasattr(value, "set"):
        return value  # type: ignore[return-value]
    raise TypeError(f"ConfigurationStore inválida: {type(value).__name__}")


__all__ = ["ConfigurationStore", "InMemoryConfigurationStore", "StoreLike", "as_store"]
