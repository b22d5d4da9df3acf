# src/paramvault/core/config/merge.py
"""
Deep-merge de settings do engine.

Política (v1): seções dict são mescladas por chave; listas e escalares do
override substituem o valor base; um override de tipo diferente do valor
base é erro (`ConfigTypeConflictError`), apontando o caminho completo da
chave (ex.: `storage.max_backups`). Nenhum input é mutado.
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Retorna um novo dict com `override` aplicado sobre `base`."""
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_section(base, override, ())


def _merge_section(base: Dict[str, Any], override: Dict[str, Any], path: Tuple[str, ...]) -> Dict[str, Any]:
    merged = {
        key: _merge_value(value, override[key], path + (str(key),)) if key in override else deepcopy(value)
        for key, value in base.items()
    }
    merged.update({key: deepcopy(value) for key, value in override.items() if key not in base})
    return merged


def _merge_value(current: Any, incoming: Any, path: Tuple[str, ...]) -> Any:
    if isinstance(current, dict) and isinstance(incoming, dict):
        return _merge_section(current, incoming, path)
    if isinstance(incoming, list):
        return deepcopy(incoming)
    # tipo exato: bool não substitui int
    if type(current) is not type(incoming):
        raise ConfigTypeConflictError(
            f"Conflito de tipo na chave '{'.'.join(path)}': "
            f"{type(current).__name__} vs {type(incoming).__name__}"
        )
    return deepcopy(incoming)
