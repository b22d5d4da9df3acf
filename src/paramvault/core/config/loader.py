# src/paramvault/core/config/loader.py
"""
Loader canônico de settings do paramvault.

Os settings efetivos do engine são resolvidos a partir de:
    - `DEFAULT_SETTINGS` embutidos no pacote (sempre presentes)
    - um arquivo de defaults alternativo (opcional, obrigatório se informado)
    - um arquivo local de overrides (opcional, ignorado se ausente)

Responsabilidades do módulo:
    - Carregar arquivos de settings em YAML ou JSON
    - Validar o tipo raiz (dict)
    - Resolver os settings finais via deep-merge determinístico

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não valida semântica (ex.: versões inválidas)
    - Não interage com o engine diretamente
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

import yaml  # PyYAML

from .defaults import default_settings
from .merge import deep_merge
from .errors import (
    InvalidConfigRootTypeError,
    SettingsFileNotFoundError,
    UnsupportedConfigFormatError,
)


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de settings e valida sua estrutura básica.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        SettingsFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise SettingsFileNotFoundError(f"Arquivo de settings não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Settings root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_settings(
    *,
    defaults_path: Optional[Union[str, Path]] = None,
    local_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve os settings efetivos do engine.

    Política de resolução:
        - `DEFAULT_SETTINGS` é sempre a base
        - `defaults_path`, quando informado, deve existir e é mesclado sobre a base
        - `local_path`, quando informado e existente, tem a maior precedência

    Args:
        defaults_path: Caminho opcional para defaults alternativos.
        local_path: Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Settings finais resolvidos.

    Raises:
        SettingsFileNotFoundError: Se `defaults_path` não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural no merge.
    """
    effective = default_settings()

    if defaults_path is not None:
        effective = deep_merge(effective, _load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective
