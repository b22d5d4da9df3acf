# src/paramvault/core/config/__init__.py
"""
Camada de settings do paramvault.

Responsabilidades do pacote:
    - Settings padrão embutidos (`DEFAULT_SETTINGS`)
    - Carregamento de overrides em YAML ou JSON
    - Resolução via deep-merge determinístico
    - Hash canônico dos settings efetivos

Limites explícitos:
    - Não contém configurações de providers (essas são dados migrados)
    - Não executa migrações
"""

from .defaults import DEFAULT_SETTINGS, default_settings
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    SettingsFileNotFoundError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_settings_hash
from .loader import load_settings
from .merge import deep_merge

__all__ = [
    "DEFAULT_SETTINGS",
    "default_settings",
    "ConfigError",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "SettingsFileNotFoundError",
    "UnsupportedConfigFormatError",
    "compute_settings_hash",
    "load_settings",
    "deep_merge",
]
