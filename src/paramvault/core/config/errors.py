# src/paramvault/core/config/errors.py
"""
Exceções canônicas da camada de settings do paramvault.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento, a validação estrutural e a resolução dos settings do
engine de migração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais de settings são falhas fatais
    - Nenhuma exceção aqui representa falha de migração de configuração

Invariantes:
    - Todas as exceções de settings herdam de `ConfigError`
"""


class ConfigError(Exception):
    """
    Exceção base para erros de settings do paramvault.

    Permite captura genérica de falhas de carregamento e merge sem
    confundi-las com falhas de migração, backup ou log.
    """


class SettingsFileNotFoundError(ConfigError):
    """
    Arquivo de settings informado explicitamente não existe.

    Decisões arquiteturais:
        - Um caminho explícito de settings é obrigatório quando informado
        - O loader não inventa arquivos ausentes
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato do arquivo de settings não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Conteúdo raiz do arquivo de settings não é um dicionário.

    Listas ou escalares no root são rejeitados sem tentativa de normalização.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge de settings.

    Exemplo de conflito:
        - base:     {"health": {"max_config_bytes": 50000}}
        - override: {"health": "strict"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
