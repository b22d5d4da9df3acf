# src/paramvault/__init__.py
"""
paramvault — engine de migração versionada e integridade de configurações
de parâmetros de providers.

Este pacote raiz define o namespace público do paramvault: evolução de
configurações persistidas entre versões de schema, verificação de
integridade por checksum, diagnóstico de saúde e reparo/rollback seguros.

Princípios centrais:
    - O mapa de configurações pertence ao chamador; o engine só o acessa
      por `items/get/set`
    - Backup antes de qualquer mutação em lote
    - Falhas por entrada são coletadas, nunca abortam o lote
    - Nenhum estado global: o engine é montado por `create_engine`

Arquitetura em alto nível:
    - core.config       → settings em YAML/JSON, merge e hashing
    - core.versioning   → Version, registry, planner e migrações embutidas
    - core.integrity    → checksum canônico (SHA-256)
    - core.audit        → regras de saúde e heurísticas de credenciais
    - core.repair       → reparo estrutural automático
    - core.traceability → log append-only de migrações aplicadas
    - core.engine       → orquestrador e raiz de composição
    - persistence       → blobs duráveis, mapa de configurações e backups
    - report            → relatório de saúde em Markdown

Limites explícitos:
    - Não decide quais parâmetros um provider aceita
    - Não faz I/O de rede
"""

from .core.engine import MigrationEngine, create_engine
from .core.model import StoredConfiguration

__all__ = ["MigrationEngine", "StoredConfiguration", "create_engine"]
