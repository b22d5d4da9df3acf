# src/paramvault/core/__init__.py
"""
Core do paramvault.

Contém o modelo canônico, versionamento, integridade, auditoria, reparo,
rastreabilidade e o engine de migração. Persistência concreta e
relatórios vivem fora do core.
"""
