"""
Checksum canônico de configurações de provider.

O checksum é a identidade estrutural de um `config` persistido e permite
detectar corrupção introduzida fora do engine (edição manual, escrita
parcial, merge incorreto).

Política de hashing (v1):
    - Serialização JSON canônica: chaves ordenadas em todos os níveis,
      separadores compactos, UTF-8 sem escape ASCII
    - SHA-256 hexadecimal (64 caracteres)

Invariantes:
    - O checksum independe da ordem de inserção das chaves
    - Ausência de checksum significa "não verificado", nunca "corrompido"
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict

from paramvault.core.model import IntegrityStatus, StoredConfiguration


def canonical_json(config: Dict[str, Any]) -> str:
    if not isinstance(config, dict):
        raise TypeError(f"Config para checksum deve ser dict, recebido: {type(config).__name__}")
    return json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_checksum(config: Dict[str, Any]) -> str:
    """SHA-256 hexadecimal do JSON canônico do config."""
    return hashlib.sha256(canonical_json(config).encode("utf-8")).hexdigest()


def verify_checksum(stored: StoredConfiguration) -> IntegrityStatus:
    """
    Compara o checksum armazenado com o checksum recalculado.

    Returns:
        IntegrityStatus.ABSENT quando não há checksum armazenado,
        MATCH quando coincide, MISMATCH caso contrário.
    """
    expected = stored.metadata.checksum
    if not expected:
        return IntegrityStatus.ABSENT
    if compute_checksum(stored.config) == expected:
        return IntegrityStatus.MATCH
    return IntegrityStatus.MISMATCH
