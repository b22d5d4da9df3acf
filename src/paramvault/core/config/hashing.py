# src/paramvault/core/config/hashing.py
"""
Hashing canônico dos settings efetivos.

O hash representa a identidade estrutural dos settings usados por uma
instância do engine e é registrado no contexto de execução para
rastreabilidade.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256 hexadecimal (64 caracteres)
"""

import hashlib
import json
from typing import Any, Dict


def compute_settings_hash(settings: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico dos settings efetivos.

    Args:
        settings (Dict[str, Any]): Settings resolvidos.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(settings, dict):
        raise TypeError(
            f"Settings para hashing devem ser dict, recebido: {type(settings).__name__}"
        )

    canonical_json = json.dumps(
        settings,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
