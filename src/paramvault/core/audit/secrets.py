"""
Heurísticas de detecção de credenciais em parâmetros.

Um parâmetro é suspeito quando o NOME casa com um padrão de credencial
e o VALOR (string) tem formato de credencial conhecida ou comprimento
acima do limite configurado.

Limites explícitos:
    - Valores não-string (números, bool, listas) nunca são sinalizados
    - Não tenta validar a credencial junto ao provider
"""

from __future__ import annotations

import re
from typing import Any, List, Pattern


CREDENTIAL_NAME_PATTERNS: List[Pattern[str]] = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"password",
        r"secret",
        r"token",
        r"key",
        r"auth",
        r"credential",
        r"private",
        r"api[_-]?key",
        r"access[_-]?token",
    )
]

CREDENTIAL_VALUE_PATTERNS: List[Pattern[str]] = [
    re.compile(r"^[A-Za-z0-9+/]{20,}={0,2}$"),  # base64
    re.compile(r"^[a-f0-9]{32,}$", re.IGNORECASE),  # hex
    re.compile(r"^sk-[a-zA-Z0-9]{20,}$"),  # openai
    re.compile(r"^xoxb-[a-zA-Z0-9-]+$"),  # slack
    re.compile(r"^ghp_[a-zA-Z0-9]{36}$"),  # github
]


def is_credential_name(key: str) -> bool:
    return any(p.search(key) for p in CREDENTIAL_NAME_PATTERNS)


def looks_like_credential(value: str) -> bool:
    return any(p.match(value) for p in CREDENTIAL_VALUE_PATTERNS)


def contains_sensitive_data(key: str, value: Any, *, min_length: int = 20) -> bool:
    if not is_credential_name(str(key)):
        return False
    if not isinstance(value, str):
        return False
    return looks_like_credential(value) or len(value) > min_length
