"""
Migrações de schema embutidas (v1).

Cadeia registrada:
    0.9.0 -> 1.0.0  formato legado (headerConfigs/bodyConfigs) para
                    headerParameters/bodyParameters (reversível)
    1.0.0 -> 1.1.0  metadados e suporte a validação (reversível)
    1.1.0 -> 1.2.0  integração com templates (sem inversa)

Transforms são funções puras: recebem uma cópia do config e retornam um
novo dicionário. Chaves desconhecidas são preservadas.
"""

from __future__ import annotations

import time
from typing import List, Optional, Union

from .registry import ConfigDict, Migration, MigrationRegistry
from .version import Version


LEGACY_HEADER_KEY = "headerConfigs"
LEGACY_BODY_KEY = "bodyConfigs"
HEADER_KEY = "headerParameters"
BODY_KEY = "bodyParameters"
VERSION_KEY = "configVersion"
TIMESTAMP_KEY = "lastModified"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _stamp(config: ConfigDict, version: str) -> ConfigDict:
    out = dict(config)
    out[VERSION_KEY] = version
    out[TIMESTAMP_KEY] = _now_ms()
    return out


# ---------------------------------------------------------------------------
# 0.9.0 -> 1.0.0
# ---------------------------------------------------------------------------

def _legacy_to_v1(config: ConfigDict) -> ConfigDict:
    if LEGACY_HEADER_KEY in config or LEGACY_BODY_KEY in config:
        rest = {k: v for k, v in config.items() if k not in (LEGACY_HEADER_KEY, LEGACY_BODY_KEY)}
        rest[HEADER_KEY] = dict(config.get(LEGACY_HEADER_KEY) or {})
        rest[BODY_KEY] = dict(config.get(LEGACY_BODY_KEY) or {})
        return _stamp(rest, "1.0.0")
    return _stamp(config, "1.0.0")


def _v1_to_legacy(config: ConfigDict) -> ConfigDict:
    rest = {k: v for k, v in config.items() if k not in (HEADER_KEY, BODY_KEY)}
    rest[LEGACY_HEADER_KEY] = dict(config.get(HEADER_KEY) or {})
    rest[LEGACY_BODY_KEY] = dict(config.get(BODY_KEY) or {})
    return _stamp(rest, "0.9.0")


# ---------------------------------------------------------------------------
# 1.0.0 -> 1.1.0
# ---------------------------------------------------------------------------

def _v1_0_to_v1_1(config: ConfigDict) -> ConfigDict:
    return _stamp(config, "1.1.0")


def _v1_1_to_v1_0(config: ConfigDict) -> ConfigDict:
    return _stamp(config, "1.0.0")


# ---------------------------------------------------------------------------
# 1.1.0 -> 1.2.0
# ---------------------------------------------------------------------------

def _v1_1_to_v1_2(config: ConfigDict) -> ConfigDict:
    return _stamp(config, "1.2.0")


def builtin_migrations() -> List[Migration]:
    return [
        Migration(
            id="v0.9.0-to-v1.0.0",
            from_version="0.9.0",
            to_version="1.0.0",
            description="Migrate from legacy parameter format to new structure",
            transform=_legacy_to_v1,
            inverse=_v1_to_legacy,
        ),
        Migration(
            id="v1.0.0-to-v1.1.0",
            from_version="1.0.0",
            to_version="1.1.0",
            description="Add enhanced metadata and validation support",
            transform=_v1_0_to_v1_1,
            inverse=_v1_1_to_v1_0,
        ),
        Migration(
            id="v1.1.0-to-v1.2.0",
            from_version="1.1.0",
            to_version="1.2.0",
            description="Add template system integration",
            transform=_v1_1_to_v1_2,
        ),
    ]


def default_registry(*, floor: Union[str, Version] = "0.9.0", extra: Optional[List[Migration]] = None) -> MigrationRegistry:
    """Registry com a cadeia embutida, mais migrações extras opcionais."""
    registry = MigrationRegistry(floor=floor)
    registry.extend(builtin_migrations())
    if extra:
        registry.extend(extra)
    return registry
