# tests/conftest.py
"""
Fixtures compartilhados para testes do paramvault.

Este módulo define fixtures reutilizáveis que fornecem:
- relógio determinístico (UTC, avança 1s por leitura)
- configurações armazenadas típicas (legado, corrente, com segredo)
- engine montado sobre `tmp_path` e já inicializado

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados
    - Fakes utilizam duck typing em vez de herança

Invariantes:
    - Nenhuma fixture escreve fora de `tmp_path`
    - Nenhuma fixture contém lógica de domínio

Limites explícitos:
    - Não substituir testes de integração
"""

from datetime import datetime, timedelta, timezone

import pytest

from paramvault.core.engine import create_engine
from paramvault.core.integrity import compute_checksum
from paramvault.core.model import ConfigurationMetadata, StoredConfiguration


class FakeClock:
    """Relógio UTC que avança `step` a cada chamada."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 16, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def legacy_stored() -> StoredConfiguration:
    """Configuração 0.9.0 sem versão declarada nem checksum."""
    return StoredConfiguration(
        config={"headerConfigs": {"X": "1"}, "bodyConfigs": {"t": 0.5}},
        metadata=ConfigurationMetadata(),
    )


@pytest.fixture
def current_stored() -> StoredConfiguration:
    """Configuração saudável na versão corrente, com checksum válido."""
    config = {
        "headerParameters": {"X-Trace": "on"},
        "bodyParameters": {"temperature": 0.2},
        "configVersion": "1.2.0",
    }
    return StoredConfiguration(
        config=config,
        metadata=ConfigurationMetadata(
            version="1.2.0",
            created_at="2026-01-01T00:00:00+00:00",
            last_modified="2026-01-01T00:00:00+00:00",
            checksum=compute_checksum(config),
        ),
    )


@pytest.fixture
def engine(tmp_path, clock):
    eng = create_engine(root=tmp_path, clock=clock)
    eng.initialize()
    return eng
