# tests/core/versioning/test_builtin.py
"""
Testes da cadeia embutida de migrações.

Propriedade central: para toda migração reversível,
`inverse(transform(c))` reproduz `c`, exceto campos de versão/timestamp.
"""

import pytest

from paramvault.core.versioning import builtin_migrations
from paramvault.core.versioning.builtin import TIMESTAMP_KEY, VERSION_KEY


def _strip(config):
    return {k: v for k, v in config.items() if k not in (VERSION_KEY, TIMESTAMP_KEY)}


INPUTS = {
    "v0.9.0-to-v1.0.0": {"headerConfigs": {"X": "1"}, "bodyConfigs": {"t": 0.5}, "notes": "keep"},
    "v1.0.0-to-v1.1.0": {"headerParameters": {"A": "b"}, "bodyParameters": {"n": 3}, "configVersion": "1.0.0"},
}


@pytest.mark.parametrize("migration", [m for m in builtin_migrations() if m.reversible], ids=lambda m: m.id)
def test_inverse_undoes_forward(migration):
    original = INPUTS[migration.id]
    restored = migration.inverse(migration.transform(dict(original)))
    assert _strip(restored) == _strip(original)


def test_legacy_transform_renames_containers_and_keeps_unknown_keys():
    legacy = next(m for m in builtin_migrations() if m.id == "v0.9.0-to-v1.0.0")
    out = legacy.transform({"headerConfigs": {"X": "1"}, "bodyConfigs": {"t": 0.5}, "notes": "keep"})

    assert out["headerParameters"] == {"X": "1"}
    assert out["bodyParameters"] == {"t": 0.5}
    assert out["notes"] == "keep"
    assert out[VERSION_KEY] == "1.0.0"
    assert "headerConfigs" not in out and "bodyConfigs" not in out


def test_last_step_has_no_inverse():
    last = builtin_migrations()[-1]
    assert last.id == "v1.1.0-to-v1.2.0"
    assert not last.reversible
