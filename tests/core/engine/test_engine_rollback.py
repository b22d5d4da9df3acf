# tests/core/engine/test_engine_rollback.py
"""
Testes de rollback do MigrationEngine.

Os testes asseguram que:
- a cadeia de inversas é aplicada em ordem descendente
- rollback através de uma migração sem inversa levanta NoInverseError
- falha de uma inversa levanta TransformError e não produz resultado parcial
- a entrada nunca é mutada
"""

import pytest

from paramvault.core.engine import create_engine
from paramvault.core.exceptions import NoInverseError, TransformError
from paramvault.core.model import ConfigurationMetadata, StoredConfiguration
from paramvault.core.versioning import Migration, default_registry


def _at(version, **config):
    config.setdefault("headerParameters", {"X": "1"})
    config.setdefault("bodyParameters", {"t": 0.5})
    config["configVersion"] = version
    return StoredConfiguration(config=config, metadata=ConfigurationMetadata(version=version))


def test_rollback_to_legacy_format(engine):
    stored = _at("1.1.0", notes="keep")
    before = stored.to_dict()

    rolled = engine.rollback_configuration(stored, "0.9.0")

    assert rolled.config["headerConfigs"] == {"X": "1"}
    assert rolled.config["bodyConfigs"] == {"t": 0.5}
    assert rolled.config["notes"] == "keep"
    assert "headerParameters" not in rolled.config
    assert rolled.metadata.version == "0.9.0"
    assert stored.to_dict() == before


def test_rollback_to_same_version_returns_input(engine):
    stored = _at("1.1.0")
    assert engine.rollback_configuration(stored, "1.1") is stored


def test_rollback_through_irreversible_migration_raises(engine):
    stored = _at("1.2.0")
    with pytest.raises(NoInverseError) as exc:
        engine.rollback_configuration(stored, "1.1.0")
    assert exc.value.message == "Migration v1.1.0-to-v1.2.0 does not support rollback"


def test_failing_inverse_raises_without_partial_result(tmp_path, clock):
    def boom(_config):
        raise ValueError("cannot restore templates")

    extra = Migration(
        "v1.2.0-to-v1.3.0",
        "1.2.0",
        "1.3.0",
        "Split template parameters",
        transform=lambda c: {**c, "configVersion": "1.3.0"},
        inverse=boom,
    )
    engine = create_engine(root=tmp_path, registry=default_registry(extra=[extra]), clock=clock)
    engine.initialize()
    stored = _at("1.3.0")
    before = stored.to_dict()

    with pytest.raises(TransformError) as exc:
        engine.rollback_configuration(stored, "1.2.0")

    assert exc.value.message == "Rollback v1.2.0-to-v1.3.0 failed: cannot restore templates"
    assert stored.to_dict() == before


def test_forward_then_back_preserves_parameters(engine):
    stored = StoredConfiguration(
        config={"headerParameters": {"A": "b"}, "bodyParameters": {"n": 1}, "configVersion": "1.0.0"},
        metadata=ConfigurationMetadata(version="1.0.0"),
    )
    forward = engine.registry.get("v1.0.0-to-v1.1.0").transform(dict(stored.config))
    at_1_1 = StoredConfiguration(config=forward, metadata=ConfigurationMetadata(version="1.1.0"))

    back = engine.rollback_configuration(at_1_1, "1.0.0")

    assert back.config["headerParameters"] == {"A": "b"}
    assert back.config["bodyParameters"] == {"n": 1}
    assert back.metadata.version == "1.0.0"
