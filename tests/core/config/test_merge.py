# tests/core/config/test_merge.py
"""
Testes do deep-merge canônico de settings.

Política validada:
    - dict → merge recursivo
    - list → sobrescrita total
    - escalar → sobrescrita direta
    - conflito de tipos → ConfigTypeConflictError
    - nenhum input é mutado
"""

import pytest

try:
    from paramvault.core.config.merge import deep_merge
    from paramvault.core.config.errors import ConfigTypeConflictError
except Exception as e:  # noqa: BLE001
    deep_merge = None
    ConfigTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """Falha explicitamente quando merge/errors não estão disponíveis."""
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing merge/errors modules. Implement:\n"
            "- src/paramvault/core/config/merge.py (deep_merge)\n"
            "- src/paramvault/core/config/errors.py (ConfigTypeConflictError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_simple_override():
    _require_imports()
    base = {"a": 1, "b": 2}
    override = {"b": 99}

    out = deep_merge(base, override)

    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_merge_nested_dict():
    _require_imports()
    base = {"storage": {"migrations_dir": "migrations", "max_backups": 10}}
    override = {"storage": {"max_backups": 3}}

    out = deep_merge(base, override)

    assert out == {"storage": {"migrations_dir": "migrations", "max_backups": 3}}


def test_merge_list_override_total():
    _require_imports()
    out = deep_merge({"tags": ["a", "b"]}, {"tags": ["c"]})
    assert out == {"tags": ["c"]}


def test_merge_type_conflict_raises():
    """Um bool sobrescrevendo um int é conflito (bool é subclasse de int, mas não é aceito)."""
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"health": {"max_config_bytes": 50000}}, {"health": "strict"})
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"storage": {"max_backups": 10}}, {"storage": {"max_backups": True}})


def test_merge_conflict_names_full_key_path():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError) as exc:
        deep_merge({"storage": {"max_backups": 10}}, {"storage": {"max_backups": "ten"}})
    assert "'storage.max_backups'" in str(exc.value)


def test_merge_keeps_base_order_and_appends_new_keys():
    _require_imports()
    base = {"storage": {"log_file": "a.json"}, "health": {"max_config_bytes": 1}}
    out = deep_merge(base, {"logging": {"max_events": 5}, "storage": {"log_file": "b.json"}})
    assert list(out) == ["storage", "health", "logging"]
    assert out["storage"] == {"log_file": "b.json"}
    assert base["storage"] == {"log_file": "a.json"}
