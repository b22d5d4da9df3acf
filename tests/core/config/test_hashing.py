# tests/core/config/test_hashing.py
import hashlib
import json

from paramvault.core.config import compute_settings_hash, default_settings


def test_hash_is_deterministic_and_order_independent():
    a = {"storage": {"max_backups": 10, "log_file": "x.json"}, "versions": {"floor": "0.9.0"}}
    b = {"versions": {"floor": "0.9.0"}, "storage": {"log_file": "x.json", "max_backups": 10}}

    h1 = compute_settings_hash(a)

    assert h1 == compute_settings_hash(b)
    assert len(h1) == 64


def test_hash_matches_sha256_of_canonical_json():
    settings = default_settings()
    canonical = json.dumps(settings, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    assert compute_settings_hash(settings) == hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def test_hash_changes_on_override():
    base = default_settings()
    changed = default_settings()
    changed["migration"]["strict_path"] = False
    assert compute_settings_hash(base) != compute_settings_hash(changed)
