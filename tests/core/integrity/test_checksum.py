# tests/core/integrity/test_checksum.py
import hashlib

import pytest

from paramvault.core.integrity import canonical_json, compute_checksum, verify_checksum
from paramvault.core.model import ConfigurationMetadata, IntegrityStatus, StoredConfiguration


def test_checksum_is_sha256_of_sorted_compact_json():
    config = {"b": 1, "a": {"y": 2, "x": "ç"}}
    assert canonical_json(config) == '{"a":{"x":"ç","y":2},"b":1}'
    assert compute_checksum(config) == hashlib.sha256(canonical_json(config).encode("utf-8")).hexdigest()


def test_checksum_ignores_key_insertion_order():
    a = {"headerParameters": {"A": "1", "B": "2"}, "bodyParameters": {}, "configVersion": "1.2.0"}
    b = {"configVersion": "1.2.0", "bodyParameters": {}, "headerParameters": {"B": "2", "A": "1"}}
    assert compute_checksum(a) == compute_checksum(b)


def test_checksum_rejects_non_dict():
    with pytest.raises(TypeError):
        compute_checksum(["not", "a", "dict"])


def test_verify_is_tri_state():
    config = {"headerParameters": {"X": "1"}}
    absent = StoredConfiguration(config=config, metadata=ConfigurationMetadata())
    match = StoredConfiguration(config=config, metadata=ConfigurationMetadata(checksum=compute_checksum(config)))
    mismatch = StoredConfiguration(config={"headerParameters": {"X": "2"}}, metadata=match.metadata)

    assert verify_checksum(absent) == IntegrityStatus.ABSENT
    assert verify_checksum(match) == IntegrityStatus.MATCH
    assert verify_checksum(mismatch) == IntegrityStatus.MISMATCH
