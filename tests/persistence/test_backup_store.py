# tests/persistence/test_backup_store.py
"""
Testes da Store de snapshots pré-migração.

Os testes asseguram que:
- o snapshot tem o formato `{timestamp, configurations, version}`
- o nome do arquivo é determinístico a partir do relógio
- a listagem é do mais recente ao mais antigo e detecta corrupção
- a retenção mantém apenas os `max_backups` mais recentes
- falha de escrita vira BackupError
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from paramvault.core.exceptions import BackupError
from paramvault.core.model import ConfigurationMetadata, StoredConfiguration
from paramvault.persistence import BackupService, FileBlobStore, InMemoryConfigurationStore, backup_file_name


class _Clock:
    def __init__(self):
        self.now = datetime(2026, 1, 16, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now += timedelta(minutes=1)
        return current


class ReadOnlyBlobStore(FileBlobStore):
    def write(self, name, data):
        raise OSError("disk full")


def _store():
    return InMemoryConfigurationStore(
        {
            "openai": StoredConfiguration(
                config={"headerConfigs": {"X": "1"}},
                metadata=ConfigurationMetadata(created_at="2026-01-01T00:00:00+00:00"),
            )
        }
    )


def test_backup_file_name_replaces_separators():
    ts = datetime(2026, 1, 16, 12, 30, 45, 123000, tzinfo=timezone.utc)
    assert backup_file_name("pre-migration-backup-", ts) == "pre-migration-backup-2026-01-16T12-30-45-123Z.json"


def test_snapshot_writes_full_map(tmp_path):
    service = BackupService(blob_store=FileBlobStore(root=tmp_path), clock=_Clock())

    path = service.snapshot(_store(), "1.2.0")

    data = json.loads(open(path, encoding="utf-8").read())
    assert set(data) == {"timestamp", "configurations", "version"}
    assert data["version"] == "1.2.0"
    assert data["configurations"]["openai"] == {
        "config": {"headerConfigs": {"X": "1"}},
        "metadata": {"createdAt": "2026-01-01T00:00:00+00:00"},
    }
    assert path.endswith("migrations/pre-migration-backup-2026-01-16T12-00-00-000Z.json")


def test_list_and_load_backups(tmp_path):
    blob = FileBlobStore(root=tmp_path)
    service = BackupService(blob_store=blob, clock=_Clock())
    service.snapshot(_store(), "1.2.0")
    service.snapshot(_store(), "1.2.0")
    blob.write("migrations/pre-migration-backup-2026-01-16T13-00-00-000Z.json", b"garbage")

    backups = service.list_backups()

    assert [b.file_name for b in backups] == [
        "pre-migration-backup-2026-01-16T13-00-00-000Z.json",
        "pre-migration-backup-2026-01-16T12-01-00-000Z.json",
        "pre-migration-backup-2026-01-16T12-00-00-000Z.json",
    ]
    assert [b.is_corrupted for b in backups] == [True, False, False]
    assert backups[1].size > 0

    restored = service.load_backup(backups[1].file_name)
    assert restored["openai"].config == {"headerConfigs": {"X": "1"}}


def test_retention_keeps_newest(tmp_path):
    service = BackupService(blob_store=FileBlobStore(root=tmp_path), max_backups=2, clock=_Clock())
    for _ in range(4):
        service.snapshot(_store(), "1.2.0")

    names = [b.file_name for b in service.list_backups()]
    assert names == [
        "pre-migration-backup-2026-01-16T12-03-00-000Z.json",
        "pre-migration-backup-2026-01-16T12-02-00-000Z.json",
    ]


def test_write_failure_raises_backup_error(tmp_path):
    service = BackupService(blob_store=ReadOnlyBlobStore(root=tmp_path), clock=_Clock())
    with pytest.raises(BackupError) as exc:
        service.snapshot(_store(), "1.2.0")
    assert "disk full" in exc.value.message
