"""Persistência: blobs duráveis, mapa de configurações e snapshots de backup."""

from .backup_store import BackupInfo, BackupService, backup_file_name
from .blob_store import BlobNotFoundError, BlobStore, FileBlobStore
from .config_store import ConfigurationStore, InMemoryConfigurationStore, as_store

__all__ = [
    "BackupInfo",
    "BackupService",
    "BlobNotFoundError",
    "BlobStore",
    "ConfigurationStore",
    "FileBlobStore",
    "InMemoryConfigurationStore",
    "as_store",
    "backup_file_name",
]
