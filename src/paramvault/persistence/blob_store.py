"""Escrita durável de artefatos nomeados (v1).

A BlobStore é o único ponto de I/O de arquivos do paramvault: log de
migrações e snapshots de backup passam por ela, o que permite substituir
o disco por fakes nos testes.

Decisões (v1):
- Nomes são relativos à raiz da store (ex.: "migrations/migration-log.json")
- Diretórios intermediários são criados na escrita
- Leitura de nome inexistente levanta `BlobNotFoundError`

Limites explícitos:
- Não oferece atomicidade entre múltiplos blobs
- Não faz lock entre processos
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Protocol, Union


class BlobNotFoundError(FileNotFoundError):
    """Blob solicitado não existe na store."""


class BlobStore(Protocol):
    def write(self, name: str, data: bytes) -> str: ...

    def read(self, name: str) -> bytes: ...

    def list(self, prefix: str = "") -> List[str]: ...

    def delete(self, name: str) -> None: ...

    def size(self, name: str) -> int: ...


class FileBlobStore:
    """BlobStore em disco, enraizada em `root`."""

    def __init__(self, *, root: Union[str, Path]):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        return self.root / name

    def write(self, name: str, data: bytes) -> str:
        """Grava `data` em `name` e retorna o caminho absoluto do artefato."""
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return str(path)

    def read(self, name: str) -> bytes:
        path = self.path_for(name)
        if not path.is_file():
            raise BlobNotFoundError(str(path))
        return path.read_bytes()

    def list(self, prefix: str = "") -> List[str]:
        """Nomes (relativos à raiz) que começam com `prefix`, em ordem lexicográfica."""
        if not self.root.exists():
            return []
        names = [p.relative_to(self.root).as_posix() for p in self.root.rglob("*") if p.is_file()]
        return sorted(n for n in names if n.startswith(prefix))

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        if not path.is_file():
            raise BlobNotFoundError(str(path))
        path.unlink()

    def size(self, name: str) -> int:
        path = self.path_for(name)
        if not path.is_file():
            raise BlobNotFoundError(str(path))
        return path.stat().st_size


__all__ = ["BlobNotFoundError", "BlobStore", "FileBlobStore"]
