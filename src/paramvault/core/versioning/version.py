"""
Versão de schema de configuração (major.minor.patch).

`Version` é um value type imutável com ordem total. O parse é defensivo:
componentes ausentes, vazios, negativos ou não numéricos valem 0, e
componentes além do terceiro são ignorados.

Exemplos:
    >>> Version.parse("1.2")
    Version(major=1, minor=2, patch=0)
    >>> Version.parse("1.x.3") < Version.parse("1.1.0")
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


def _component(raw: str) -> int:
    raw = raw.strip()
    if not raw.isdigit():
        return 0
    return int(raw)


@dataclass(frozen=True, order=True)
class Version:
    major: int = 0
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, value: Any) -> "Version":
        if isinstance(value, Version):
            return value
        if value is None:
            return cls()
        parts = str(value).strip().split(".")
        nums = [_component(p) for p in parts[:3]]
        nums += [0] * (3 - len(nums))
        return cls(*nums)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


VersionLike = Union[str, Version]


def as_version(value: VersionLike) -> Version:
    return Version.parse(value)
