"""Auditoria de saúde de configurações armazenadas (v1).

Responsabilidades:
- Executar, por configuração, um conjunto de regras independentes.
- Produzir `HealthIssue`s com severidade e recomendação.
- Consolidar um `HealthReport` com resumo agregado.

Princípios:
- OBSERVAR sem mutar: a auditoria NÃO altera configurações.
- Problemas estruturais são dados (`HealthIssue`), nunca exceções.

Regras (v1):
  version_drift      critical | high | medium  (major | minor | patch difere)
  missing_checksum   medium
  checksum_mismatch  high
  empty              low
  oversized          medium  (> health.max_config_bytes)
  possible_secret    high
  duplicate_names    medium  (colisão após case-folding)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Tuple

from paramvault.core.integrity.checksum import verify_checksum
from paramvault.core.model import (
    HealthIssue,
    HealthReport,
    HealthSummary,
    IntegrityStatus,
    Severity,
    StoredConfiguration,
)
from paramvault.core.versioning.version import Version

from .secrets import contains_sensitive_data


VersionOf = Callable[[StoredConfiguration], Version]


def drift_severity(current: Version, target: Version) -> Severity:
    """Severidade da divergência de versão entre a configuração e o alvo."""
    if current.major != target.major:
        return Severity.CRITICAL
    if current.minor != target.minor:
        return Severity.HIGH
    return Severity.MEDIUM


def serialized_size(config: Dict) -> int:
    raw = json.dumps(config, separators=(",", ":"), ensure_ascii=False, default=str)
    return len(raw.encode("utf-8"))


def duplicate_names(stored: StoredConfiguration) -> List[str]:
    """Nomes (case-folded) que aparecem mais de uma vez entre header e body."""
    counts: Dict[str, int] = {}
    for key in list(stored.header_parameters()) + list(stored.body_parameters()):
        folded = str(key).casefold()
        counts[folded] = counts.get(folded, 0) + 1
    return sorted(name for name, n in counts.items() if n > 1)


def _all_parameters(stored: StoredConfiguration) -> Iterable[Tuple[str, object]]:
    yield from stored.header_parameters().items()
    yield from stored.body_parameters().items()


@dataclass
class HealthAuditor:
    """Diagnóstico observacional de configurações (todas as regras, todas as entradas)."""

    current_version: Version
    version_of: VersionOf
    max_config_bytes: int = 50000
    secret_value_min_length: int = 20

    def audit(self, configurations: Iterable[Tuple[str, StoredConfiguration]]) -> HealthReport:
        issues: List[HealthIssue] = []
        total = 0
        healthy = 0

        for provider_id, stored in configurations:
            total += 1
            found = self.audit_one(provider_id, stored)
            if found:
                issues.extend(found)
            else:
                healthy += 1

        critical = sum(1 for i in issues if i.severity == Severity.CRITICAL)
        with_issues = total - healthy

        return HealthReport(
            is_healthy=critical == 0 and with_issues == 0,
            issues=issues,
            summary=HealthSummary(
                total_configurations=total,
                healthy_configurations=healthy,
                configurations_with_issues=with_issues,
                critical_issues=critical,
            ),
        )

    def audit_one(self, provider_id: str, stored: StoredConfiguration) -> List[HealthIssue]:
        issues: List[HealthIssue] = []
        for rule in (
            self._version_drift,
            self._integrity,
            self._empty,
            self._oversized,
            self._secrets,
            self._duplicates,
        ):
            issues.extend(rule(provider_id, stored))
        return issues

    # ------------------------------------------------------------------
    # Regras
    # ------------------------------------------------------------------
    def _version_drift(self, provider_id: str, stored: StoredConfiguration) -> List[HealthIssue]:
        version = self.version_of(stored)
        if version == self.current_version:
            return []
        return [
            HealthIssue(
                provider_id=provider_id,
                severity=drift_severity(version, self.current_version),
                issue=f"Configuration version {version} is outdated (current: {self.current_version})",
                recommendation="Run migration to update to the latest version",
            )
        ]

    def _integrity(self, provider_id: str, stored: StoredConfiguration) -> List[HealthIssue]:
        try:
            status = verify_checksum(stored)
        except (TypeError, ValueError) as e:
            # conteúdo fora de JSON canônico (ex.: set, chaves de tipos mistos)
            return [
                HealthIssue(
                    provider_id=provider_id,
                    severity=Severity.HIGH,
                    issue=f"Configuration contents cannot be serialized for integrity verification: {e}",
                    recommendation="Replace non-JSON values with strings, numbers, lists or objects",
                )
            ]
        if status == IntegrityStatus.ABSENT:
            return [
                HealthIssue(
                    provider_id=provider_id,
                    severity=Severity.MEDIUM,
                    issue="Configuration missing integrity checksum",
                    recommendation="Regenerate checksum by saving or auto-repairing the configuration",
                )
            ]
        if status == IntegrityStatus.MISMATCH:
            return [
                HealthIssue(
                    provider_id=provider_id,
                    severity=Severity.HIGH,
                    issue="Configuration checksum does not match its contents",
                    recommendation="Review recent manual edits or restore from a backup",
                )
            ]
        return []

    def _empty(self, provider_id: str, stored: StoredConfiguration) -> List[HealthIssue]:
        if stored.header_parameters() or stored.body_parameters():
            return []
        return [
            HealthIssue(
                provider_id=provider_id,
                severity=Severity.LOW,
                issue="Configuration has no parameters",
                recommendation="Add parameters or delete unused configuration",
            )
        ]

    def _oversized(self, provider_id: str, stored: StoredConfiguration) -> List[HealthIssue]:
        size = serialized_size(stored.config)
        if size <= self.max_config_bytes:
            return []
        return [
            HealthIssue(
                provider_id=provider_id,
                severity=Severity.MEDIUM,
                issue=f"Configuration size ({round(size / 1024)}KB) is large",
                recommendation="Review and optimize parameter values",
            )
        ]

    def _secrets(self, provider_id: str, stored: StoredConfiguration) -> List[HealthIssue]:
        issues: List[HealthIssue] = []
        for key, value in _all_parameters(stored):
            if contains_sensitive_data(key, value, min_length=self.secret_value_min_length):
                issues.append(
                    HealthIssue(
                        provider_id=provider_id,
                        severity=Severity.HIGH,
                        issue=f"Parameter '{key}' may contain sensitive data",
                        recommendation="Use environment variables or secure configuration for sensitive data",
                    )
                )
        return issues

    def _duplicates(self, provider_id: str, stored: StoredConfiguration) -> List[HealthIssue]:
        dups = duplicate_names(stored)
        if not dups:
            return []
        return [
            HealthIssue(
                provider_id=provider_id,
                severity=Severity.MEDIUM,
                issue=f"Duplicate parameter names found: {', '.join(dups)}",
                recommendation="Rename or remove duplicate parameters",
            )
        ]
