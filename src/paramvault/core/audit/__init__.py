"""Auditoria de saúde: regras de diagnóstico e heurísticas de credenciais."""

from .health import HealthAuditor, drift_severity, duplicate_names, serialized_size
from .secrets import contains_sensitive_data

__all__ = [
    "HealthAuditor",
    "contains_sensitive_data",
    "drift_severity",
    "duplicate_names",
    "serialized_size",
]
