"""Integridade de configurações: checksum canônico e verificação tri-state."""

from .checksum import canonical_json, compute_checksum, verify_checksum

__all__ = ["canonical_json", "compute_checksum", "verify_checksum"]
