"""Reparo estrutural automático de configurações."""

from .auto_repair import AutoRepairer

__all__ = ["AutoRepairer"]
