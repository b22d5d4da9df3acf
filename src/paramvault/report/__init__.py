"""Relatórios derivados de resultados do engine."""

from .health_md import REQUIRED_SECTIONS, issues_frame, render_health_report_md, severity_counts

__all__ = ["REQUIRED_SECTIONS", "issues_frame", "render_health_report_md", "severity_counts"]
