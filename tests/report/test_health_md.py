# tests/report/test_health_md.py
"""
Testes do relatório de saúde em Markdown.

Os testes asseguram que:
- todas as seções obrigatórias estão presentes
- issues são ordenados por severidade decrescente, depois por provider
- o relatório é determinístico
"""

from paramvault.core.model import HealthIssue, HealthReport, HealthSummary, Severity
from paramvault.report import REQUIRED_SECTIONS, issues_frame, render_health_report_md, severity_counts


def _report():
    issues = [
        HealthIssue("zeta", Severity.LOW, "Configuration has no parameters", "Add parameters"),
        HealthIssue("alpha", Severity.HIGH, "Parameter 'apiKey' may contain sensitive data", "Use env vars"),
        HealthIssue("beta", Severity.CRITICAL, "Configuration version 0.9.0 is outdated (current: 1.2.0)", "Migrate"),
        HealthIssue("alpha", Severity.MEDIUM, "Duplicate parameter names found: a|b", "Rename"),
    ]
    return HealthReport(
        is_healthy=False,
        issues=issues,
        summary=HealthSummary(
            total_configurations=4,
            healthy_configurations=1,
            configurations_with_issues=3,
            critical_issues=1,
        ),
    )


def test_frame_is_sorted_by_severity_then_provider():
    df = issues_frame(_report())

    assert list(df.columns) == ["provider_id", "severity", "issue", "recommendation"]
    assert list(df["severity"]) == ["critical", "high", "medium", "low"]
    assert list(df["provider_id"]) == ["beta", "alpha", "alpha", "zeta"]


def test_severity_counts_include_zeros():
    empty = HealthReport(is_healthy=True)
    assert severity_counts(empty) == [("critical", 0), ("high", 0), ("medium", 0), ("low", 0)]
    assert severity_counts(_report()) == [("critical", 1), ("high", 1), ("medium", 1), ("low", 1)]


def test_markdown_has_required_sections_and_escapes_pipes():
    md = render_health_report_md(_report())

    for section in REQUIRED_SECTIONS:
        assert section in md
    assert "- **Status**: `unhealthy`" in md
    assert "- **critical**: 1" in md
    assert "Duplicate parameter names found: a\\|b" in md
    assert md.index("`beta`") < md.index("`zeta`")
    assert md == render_health_report_md(_report())


def test_healthy_report_has_no_table():
    md = render_health_report_md(HealthReport(is_healthy=True))
    assert "No issues found." in md
    assert "| Provider |" not in md
