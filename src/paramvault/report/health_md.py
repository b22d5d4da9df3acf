"""
src/paramvault/report/health_md.py

Gerador canônico do relatório de saúde (Markdown, v1).

Regras:
- O relatório é derivado EXCLUSIVAMENTE do `HealthReport`.
- Não reaudita, não acessa filesystem.
- Mesmo HealthReport => mesmo Markdown (ordenação estável: severidade
  decrescente, depois provider, depois ordem de detecção).

Estrutura mínima obrigatória:
# Configuration Health Report

## Summary
## Issues by Severity
## Issues
"""

from __future__ import annotations

from typing import Any, List

from paramvault.core.model import HealthReport, Severity


REQUIRED_SECTIONS: List[str] = [
    "# Configuration Health Report",
    "## Summary",
    "## Issues by Severity",
    "## Issues",
]

COLUMNS: List[str] = ["provider_id", "severity", "issue", "recommendation"]


def _pandas() -> Any:
    try:
        import pandas as pd  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("pandas is required for health report rendering") from e
    return pd


def _cell(value: Any) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def issues_frame(report: HealthReport) -> Any:
    """DataFrame dos issues (uma linha por issue), ordenado de forma estável."""
    pd = _pandas()
    rows = [
        {
            "provider_id": i.provider_id,
            "severity": i.severity.value,
            "rank": i.severity.rank,
            "issue": i.issue,
            "recommendation": i.recommendation,
        }
        for i in report.issues
    ]
    df = pd.DataFrame(rows, columns=COLUMNS + ["rank"])
    if df.empty:
        return df[COLUMNS]
    df = df.sort_values(["rank", "provider_id"], ascending=[False, True], kind="mergesort")
    return df[COLUMNS].reset_index(drop=True)


def severity_counts(report: HealthReport) -> List[tuple]:
    """Pares (severidade, quantidade) da mais grave à menos grave, incluindo zeros."""
    df = issues_frame(report)
    counts = df["severity"].value_counts() if not df.empty else {}
    ordered = sorted(Severity, key=lambda s: s.rank, reverse=True)
    return [(s.value, int(counts.get(s.value, 0))) for s in ordered]


def render_health_report_md(report: HealthReport) -> str:
    """Gera o conteúdo completo do relatório de saúde em Markdown."""
    if not isinstance(report, HealthReport):
        raise ValueError("HealthReport is required to render the health report")

    summary = report.summary
    lines: List[str] = []

    lines.append("# Configuration Health Report\n")

    lines.append("## Summary")
    lines.append(f"- **Status**: `{'healthy' if report.is_healthy else 'unhealthy'}`")
    lines.append(f"- **Total configurations**: {summary.total_configurations}")
    lines.append(f"- **Healthy configurations**: {summary.healthy_configurations}")
    lines.append(f"- **Configurations with issues**: {summary.configurations_with_issues}")
    lines.append(f"- **Critical issues**: {summary.critical_issues}\n")

    lines.append("## Issues by Severity")
    for severity, count in severity_counts(report):
        lines.append(f"- **{severity}**: {count}")
    lines.append("")

    lines.append("## Issues")
    df = issues_frame(report)
    if df.empty:
        lines.append("No issues found.")
    else:
        lines.append("| Provider | Severity | Issue | Recommendation |")
        lines.append("|---|---|---|---|")
        for row in df.itertuples(index=False):
            lines.append(
                f"| `{_cell(row.provider_id)}` | {row.severity} | {_cell(row.issue)} | {_cell(row.recommendation)} |"
            )

    return "\n".join(lines).rstrip() + "\n"


__all__ = ["REQUIRED_SECTIONS", "issues_frame", "render_health_report_md", "severity_counts"]
