# app/core/markdown.py
from app.core.models import PRSummary, Report


def to_markdown(pr: PRSummary, report: Report) -> str:
    metrics, risk = report.metrics, report.risk

    if risk.reasons:
        reason_lines = [f"- {r}" for r in risk.reasons]
    else:
        reason_lines = ["- No major risk flags detected"]

    lines = [
        "# PR Review Report",
        "",
        f"**Title:** {pr.title}",
        f"**Repo:** {pr.repo or ''}",
        f"**Author:** {pr.author or ''}",
        f"**URL:** {pr.url}",
        "",
        "## Metrics",
        f"- Files changed: **{metrics.total_files}**",
        f"- Additions: **{metrics.additions}**",
        f"- Deletions: **{metrics.deletions}**",
        f"- Total churn: **{metrics.churn}**",
        "",
        "## Risk",
        f"**Level:** **{risk.level.upper()}** (score: {risk.score})",
        *reason_lines,
        "",
        "## Hotspots (by churn)",
        *[f"- {h.dir}: {h.churn}" for h in report.hotspots],
        "",
        "## Biggest changed files",
        *[
            f"- `{f.filename}` (+{f.additions}/-{f.deletions}, changes: {f.changes})"
            for f in report.biggest_files
        ],
    ]
    return "\n".join(lines) + "\n"
