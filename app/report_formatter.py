"""Format scan results as human-readable Markdown."""

from deps import Dict, List, datetime
from .schemas import ViolationOut


def _violation_block_md(v: ViolationOut) -> List[str]:
    """One violation as Markdown: Line N · Type · Context, then feature and message."""
    lines = []
    lines.append(f"**Line {v.line} · {v.type.upper()} · {v.context.replace('_', ' ')}**")
    lines.append("")
    lines.append(f"- **Feature:** `{v.feature}`")
    if v.function_name:
        lines.append(f"- **In function:** `{v.function_name}`")
    if v.message:
        lines.append(f"- **Detail:** {v.message}")
    lines.append("")
    return lines


def format_text_report(
    source: str,
    baseline_target: str,
    violations: List[ViolationOut],
    summary: Dict[str, int],
) -> str:
    """Format scan results for one source as Markdown."""
    lines = []
    lines.append(f"# Baseline results: {source}")
    lines.append("")
    lines.append(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append("")
    lines.append(f"Target baseline: `{baseline_target}`")
    lines.append("")
    lines.append(
        f"**{len(violations)}** violation(s) found "
        f"({summary.get('js_violations', 0)} js, {summary.get('css_violations', 0)} css)."
    )
    lines.append("")

    lines.append("## Violations")
    lines.append("")
    if not violations:
        lines.append("No baseline violations found.")
        lines.append("")
    else:
        by_file: Dict[str, List[ViolationOut]] = {}
        for v in violations:
            by_file.setdefault(v.file, []).append(v)
        for file_path, file_violations in by_file.items():
            lines.append(f"### {file_path}")
            lines.append("")
            for v in file_violations:
                lines.extend(_violation_block_md(v))

    return "\n".join(lines)
