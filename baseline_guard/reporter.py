"""
Report generation for Baseline compliance results.
"""

import html
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .policy import CompliancePolicy
from .violation import ViolationKind, ViolationRecord

HTML_REPORT_NAME = "baseline-report.html"
JSON_REPORT_NAME = "baseline-report.json"

_HTML_STYLE = """
    body { font-family: system-ui, sans-serif; margin: 2rem; }
    .summary { background: #f8f9fa; padding: 1rem; border-radius: 0.5rem; margin-bottom: 2rem; }
    table { width: 100%; border-collapse: collapse; }
    th, td { padding: 0.75rem; text-align: left; border-bottom: 1px solid #ddd; }
    th { background: #e9ecef; }
    .violation { background: #ffeaea; }
    .pass { color: #28a745; }
    .fail { color: #dc3545; }
    code { background: #f1f3f4; padding: 0.2rem 0.4rem; border-radius: 0.25rem; }
"""


class ReportGenerator:
    """Generate reports from violations."""

    @staticmethod
    def generate_text_report(violations: List[ViolationRecord], target: str) -> str:
        """Generate a text report."""
        if not violations:
            return f"\n✓ No baseline violations found (target: {target})\n"

        report = [f"\n{'='*80}"]
        report.append(f"Baseline Compliance Report (target: {target})")
        report.append(f"{'='*80}\n")

        for kind, label in ((ViolationKind.JS, "JAVASCRIPT"), (ViolationKind.CSS, "CSS")):
            group = [v for v in violations if v.kind is kind]
            if not group:
                continue
            report.append(f"{label} ({len(group)}):")
            report.append("-" * 80)
            for v in group:
                report.append(f"  {v.file}:{v.line}: {v.feature_id} [{v.context.value}]")
                if v.message:
                    report.append(f"    {v.message}")
            report.append("")

        summary = ReportGenerator.generate_summary(violations)
        report.append(
            f"\nSummary: {summary['js_violations']} js, {summary['css_violations']} css"
        )
        report.append("="*80)

        return "\n".join(report)

    @staticmethod
    def generate_summary(violations: List[ViolationRecord]) -> Dict[str, int]:
        """Generate a summary count by kind."""
        summary = {"js_violations": 0, "css_violations": 0}
        for v in violations:
            summary[f"{v.kind.value}_violations"] += 1
        return summary

    @staticmethod
    def generate_json_report(
        violations: List[ViolationRecord],
        total_files: int,
        policy: CompliancePolicy,
        timestamp: str,
    ) -> Dict[str, Any]:
        return {
            "generated_at": timestamp,
            "baseline_target": str(policy.target),
            "strict": policy.strict,
            "total_files_scanned": total_files,
            "violations_count": len(violations),
            "violations": [v.to_dict() for v in violations],
            "summary": ReportGenerator.generate_summary(violations),
        }

    @staticmethod
    def generate_html_report(
        violations: List[ViolationRecord],
        total_files: int,
        policy: CompliancePolicy,
        timestamp: str,
        dry_run: bool = False,
    ) -> str:
        esc = html.escape
        rows = "".join(
            f"""
      <tr class="violation">
        <td>{esc(v.file)}</td>
        <td>{v.line}</td>
        <td><code>{esc(v.feature_id)}</code></td>
        <td>{esc(v.kind.value)}</td>
        <td>{esc(v.message or '')}</td>
      </tr>"""
            for v in violations
        )
        status_cls = "fail" if violations else "pass"
        if violations:
            body = f"""
  <table>
    <thead>
      <tr><th>File</th><th>Line</th><th>Feature</th><th>Type</th><th>Message</th></tr>
    </thead>
    <tbody>{rows}</tbody>
  </table>"""
        else:
            body = '<div class="pass"><h3>✅ No violations found!</h3></div>'

        return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Baseline Guard Report</title>
  <style>{_HTML_STYLE}</style>
</head>
<body>
  <h1>🚦 Baseline Guard Report</h1>
  <div class="summary">
    <p><strong>Generated:</strong> {esc(timestamp)}</p>
    <p><strong>Baseline Target:</strong> <code>{esc(policy.describe())}</code></p>
    <p><strong>Files Scanned:</strong> {total_files}</p>
    <p><strong>Violations Found:</strong> <span class="{status_cls}">{len(violations)}</span></p>
    <p><strong>Dry Run:</strong> {dry_run}</p>
  </div>
  {body}
</body>
</html>
"""

    @staticmethod
    def generate_github_annotations(violations: List[ViolationRecord]) -> List[str]:
        """Workflow commands that annotate each violation in a GitHub Actions run."""
        lines = []
        for v in violations:
            message = v.message or f"'{v.feature_id}' is below the Baseline target"
            message = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
            lines.append(f"::error file={v.file},line={v.line}::{message}")
        return lines

    @staticmethod
    def write_reports(
        violations: List[ViolationRecord],
        total_files: int,
        policy: CompliancePolicy,
        report_dir: Path,
        dry_run: bool = False,
    ) -> Dict[str, Path]:
        """Write the HTML and JSON reports; returns their paths."""
        report_dir = Path(report_dir)
        report_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now(timezone.utc).isoformat()

        html_path = report_dir / HTML_REPORT_NAME
        json_path = report_dir / JSON_REPORT_NAME
        html_path.write_text(
            ReportGenerator.generate_html_report(violations, total_files, policy, timestamp, dry_run),
            encoding="utf-8",
        )
        json_path.write_text(
            json.dumps(
                ReportGenerator.generate_json_report(violations, total_files, policy, timestamp),
                indent=2,
            ),
            encoding="utf-8",
        )
        return {"html": html_path, "json": json_path}
