import json

import pytest

from baseline_guard.policy import CompliancePolicy
from baseline_guard.reporter import ReportGenerator
from baseline_guard.violation import ContextTag, ViolationKind, ViolationRecord


@pytest.fixture
def violations():
    return [
        ViolationRecord("src/app.js", 3, "at", ViolationKind.JS, ContextTag.FUNCTION_CALL, function_name="last"),
        ViolationRecord("src/app.js", 9, "structuredclone", ViolationKind.JS, ContextTag.USAGE),
        ViolationRecord(
            "src/site.css", 2, "flexbox-gap", ViolationKind.CSS, ContextTag.STYLESHEET,
            message="Flexbox gap not supported by: Safari (< 14.1)",
        ),
    ]


def test_summary(violations):
    assert ReportGenerator.generate_summary(violations) == {"js_violations": 2, "css_violations": 1}
    assert ReportGenerator.generate_summary([]) == {"js_violations": 0, "css_violations": 0}


def test_text_report(violations):
    text = ReportGenerator.generate_text_report(violations, "widely")
    assert "JAVASCRIPT (2):" in text
    assert "CSS (1):" in text
    assert "src/app.js:3: at [function_call]" in text
    assert "Flexbox gap not supported by: Safari (< 14.1)" in text
    assert "Summary: 2 js, 1 css" in text


def test_text_report_without_violations():
    assert "No baseline violations found (target: newly)" in ReportGenerator.generate_text_report([], "newly")


def test_json_report(violations):
    report = ReportGenerator.generate_json_report(
        violations, 4, CompliancePolicy("newly", strict=True), "2024-01-01T00:00:00+00:00"
    )
    assert report["baseline_target"] == "newly"
    assert report["strict"] is True
    assert report["total_files_scanned"] == 4
    assert report["violations_count"] == 3
    assert report["violations"][0] == {
        "file": "src/app.js",
        "line": 3,
        "feature_id": "at",
        "kind": "js",
        "context": "function_call",
        "message": None,
        "function_name": "last",
    }
    json.dumps(report)


def test_html_report_escapes():
    record = ViolationRecord("<b>.js", 1, "at", ViolationKind.JS, ContextTag.USAGE, message="<script>")
    page = ReportGenerator.generate_html_report([record], 1, CompliancePolicy(), "now")
    assert "&lt;script&gt;" in page
    assert "<script>" not in page
    assert "&lt;b&gt;.js" in page


def test_html_report_without_violations():
    page = ReportGenerator.generate_html_report([], 2, CompliancePolicy(), "now", dry_run=True)
    assert "No violations found" in page
    assert "<strong>Dry Run:</strong> True" in page


def test_github_annotations(violations):
    lines = ReportGenerator.generate_github_annotations(violations)
    assert lines[0] == "::error file=src/app.js,line=3::'at' is below the Baseline target"
    assert lines[2] == "::error file=src/site.css,line=2::Flexbox gap not supported by: Safari (< 14.1)"


def test_github_annotations_escape_newlines():
    record = ViolationRecord("a.css", 1, "x", ViolationKind.CSS, ContextTag.STYLESHEET, message="50%\nsupport")
    assert ReportGenerator.generate_github_annotations([record]) == [
        "::error file=a.css,line=1::50%25%0Asupport"
    ]


def test_write_reports(violations, tmp_path):
    paths = ReportGenerator.write_reports(violations, 3, CompliancePolicy(), tmp_path / "reports")
    assert paths["html"].name == "baseline-report.html"
    data = json.loads(paths["json"].read_text(encoding="utf-8"))
    assert data["violations_count"] == 3
    assert data["summary"] == {"js_violations": 2, "css_violations": 1}
    assert "Baseline Guard Report" in paths["html"].read_text(encoding="utf-8")
