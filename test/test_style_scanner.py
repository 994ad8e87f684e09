"""
Tests for the stylesheet analyzer and scanner.
"""

import pytest

from baseline_guard.browsers import parse_browser_targets
from baseline_guard.errors import ProcessingError
from baseline_guard.oracle import FeatureOracle
from baseline_guard.policy import CompliancePolicy
from baseline_guard.scanners import StyleScanner
from baseline_guard.style_analyzer import FeatureUsage, StyleUsageAnalyzer
from baseline_guard.violation import ContextTag, ViolationKind, ViolationLedger

from conftest import feature

GAP_CSS = ".grid {\n  display: flex;\n  gap: 1rem;\n}\n"


@pytest.fixture
def make_scanner(oracle):
    def _make(target="widely", browsers="safari >= 14", scanner_oracle=None, ledger=None):
        return StyleScanner(
            scanner_oracle or oracle,
            CompliancePolicy(target),
            targets=parse_browser_targets(browsers),
            ledger=ledger,
        )
    return _make


def collect_usages(dataset, css, browsers="defaults"):
    usages = []
    analyzer = StyleUsageAnalyzer(dataset, parse_browser_targets(browsers))
    analyzer.analyze(css, "style.css", usages.append)
    return usages


class TestAnalyzer:
    def test_unsupported_property(self, dataset):
        usages = collect_usages(dataset, GAP_CSS, "safari >= 14")
        assert usages == [
            FeatureUsage("flexbox-gap", 3, "Flexbox gap not supported by: Safari (< 14.1)"),
        ]

    def test_defaults_cover_every_release(self, dataset):
        usages = collect_usages(dataset, GAP_CSS, "defaults")
        assert usages == [FeatureUsage(
            "flexbox-gap",
            3,
            "Flexbox gap not supported by: Chrome (< 84), Chrome Android (< 84), Edge (< 84), "
            "Firefox (< 63), Firefox Android (< 63), Safari (< 14.1), Safari iOS (< 14.5)",
        )]

    def test_supported_by_versioned_targets(self, dataset):
        assert collect_usages(dataset, GAP_CSS, "safari >= 15, chrome >= 100") == []

    def test_missing_browser_support(self, make_dataset):
        support = {"chrome": "84", "firefox": "63"}
        dataset = make_dataset({"flexbox-gap": feature("low", support=support, compat=["css.properties.gap"])})
        usages = collect_usages(dataset, GAP_CSS, "chrome >= 90, safari")
        assert [u.message for u in usages] == ["flexbox-gap not supported by: Safari"]

    def test_no_support_data(self, make_dataset):
        dataset = make_dataset({"aspect-ratio": feature("low", name="aspect-ratio")})
        usages = collect_usages(dataset, ".box { aspect-ratio: auto; }\n")
        assert usages == [FeatureUsage("aspect-ratio", 1, "aspect-ratio has no browser support data")]

    def test_pseudo_class(self, make_dataset):
        dataset = make_dataset({"hover": feature("low", compat=["css.selectors.hover"])})
        usages = collect_usages(dataset, "a:hover {\n  color: red;\n}\n")
        assert [(u.feature_id, u.line) for u in usages] == [("hover", 1)]

    def test_at_rule(self, make_dataset):
        dataset = make_dataset({"media-queries": feature("low", compat=["css.at-rules.media"])})
        css = ".a { color: red; }\n@media (min-width: 600px) {\n  .a { color: blue; }\n}\n"
        usages = collect_usages(dataset, css)
        assert [(u.feature_id, u.line) for u in usages] == [("media-queries", 2)]

    def test_one_usage_per_line(self, dataset):
        css = ".a { gap: 1rem; } .b { gap: 2rem; }\n.c { gap: 0; }\n"
        usages = collect_usages(dataset, css, "safari >= 14")
        assert [u.line for u in usages] == [1, 2]

    def test_custom_properties_are_ignored(self, make_dataset):
        dataset = make_dataset({"gap": feature("low")})
        assert collect_usages(dataset, ":root { --gap: 1rem; }\n") == []


class TestStyleScanner:
    def test_gap_violation(self, make_scanner):
        violations = make_scanner().scan("style.css", GAP_CSS)
        assert len(violations) == 1
        v = violations[0]
        assert v.feature_id == "flexbox-gap"
        assert v.kind is ViolationKind.CSS
        assert v.context is ContextTag.STYLESHEET
        assert v.line == 3
        assert v.message == "Flexbox gap not supported by: Safari (< 14.1)"

    def test_compliant_feature_is_not_reported(self, make_scanner):
        assert make_scanner(target="newly").scan("style.css", GAP_CSS) == []

    def test_blank_file_is_skipped(self, make_scanner, caplog):
        assert make_scanner().scan("empty.css", "\n  \n") == []
        assert "Skipping empty CSS file" in caplog.text

    def test_failing_file_does_not_abort_others(self, make_scanner, tmp_path, write_file, caplog):
        good = write_file("good.css", GAP_CSS)
        violations = make_scanner().scan_all([tmp_path / "missing.css", good])
        assert [v.file for v in violations] == [str(good)]
        assert "CSS scan failed for" in caplog.text

    def test_scan_propagates_analyzer_errors(self, oracle):
        class BrokenAnalyzer:
            def analyze(self, css, file_path, on_feature_usage):
                raise ProcessingError(file_path, "boom")

        scanner = StyleScanner(oracle, CompliancePolicy(), analyzer=BrokenAnalyzer())
        with pytest.raises(ProcessingError):
            scanner.scan("style.css", GAP_CSS)

    def test_shared_ledger(self, make_scanner):
        ledger = ViolationLedger()
        scanner = make_scanner(ledger=ledger)
        scanner.scan("style.css", GAP_CSS)
        assert scanner.scan("style.css", GAP_CSS) == []
        assert len(ledger) == 1

    def test_default_targets(self, oracle):
        scanner = StyleScanner(oracle, CompliancePolicy("widely", strict=True))
        assert len(scanner.analyzer.targets) == 7
        violations = scanner.scan("style.css", ".g { display: flex; gap: 1rem; }\n")
        assert [(v.feature_id, v.line) for v in violations] == [("flexbox-gap", 1)]

    def test_default_targets_defer_to_policy(self, oracle):
        scanner = StyleScanner(oracle, CompliancePolicy("newly"))
        assert scanner.scan("style.css", GAP_CSS) == []
