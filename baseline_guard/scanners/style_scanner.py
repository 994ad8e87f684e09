"""
Style usage scanner: runs stylesheets through the usage analyzer.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from ..browsers import BrowserTarget, parse_browser_targets
from ..oracle import FeatureOracle
from ..policy import CompliancePolicy
from ..scanner_base import BaseScanner
from ..style_analyzer import FeatureUsage, StyleUsageAnalyzer
from ..violation import ContextTag, ViolationKind, ViolationLedger, ViolationRecord

LOGGER = logging.getLogger(__name__)


class StyleScanner(BaseScanner):
    """Finds non-compliant feature usage in stylesheets."""

    kind = ViolationKind.CSS

    def __init__(
        self,
        oracle: FeatureOracle,
        policy: CompliancePolicy,
        targets: Optional[Sequence[BrowserTarget]] = None,
        ledger: Optional[ViolationLedger] = None,
        analyzer: Optional[StyleUsageAnalyzer] = None,
    ):
        super().__init__(oracle, policy, ledger)
        if targets is None:
            targets = parse_browser_targets("defaults")
        self.analyzer = analyzer or StyleUsageAnalyzer(oracle.dataset, targets)

    def scan_all(self, file_paths: Iterable[Union[str, Path]]) -> List[ViolationRecord]:
        """Scan stylesheets in order. A failing file is logged and skipped."""
        found: List[ViolationRecord] = []
        for file_path in file_paths:
            try:
                self._scan_one(str(file_path), found)
            except Exception as e:
                LOGGER.warning("CSS scan failed for %s: %s", file_path, e)
        return found

    def scan(self, file_path: str, css: str) -> List[ViolationRecord]:
        """Scan stylesheet text. Errors propagate to the caller."""
        found: List[ViolationRecord] = []
        self._analyze(file_path, css, found)
        return found

    def _scan_one(self, file_path: str, found: List[ViolationRecord]) -> None:
        css = Path(file_path).read_text(encoding="utf-8")
        self._analyze(file_path, css, found)

    def _analyze(self, file_path: str, css: str, found: List[ViolationRecord]) -> None:
        if not css.strip():
            LOGGER.warning("Skipping empty CSS file: %s", file_path)
            return

        def on_feature_usage(usage: FeatureUsage) -> None:
            if self._is_compliant(usage.feature_id):
                return
            self._add_violation(
                found,
                file_path,
                usage.line,
                usage.feature_id,
                ContextTag.STYLESHEET,
                message=usage.message,
            )

        self.analyzer.analyze(css, file_path, on_feature_usage)
