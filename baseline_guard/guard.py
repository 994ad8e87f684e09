"""
Main guard class that coordinates the script and style scanners.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .browsers import BrowserTarget, parse_browser_targets
from .features import FeatureDataset
from .oracle import FeatureOracle
from .policy import CompliancePolicy, Whitelist
from .scanners import ScriptScanner, StyleScanner
from .utils import detect_kind
from .violation import ViolationLedger, ViolationRecord

LOGGER = logging.getLogger(__name__)


class BaselineGuard:
    """Runs every scanner over a resolved file list and merges the results."""

    def __init__(
        self,
        dataset: FeatureDataset,
        policy: CompliancePolicy,
        whitelist: Optional[Whitelist] = None,
        browsers: Union[str, Sequence[BrowserTarget]] = "defaults",
    ):
        self.dataset = dataset
        self.policy = policy
        self.whitelist = whitelist if whitelist is not None else Whitelist()
        if isinstance(browsers, str):
            browsers = parse_browser_targets(browsers)
        self.targets: List[BrowserTarget] = list(browsers)
        self.oracle = FeatureOracle(dataset)

    def check_files(self, file_paths: Sequence[Union[str, Path]]) -> List[ViolationRecord]:
        """Scan script files, then stylesheets, each in list order."""
        script_files = [p for p in file_paths if detect_kind(p) == 'script']
        style_files = [p for p in file_paths if detect_kind(p) == 'style']

        ledger = ViolationLedger()
        script_scanner = ScriptScanner(self.oracle, self.policy, self.whitelist, ledger)
        style_scanner = StyleScanner(self.oracle, self.policy, self.targets, ledger)

        LOGGER.info("Scanning %d JavaScript files...", len(script_files))
        for file_path in script_files:
            script_scanner.scan_file(file_path)

        LOGGER.info("Scanning %d CSS files...", len(style_files))
        style_scanner.scan_all(style_files)

        return ledger.records

    def check_source(self, file_path: str, source_text: str) -> List[ViolationRecord]:
        """Scan in-memory source; the file name only selects the scanner."""
        kind = detect_kind(file_path)
        if kind == 'script':
            scanner = ScriptScanner(self.oracle, self.policy, self.whitelist)
            return scanner.scan(file_path, source_text)
        if kind == 'style':
            scanner = StyleScanner(self.oracle, self.policy, self.targets)
            try:
                return scanner.scan(file_path, source_text)
            except Exception as e:
                LOGGER.warning("CSS scan failed for %s: %s", file_path, e)
                return []
        return []
