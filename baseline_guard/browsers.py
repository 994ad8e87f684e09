"""
Browser target queries and version comparison for stylesheet analysis.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import ConfigError

# Browsers that define Baseline.
CORE_BROWSERS = (
    "chrome",
    "chrome_android",
    "edge",
    "firefox",
    "firefox_android",
    "safari",
    "safari_ios",
)

BROWSER_ALIASES = {
    "chrome": "chrome",
    "and_chr": "chrome_android",
    "chromeandroid": "chrome_android",
    "chrome_android": "chrome_android",
    "edge": "edge",
    "firefox": "firefox",
    "ff": "firefox",
    "and_ff": "firefox_android",
    "firefoxandroid": "firefox_android",
    "firefox_android": "firefox_android",
    "safari": "safari",
    "ios_saf": "safari_ios",
    "ios": "safari_ios",
    "safari_ios": "safari_ios",
}

DISPLAY_NAMES = {
    "chrome": "Chrome",
    "chrome_android": "Chrome Android",
    "edge": "Edge",
    "firefox": "Firefox",
    "firefox_android": "Firefox Android",
    "safari": "Safari",
    "safari_ios": "Safari iOS",
}

CORE_QUERIES = {"defaults", "baseline", "core"}

_ENTRY_PATTERN = re.compile(r"^([a-z_]+)\s*(?:(>=)?\s*(\d+(?:\.\d+)*))?$")
_VERSION_PATTERN = re.compile(r"(\d+(?:\.\d+)*)")

Version = Tuple[int, ...]


def parse_version(value: str) -> Optional[Version]:
    """'15.4' -> (15, 4); '≤79' -> (79,); unparseable values -> None."""
    match = _VERSION_PATTERN.search(str(value))
    if not match:
        return None
    return tuple(int(part) for part in match.group(1).split("."))


def format_version(version: Version) -> str:
    return ".".join(str(part) for part in version)


@dataclass(frozen=True)
class BrowserTarget:
    """A browser and the oldest version that must be supported."""
    browser: str
    min_version: Optional[Version] = None

    def supports(self, first_supported: Optional[str]) -> bool:
        """True if a feature first shipped in ``first_supported`` works here.

        A target without a minimum version covers every release of the
        browser, so any feature that shipped in some version is missing from
        the releases before it.
        """
        if first_supported is None or self.min_version is None:
            return False
        shipped = parse_version(first_supported)
        if shipped is None:
            return False
        return shipped <= self.min_version

    def describe(self, first_supported: Optional[str]) -> str:
        name = DISPLAY_NAMES.get(self.browser, self.browser)
        shipped = parse_version(first_supported) if first_supported else None
        if shipped is None:
            return name
        return f"{name} (< {format_version(shipped)})"


def parse_browser_targets(query: str) -> List[BrowserTarget]:
    """Parse a comma separated browser query into de-duplicated targets."""
    entries = [e.strip().lower() for e in (query or "").split(",") if e.strip()]
    if not entries:
        entries = ["defaults"]

    targets: Dict[str, BrowserTarget] = {}
    for entry in entries:
        if entry in CORE_QUERIES:
            for browser in CORE_BROWSERS:
                targets.setdefault(browser, BrowserTarget(browser))
            continue
        match = _ENTRY_PATTERN.match(entry)
        if not match or match.group(1) not in BROWSER_ALIASES:
            raise ConfigError(
                f"Unsupported browser query: {entry!r} "
                "(use 'defaults' or '<browser> [>=] <version>')"
            )
        browser = BROWSER_ALIASES[match.group(1)]
        version = parse_version(match.group(3)) if match.group(3) else None
        existing = targets.get(browser)
        # The strictest (oldest) version wins when a browser is listed twice.
        if existing is not None and existing.min_version is not None:
            if version is None or version > existing.min_version:
                continue
        targets[browser] = BrowserTarget(browser, version)
    return list(targets.values())
