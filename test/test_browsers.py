import pytest

from baseline_guard.browsers import (
    CORE_BROWSERS,
    BrowserTarget,
    parse_browser_targets,
    parse_version,
)
from baseline_guard.errors import ConfigError


@pytest.mark.parametrize("query", ["defaults", "baseline", "", "  ", "Core"])
def test_core_queries(query):
    targets = parse_browser_targets(query)
    assert [t.browser for t in targets] == list(CORE_BROWSERS)
    assert all(t.min_version is None for t in targets)


def test_versioned_entries_and_aliases():
    targets = parse_browser_targets("safari >= 15.4, ios_saf 16, ff 100")
    assert targets == [
        BrowserTarget("safari", (15, 4)),
        BrowserTarget("safari_ios", (16,)),
        BrowserTarget("firefox", (100,)),
    ]


def test_version_narrows_defaults():
    targets = {t.browser: t for t in parse_browser_targets("defaults, safari >= 14")}
    assert len(targets) == len(CORE_BROWSERS)
    assert targets["safari"].min_version == (14,)


def test_strictest_version_wins():
    targets = parse_browser_targets("chrome >= 100, chrome >= 90, chrome >= 95, chrome")
    assert targets == [BrowserTarget("chrome", (90,))]


@pytest.mark.parametrize("query", ["netscape 4", "last 2 versions", "> 0.5%", "safari >= x"])
def test_unsupported_queries(query):
    with pytest.raises(ConfigError):
        parse_browser_targets(query)


def test_parse_version():
    assert parse_version("15.4") == (15, 4)
    assert parse_version("≤79") == (79,)
    assert parse_version("preview") is None


def test_supports():
    target = BrowserTarget("safari", (14,))
    assert target.supports("13.1")
    assert target.supports("14")
    assert not target.supports("14.1")
    assert not target.supports(None)
    assert not BrowserTarget("safari").supports("17")
    assert not BrowserTarget("safari").supports("1")
    assert not BrowserTarget("safari").supports("preview")


def test_describe():
    assert BrowserTarget("safari_ios", (14,)).describe("14.5") == "Safari iOS (< 14.5)"
    assert BrowserTarget("edge").describe(None) == "Edge"
