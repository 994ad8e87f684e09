import json
import os
from pathlib import Path

import pytest

from baseline_guard.features import FeatureDataset
from baseline_guard.oracle import FeatureOracle


# Inputs that would otherwise leak from the developer's shell or a CI runner.
_ENV_INPUTS = (
    "TARGET_BASELINE",
    "SCAN_FILES",
    "BROWSERS",
    "REPORT_DIR",
    "FAIL_ON_NEWLY",
    "DRY_RUN",
    "BASELINE_DATA",
    "GITHUB_ACTIONS",
)


def feature(level, low=None, high=None, name=None, support=None, compat=None):
    """One web-features entry in the on-disk format."""
    status = {"baseline": level}
    if low:
        status["baseline_low_date"] = low
    if high:
        status["baseline_high_date"] = high
    if support:
        status["support"] = support
    entry = {"status": status}
    if name:
        entry["name"] = name
    if compat:
        entry["compat_features"] = compat
    return entry


GAP_SUPPORT = {
    "chrome": "84",
    "chrome_android": "84",
    "edge": "84",
    "firefox": "63",
    "firefox_android": "63",
    "safari": "14.1",
    "safari_ios": "14.5",
}

SAMPLE_FEATURES = {
    "at": feature("low", low="2021-09-01", name="Array at()"),
    "flexbox": feature("low", low="2017-03-01"),
    "fetch": feature("high", low="2017-03-27", high="2019-09-27"),
    "structuredclone": feature("low", low="2022-03-14"),
    "await": feature("low", low="2023-01-01"),
    "yield": feature("low", low="2023-01-01"),
    "dialog": feature(False, name="dialog"),
    "flexbox-gap": feature(
        "low",
        low="2021-04-26",
        name="Flexbox gap",
        support=GAP_SUPPORT,
        compat=["css.properties.gap", "css.properties.gap.flex_context"],
    ),
    "old-redirect": {"kind": "moved", "redirect_target": "fetch"},
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop configuration inputs from the process environment."""
    for key in list(os.environ):
        if key.startswith("INPUT_") or key in _ENV_INPUTS:
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_dataset():
    """Factory: build a dataset from raw web-features entries."""
    def _make(features=None):
        return FeatureDataset.from_raw(SAMPLE_FEATURES if features is None else features)
    return _make


@pytest.fixture
def dataset(make_dataset):
    return make_dataset()


@pytest.fixture
def oracle(dataset):
    return FeatureOracle(dataset)


@pytest.fixture
def data_file(tmp_path):
    """Sample dataset written as data.json."""
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"features": SAMPLE_FEATURES}), encoding="utf-8")
    return path


@pytest.fixture
def write_file(tmp_path):
    """Factory: write text to a file under tmp_path and return its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write
