"""
Feature-status dataset: Baseline records keyed by feature id.

The on-disk format is the web-features ``data.json`` document: a top-level
``features`` object whose entries carry a ``status`` block.
"""

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import DataLoadError

LOGGER = logging.getLogger(__name__)

# Ranged dates are published as "≤2020-03-24".
_DATE_PATTERN = re.compile(r"^\s*[≤<]?\s*(\d{4})-(\d{2})-(\d{2})\s*$")

# Entries that only point at other features.
_REDIRECT_KINDS = {"moved", "split"}


class BaselineLevel(Enum):
    """Baseline classification of a feature."""
    HIGH = "high"
    LOW = "low"
    NONE = "none"


@dataclass(frozen=True)
class FeatureStatusRecord:
    """Baseline status of one feature."""
    level: BaselineLevel
    low_date: Optional[date] = None
    high_date: Optional[date] = None
    title: Optional[str] = None
    support: Dict[str, str] = field(default_factory=dict)
    compat_features: Tuple[str, ...] = ()


def parse_baseline_date(value: Any, feature_id: str = "") -> Optional[date]:
    """Parse a Baseline date; ``None`` and empty values mean no date."""
    if value in (None, "", False):
        return None
    if isinstance(value, date):
        return value
    match = _DATE_PATTERN.match(str(value))
    if not match:
        raise DataLoadError(f"Feature '{feature_id}' has malformed date: {value!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise DataLoadError(f"Feature '{feature_id}' has invalid date {value!r}: {e}") from e


def _parse_level(value: Any, feature_id: str) -> BaselineLevel:
    if value is None or value is False:
        return BaselineLevel.NONE
    if isinstance(value, str):
        try:
            return BaselineLevel(value.strip().lower())
        except ValueError:
            pass
    raise DataLoadError(f"Feature '{feature_id}' has unknown baseline value: {value!r}")


def parse_record(feature_id: str, raw: Any) -> FeatureStatusRecord:
    """Build a record from one web-features entry."""
    if not isinstance(raw, dict):
        raise DataLoadError(f"Feature '{feature_id}' is not an object")
    status = raw.get("status") or {}
    if not isinstance(status, dict):
        raise DataLoadError(f"Feature '{feature_id}' has a malformed status block")

    support = status.get("support") or {}
    if not isinstance(support, dict):
        raise DataLoadError(f"Feature '{feature_id}' has a malformed support table")
    compat = raw.get("compat_features") or []
    if not isinstance(compat, list):
        raise DataLoadError(f"Feature '{feature_id}' has malformed compat_features")

    return FeatureStatusRecord(
        level=_parse_level(status.get("baseline"), feature_id),
        low_date=parse_baseline_date(
            status.get("baseline_low_date") or status.get("low"), feature_id
        ),
        high_date=parse_baseline_date(
            status.get("baseline_high_date") or status.get("high"), feature_id
        ),
        title=raw.get("name") if isinstance(raw.get("name"), str) else None,
        support={str(k).lower(): str(v) for k, v in support.items()},
        compat_features=tuple(str(c).lower() for c in compat),
    )


class FeatureDataset(Mapping):
    """Read-only, case-insensitive mapping of feature id to status record."""

    def __init__(self, records: Union[Mapping, Iterable[Tuple[str, FeatureStatusRecord]]]):
        items = records.items() if isinstance(records, Mapping) else records
        self._records: Dict[str, FeatureStatusRecord] = {}
        self._compat_index: Dict[str, str] = {}
        for feature_id, record in items:
            key = feature_id.lower()
            self._records[key] = record
            for compat_key in record.compat_features:
                # First feature listing a compat key owns it.
                self._compat_index.setdefault(compat_key, key)

    @classmethod
    def from_raw(cls, features: Dict[str, Any]) -> "FeatureDataset":
        """Build from the ``features`` object of a web-features document."""
        records: List[Tuple[str, FeatureStatusRecord]] = []
        for feature_id, raw in features.items():
            if isinstance(raw, dict) and raw.get("kind") in _REDIRECT_KINDS:
                continue
            records.append((feature_id, parse_record(feature_id, raw)))
        return cls(records)

    def __getitem__(self, feature_id: str) -> FeatureStatusRecord:
        return self._records[feature_id.lower()]

    def __contains__(self, feature_id: object) -> bool:
        return isinstance(feature_id, str) and feature_id.lower() in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def resolve_compat_key(self, compat_key: str) -> Optional[str]:
        """Feature id that lists the given browser-compat-data key, if any."""
        return self._compat_index.get(compat_key.lower())


def load_dataset(path: Union[str, Path]) -> FeatureDataset:
    """Load a web-features ``data.json`` file."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise DataLoadError(f"Dataset not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DataLoadError(f"Could not read dataset {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Dataset {path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict) or not isinstance(raw.get("features"), dict):
        raise DataLoadError(f"Dataset {path} has no 'features' object")

    dataset = FeatureDataset.from_raw(raw["features"])
    LOGGER.info("Loaded %d features from %s", len(dataset), path)
    return dataset


def locate_dataset(candidates: Iterable[Union[str, Path]]) -> FeatureDataset:
    """Load the first candidate path that holds a usable dataset."""
    tried: List[str] = []
    for candidate in candidates:
        path = Path(candidate)
        tried.append(str(path))
        if not path.exists():
            continue
        try:
            return load_dataset(path)
        except DataLoadError as e:
            LOGGER.warning("Failed to load %s: %s", path, e)
    raise DataLoadError(
        "Could not load web-features data.json from any known location: " + ", ".join(tried)
    )
