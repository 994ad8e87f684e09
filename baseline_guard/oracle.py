"""
Feature Compliance Oracle: decides whether a feature meets the Baseline target.
"""

from typing import Dict, Optional, Tuple

from .errors import ConfigError
from .features import BaselineLevel, FeatureDataset, FeatureStatusRecord
from .policy import NEWLY, WIDELY, CompliancePolicy, TargetSpec


class FeatureOracle:
    """Memoized compliance decisions over a fixed dataset."""

    def __init__(self, dataset: FeatureDataset):
        self._dataset = dataset
        self._cache: Dict[Tuple[str, TargetSpec, bool], bool] = {}

    @property
    def dataset(self) -> FeatureDataset:
        return self._dataset

    def clear_cache(self) -> None:
        """Drop memoized decisions (needed only if the dataset is swapped)."""
        self._cache.clear()

    def lookup(self, feature_id: str) -> Optional[FeatureStatusRecord]:
        return self._dataset.get(feature_id.lower())

    def is_compliant(self, feature_id: str, policy: CompliancePolicy) -> bool:
        """True if the feature meets the policy. Unknown features are compliant."""
        name = feature_id.lower()
        key = (name, policy.target, policy.strict)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        record = self._dataset.get(name)
        decision = True if record is None else self._decide(record, policy)
        self._cache[key] = decision
        return decision

    @staticmethod
    def _decide(record: FeatureStatusRecord, policy: CompliancePolicy) -> bool:
        target = policy.target
        level = record.level

        if target == WIDELY:
            compliant = level is BaselineLevel.HIGH
        elif target == NEWLY:
            compliant = level is BaselineLevel.HIGH or (
                level is BaselineLevel.LOW and not policy.strict
            )
        elif isinstance(target, int) and not isinstance(target, bool):
            reference = record.low_date or record.high_date
            if reference is not None:
                compliant = reference.year <= target
            else:
                compliant = level is BaselineLevel.HIGH
        else:
            raise ConfigError(f"Invalid target baseline: {target!r}")

        # Strict mode only ever fails newly available features.
        if policy.strict and level is BaselineLevel.LOW:
            compliant = False
        return compliant
