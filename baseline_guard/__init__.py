"""
Baseline Guard: flags web-platform features below a Baseline compatibility target.
"""

from .errors import (
    BaselineGuardError,
    ConfigError,
    DataLoadError,
    ParseError,
    ProcessingError,
)
from .features import BaselineLevel, FeatureDataset, FeatureStatusRecord, load_dataset
from .guard import BaselineGuard
from .oracle import FeatureOracle
from .policy import CompliancePolicy, Whitelist
from .violation import ContextTag, ViolationKind, ViolationLedger, ViolationRecord

__version__ = "0.2.0"

__all__ = [
    "BaselineGuard",
    "BaselineGuardError",
    "BaselineLevel",
    "CompliancePolicy",
    "ConfigError",
    "ContextTag",
    "DataLoadError",
    "FeatureDataset",
    "FeatureOracle",
    "FeatureStatusRecord",
    "ParseError",
    "ProcessingError",
    "ViolationKind",
    "ViolationLedger",
    "ViolationRecord",
    "Whitelist",
    "load_dataset",
]
