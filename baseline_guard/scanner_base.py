"""
Base scanner class for Baseline compliance checks.
"""

from typing import List, Optional

from .oracle import FeatureOracle
from .policy import CompliancePolicy
from .violation import ContextTag, ViolationKind, ViolationLedger, ViolationRecord


class BaseScanner:
    """Base class for all scanners."""

    kind: ViolationKind = ViolationKind.JS

    def __init__(
        self,
        oracle: FeatureOracle,
        policy: CompliancePolicy,
        ledger: Optional[ViolationLedger] = None,
    ):
        self.oracle = oracle
        self.policy = policy
        self.ledger = ledger if ledger is not None else ViolationLedger()

    def _is_compliant(self, feature_id: str) -> bool:
        return self.oracle.is_compliant(feature_id, self.policy)

    def _add_violation(
        self,
        found: List[ViolationRecord],
        file_path: str,
        line: int,
        feature_id: str,
        context: ContextTag,
        message: Optional[str] = None,
        function_name: Optional[str] = None,
    ) -> None:
        """Record a violation unless the same site was already recorded."""
        record = ViolationRecord(
            file=file_path,
            line=line,
            feature_id=feature_id,
            kind=self.kind,
            context=context,
            message=message,
            function_name=function_name,
        )
        if self.ledger.add(record):
            found.append(record)
