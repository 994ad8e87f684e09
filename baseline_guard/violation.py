"""
Violation data models for the Baseline compliance engine.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple


class ViolationKind(Enum):
    """Source kind a violation was found in."""
    JS = "js"
    CSS = "css"


class ContextTag(Enum):
    """Syntactic context that produced a script candidate."""
    FUNCTION_CALL = "function_call"
    PROPERTY_ACCESS = "property_access"
    IMPORT = "import"
    USAGE = "usage"
    STYLESHEET = "stylesheet"


@dataclass(frozen=True)
class ViolationRecord:
    """A non-compliant feature usage site."""
    file: str
    line: int
    feature_id: str
    kind: ViolationKind
    context: ContextTag
    message: Optional[str] = None
    function_name: Optional[str] = None

    @property
    def key(self) -> Tuple[str, int, str]:
        return (self.file, self.line, self.feature_id)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        data["context"] = self.context.value
        return data


class ViolationLedger:
    """Append-only violation list, deduplicated by (file, line, feature)."""

    def __init__(self):
        self._records: List[ViolationRecord] = []
        self._seen: Set[Tuple[str, int, str]] = set()

    def add(self, record: ViolationRecord) -> bool:
        """Record a violation; returns False if the site was already recorded."""
        if record.key in self._seen:
            return False
        self._seen.add(record.key)
        self._records.append(record)
        return True

    def extend(self, records) -> None:
        for record in records:
            self.add(record)

    @property
    def records(self) -> List[ViolationRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))
