"""
Per-node walk context for the script scanner.
"""

from dataclasses import dataclass, replace
from typing import Optional

# Destructuring nodes whose identifiers are still binding targets.
PATTERN_TYPES = {
    "object_pattern",
    "array_pattern",
    "rest_pattern",
    "pair_pattern",
    "assignment_pattern",
    "object_assignment_pattern",
}

# For these pattern nodes only one field keeps binding position.
PATTERN_BINDING_FIELDS = {
    "pair_pattern": "value",
    "assignment_pattern": "left",
    "object_assignment_pattern": "left",
}


@dataclass(frozen=True)
class ScanContext:
    """Immutable context carried from a node to its children."""
    in_declaration_target: bool = False
    in_assignment_target: bool = False
    function_name: Optional[str] = None

    def entering_declaration_target(self) -> "ScanContext":
        return replace(self, in_declaration_target=True, in_assignment_target=False)

    def entering_assignment_target(self) -> "ScanContext":
        return replace(self, in_declaration_target=False, in_assignment_target=True)

    def entering_function(self, name: str) -> "ScanContext":
        return replace(self, function_name=name)

    def reading(self) -> "ScanContext":
        """Context for a subtree that is read, not bound."""
        if not (self.in_declaration_target or self.in_assignment_target):
            return self
        return replace(self, in_declaration_target=False, in_assignment_target=False)

    def for_pattern_child(self, parent_type: str, field: Optional[str]) -> "ScanContext":
        """Context for a child of a destructuring pattern."""
        if parent_type not in PATTERN_TYPES:
            return self.reading()
        binding_field = PATTERN_BINDING_FIELDS.get(parent_type)
        if binding_field is not None and field != binding_field:
            return self.reading()
        return self
