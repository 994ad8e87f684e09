"""
Script usage scanner: walks JavaScript/TypeScript syntax trees for feature usage.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .. import grammars
from ..errors import ParseError
from ..oracle import FeatureOracle
from ..policy import CompliancePolicy, Whitelist
from ..scanner_base import BaseScanner
from ..utils import (
    children_with_fields,
    node_line,
    node_text,
    same_node,
    script_grammar,
)
from ..violation import ContextTag, ViolationKind, ViolationLedger, ViolationRecord
from .scan_context import PATTERN_TYPES, ScanContext

LOGGER = logging.getLogger(__name__)

FUNCTION_TYPES = {
    "function_declaration",
    "function_expression",
    "function",
    "generator_function_declaration",
    "generator_function",
    "method_definition",
    "function_signature",
}

ARROW_FUNCTION = "arrow_function"

ASSIGNMENT_TYPES = {"assignment_expression", "augmented_assignment_expression"}

# Declarations whose "name" identifier is a definition, not a read.
NAMED_DEFINITION_TYPES = FUNCTION_TYPES | {
    "class_declaration",
    "class",
    "abstract_class_declaration",
    "enum_declaration",
}

# Identifiers directly under these nodes never reference a value.
NON_REFERENCE_PARENTS = {
    "import_specifier",
    "import_clause",
    "namespace_import",
    "export_specifier",
    "namespace_export",
    "jsx_opening_element",
    "jsx_closing_element",
    "jsx_self_closing_element",
}

TS_PARAMETER_TYPES = {"required_parameter", "optional_parameter"}


class ScriptScanner(BaseScanner):
    """Finds non-compliant feature usage in script sources."""

    kind = ViolationKind.JS

    def __init__(
        self,
        oracle: FeatureOracle,
        policy: CompliancePolicy,
        whitelist: Optional[Whitelist] = None,
        ledger: Optional[ViolationLedger] = None,
    ):
        super().__init__(oracle, policy, ledger)
        self.whitelist = whitelist if whitelist is not None else Whitelist()

    def scan_file(self, file_path: Union[str, Path]) -> List[ViolationRecord]:
        """Read and scan one file. Unreadable files yield no violations."""
        path = Path(file_path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            LOGGER.warning("Unable to read file %s: %s", file_path, e)
            return []
        return self.scan(str(file_path), source)

    def scan(self, file_path: str, source_text: str) -> List[ViolationRecord]:
        """Scan script source text; parse failures yield no violations."""
        grammar = script_grammar(file_path)
        if grammar is None:
            return []
        if not source_text.strip():
            LOGGER.warning("Skipping empty file: %s", file_path)
            return []

        try:
            root = self._parse(file_path, source_text, grammar)
        except ParseError as e:
            LOGGER.warning("Failed to parse %s: %s", file_path, e.reason)
            return []

        found: List[ViolationRecord] = []
        self._walk(root, file_path, found)
        return found

    def _parse(self, file_path: str, source_text: str, grammar: str):
        try:
            root = grammars.parse_source(source_text, grammar)
        except (ValueError, RuntimeError) as e:
            raise ParseError(file_path, str(e)) from e
        if root.has_error:
            errors = grammars.find_error_nodes(root, limit=1)
            line = node_line(errors[0]) if errors else node_line(root)
            raise ParseError(file_path, f"syntax error near line {line}")
        return root

    def _walk(self, root, file_path: str, found: List[ViolationRecord]) -> None:
        # Post-order with an explicit stack: a node is visited after all of
        # its children, so `a.at()` records the member access before the call.
        stack: List[Tuple[object, object, ScanContext, bool]] = [(root, None, ScanContext(), False)]
        while stack:
            node, parent, ctx, expanded = stack.pop()
            if expanded:
                self._visit(node, parent, ctx, file_path, found)
                continue
            stack.append((node, parent, ctx, True))
            children = list(self._child_contexts(node, ctx))
            for child, child_ctx in reversed(children):
                stack.append((child, node, child_ctx, False))

    def _child_contexts(self, node, ctx: ScanContext) -> Iterator[Tuple[object, ScanContext]]:
        """Pair each named child with the context it is walked in."""
        node_type = node.type
        base = ctx
        if node_type in FUNCTION_TYPES:
            base = ctx.reading().entering_function(self._function_name(node))
        elif node_type == ARROW_FUNCTION:
            base = ctx.reading().entering_function("arrow")

        for child, field in children_with_fields(node):
            if not child.is_named:
                continue
            if node_type == "variable_declarator":
                child_ctx = base.entering_declaration_target() if field == "name" else base.reading()
            elif node_type in ASSIGNMENT_TYPES:
                child_ctx = base.entering_assignment_target() if field == "left" else base.reading()
            elif node_type == "formal_parameters":
                child_ctx = base.entering_declaration_target()
            elif node_type == ARROW_FUNCTION and field == "parameter":
                child_ctx = base.entering_declaration_target()
            elif node_type == "catch_clause" and field == "parameter":
                child_ctx = base.entering_declaration_target()
            elif node_type == "for_in_statement" and field == "left":
                child_ctx = base.entering_declaration_target()
            elif node_type in TS_PARAMETER_TYPES:
                child_ctx = base if field == "pattern" else base.reading()
            elif node_type in PATTERN_TYPES:
                child_ctx = base.for_pattern_child(node_type, field)
            else:
                child_ctx = base.reading()
            yield child, child_ctx

    def _visit(self, node, parent, ctx: ScanContext, file_path: str, found: List[ViolationRecord]) -> None:
        node_type = node.type

        if node_type == "identifier":
            if ctx.in_declaration_target or ctx.in_assignment_target:
                return
            if self._is_definition_name(node, parent):
                return
            self._check_candidate(node_text(node), node, ContextTag.USAGE, ctx, file_path, found)

        elif node_type == "shorthand_property_identifier":
            # `{ name }` in an object literal reads the variable `name`.
            if ctx.in_declaration_target or ctx.in_assignment_target:
                return
            self._check_candidate(node_text(node), node, ContextTag.USAGE, ctx, file_path, found)

        elif node_type == "member_expression":
            # The target of `obj.prop = value` is a write, not a usage.
            if ctx.in_assignment_target:
                return
            prop = node.child_by_field_name("property")
            if prop is not None and prop.type == "property_identifier":
                self._check_candidate(
                    node_text(prop), node, ContextTag.PROPERTY_ACCESS, ctx, file_path, found
                )

        elif node_type == "call_expression":
            name = self._callee_name(node.child_by_field_name("function"))
            if name:
                self._check_candidate(name, node, ContextTag.FUNCTION_CALL, ctx, file_path, found)

        elif node_type == "import_statement":
            self._check_candidate("import", node, ContextTag.IMPORT, ctx, file_path, found)
            # Imported names are treated as possible platform APIs; this is
            # knowingly approximate and can flag unrelated module exports.
            for specifier in self._import_specifiers(node):
                imported = specifier.child_by_field_name("name")
                if imported is not None and imported.type == "identifier":
                    self._check_candidate(
                        node_text(imported), node, ContextTag.IMPORT, ctx, file_path, found
                    )

        elif node_type == "await_expression":
            self._check_candidate("await", node, ContextTag.USAGE, ctx, file_path, found)

        elif node_type == "yield_expression":
            self._check_candidate("yield", node, ContextTag.USAGE, ctx, file_path, found)

    def _check_candidate(
        self,
        raw_name: str,
        node,
        context: ContextTag,
        ctx: ScanContext,
        file_path: str,
        found: List[ViolationRecord],
    ) -> None:
        name = raw_name.lower()
        if not name or name in self.whitelist:
            return
        if self._is_compliant(name):
            return
        self._add_violation(
            found,
            file_path,
            node_line(node),
            name,
            context,
            function_name=ctx.function_name,
        )

    @staticmethod
    def _is_definition_name(node, parent) -> bool:
        if parent is None:
            return False
        if parent.type in NON_REFERENCE_PARENTS:
            return True
        if parent.type in NAMED_DEFINITION_TYPES:
            return same_node(parent.child_by_field_name("name"), node)
        return False

    @staticmethod
    def _callee_name(callee) -> Optional[str]:
        if callee is None:
            return None
        if callee.type == "identifier":
            return node_text(callee)
        if callee.type == "member_expression":
            prop = callee.child_by_field_name("property")
            if prop is not None and prop.type == "property_identifier":
                return node_text(prop)
        return None

    @staticmethod
    def _function_name(node) -> str:
        name = node.child_by_field_name("name")
        return node_text(name) if name is not None else "anonymous"

    @staticmethod
    def _import_specifiers(import_node):
        stack = list(import_node.named_children)
        while stack:
            current = stack.pop(0)
            if current.type == "import_specifier":
                yield current
            elif current.type in ("import_clause", "named_imports"):
                stack.extend(current.named_children)
