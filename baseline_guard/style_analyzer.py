"""
Stylesheet feature-usage analyzer.

Walks a CSS syntax tree, maps each construct to a browser-compat-data key,
resolves the key to a feature id through the dataset and reports usages that
some target browser does not support.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Set, Tuple

from . import grammars
from .browsers import BrowserTarget
from .errors import ProcessingError
from .features import FeatureDataset, FeatureStatusRecord
from .utils import node_line, node_text, strip_vendor_prefix


@dataclass(frozen=True)
class FeatureUsage:
    """One reported usage site."""
    feature_id: str
    line: int
    message: str


UsageCallback = Callable[[FeatureUsage], None]

# (compat keys, most specific first; bare-name fallback; source line)
_Construct = Tuple[Tuple[str, ...], str, int]


class StyleUsageAnalyzer:
    """Reports feature usages in a stylesheet against target browsers."""

    def __init__(self, dataset: FeatureDataset, targets: Sequence[BrowserTarget]):
        self.dataset = dataset
        self.targets = list(targets)

    def analyze(self, css: str, file_path: str, on_feature_usage: UsageCallback) -> int:
        """Analyze CSS text; returns the number of usages reported."""
        root = grammars.parse_source(css, grammars.CSS)
        if root.has_error:
            errors = grammars.find_error_nodes(root, limit=1)
            line = node_line(errors[0]) if errors else 1
            raise ProcessingError(file_path, f"CSS syntax error near line {line}")

        reported: Set[Tuple[str, int]] = set()
        for keys, fallback, line in self._constructs(root):
            feature_id = self._resolve(keys, fallback)
            if feature_id is None or (feature_id, line) in reported:
                continue
            message = self._unsupported_message(feature_id)
            if message is None:
                continue
            reported.add((feature_id, line))
            on_feature_usage(FeatureUsage(feature_id, line, message))
        return len(reported)

    def _resolve(self, keys: Tuple[str, ...], fallback: str) -> Optional[str]:
        for key in keys:
            feature_id = self.dataset.resolve_compat_key(key)
            if feature_id is not None:
                return feature_id
        if fallback and fallback in self.dataset:
            return fallback.lower()
        return None

    def _unsupported_message(self, feature_id: str) -> Optional[str]:
        record: FeatureStatusRecord = self.dataset[feature_id]
        title = record.title or feature_id
        if not record.support:
            return f"{title} has no browser support data"
        missing: List[str] = []
        for target in self.targets:
            first_supported = record.support.get(target.browser)
            if not target.supports(first_supported):
                missing.append(target.describe(first_supported))
        if not missing:
            return None
        return f"{title} not supported by: {', '.join(missing)}"

    def _constructs(self, root) -> Iterator[_Construct]:
        stack = [root]
        while stack:
            node = stack.pop()
            yield from self._node_constructs(node)
            stack.extend(reversed(node.named_children))

    def _node_constructs(self, node) -> Iterator[_Construct]:
        node_type = node.type
        line = node_line(node)

        if node_type == "declaration":
            yield from self._declaration_constructs(node, line)

        elif node_type == "call_expression":
            name = self._first_child_text(node, "function_name").lower()
            if name:
                yield (f"css.types.{name}",), name, line

        elif node_type == "at_rule" or node_type.endswith("_statement"):
            keyword = node_text(node.children[0]) if node.children else ""
            if keyword.startswith("@"):
                name = strip_vendor_prefix(keyword[1:].lower())
                yield (f"css.at-rules.{name}",), name, line

        elif node_type in ("pseudo_class_selector", "pseudo_element_selector"):
            name = self._pseudo_name(node).lower()
            if name:
                name = strip_vendor_prefix(name)
                yield (f"css.selectors.{name}",), name, line

        elif node_type == "nesting_selector":
            yield ("css.selectors.nesting",), "", line

    def _declaration_constructs(self, node, line: int) -> Iterator[_Construct]:
        prop = self._first_child_text(node, "property_name").lower()
        if not prop or prop.startswith("--"):
            return
        prop = strip_vendor_prefix(prop)
        keys: List[str] = []
        for child in node.named_children:
            if child.type == "plain_value":
                keyword = strip_vendor_prefix(node_text(child).lower())
                keys.append(f"css.properties.{prop}.{keyword}")
        keys.append(f"css.properties.{prop}")
        yield tuple(keys), prop, line

    @staticmethod
    def _first_child_text(node, child_type: str) -> str:
        for child in node.children:
            if child.type == child_type:
                return node_text(child)
        return ""

    @staticmethod
    def _pseudo_name(node) -> str:
        # The name is the identifier right after the ':' or '::' token;
        # an earlier named child is the selector the pseudo applies to.
        seen_colon = False
        for child in node.children:
            if not child.is_named and child.type in (":", "::"):
                seen_colon = True
                continue
            if seen_colon and child.is_named:
                return node_text(child)
        return ""
