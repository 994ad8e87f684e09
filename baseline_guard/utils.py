"""
Utility functions for the Baseline compliance engine.
"""

import re
from pathlib import Path
from typing import List, Optional, Union

from . import grammars

SCRIPT_GRAMMARS = {
    '.js': grammars.JAVASCRIPT,
    '.jsx': grammars.JAVASCRIPT,
    '.mjs': grammars.JAVASCRIPT,
    '.cjs': grammars.JAVASCRIPT,
    '.ts': grammars.TYPESCRIPT,
    '.mts': grammars.TYPESCRIPT,
    '.cts': grammars.TYPESCRIPT,
    '.tsx': grammars.TSX,
}

STYLE_EXTENSIONS = {'.css'}

_BRACE_PATTERN = re.compile(r"\{([^{}]*)\}")


def detect_kind(file_path: Union[str, Path]) -> str:
    """Classify a file as 'script', 'style' or 'unknown' by extension."""
    ext = Path(file_path).suffix.lower()
    if ext in SCRIPT_GRAMMARS:
        return 'script'
    if ext in STYLE_EXTENSIONS:
        return 'style'
    return 'unknown'


def script_grammar(file_path: Union[str, Path]) -> Optional[str]:
    """Grammar name for a script file, or None if not a script."""
    return SCRIPT_GRAMMARS.get(Path(file_path).suffix.lower())


def node_text(node) -> str:
    """Source text of a tree-sitter node."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def node_line(node) -> int:
    """1-based start line of a tree-sitter node."""
    return node.start_point[0] + 1


def children_with_fields(node):
    """Yield (child, field_name) for every child of a tree-sitter node."""
    cursor = node.walk()
    if not cursor.goto_first_child():
        return
    while True:
        yield cursor.node, cursor.field_name
        if not cursor.goto_next_sibling():
            break


def same_node(a, b) -> bool:
    """True if both nodes cover the same span with the same type."""
    if a is None or b is None:
        return False
    return (
        a.start_byte == b.start_byte
        and a.end_byte == b.end_byte
        and a.type == b.type
    )


def expand_braces(pattern: str) -> List[str]:
    """Expand shell-style brace alternatives: 'src/*.{js,css}' -> two patterns."""
    match = _BRACE_PATTERN.search(pattern)
    if not match:
        return [pattern]
    head, tail = pattern[:match.start()], pattern[match.end():]
    expanded: List[str] = []
    for option in match.group(1).split(','):
        for result in expand_braces(head + option + tail):
            if result not in expanded:
                expanded.append(result)
    return expanded


def strip_vendor_prefix(name: str) -> str:
    """'-webkit-box-shadow' -> 'box-shadow'."""
    match = re.match(r"^-(?:webkit|moz|ms|o)-(.+)$", name)
    return match.group(1) if match else name
