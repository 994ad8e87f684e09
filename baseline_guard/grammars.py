"""
Tree-sitter grammars and parser construction.
"""

from functools import lru_cache

import tree_sitter_css
import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser

JAVASCRIPT = "javascript"
TYPESCRIPT = "typescript"
TSX = "tsx"
CSS = "css"


@lru_cache(maxsize=None)
def get_language(name: str) -> Language:
    """Compiled tree-sitter language for a grammar name."""
    if name == JAVASCRIPT:
        return Language(tree_sitter_javascript.language())
    if name == TYPESCRIPT:
        return Language(tree_sitter_typescript.language_typescript())
    if name == TSX:
        return Language(tree_sitter_typescript.language_tsx())
    if name == CSS:
        return Language(tree_sitter_css.language())
    raise ValueError(f"Unknown grammar: {name}")


def parse_source(source_code: str, grammar: str):
    """Parse source text with the given grammar and return the root node."""
    parser = Parser(get_language(grammar))
    tree = parser.parse(source_code.encode("utf-8"))
    return tree.root_node


def find_error_nodes(node, limit: int = 5) -> list:
    """Collect up to ``limit`` ERROR or MISSING nodes below ``node``."""
    errors = []
    stack = [node]
    while stack and len(errors) < limit:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            errors.append(current)
            continue
        if current.has_error:
            stack.extend(reversed(current.children))
    return errors
