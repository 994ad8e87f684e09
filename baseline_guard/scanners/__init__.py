"""
Scanners package for Baseline feature usage.
"""

from .script_scanner import ScriptScanner
from .style_scanner import StyleScanner

__all__ = [
    'ScriptScanner',
    'StyleScanner',
]
