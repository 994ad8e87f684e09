"""
Compliance policy and whitelist.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from .errors import ConfigError

WIDELY = "widely"
NEWLY = "newly"

TargetSpec = Union[str, int]

_YEAR_PATTERN = re.compile(r"^\d{4}$")


def parse_target(value: object) -> TargetSpec:
    """Normalize a target spec to "widely", "newly" or a year."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid target baseline: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in (WIDELY, NEWLY):
            return text
        if _YEAR_PATTERN.match(text):
            return int(text)
    raise ConfigError(
        f"Invalid target baseline: {value!r} (expected 'widely', 'newly' or a year)"
    )


@dataclass(frozen=True)
class CompliancePolicy:
    """Target Baseline and strictness for one run."""
    target: TargetSpec = WIDELY
    strict: bool = False

    def __post_init__(self):
        object.__setattr__(self, "target", parse_target(self.target))
        object.__setattr__(self, "strict", bool(self.strict))

    @property
    def is_year(self) -> bool:
        return isinstance(self.target, int)

    def describe(self) -> str:
        label = str(self.target)
        return f"{label} (strict)" if self.strict else label


class Whitelist:
    """Case-insensitive set of identifiers that are never reported."""

    def __init__(self, names: Optional[Iterable[str]] = None):
        self._names = frozenset(n.strip().lower() for n in (names or ()) if n and n.strip())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"Whitelist({sorted(self._names)!r})"
