"""File enumeration service: expands scan globs into source file paths."""

from deps import Iterable, List, Optional, Path, Union, fnmatch, glob

from baseline_guard.utils import detect_kind, expand_braces

# Directories to exclude
EXCLUDE_DIRS = {
    '.git', '.svn', '.hg', '__pycache__', 'node_modules',
    '.venv', 'venv', '.tox', '.idea', '.vscode', 'bower_components', 'dist',
}


def split_patterns(patterns: Union[str, Iterable[str]]) -> List[str]:
    """Split a comma separated pattern string, keeping commas inside braces."""
    if not isinstance(patterns, str):
        return [p.strip() for p in patterns if p and p.strip()]
    parts: List[str] = []
    depth = 0
    current = ""
    for ch in patterns:
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth = max(0, depth - 1)
        if ch == ',' and depth == 0:
            parts.append(current)
            current = ""
            continue
        current += ch
    parts.append(current)
    return [p.strip() for p in parts if p.strip()]


def _is_ignored(rel_path: str, ignore_patterns: List[str]) -> bool:
    for pattern in ignore_patterns:
        if fnmatch(rel_path, pattern):
            return True
        # "**/x" should also match "x" at the root.
        if pattern.startswith('**/') and fnmatch(rel_path, pattern[3:]):
            return True
    return False


def _static_root(pattern: str) -> Path:
    """Leading part of a glob pattern that contains no wildcard."""
    parts: List[str] = []
    for part in Path(pattern).parts:
        if any(ch in part for ch in '*?['):
            break
        parts.append(part)
    return Path(*parts) if parts else Path('.')


def _relative_to(path: Path, base: Path, pattern: str) -> Path:
    """Path of a match relative to ``base``, else to the pattern's static root."""
    resolved = path.resolve()
    for root in (base, _static_root(pattern).resolve()):
        try:
            return resolved.relative_to(root)
        except ValueError:
            continue
    return Path(resolved.name)


def collect_files(
    patterns: Union[str, Iterable[str]],
    ignore_patterns: Optional[Iterable[str]] = None,
    cwd: Optional[Path] = None,
) -> List[Path]:
    """Resolve scan globs to a sorted list of script and style files.

    Args:
        patterns: Comma separated globs (or a list); brace alternatives allowed
        ignore_patterns: Globs matched against paths relative to ``cwd``
        cwd: Directory relative patterns are resolved against

    Returns:
        Sorted, de-duplicated list of absolute file paths
    """
    base = Path(cwd).resolve() if cwd else Path.cwd().resolve()
    ignores: List[str] = []
    for pattern in split_patterns(ignore_patterns or []):
        ignores.extend(expand_braces(pattern))

    found = set()
    for pattern in split_patterns(patterns):
        for expanded in expand_braces(pattern):
            if Path(expanded).is_absolute():
                matches = glob.glob(expanded, recursive=True)
            else:
                matches = [str(base / m) for m in glob.glob(expanded, root_dir=base, recursive=True)]
            for match in matches:
                path = Path(match)
                if not path.is_file():
                    continue
                rel = _relative_to(path, base, expanded)
                # Only directories below the search root count; the project
                # itself may live under e.g. a `dist` directory.
                if any(part in EXCLUDE_DIRS for part in rel.parts[:-1]):
                    continue
                if _is_ignored(rel.as_posix(), ignores):
                    continue
                if detect_kind(path) == 'unknown':
                    continue
                found.add(path.resolve())

    return sorted(found)
