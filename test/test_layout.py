"""
Import conventions: the app layer goes through deps, the engine does not.
"""

import re
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent

TOP_LEVEL_IMPORT = re.compile(r"^(?:import|from)\s+([\w.]+)", re.MULTILINE)


def top_level_imports(path):
    return TOP_LEVEL_IMPORT.findall(path.read_text(encoding="utf-8"))


@pytest.mark.parametrize("path", sorted((ROOT / "baseline_guard").rglob("*.py")), ids=str)
def test_engine_does_not_use_deps(path):
    assert "deps" not in top_level_imports(path)


@pytest.mark.parametrize("path", sorted((ROOT / "app").rglob("*.py")), ids=str)
def test_app_imports_through_deps(path):
    for module in top_level_imports(path):
        assert module == "deps" or module.startswith(("baseline_guard", ".")), module
