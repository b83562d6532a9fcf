"""Architectural tests for the maturity engine package.

These tests enforce structural rules by static inspection of the source
tree (AST parsing only; nothing under test is executed):
- engine logic stays free of I/O, transport and persistence imports;
- no dynamic code evaluation anywhere in the package;
- every logic module declares its public surface via __all__;
- the package root exports the collaborator-facing operations.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterator, List, Tuple

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[2] / "maturity_engine"
LOGIC_DIR = PACKAGE_ROOT / "logic"

FORBIDDEN_LOGIC_IMPORTS = {
    "fastapi",
    "starlette",
    "sqlalchemy",
    "httpx",
    "requests",
    "socket",
    "subprocess",
    "os",
    "pathlib",
    "sqlite3",
}


def _parse(path: Path) -> ast.Module:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except SyntaxError as exc:
        pytest.fail(f"Source file does not parse: {path}: {exc}")


def _python_files(root: Path) -> List[Path]:
    return sorted(p for p in root.rglob("*.py") if p.is_file())


def _imported_roots(tree: ast.Module) -> Iterator[Tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name.split(".")[0]
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module.split(".")[0]


def _module_all(tree: ast.Module) -> List[str] | None:
    for node in tree.body:
        if isinstance(node, ast.Assign):
            for target in node.targets:
                if isinstance(target, ast.Name) and target.id == "__all__":
                    return [elt.value for elt in node.value.elts if isinstance(elt, ast.Constant)]
    return None


def test_package_layout_exists():
    assert PACKAGE_ROOT.is_dir(), f"Package directory missing: {PACKAGE_ROOT}"
    assert (LOGIC_DIR / "__init__.py").exists()
    assert (PACKAGE_ROOT / "models" / "__init__.py").exists()


@pytest.mark.parametrize("path", _python_files(LOGIC_DIR), ids=lambda p: p.name)
def test_logic_modules_have_no_io_or_transport_imports(path: Path):
    offenders = [
        f"{path.name}:{line} imports {name}"
        for line, name in _imported_roots(_parse(path))
        if name in FORBIDDEN_LOGIC_IMPORTS
    ]
    assert not offenders, "Engine logic must stay pure: " + "; ".join(offenders)


@pytest.mark.parametrize("path", _python_files(PACKAGE_ROOT), ids=lambda p: p.name)
def test_no_dynamic_code_evaluation(path: Path):
    calls = [
        node.lineno
        for node in ast.walk(_parse(path))
        if isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in {"eval", "exec", "compile"}
    ]
    assert not calls, f"{path.name} evaluates code at lines {calls}"


@pytest.mark.parametrize(
    "path",
    [p for p in _python_files(LOGIC_DIR) if p.name != "__init__.py"],
    ids=lambda p: p.name,
)
def test_logic_modules_declare_all(path: Path):
    exported = _module_all(_parse(path))
    assert exported, f"{path.name} must declare a non-empty __all__"


def test_package_exports_collaborator_operations():
    exported = _module_all(_parse(PACKAGE_ROOT / "__init__.py")) or []
    for name in (
        "compute_result",
        "filter_questions_for_respondent",
        "validate_response",
        "compute_statistics",
        "UnsupportedScoringMethodError",
        "CustomScoringExecutionError",
    ):
        assert name in exported, f"maturity_engine must export {name}"
