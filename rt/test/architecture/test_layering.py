from __future__ import annotations

import ast
from pathlib import Path

import pytest

RT_ROOT = Path(__file__).resolve().parents[2]

_LIBRARY_LAYERS = ("core", "platform", "output", "model", "git", "issues", "services")


def _source_files() -> list[Path]:
    return [
        path
        for path in sorted(RT_ROOT.rglob("*.py"))
        if "test" not in path.relative_to(RT_ROOT).parts and "__pycache__" not in path.parts
    ]


def _imports(path: Path) -> list[tuple[str, int]]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    found: list[tuple[str, int]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend((alias.name, node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            found.append((node.module, node.lineno))
    return found


def _violations(paths: list[Path], forbidden: tuple[str, ...]) -> list[str]:
    out: list[str] = []
    for path in paths:
        for module, line in _imports(path):
            if any(module == f or module.startswith(f + ".") for f in forbidden):
                out.append(f"{path.relative_to(RT_ROOT)}:{line} imports {module}")
    return out


def test_source_tree_found() -> None:
    assert any(p.name == "workspace.py" for p in _source_files())


def test_subprocess_only_in_platform_process() -> None:
    allowed = RT_ROOT / "platform" / "process.py"
    paths = [p for p in _source_files() if p != allowed]
    assert _violations(paths, ("subprocess",)) == []


def test_rich_only_in_console() -> None:
    allowed = RT_ROOT / "output" / "console.py"
    paths = [p for p in _source_files() if p != allowed]
    assert _violations(paths, ("rich",)) == []


@pytest.mark.parametrize("layer", _LIBRARY_LAYERS)
def test_library_layers_do_not_import_cli(layer: str) -> None:
    paths = [p for p in _source_files() if p.relative_to(RT_ROOT).parts[0] == layer]
    assert _violations(paths, ("rt.cli", "typer")) == []
