#!/usr/bin/env python3
"""Keep env and wall-clock reads out of the timing components."""

from __future__ import annotations

import argparse
import ast
from pathlib import Path

ENV_READ_FILES = {"frametime/runtime/config.py"}
CLOCK_READ_FILES = {"frametime/runtime/clock.py"}
CLOCK_FUNCTIONS = {
    "monotonic",
    "monotonic_ns",
    "perf_counter",
    "perf_counter_ns",
    "time",
    "time_ns",
}


def _dotted(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        parent = _dotted(node.value)
        return None if parent is None else f"{parent}.{node.attr}"
    return None


def _is_env_read(node: ast.AST) -> bool:
    if isinstance(node, ast.Call):
        return _dotted(node.func) in {"os.getenv", "os.environ.get"}
    if isinstance(node, ast.Subscript):
        return _dotted(node.value) == "os.environ"
    return False


def _clock_imports(tree: ast.Module) -> set[str]:
    names: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module == "time":
            names.update(alias.asname or alias.name for alias in node.names if alias.name in CLOCK_FUNCTIONS)
    return names


def _is_clock_read(node: ast.AST, imported: set[str]) -> bool:
    if not isinstance(node, ast.Call):
        return False
    name = _dotted(node.func)
    if name is None:
        return False
    if name in imported:
        return True
    module, _, attr = name.rpartition(".")
    return module == "time" and attr in CLOCK_FUNCTIONS


def check_file(path: Path, rel: str) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    imported = _clock_imports(tree)
    violations: list[str] = []
    for node in ast.walk(tree):
        if rel not in ENV_READ_FILES and _is_env_read(node):
            violations.append(f"{rel}:{node.lineno} env read outside the timing config module")
        if rel not in CLOCK_READ_FILES and _is_clock_read(node, imported):
            violations.append(f"{rel}:{node.lineno} wall-clock read outside the frame timer")
    return violations


def main() -> int:
    parser = argparse.ArgumentParser(description="Check env and clock read placement.")
    parser.add_argument("--root", default="frametime")
    args = parser.parse_args()

    violations: list[str] = []
    for path in sorted(Path(args.root).rglob("*.py")):
        violations.extend(check_file(path, path.as_posix()))

    if violations:
        print("Runtime purity violations:")
        for line in violations:
            print(f"  {line}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
