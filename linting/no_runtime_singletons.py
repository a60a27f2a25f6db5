#!/usr/bin/env python
"""Reject process-wide upstream clients held in module state.

Speech and generation clients are owned by the factories built in
`livescribe.runtime.dependencies`. Module-level clients, lazily cached
`_client = None` slots and `global` rebinding of them are violations.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT / "livescribe"

LAZY_SLOT_SUFFIXES = ("_client", "_instance")
SINGLETON_FN_NAMES = {"get_instance", "reset_instance", "get_client"}
CLIENT_CALL_SUFFIX = "Client"


def _target_names(node: ast.Assign | ast.AnnAssign) -> list[str]:
    targets = [node.target] if isinstance(node, ast.AnnAssign) else node.targets
    return [t.id for t in targets if isinstance(t, ast.Name)]


def _called_name(value: ast.expr | None) -> str | None:
    if not isinstance(value, ast.Call):
        return None
    func = value.func
    if isinstance(func, ast.Attribute):
        return func.attr
    if isinstance(func, ast.Name):
        return func.id
    return None


def _is_lazy_slot(names: list[str], value: ast.expr | None) -> bool:
    if not isinstance(value, ast.Constant) or value.value is not None:
        return False
    return any(name.lower().endswith(LAZY_SLOT_SUFFIXES) for name in names)


def _module_level_violations(tree: ast.Module, rel: Path) -> list[str]:
    violations: list[str] = []
    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name in SINGLETON_FN_NAMES:
            violations.append(f"  {rel}:{node.lineno} function `{node.name}` suggests a cached client")
            continue
        if not isinstance(node, (ast.Assign, ast.AnnAssign)):
            continue
        names = _target_names(node)
        if not names:
            continue
        if _is_lazy_slot(names, node.value):
            violations.append(f"  {rel}:{node.lineno} lazy client slot: {', '.join(names)}")
            continue
        called = _called_name(node.value)
        if called is not None and called.endswith(CLIENT_CALL_SUFFIX):
            violations.append(f"  {rel}:{node.lineno} module-level client `{called}` bound to {', '.join(names)}")
    return violations


def _global_rebinding_violations(tree: ast.Module, rel: Path) -> list[str]:
    violations: list[str] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Global):
            continue
        suspicious = [name for name in node.names if name.lower().endswith(LAZY_SLOT_SUFFIXES)]
        if suspicious:
            violations.append(f"  {rel}:{node.lineno} `global` rebinding of {', '.join(suspicious)}")
    return violations


def collect_violations(filepath: Path, root: Path = ROOT) -> list[str]:
    try:
        source = filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []

    try:
        tree = ast.parse(source, filename=str(filepath))
    except SyntaxError:
        return []

    rel = filepath.relative_to(root) if filepath.is_relative_to(root) else filepath
    return _module_level_violations(tree, rel) + _global_rebinding_violations(tree, rel)


def main(src_dir: Path = SRC_DIR) -> int:
    if not src_dir.is_dir():
        print(f"[no-runtime-singletons] Missing source directory: {src_dir}", file=sys.stderr)
        return 1

    violations: list[str] = []
    for py_file in sorted(src_dir.rglob("*.py")):
        if "__pycache__" in py_file.parts:
            continue
        violations.extend(collect_violations(py_file))

    if not violations:
        return 0

    print("Runtime singleton pattern violations:", file=sys.stderr)
    for violation in violations:
        print(violation, file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
