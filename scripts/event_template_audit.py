"""Audit tool for event templates.

Compares every ``*.log_event(domain, action)`` call in the package with the
entries of ``twitch_irc/logs/event_templates.json``.
"""

from __future__ import annotations

import argparse
import ast
import json
import re
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "twitch_irc"
TEMPLATES_JSON = PACKAGE_ROOT / "logs" / "event_templates.json"

# Fallback for files that fail to parse; AST extraction is authoritative.
_RE_POSITIONAL = re.compile(
    r"logger\.log_event\(\s*(['\"])(?P<domain>[^'\"]+)\1\s*,\s*(['\"])(?P<action>[^'\"]+)\3"
)


def iter_python_files(root: Path) -> Iterable[Path]:
    for path in root.rglob("*.py"):
        if path.name.startswith("."):
            continue
        yield path


def _gather_string_literals(expr: ast.AST) -> set[str]:
    """Return string literal values in expr, following ternary branches."""
    out: set[str] = set()
    if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
        out.add(expr.value)
    elif isinstance(expr, ast.IfExp):
        out.update(_gather_string_literals(expr.body))
        out.update(_gather_string_literals(expr.orelse))
    return out


def _is_log_event_call(node: ast.Call) -> bool:
    func = node.func
    return isinstance(func, ast.Attribute) and func.attr == "log_event"


def _extract_from_call(node: ast.Call) -> set[tuple[str, str]]:
    domain_expr: ast.AST | None = node.args[0] if len(node.args) >= 1 else None
    action_expr: ast.AST | None = node.args[1] if len(node.args) >= 2 else None
    for kw in node.keywords or []:
        if kw.arg == "domain":
            domain_expr = kw.value
        elif kw.arg == "action":
            action_expr = kw.value
    if not (
        isinstance(domain_expr, ast.Constant) and isinstance(domain_expr.value, str)
    ):
        return set()
    if action_expr is None:
        return set()
    return {(domain_expr.value, a) for a in _gather_string_literals(action_expr)}


def extract_references(paths: Iterable[Path]) -> set[tuple[str, str]]:
    refs: set[tuple[str, str]] = set()
    for path in paths:
        try:
            source = path.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            continue
        try:
            tree = ast.parse(source, filename=str(path))
        except SyntaxError:
            for m in _RE_POSITIONAL.finditer(source):
                refs.add((m.group("domain"), m.group("action")))
            continue
        for node in ast.walk(tree):
            if isinstance(node, ast.Call) and _is_log_event_call(node):
                refs.update(_extract_from_call(node))
    return refs


def load_templates_from_json(path: Path = TEMPLATES_JSON) -> set[tuple[str, str]]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        return set()
    result: set[tuple[str, str]] = set()
    if isinstance(raw, dict):
        for domain, actions in raw.items():
            if isinstance(actions, dict):
                result.update((domain, action) for action in actions)
    return result


@dataclass(slots=True)
class DiffResult:
    missing: set[tuple[str, str]]
    unused: set[tuple[str, str]]


def diff(root: Path = PACKAGE_ROOT, templates: Path = TEMPLATES_JSON) -> DiffResult:
    code_refs = extract_references(iter_python_files(root))
    json_templates = load_templates_from_json(templates)
    return DiffResult(missing=code_refs - json_templates, unused=json_templates - code_refs)


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Audit event templates vs code usages")
    parser.add_argument(
        "--json-output", action="store_true", help="Emit JSON diff result"
    )
    return parser.parse_args(argv)


def emit_human(d: DiffResult) -> None:
    print("Event Template Audit Report")
    print("============================")
    for label, entries in (("Missing", d.missing), ("Unused", d.unused)):
        if entries:
            print(f"{label} templates ({len(entries)}):")
            for domain, action in sorted(entries):
                print(f"  - {domain}:{action}")
        else:
            print(f"No {label.lower()} templates found.")
        print()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    result = diff()
    if args.json_output:
        print(
            json.dumps(
                {"missing": sorted(result.missing), "unused": sorted(result.unused)},
                indent=2,
            )
        )
    else:
        emit_human(result)
    return 1 if result.missing else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
