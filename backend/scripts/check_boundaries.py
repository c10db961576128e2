#!/usr/bin/env python3
from __future__ import annotations

import argparse
import ast
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PACKAGE = "lark_notify"

DOMAIN_BANNED_EXTERNAL = {
    "celery",
    "fastapi",
    "httpx",
    "jinja2",
    "pydantic",
    "pydantic_settings",
}

APP_BANNED_EXTERNAL = {
    "celery",
    "fastapi",
    "httpx",
    "jinja2",
    "pydantic",
    "pydantic_settings",
}

API_BANNED_EXTERNAL = {
    "celery",
    "jinja2",
}

TASKS_BANNED_EXTERNAL = {
    "fastapi",
    "httpx",
    "jinja2",
}

INFRA_BANNED_EXTERNAL = {
    "celery",
    "fastapi",
}

LAYER_NAMES = ("api", "tasks", "application", "domain", "infrastructure")

EXTERNAL_BANS = {
    "domain": DOMAIN_BANNED_EXTERNAL,
    "application": APP_BANNED_EXTERNAL,
    "api": API_BANNED_EXTERNAL,
    "tasks": TASKS_BANNED_EXTERNAL,
    "infrastructure": INFRA_BANNED_EXTERNAL,
}

FORBIDDEN_INTERNAL = {
    "domain": {"api", "tasks", "application", "infrastructure"},
    "infrastructure": {"api", "tasks", "application"},
    "application": {"api", "tasks"},
    "api": {"infrastructure", "tasks"},
    "tasks": {"infrastructure", "api"},
}

NO_INTERFACE_IMPORT_RULES = {
    ("typing", "Protocol"),
    ("typing_extensions", "Protocol"),
    ("abc", "ABC"),
    ("abc", "ABCMeta"),
    ("abc", "abstractmethod"),
}
NO_INTERFACE_BASES = {"Protocol", "ABC", "ABCMeta"}


@dataclass(frozen=True)
class ImportRef:
    module: str
    lineno: int


def _classify_layer(py_file: Path, *, pkg_root: Path) -> str | None:
    rel = py_file.relative_to(pkg_root)
    if not rel.parts:
        return None
    top = rel.parts[0]
    return top if top in LAYER_NAMES else None


def _normalize_module(module: str, package: str | None) -> str:
    if package and module.startswith(package + "."):
        return module[len(package) + 1 :]
    return module


def _extract_imports(tree: ast.AST) -> list[ImportRef]:
    found: list[ImportRef] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                found.append(ImportRef(module=alias.name, lineno=node.lineno))
        elif isinstance(node, ast.ImportFrom):
            if node.module and node.level == 0:
                found.append(ImportRef(module=node.module, lineno=node.lineno))
    return found


def _extract_no_interface_violations(tree: ast.AST, py_path: Path) -> list[str]:
    violations: list[str] = []
    banned_base_aliases = set(NO_INTERFACE_BASES)

    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            for alias in node.names:
                if (node.module, alias.name) in NO_INTERFACE_IMPORT_RULES:
                    violations.append(
                        f"{py_path}:{node.lineno} no-interfaces rule: forbidden import "
                        f"'{node.module}.{alias.name}'"
                    )
                    if alias.name in NO_INTERFACE_BASES:
                        banned_base_aliases.add(alias.asname or alias.name)

    for node in ast.walk(tree):
        if not isinstance(node, ast.ClassDef):
            continue

        for base in node.bases:
            symbol = _base_symbol(base)
            if symbol is None:
                continue
            if symbol in banned_base_aliases:
                violations.append(
                    f"{py_path}:{node.lineno} no-interfaces rule: class '{node.name}' "
                    f"must not inherit from '{symbol}'"
                )

    return violations


def _base_symbol(node: ast.AST) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Subscript):
        return _base_symbol(node.value)
    return None


def _resolve_package_root(repo_root: Path, package: str) -> Path:
    for candidate in (repo_root / "src" / package, repo_root / package):
        if candidate.is_dir():
            return candidate
    raise SystemExit(f"Package root not found for package '{package}' under {repo_root}")


def find_violations(pkg_root: Path, *, package: str) -> list[str]:
    violations: list[str] = []
    for py_file in sorted(p for p in pkg_root.rglob("*.py") if p.is_file()):
        tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
        violations.extend(_extract_no_interface_violations(tree, py_file))

        layer = _classify_layer(py_file, pkg_root=pkg_root)
        if layer is None:
            continue

        for imp in _extract_imports(tree):
            normalized = _normalize_module(imp.module, package)
            top = normalized.split(".", 1)[0]
            is_internal = imp.module.startswith(package + ".")

            if not is_internal and top in EXTERNAL_BANS[layer]:
                violations.append(f"{py_file}:{imp.lineno} {layer} imports banned external module: {imp.module}")
            if is_internal and top in FORBIDDEN_INTERNAL.get(layer, set()):
                violations.append(f"{py_file}:{imp.lineno} {layer} must not depend on {top}: {imp.module}")

    return violations


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Check layering/import boundaries for API/Tasks→Application→Infrastructure→Domain "
            "(supports src/<package> and <package>/ layouts)."
        )
    )
    parser.add_argument("--root", default=".", help="Repository root (default: current directory).")
    parser.add_argument("--package", default=DEFAULT_PACKAGE, help="Python package name.")
    args = parser.parse_args(argv)

    repo_root = Path(args.root).resolve()
    pkg_root = _resolve_package_root(repo_root, args.package)

    violations = find_violations(pkg_root, package=args.package)
    if violations:
        print("Boundary violations found:\n")
        for v in violations:
            print("-", v)
        return 1

    print(f"No boundary violations under {pkg_root} (package={args.package})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
