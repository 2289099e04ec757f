"""
Layering rules.

Dependencies point inward: entry points and infrastructure depend on the
application layer, which depends on the domain, which depends on nothing
but the standard library. These tests read the import statements of every
module and fail on an import that points the wrong way.
"""

import ast
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "orderflow"

FRAMEWORKS = ("fastapi", "sqlalchemy", "pydantic", "pydantic_settings", "httpx", "click")


def module_name(path: Path) -> str:
    parts = path.relative_to(PACKAGE_ROOT.parent).with_suffix("").parts
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


def imported_modules(path: Path) -> set[str]:
    """Absolute names of everything a module imports, relative imports resolved."""
    tree = ast.parse(path.read_text(encoding="utf-8"))
    package = module_name(path).split(".")
    if path.name != "__init__.py":
        package = package[:-1]

    names: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = package[: len(package) - (node.level - 1)]
                module = ".".join([*base, node.module] if node.module else base)
            else:
                module = node.module or ""
            names.add(module)
            names.update(f"{module}.{alias.name}" for alias in node.names)
    return names


def modules_under(*package: str) -> list[Path]:
    return sorted(PACKAGE_ROOT.joinpath(*package).rglob("*.py"))


def violations(paths: list[Path], forbidden: tuple[str, ...]) -> list[str]:
    found = []
    for path in paths:
        for name in sorted(imported_modules(path)):
            if any(name == prefix or name.startswith(f"{prefix}.") for prefix in forbidden):
                found.append(f"{module_name(path)} imports {name}")
    return found


def test_modules_are_found() -> None:
    assert modules_under("domain")
    assert modules_under("application")
    assert modules_under("infrastructure")


def test_domain_depends_on_nothing_outside_itself() -> None:
    forbidden = (
        "orderflow.application",
        "orderflow.infrastructure",
        "orderflow.core",
        "orderflow.config",
        "orderflow.database",
        "orderflow.models",
        "orderflow.exceptions",
        "orderflow.main",
        "structlog",
        *FRAMEWORKS,
    )

    assert violations(modules_under("domain"), forbidden) == []


def test_application_does_not_know_infrastructure() -> None:
    forbidden = (
        "orderflow.infrastructure",
        "orderflow.core",
        "orderflow.database",
        "orderflow.models",
        "orderflow.main",
        *FRAMEWORKS,
    )

    assert violations(modules_under("application"), forbidden) == []


@pytest.mark.parametrize(
    "path",
    [p for p in modules_under("application", "ordering", "use_cases") if p.name != "__init__.py"],
    ids=lambda p: p.stem,
)
def test_use_cases_do_not_call_each_other(path: Path) -> None:
    own = module_name(path)
    others = [
        name
        for name in imported_modules(path)
        if name.startswith("orderflow.application.ordering.use_cases") and not name.startswith(own)
    ]

    assert others == []


def test_entities_do_not_reach_for_services() -> None:
    forbidden = ("orderflow.application", "orderflow.infrastructure")

    assert violations(modules_under("domain", "ordering", "entities"), forbidden) == []


def test_services_and_repositories_do_not_call_use_cases() -> None:
    paths = [
        *modules_under("infrastructure", "ordering", "services"),
        *modules_under("infrastructure", "ordering", "repositories"),
        *modules_under("infrastructure", "ordering", "mappers"),
    ]

    assert violations(paths, ("orderflow.application.ordering.use_cases",)) == []


def test_entry_points_go_through_use_cases() -> None:
    entry_points = [
        *modules_under("infrastructure", "ordering", "routers"),
        *modules_under("infrastructure", "ordering", "workers"),
        PACKAGE_ROOT / "infrastructure" / "ordering" / "cli.py",
    ]
    forbidden = (
        "orderflow.infrastructure.ordering.repositories",
        "orderflow.infrastructure.ordering.mappers",
        "orderflow.models",
        "sqlalchemy",
    )

    assert violations(entry_points, forbidden) == []
