"""Architecture enforcement tests for the assistant core layering.

The orchestration core (``assistant_core/base``) must stay independent of the
transport, composition and vendor layers so it can be reused without FastAPI
or a model SDK installed. Imports are checked statically with ``ast`` to
avoid import-time side effects; relative imports are resolved against the
file's package.

Rules validated here:
1) ``base`` never imports the outer packages, the web stack or a model SDK.
2) ``capabilities``, ``plugins`` and ``backends`` never import ``service``.
3) ``base`` source never names a model vendor.
4) Inside ``base`` only ``timeouts`` reads ``config.defaults``; the
   orchestrator receives its settings from the caller.
"""

from __future__ import annotations

import ast
import re
from pathlib import Path
from typing import Iterable, List, Tuple

REPO_ROOT = Path(__file__).resolve().parents[1]
PACKAGE_DIR = REPO_ROOT / "assistant_core"

FORBIDDEN_FOR_BASE = (
    "assistant_core.service",
    "assistant_core.di",
    "assistant_core.backends",
    "assistant_core.capabilities",
    "assistant_core.plugins",
    "fastapi",
    "uvicorn",
    "openai",
    "pydantic",
    "yaml",
)

_VENDOR_RE = re.compile(r"(?:^|[^a-z0-9_])(?:openai|anthropic|gemini|gpt|ollama|deepseek)(?:[^a-z0-9_]|$)", re.IGNORECASE)


def _iter_python_files(root: Path) -> Iterable[Path]:
    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _module_name(path: Path) -> str:
    rel = path.relative_to(REPO_ROOT).with_suffix("")
    parts = list(rel.parts)
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def _imports(path: Path) -> List[Tuple[int, str]]:
    """Return ``(lineno, absolute_module)`` for every import in ``path``."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    package = _module_name(path)
    if path.name != "__init__.py":
        package = package.rpartition(".")[0]
    found: List[Tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend((node.lineno, alias.name) for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = package.split(".")
                base = base[: len(base) - (node.level - 1)]
                module = ".".join(base + ([node.module] if node.module else []))
            else:
                module = node.module or ""
            found.append((node.lineno, module))
    return found


def _violations(root: Path, forbidden: Iterable[str]) -> List[str]:
    forbidden = tuple(forbidden)
    out: List[str] = []
    for path in _iter_python_files(root):
        for lineno, module in _imports(path):
            if any(module == f or module.startswith(f + ".") for f in forbidden):
                out.append(f"{path.relative_to(REPO_ROOT)}:{lineno} imports {module}")
    return out


def test_base_does_not_import_outer_layers() -> None:
    offenders = _violations(PACKAGE_DIR / "base", FORBIDDEN_FOR_BASE)
    assert not offenders, "base must not depend on outer layers:\n" + "\n".join(offenders)


def test_inner_layers_do_not_import_service() -> None:
    offenders: List[str] = []
    for name in ("capabilities", "plugins", "backends", "config"):
        offenders.extend(_violations(PACKAGE_DIR / name, ("assistant_core.service",)))
    assert not offenders, "service is the outermost layer:\n" + "\n".join(offenders)


def test_base_is_vendor_neutral() -> None:
    offenders: List[str] = []
    for path in _iter_python_files(PACKAGE_DIR / "base"):
        for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
            if _VENDOR_RE.search(line):
                offenders.append(f"{path.relative_to(REPO_ROOT)}:{lineno}: {line.strip()}")
    assert not offenders, "vendor names leaked into base:\n" + "\n".join(offenders)


def test_relative_import_resolution() -> None:
    modules = {m for _, m in _imports(PACKAGE_DIR / "base" / "timeouts.py")}
    assert "assistant_core.config.defaults" in modules
    modules = {m for _, m in _imports(PACKAGE_DIR / "base" / "orchestrator.py")}
    assert "assistant_core.base.registry" in modules


def test_orchestrator_takes_settings_from_its_caller() -> None:
    offenders = [
        f"base/orchestrator.py:{lineno} imports {module}"
        for lineno, module in _imports(PACKAGE_DIR / "base" / "orchestrator.py")
        if module == "assistant_core.config" or module.startswith("assistant_core.config.")
    ]
    assert not offenders, "orchestrator must not read config directly:\n" + "\n".join(offenders)


def test_base_reads_config_only_through_timeouts() -> None:
    offenders = [
        v
        for v in _violations(PACKAGE_DIR / "base", ("assistant_core.config",))
        if not v.startswith("assistant_core/base/timeouts.py:")
    ]
    assert not offenders, "only base/timeouts.py may read config defaults:\n" + "\n".join(offenders)
