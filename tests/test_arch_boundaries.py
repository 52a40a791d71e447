from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

# Orchestrator modules (file system walk, verification, CLI).
# The codec (core/ + errors) must NEVER import these.
ORCH_PREFIXES: tuple[str, ...] = (
    "unityweb.cli",
    "unityweb.tree",
    "unityweb.verify",
)

PACKAGE_ROOT = "unityweb"


@dataclass(frozen=True)
class ImportEdge:
    src: str
    dst: str
    file: Path
    lineno: int


def _is_orch(mod: str) -> bool:
    return any(mod == p or mod.startswith(p + ".") for p in ORCH_PREFIXES)


def _module_name(src_dir: Path, py_file: Path) -> str:
    parts = list(py_file.relative_to(src_dir).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


def _iter_import_edges(src_dir: Path) -> Iterable[ImportEdge]:
    for py in sorted((src_dir / PACKAGE_ROOT).rglob("*.py")):
        mod = _module_name(src_dir, py)
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names = [alias.name for alias in node.names]
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                names = [node.module]
            else:
                continue
            for name in names:
                if name == PACKAGE_ROOT or name.startswith(PACKAGE_ROOT + "."):
                    yield ImportEdge(src=mod, dst=name, file=py, lineno=node.lineno)


def test_package_uses_absolute_imports_only() -> None:
    src_dir = Path(__file__).resolve().parents[1] / "src"
    relative: list[str] = []
    for py in (src_dir / PACKAGE_ROOT).rglob("*.py"):
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom) and node.level > 0:
                relative.append(f"{py}:{node.lineno}")
    assert relative == []


def test_codec_does_not_import_orchestrators() -> None:
    """
    Hard dependency direction:
      ORCH (tree, verify, cli) -> may depend on the codec
      codec                    -> must NOT depend on ORCH
    """
    src_dir = Path(__file__).resolve().parents[1] / "src"
    assert (src_dir / PACKAGE_ROOT).is_dir(), f"Expected src/{PACKAGE_ROOT} at: {src_dir}"

    edges = list(_iter_import_edges(src_dir))
    assert edges, "no internal imports found: wrong src_dir?"

    violations = [e for e in edges if not _is_orch(e.src) and _is_orch(e.dst)]
    if violations:
        lines = ["Forbidden imports detected (codec -> ORCH):"]
        for v in violations:
            lines.append(f"  {v.file}:{v.lineno}  {v.src}  ->  {v.dst}")
        raise AssertionError("\n".join(lines))
