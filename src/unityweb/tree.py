"""
Directory bridge.

pack   : directory tree -> Archive (entry names are relative POSIX paths)
unpack : archive file   -> directory tree (parents created as needed)

Order
-----
Files are appended sorted by their relative POSIX path, so packing the same
tree twice yields the same bytes regardless of file system listing order.
"""

from __future__ import annotations

from pathlib import Path

from unityweb.core.archive import Archive, decode_from_file
from unityweb.errors import ArchiveIOError, UsageError


def iter_files_deterministic(root: Path) -> list[Path]:
    files = [p for p in Path(root).rglob("*") if p.is_file()]
    files.sort(key=lambda p: p.relative_to(root).as_posix())
    return files


def build_archive_from_directory(input_dir: Path) -> Archive:
    inp = Path(input_dir)
    if not inp.is_dir():
        raise UsageError(f"input_dir is not a directory: {inp}")

    arc = Archive()
    for p in iter_files_deterministic(inp):
        rel = p.relative_to(inp).as_posix()
        try:
            data = p.read_bytes()
        except OSError as err:
            raise ArchiveIOError(f"cannot read {p}", err) from err
        arc.append(rel, data)
    return arc


def pack_directory(input_dir: Path, output_path: Path) -> Archive:
    arc = build_archive_from_directory(input_dir)
    arc.write_to_file(output_path)
    return arc


def unpack_file(input_path: Path, output_dir: Path) -> Archive:
    arc = decode_from_file(input_path)
    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise ArchiveIOError(f"cannot create {out}", err) from err
    arc.write_entries_to_directory(out)
    return arc
