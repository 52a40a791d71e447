from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from unityweb.errors import (
    EXIT_CODES,
    EXIT_FORMAT,
    EXIT_IO,
    EXIT_TRUNCATED,
    EXIT_USAGE,
    ArchiveIOError,
    ErrorKind,
    FormatError,
    TruncationError,
    UsageError,
    exit_code_info,
    render_exit_codes_markdown,
)


def test_exit_codes_doc_is_up_to_date() -> None:
    doc = Path(__file__).resolve().parents[1] / "docs" / "exit_codes.md"
    assert doc.read_text(encoding="utf-8") == render_exit_codes_markdown()


def test_exit_codes_unique() -> None:
    codes = [e.code for e in EXIT_CODES]
    names = [e.name for e in EXIT_CODES]
    assert len(set(codes)) == len(codes)
    assert len(set(names)) == len(names)
    assert exit_code_info(EXIT_IO).name == "IO"
    assert exit_code_info(99) is None


def test_error_kinds_map_to_exit_codes() -> None:
    cause = PermissionError(13, "Permission denied")
    errs = {
        ErrorKind.FORMAT: FormatError("x"),
        ErrorKind.TRUNCATION: TruncationError("x"),
        ErrorKind.IO: ArchiveIOError("cannot write", cause),
        ErrorKind.USAGE: UsageError("x"),
    }
    assert {k: e.kind for k, e in errs.items()} == {k: k for k in ErrorKind}
    assert [e.exit_code for e in errs.values()] == [EXIT_FORMAT, EXIT_TRUNCATED, EXIT_IO, EXIT_USAGE]
    assert errs[ErrorKind.IO].cause is cause
    assert "Permission denied" in str(errs[ErrorKind.IO])


def test_gen_script_check_mode() -> None:
    repo = Path(__file__).resolve().parents[1]
    r = subprocess.run(
        [sys.executable, str(repo / "scripts" / "gen_exit_codes_md.py"), "--check"],
        text=True,
        capture_output=True,
    )
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "up to date" in r.stdout
