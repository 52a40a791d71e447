"""Typed errors for unityweb.

Single source of truth for exit codes lives here.

Policy:
- The error set is closed: every failure is one ``ErrorKind``.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_FORMAT = 11
EXIT_TRUNCATED = 12
EXIT_IO = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage error (invalid args, input directory missing, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Unexpected failure"),
    ExitCodeInfo(EXIT_FORMAT, "FORMAT", "Not a UnityWebData1.0 archive (bad magic) or inconsistent layout"),
    ExitCodeInfo(EXIT_TRUNCATED, "TRUNCATED", "Archive ends early or its metadata table is corrupt"),
    ExitCodeInfo(EXIT_IO, "IO", "File system error (missing path, permissions, disk full)"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/unityweb/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every library error is a `UnityWebError` with a `kind` and an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Error kinds
# ---------------


class ErrorKind(enum.Enum):
    FORMAT = "format"
    TRUNCATION = "truncation"
    IO = "io"
    USAGE = "usage"


_EXIT_CODE_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.FORMAT: EXIT_FORMAT,
    ErrorKind.TRUNCATION: EXIT_TRUNCATED,
    ErrorKind.IO: EXIT_IO,
    ErrorKind.USAGE: EXIT_USAGE,
}


class UnityWebError(Exception):
    """Base error for unityweb. Dispatch on ``kind``, not on the subclass."""

    kind: ErrorKind = ErrorKind.FORMAT

    @property
    def exit_code(self) -> int:
        return _EXIT_CODE_BY_KIND.get(self.kind, EXIT_GENERIC)


class FormatError(UnityWebError):
    kind = ErrorKind.FORMAT


class TruncationError(UnityWebError):
    kind = ErrorKind.TRUNCATION


class ArchiveIOError(UnityWebError):
    kind = ErrorKind.IO

    def __init__(self, message: str, cause: OSError):
        super().__init__(f"{message}: {cause}")
        self.cause = cause


class UsageError(UnityWebError):
    kind = ErrorKind.USAGE
