"""Verification helpers.

A decoded archive is structurally sound (magic, table boundary, payload
lengths) or decode would have failed. verify additionally checks that the
stored offsets describe the layout the payloads were actually read from.
"""

from __future__ import annotations

from pathlib import Path

from unityweb.core.archive import Archive, decode_from_file
from unityweb.errors import FormatError

MAX_REPORTED_PROBLEMS = 5


def verify_archive(arc: Archive) -> None:
    problems = arc.layout_problems()
    if not problems:
        return
    shown = problems[:MAX_REPORTED_PROBLEMS]
    more = len(problems) - len(shown)
    msg = "inconsistent offset table: " + "; ".join(shown)
    if more > 0:
        msg += f" (+{more} more)"
    raise FormatError(msg)


def verify_archive_file(path: Path) -> Archive:
    arc = decode_from_file(path)
    verify_archive(arc)
    return arc
