"""UnityWebData1.0 archive model.

Layout (all integers u32 little endian):
  [MAGIC 16B "UnityWebData1.0\\0"][start_offset 4B][metadata_block ...][payload ...]

start_offset is the absolute position of the first payload, i.e. the end of
the metadata table. Payloads are concatenated in entry order, so for i > 0
offset[i] == offset[i-1] + size[i-1] and offset[0] == start_offset.

Two phases:
  - building: Archive() + append(); offsets are 0 until recompute_offsets()
  - resolved: offsets computed (encode) or trusted from input (decode)
"""

from __future__ import annotations

import io
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Final, Iterator

from unityweb.core.entry import FileEntry, read_exact
from unityweb.core.u32 import U32_BYTES, U32_MAX, check_u32, decode_u32_le, encode_u32_le
from unityweb.errors import ArchiveIOError, FormatError, TruncationError

MAGIC: Final[bytes] = b"UnityWebData1.0\x00"
MAGIC_LEN: Final[int] = 16
START_OFFSET_LEN: Final[int] = U32_BYTES
HEADER_LEN: Final[int] = MAGIC_LEN + START_OFFSET_LEN


def _as_name_bytes(name: str | bytes) -> bytes:
    if isinstance(name, str):
        return os.fsencode(name)
    return bytes(name)


@dataclass
class Archive:
    magic: bytes = MAGIC
    start_offset: int = 0
    entries: list[FileEntry] = field(default_factory=list)

    @classmethod
    def new(cls) -> "Archive":
        return cls()

    # --- building ---

    def append(self, name: str | bytes, content: bytes) -> FileEntry:
        name_b = _as_name_bytes(name)
        data = bytes(content)
        if len(name_b) > U32_MAX:
            raise ValueError(f"entry name too long for u32 field: {len(name_b)} bytes")
        if len(data) > U32_MAX:
            raise ValueError(f"entry content too large for u32 field: {len(data)} bytes")
        ent = FileEntry(name=name_b, size=len(data), offset=0, content=data)
        self.entries.append(ent)
        return ent

    def _layout(self) -> tuple[int, list[int]]:
        """Return (start_offset, offsets) implied by the current entries."""
        if not self.entries:
            return 0, []
        start = HEADER_LEN + sum(e.metadata_block_size() for e in self.entries)
        check_u32(start, "start_offset")
        offsets: list[int] = []
        off = start
        for e in self.entries:
            offsets.append(check_u32(off, f"offset of {e.name_str!r}"))
            off += e.size
        # the payload region must end inside the u32 address space too
        check_u32(off, "archive end")
        return start, offsets

    def recompute_offsets(self) -> None:
        start, offsets = self._layout()
        self.start_offset = start
        for e, off in zip(self.entries, offsets):
            e.offset = off

    def layout_problems(self) -> list[str]:
        """Compare stored offsets with the computed layout (no mutation)."""
        problems: list[str] = []
        if not self.entries:
            if self.start_offset not in (0, HEADER_LEN):
                problems.append(f"empty archive with start_offset {self.start_offset}")
            return problems

        start, offsets = self._layout()
        if self.start_offset != start:
            problems.append(f"start_offset {self.start_offset}, expected {start}")
        for i, (e, off) in enumerate(zip(self.entries, offsets)):
            if e.offset != off:
                problems.append(f"entry {i} {e.name_str!r}: offset {e.offset}, expected {off}")
            if e.size != len(e.content):
                problems.append(f"entry {i} {e.name_str!r}: size {e.size}, content {len(e.content)} bytes")
        return problems

    # --- access ---

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(self.entries)

    def names(self) -> list[str]:
        return [e.name_str for e in self.entries]

    def get(self, name: str | bytes) -> FileEntry:
        key = _as_name_bytes(name)
        for e in self.entries:
            if e.name == key:
                return e
        raise KeyError(name)

    # --- codec ---

    def encode(self) -> bytes:
        # size goes into the table, content into the payload region: they must agree
        for i, e in enumerate(self.entries):
            if e.size != len(e.content):
                raise ValueError(
                    f"entry {i} {e.name_str!r}: size {e.size}, content {len(e.content)} bytes"
                )
        self.recompute_offsets()

        out = bytearray()
        out += self.magic
        out += encode_u32_le(self.start_offset)
        for e in self.entries:
            out += e.encode_metadata()
        for e in self.entries:
            out += e.content
        return bytes(out)

    @classmethod
    def decode(cls, stream: BinaryIO) -> "Archive":
        try:
            magic = read_exact(stream, MAGIC_LEN, "magic")
        except TruncationError as err:
            raise FormatError("invalid magic header (input shorter than 16 bytes)") from err
        if magic != MAGIC:
            raise FormatError(f"invalid magic header: {magic!r}")

        start_offset = decode_u32_le(read_exact(stream, START_OFFSET_LEN, "start_offset"))
        if 0 < start_offset < HEADER_LEN:
            raise TruncationError(f"corrupt start_offset {start_offset}: points inside the header")

        arc = cls(magic=magic, start_offset=start_offset)

        consumed = HEADER_LEN
        while consumed < start_offset:
            ent = FileEntry.decode_metadata(stream)
            consumed += ent.metadata_block_size()
            if consumed > start_offset:
                raise TruncationError(
                    f"corrupt metadata table: entry {len(arc.entries)} ends at {consumed}, "
                    f"past start_offset {start_offset}"
                )
            arc.entries.append(ent)

        for ent in arc.entries:
            ent.content = read_exact(stream, ent.size, f"payload of {ent.name_str!r}")

        return arc

    @classmethod
    def from_bytes(cls, blob: bytes) -> "Archive":
        return cls.decode(io.BytesIO(blob))

    # --- files ---

    def write_to_file(self, path: str | Path) -> None:
        blob = self.encode()
        p = Path(path)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(blob)
        except OSError as err:
            raise ArchiveIOError(f"cannot write archive {p}", err) from err

    def write_entries_to_directory(self, output_dir: str | Path) -> None:
        out = Path(output_dir)
        for e in self.entries:
            rel = Path(e.name_str)
            if b"\x00" in e.name or not rel.parts or rel.anchor or ".." in rel.parts:
                raise FormatError(f"entry name not usable as a relative path: {e.name_str!r}")
            dest = out / rel
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                dest.write_bytes(e.content)
            except OSError as err:
                raise ArchiveIOError(f"cannot write {dest}", err) from err


def decode_from_file(path: str | Path) -> Archive:
    p = Path(path)
    try:
        fp = p.open("rb")
    except OSError as err:
        raise ArchiveIOError(f"cannot open archive {p}", err) from err
    with fp:
        try:
            return Archive.decode(fp)
        except OSError as err:
            raise ArchiveIOError(f"cannot read archive {p}", err) from err
