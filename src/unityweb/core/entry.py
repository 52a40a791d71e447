"""One archive entry and its metadata block.

Metadata block layout (all u32 little endian):
  offset       4B  absolute position of the payload inside the archive
  size         4B  payload length
  name_length  4B
  name         name_length bytes (no encoding enforced, usually UTF-8)

The payload itself is not part of the block: it lives in the payload
region and is read by the archive once the whole table is known.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO

from unityweb.core.u32 import U32_BYTES, decode_u32_le, encode_u32_le
from unityweb.errors import TruncationError

OFFSET_FIELD_BYTES = U32_BYTES
SIZE_FIELD_BYTES = U32_BYTES
NAME_LENGTH_FIELD_BYTES = U32_BYTES
FIXED_BLOCK_BYTES = OFFSET_FIELD_BYTES + SIZE_FIELD_BYTES + NAME_LENGTH_FIELD_BYTES

CHUNK_SIZE_DEFAULT = 256 * 1024


def read_exact(stream: BinaryIO, n: int, what: str, *, chunk_size: int = CHUNK_SIZE_DEFAULT) -> bytes:
    """Read exactly ``n`` bytes or raise TruncationError.

    Reads in bounded chunks: a corrupt length field must not turn into a
    single huge allocation.
    """
    if n == 0:
        return b""
    buf = bytearray()
    while len(buf) < n:
        remaining = n - len(buf)
        chunk = stream.read(chunk_size if remaining > chunk_size else remaining)
        if not chunk:
            break
        buf += chunk
    if len(buf) != n:
        raise TruncationError(f"truncated {what}: expected {n} bytes, got {len(buf)}")
    return bytes(buf)


@dataclass
class FileEntry:
    name: bytes
    size: int
    # Zero until the archive recomputes offsets (or decode reads it).
    offset: int = 0
    content: bytes = b""

    @property
    def name_length(self) -> int:
        return len(self.name)

    @property
    def name_str(self) -> str:
        return os.fsdecode(self.name)

    @property
    def display_name(self) -> str:
        """Printable name: undecodable bytes shown as \\xNN escapes."""
        return self.name.decode("utf-8", "backslashreplace")

    def metadata_block_size(self) -> int:
        return FIXED_BLOCK_BYTES + self.name_length

    def encode_metadata(self) -> bytes:
        out = bytearray()
        out += encode_u32_le(self.offset)
        out += encode_u32_le(self.size)
        out += encode_u32_le(self.name_length)
        out += self.name
        return bytes(out)

    @classmethod
    def decode_metadata(cls, stream: BinaryIO) -> "FileEntry":
        offset = decode_u32_le(read_exact(stream, OFFSET_FIELD_BYTES, "entry offset"))
        size = decode_u32_le(read_exact(stream, SIZE_FIELD_BYTES, "entry size"))
        name_length = decode_u32_le(read_exact(stream, NAME_LENGTH_FIELD_BYTES, "entry name length"))
        name = read_exact(stream, name_length, "entry name")
        return cls(name=name, size=size, offset=offset)
