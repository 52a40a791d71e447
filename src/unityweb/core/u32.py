from __future__ import annotations

U32_BYTES = 4
U32_MAX = 0xFFFFFFFF


def decode_u32_le(b: bytes) -> int:
    """Unsigned little-endian u32 from the first 4 bytes of ``b``."""
    if len(b) < U32_BYTES:
        raise ValueError(f"u32: need {U32_BYTES} bytes, got {len(b)}")
    return int.from_bytes(b[:U32_BYTES], "little")


def encode_u32_le(x: int) -> bytes:
    return check_u32(x, "u32").to_bytes(U32_BYTES, "little")


def check_u32(value: int, what: str) -> int:
    # bool is an int subclass but never a valid length/offset
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an int, got {type(value).__name__}")
    if value < 0 or value > U32_MAX:
        raise ValueError(f"{what} out of u32 range: {value}")
    return value
