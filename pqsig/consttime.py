"""Branch-free helpers on big-endian byte strings.

Each helper walks every byte, whatever the values are, rather than
stopping at the first difference.
"""

from __future__ import annotations

from typing import Sequence


def leading_zeros(n: Sequence[int]) -> int:
    """Number of leading zero bits in the first byte of ``n``."""
    if not n:
        raise ValueError("cannot count leading zeros of an empty byte string")
    return 8 - (n[0] & 0xFF).bit_length()


def rshift(n: Sequence[int], shift: int) -> bytes:
    """Shift the big-endian integer in ``n`` right by ``shift`` bits (below 8)."""
    if not 0 <= shift < 8:
        raise ValueError(f"shift must be in [0, 8), got {shift}")
    mask = (1 << shift) - 1
    carry = 0
    out = bytearray()
    for byte in bytes(n):
        new_carry = ((byte & mask) << (8 - shift)) & 0xFF
        out.append((byte >> shift) | carry)
        carry = new_carry
    return bytes(out)


def is_zero(n: Sequence[int]) -> bool:
    """Whether every byte of ``n`` is zero."""
    acc = 0
    for byte in bytes(n):
        acc |= byte
    return acc == 0


def lt(a: Sequence[int], b: Sequence[int]) -> bool:
    """Whether big-endian ``a`` is less than big-endian ``b`` (equal lengths)."""
    a = bytes(a)
    b = bytes(b)
    if len(a) != len(b):
        raise ValueError(f"length mismatch: {len(a)} != {len(b)}")
    borrow = 0
    for x, y in zip(reversed(a), reversed(b)):
        c = (y + (borrow >> 7)) & 0xFFFF
        borrow = ((x - c) & 0xFFFF) >> 8
    return borrow != 0