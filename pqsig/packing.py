"""Bit packing of polynomials and vectors into byte strings.

``byte_encode``/``byte_decode`` implement SimpleBitPack/SimpleBitUnpack:
every coefficient is stored in a fixed number of bits, little-endian.
``bit_pack``/``bit_unpack`` implement BitPack/BitUnpack for coefficients in
the signed range ``[-a, b]``, which are stored as ``b - w``.
"""

from __future__ import annotations

from math import gcd
from typing import Iterable, Iterator

from .lattice import (
    BASE_FIELD,
    DEGREE,
    Elem,
    Polynomial,
    Vector,
    flatten,
    truncate,
    unflatten,
)

B32_SIZE = 32
B64_SIZE = 64


def _steps(bits: int) -> tuple[int, int]:
    """Number of values and of bytes in one aligned encoding unit."""
    if bits <= 0:
        raise ValueError(f"encoding width must be positive, got {bits}")
    unit = bits * 8 // gcd(bits, 8)
    return unit // bits, unit // 8


def _chunks(items, size: int) -> Iterator:
    for start in range(0, len(items), size):
        yield items[start:start + size]


def encoded_polynomial_size(bits: int) -> int:
    """Size in bytes of one polynomial encoded with ``bits`` bits per value."""
    _steps(bits)
    return 32 * bits


def byte_encode(values: Iterable[int | Elem], bits: int) -> bytes:
    """Pack 256 values, ``bits`` bits each, into a byte string."""
    value_step, byte_step = _steps(bits)
    ints = [int(v) for v in values]
    if len(ints) != DEGREE:
        raise ValueError(f"expected {DEGREE} values, got {len(ints)}")

    out = bytearray()
    for chunk in _chunks(ints, value_step):
        x = 0
        for j, v in enumerate(chunk):
            x |= v << (bits * j)
        out += truncate(x, 8 * byte_step).to_bytes(byte_step, "little")
    return bytes(out)


def byte_decode(data: bytes, bits: int, q: int = BASE_FIELD.q) -> list[int]:
    """Unpack 256 values of ``bits`` bits each from a byte string.

    With a 12-bit width the values are also reduced modulo ``q``.
    """
    value_step, byte_step = _steps(bits)
    data = bytes(data)
    expected = encoded_polynomial_size(bits)
    if len(data) != expected:
        raise ValueError(f"expected {expected} bytes, got {len(data)}")

    mask = (1 << bits) - 1
    values: list[int] = []
    for chunk in _chunks(data, byte_step):
        x = int.from_bytes(chunk, "little")
        for j in range(value_step):
            val = (x >> (bits * j)) & mask
            if bits == 12:
                val %= q
            values.append(val)
    return values


def encode_polynomial(poly: Iterable[Elem], bits: int) -> bytes:
    """SimpleBitPack of a polynomial."""
    return byte_encode(poly, bits)


def decode_polynomial(data: bytes, bits: int) -> Polynomial:
    """SimpleBitUnpack into a polynomial over the base field."""
    return Polynomial(tuple(Elem(v) for v in byte_decode(data, bits)))


def encode_vector(vector: Iterable[Iterable[Elem]], bits: int) -> bytes:
    """SimpleBitPack of every polynomial of a vector, concatenated."""
    return flatten([encode_polynomial(p, bits) for p in vector])


def decode_vector(data: bytes, bits: int, k: int) -> Vector:
    """SimpleBitUnpack of a vector of ``k`` polynomials."""
    data = bytes(data)
    expected = k * encoded_polynomial_size(bits)
    if len(data) != expected:
        raise ValueError(f"expected {expected} bytes, got {len(data)}")
    return Vector(tuple(decode_polynomial(part, bits) for part in unflatten(data, k)))


def range_bits(a: int, b: int) -> int:
    """Bits needed to encode values in ``[-a, b]``: bitlen(a + b)."""
    if a < 0 or b < 0:
        raise ValueError("range bounds must be non-negative")
    bits = (a + b).bit_length()
    if bits == 0:
        raise ValueError("range must contain more than one value")
    return bits


def bit_pack(poly: Iterable[Elem], a: int, b: int) -> bytes:
    """BitPack: encode coefficients in ``[-a, b]`` as ``b - w``."""
    bits = range_bits(a, b)
    b_elem = Elem(b)
    neg_a = (-Elem(a)).value
    shifted = []
    for w in poly:
        if not (w.value <= b or w.value >= neg_a):
            raise ValueError(f"coefficient {w.value} outside the range [-{a}, {b}]")
        shifted.append(b_elem - w)
    return byte_encode(shifted, bits)


def bit_unpack(data: bytes, a: int, b: int) -> Polynomial:
    """BitUnpack: inverse of :func:`bit_pack`."""
    bits = range_bits(a, b)
    a_elem = Elem(a)
    b_elem = Elem(b)
    limit = (a_elem + b_elem).value
    coeffs = []
    for z in byte_decode(data, bits):
        if z > limit:
            raise ValueError(f"encoded value {z} exceeds {limit}")
        coeffs.append(b_elem - Elem(z))
    return Polynomial(tuple(coeffs))


def bit_pack_vector(vector: Iterable[Iterable[Elem]], a: int, b: int) -> bytes:
    """BitPack of every polynomial of a vector, concatenated."""
    return flatten([bit_pack(p, a, b) for p in vector])


def bit_unpack_vector(data: bytes, a: int, b: int, k: int) -> Vector:
    """BitUnpack of a vector of ``k`` polynomials."""
    data = bytes(data)
    expected = k * encoded_polynomial_size(range_bits(a, b))
    if len(data) != expected:
        raise ValueError(f"expected {expected} bytes, got {len(data)}")
    return Vector(tuple(bit_unpack(part, a, b) for part in unflatten(data, k)))