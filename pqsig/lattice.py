"""Polynomials, vectors and matrices over a prime field, plus array helpers.

The ring is ``Z_q[X] / (X^256 + 1)``; elements of ``T_q`` (the NTT domain) are
256-tuples multiplied coefficient by coefficient.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

DEGREE = 256


@dataclass(frozen=True)
class Field:
    """A prime-order field with precomputed Barrett reduction constants."""

    q: int
    barrett_shift: int = field(init=False, repr=False, compare=False)
    barrett_multiplier: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.q < 2:
            raise ValueError(f"field modulus must be at least 2, got {self.q}")
        shift = 2 * self.q.bit_length()
        object.__setattr__(self, "barrett_shift", shift)
        object.__setattr__(self, "barrett_multiplier", (1 << shift) // self.q)

    def small_reduce(self, x: int) -> int:
        """Reduce a value known to lie in ``[0, 2q)``."""
        return x if x < self.q else x - self.q

    def barrett_reduce(self, x: int) -> int:
        """Reduce a value below ``q**2`` using Barrett reduction."""
        quotient = (x * self.barrett_multiplier) >> self.barrett_shift
        return self.small_reduce(x - quotient * self.q)


BASE_FIELD = Field(8_380_417)


@dataclass(frozen=True, slots=True)
class Elem:
    """A member of a prime-order field, stored as an integer in ``[0, q)``."""

    value: int
    field: Field = BASE_FIELD

    def _check(self, other: Elem) -> None:
        if other.field != self.field:
            raise ValueError("elements belong to different fields")

    def __add__(self, other: object) -> Elem:
        if not isinstance(other, Elem):
            return NotImplemented
        self._check(other)
        return Elem(self.field.small_reduce(self.value + other.value), self.field)

    def __sub__(self, other: object) -> Elem:
        if not isinstance(other, Elem):
            return NotImplemented
        self._check(other)
        f = self.field
        return Elem(f.small_reduce(self.value + f.q - other.value), f)

    def __mul__(self, other: object) -> Elem:
        if not isinstance(other, Elem):
            return NotImplemented
        self._check(other)
        return Elem(self.field.barrett_reduce(self.value * other.value), self.field)

    def __neg__(self) -> Elem:
        f = self.field
        return Elem(f.small_reduce(f.q - self.value), f)

    def __int__(self) -> int:
        return self.value


def _zero_coeffs() -> tuple[Elem, ...]:
    return (Elem(0),) * DEGREE


def _add_coeffs(a: Iterable[Elem], b: Iterable[Elem]) -> tuple[Elem, ...]:
    return tuple(x + y for x, y in zip(a, b))


def _sub_coeffs(a: Iterable[Elem], b: Iterable[Elem]) -> tuple[Elem, ...]:
    return tuple(x - y for x, y in zip(a, b))


def _neg_coeffs(a: Iterable[Elem]) -> tuple[Elem, ...]:
    return tuple(-x for x in a)


def _scale_coeffs(scalar: Elem, a: Iterable[Elem]) -> tuple[Elem, ...]:
    return tuple(scalar * x for x in a)


@dataclass(frozen=True)
class _Coefficients:
    """Storage and access shared by 256-coefficient tuples."""

    coeffs: tuple[Elem, ...]

    def __post_init__(self) -> None:
        coeffs = tuple(self.coeffs)
        if len(coeffs) != DEGREE:
            raise ValueError(f"expected {DEGREE} coefficients, got {len(coeffs)}")
        object.__setattr__(self, "coeffs", coeffs)

    def __iter__(self) -> Iterator[Elem]:
        return iter(self.coeffs)

    def __len__(self) -> int:
        return len(self.coeffs)

    def __getitem__(self, index: int) -> Elem:
        return self.coeffs[index]


class Polynomial(_Coefficients):
    """A polynomial of degree below 256 in ``R_q``."""

    @classmethod
    def zero(cls) -> Polynomial:
        """The all-zero polynomial over the base field."""
        return cls(_zero_coeffs())

    def __add__(self, other: object) -> Polynomial:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return Polynomial(_add_coeffs(self.coeffs, other.coeffs))

    def __sub__(self, other: object) -> Polynomial:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return Polynomial(_sub_coeffs(self.coeffs, other.coeffs))

    def __neg__(self) -> Polynomial:
        return Polynomial(_neg_coeffs(self.coeffs))

    def __rmul__(self, scalar: object) -> Polynomial:
        if not isinstance(scalar, Elem):
            return NotImplemented
        return Polynomial(_scale_coeffs(scalar, self.coeffs))


class NttPolynomial(_Coefficients):
    """An element of the NTT algebra ``T_q``."""

    @classmethod
    def zero(cls) -> NttPolynomial:
        """The all-zero NTT polynomial over the base field."""
        return cls(_zero_coeffs())

    def __add__(self, other: object) -> NttPolynomial:
        if not isinstance(other, NttPolynomial):
            return NotImplemented
        return NttPolynomial(_add_coeffs(self.coeffs, other.coeffs))

    def __sub__(self, other: object) -> NttPolynomial:
        if not isinstance(other, NttPolynomial):
            return NotImplemented
        return NttPolynomial(_sub_coeffs(self.coeffs, other.coeffs))

    def __neg__(self) -> NttPolynomial:
        return NttPolynomial(_neg_coeffs(self.coeffs))

    def __mul__(self, other: object) -> NttPolynomial:
        if not isinstance(other, NttPolynomial):
            return NotImplemented
        return NttPolynomial(tuple(x * y for x, y in zip(self.coeffs, other.coeffs)))

    def __rmul__(self, scalar: object) -> NttPolynomial:
        if not isinstance(scalar, Elem):
            return NotImplemented
        return NttPolynomial(_scale_coeffs(scalar, self.coeffs))


def _check_length(k: int) -> None:
    if k < 0:
        raise ValueError(f"vector length must be non-negative, got {k}")


@dataclass(frozen=True)
class _PolyVector:
    """Storage and access shared by fixed-length vectors of polynomials."""

    polys: tuple

    def __post_init__(self) -> None:
        object.__setattr__(self, "polys", tuple(self.polys))

    def __iter__(self) -> Iterator:
        return iter(self.polys)

    def __len__(self) -> int:
        return len(self.polys)

    def __getitem__(self, index: int):
        return self.polys[index]


class Vector(_PolyVector):
    """A vector of polynomials from ``R_q``."""

    @classmethod
    def zero(cls, k: int) -> Vector:
        """The all-zero vector of length ``k``."""
        _check_length(k)
        return cls(tuple(Polynomial.zero() for _ in range(k)))

    def __add__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(tuple(x + y for x, y in zip(self.polys, other.polys, strict=True)))

    def __sub__(self, other: object) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(tuple(x - y for x, y in zip(self.polys, other.polys, strict=True)))

    def __neg__(self) -> Vector:
        return Vector(tuple(-x for x in self.polys))

    def __rmul__(self, scalar: object) -> Vector:
        if not isinstance(scalar, Elem):
            return NotImplemented
        return Vector(tuple(scalar * x for x in self.polys))


class NttVector(_PolyVector):
    """A vector of NTT-domain polynomials."""

    @classmethod
    def zero(cls, k: int) -> NttVector:
        """The all-zero NTT vector of length ``k``."""
        _check_length(k)
        return cls(tuple(NttPolynomial.zero() for _ in range(k)))

    def __add__(self, other: object) -> NttVector:
        if not isinstance(other, NttVector):
            return NotImplemented
        return NttVector(tuple(x + y for x, y in zip(self.polys, other.polys, strict=True)))

    def __sub__(self, other: object) -> NttVector:
        if not isinstance(other, NttVector):
            return NotImplemented
        return NttVector(tuple(x - y for x, y in zip(self.polys, other.polys, strict=True)))

    def __mul__(self, other: object) -> NttPolynomial:
        """Dot product with another NTT vector."""
        if not isinstance(other, NttVector):
            return NotImplemented
        total = NttPolynomial.zero()
        for x, y in zip(self.polys, other.polys, strict=True):
            total = total + x * y
        return total

    def __rmul__(self, other: object) -> NttVector:
        """Multiply every entry by an NTT polynomial."""
        if not isinstance(other, NttPolynomial):
            return NotImplemented
        return NttVector(tuple(other * x for x in self.polys))


@dataclass(frozen=True)
class NttMatrix:
    """A K x L matrix of NTT polynomials, stored as K row vectors."""

    rows: tuple[NttVector, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))

    def __iter__(self) -> Iterator[NttVector]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> NttVector:
        return self.rows[index]

    def __mul__(self, vector: object) -> NttVector:
        if not isinstance(vector, NttVector):
            return NotImplemented
        return NttVector(tuple(row * vector for row in self.rows))


def truncate(x: int, bits: int) -> int:
    """Keep only the low ``bits`` bits of a non-negative integer."""
    if bits < 0:
        raise ValueError(f"bit width must be non-negative, got {bits}")
    return x & ((1 << bits) - 1)


def flatten(parts: Iterable[Sequence]) -> bytes | list:
    """Concatenate a sequence of sequences; byte strings give ``bytes``."""
    parts = list(parts)
    if parts and all(isinstance(p, (bytes, bytearray, memoryview)) for p in parts):
        return b"".join(bytes(p) for p in parts)
    return [item for part in parts for item in part]


def unflatten(data: Sequence, count: int) -> list:
    """Split ``data`` into ``count`` consecutive parts of equal length."""
    if count <= 0:
        raise ValueError(f"part count must be positive, got {count}")
    size, remainder = divmod(len(data), count)
    if remainder:
        raise ValueError(f"length {len(data)} is not divisible by {count}")
    return [data[i * size:(i + 1) * size] for i in range(count)]