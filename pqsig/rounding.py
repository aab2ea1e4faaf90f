"""Rounding, decomposition and norms of field elements, polynomials and vectors.

Every function accepts an :class:`Elem`, a :class:`Polynomial` or a
:class:`Vector` and applies itself coefficient by coefficient. Signed results
are represented modulo ``q``: a negative ``-x`` is stored as ``q - x``.
"""

from __future__ import annotations

from typing import Callable, TypeVar, Union

from .lattice import BASE_FIELD, Elem, Polynomial, Vector

Q = BASE_FIELD.q
D = 13

Value = Union[Elem, Polynomial, Vector]
_T = TypeVar("_T", Elem, Polynomial, Vector)


def barrett_reduce(x: int, m: int) -> int:
    """Reduce ``x`` modulo ``m`` with Barrett reduction.

    The result is exact for ``0 <= x < m**2``, which covers every value
    reduced modulo ``q``, ``2**13`` or ``2 * gamma2``.
    """
    if m <= 0:
        raise ValueError(f"modulus must be positive, got {m}")
    shift = 2 * m.bit_length()
    multiplier = (1 << shift) // m
    quotient = (x * multiplier) >> shift
    remainder = x - quotient * m
    return remainder if remainder < m else remainder - m


def _apply(value: _T, fn: Callable[[Elem], Elem]) -> _T:
    if isinstance(value, Elem):
        return fn(value)
    if isinstance(value, Polynomial):
        return Polynomial(tuple(fn(x) for x in value))
    if isinstance(value, Vector):
        return Vector(tuple(_apply(p, fn) for p in value))
    raise TypeError(f"expected Elem, Polynomial or Vector, got {type(value).__name__}")


def _apply_pair(value: _T, fn: Callable[[Elem], tuple[Elem, Elem]]) -> tuple[_T, _T]:
    if isinstance(value, Elem):
        return fn(value)
    if isinstance(value, Polynomial):
        pairs = [fn(x) for x in value]
        return (
            Polynomial(tuple(hi for hi, _ in pairs)),
            Polynomial(tuple(lo for _, lo in pairs)),
        )
    if isinstance(value, Vector):
        pairs = [_apply_pair(p, fn) for p in value]
        return (
            Vector(tuple(hi for hi, _ in pairs)),
            Vector(tuple(lo for _, lo in pairs)),
        )
    raise TypeError(f"expected Elem, Polynomial or Vector, got {type(value).__name__}")


def _elem_mod_plus_minus(r: Elem, m: int) -> Elem:
    raw = Elem(barrett_reduce(r.value, m))
    if raw.value <= m >> 1:
        return raw
    return raw - Elem(m)


def mod_plus_minus(value: _T, m: int) -> _T:
    """Centered reduction into ``(-m/2, m/2]``, represented modulo ``q``."""
    return _apply(value, lambda r: _elem_mod_plus_minus(r, m))


def infinity_norm(value: Value) -> int:
    """Largest absolute value of any coefficient, reading values mod± q."""
    if isinstance(value, Elem):
        v = value.value
        return v if v <= Q >> 1 else Q - v
    if isinstance(value, (Polynomial, Vector)):
        return max(infinity_norm(x) for x in value)
    raise TypeError(f"expected Elem, Polynomial or Vector, got {type(value).__name__}")


def _elem_power2round(r: Elem) -> tuple[Elem, Elem]:
    r0 = _elem_mod_plus_minus(r, 1 << D)
    r1 = Elem((r - r0).value >> D)
    return r1, r0


def power2round(value: _T) -> tuple[_T, _T]:
    """Power2Round: split ``r`` into ``(r1, r0)`` with ``r = r1 * 2**13 + r0``."""
    return _apply_pair(value, _elem_power2round)


def _elem_decompose(r: Elem, two_gamma2: int) -> tuple[Elem, Elem]:
    r0 = _elem_mod_plus_minus(r, two_gamma2)
    diff = r - r0
    if diff.value == Q - 1:
        return Elem(0), r0 - Elem(1)
    return Elem(diff.value // two_gamma2), r0


def decompose(value: _T, two_gamma2: int) -> tuple[_T, _T]:
    """Decompose: split ``r`` into high and low parts ``(r1, r0)``."""
    if two_gamma2 <= 0:
        raise ValueError(f"2 * gamma2 must be positive, got {two_gamma2}")
    return _apply_pair(value, lambda r: _elem_decompose(r, two_gamma2))


def high_bits(value: _T, two_gamma2: int) -> _T:
    """HighBits: the ``r1`` part of :func:`decompose`."""
    return decompose(value, two_gamma2)[0]


def low_bits(value: _T, two_gamma2: int) -> _T:
    """LowBits: the ``r0`` part of :func:`decompose`."""
    return decompose(value, two_gamma2)[1]