"""Number-theoretic transform over the base field ``Z_q``."""

from __future__ import annotations

from typing import Union, overload

from .lattice import BASE_FIELD, Elem, NttPolynomial, NttVector, Polynomial, Vector

Q = BASE_FIELD.q
ZETA = 1753
INVERSE_256 = 8_347_681

_FORWARD_LAYERS = (128, 64, 32, 16, 8, 4, 2, 1)


def _bitrev8(x: int) -> int:
    return int(f"{x:08b}"[::-1], 2)


def _zeta_table() -> tuple[int, ...]:
    powers = [pow(ZETA, i, Q) for i in range(256)]
    # Entry 0 is left as zero to match the zetas table of the specification.
    return (0,) + tuple(powers[_bitrev8(i)] for i in range(1, 256))


ZETA_POW_BITREV: tuple[int, ...] = _zeta_table()


def _forward(values: list[int]) -> list[int]:
    w = list(values)
    m = 0
    for length in _FORWARD_LAYERS:
        for start in range(0, 256, 2 * length):
            m += 1
            z = ZETA_POW_BITREV[m]
            for j in range(start, start + length):
                t = z * w[j + length] % Q
                w[j + length] = (w[j] - t) % Q
                w[j] = (w[j] + t) % Q
    return w


def _inverse(values: list[int]) -> list[int]:
    w = list(values)
    m = 256
    for length in reversed(_FORWARD_LAYERS):
        for start in range(0, 256, 2 * length):
            m -= 1
            z = (Q - ZETA_POW_BITREV[m]) % Q
            for j in range(start, start + length):
                t = w[j]
                w[j] = (t + w[j + length]) % Q
                w[j + length] = z * (t - w[j + length]) % Q
    return [x * INVERSE_256 % Q for x in w]


@overload
def ntt(value: Polynomial) -> NttPolynomial: ...
@overload
def ntt(value: Vector) -> NttVector: ...


def ntt(value: Union[Polynomial, Vector]) -> Union[NttPolynomial, NttVector]:
    """Map a polynomial (or each polynomial of a vector) into ``T_q``."""
    if isinstance(value, Polynomial):
        return NttPolynomial(tuple(Elem(x) for x in _forward([c.value for c in value])))
    if isinstance(value, Vector):
        return NttVector(tuple(ntt(p) for p in value))
    raise TypeError(f"expected Polynomial or Vector, got {type(value).__name__}")


@overload
def ntt_inverse(value: NttPolynomial) -> Polynomial: ...
@overload
def ntt_inverse(value: NttVector) -> Vector: ...


def ntt_inverse(value: Union[NttPolynomial, NttVector]) -> Union[Polynomial, Vector]:
    """Map an NTT polynomial (or each entry of an NTT vector) back into ``R_q``."""
    if isinstance(value, NttPolynomial):
        return Polynomial(tuple(Elem(x) for x in _inverse([c.value for c in value])))
    if isinstance(value, NttVector):
        return Vector(tuple(ntt_inverse(p) for p in value))
    raise TypeError(f"expected NttPolynomial or NttVector, got {type(value).__name__}")