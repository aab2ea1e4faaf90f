"""Rejection samplers that expand seeds into polynomials, vectors and matrices."""

from __future__ import annotations

from typing import Optional, Sequence

from .lattice import (
    BASE_FIELD,
    DEGREE,
    Elem,
    NttMatrix,
    NttPolynomial,
    NttVector,
    Polynomial,
    Vector,
    truncate,
)
from .param import Eta, ParameterSet
from .xof import g, h

Q = BASE_FIELD.q
_ONE = Elem(1)
_MINUS_ONE = Elem(Q - 1)
_MAX_TAU = 64
_MAX_NONCE = 0xFFFF


def _bit_set(z: bytes, i: int) -> bool:
    """BytesToBits, read at a single bit position."""
    return bool((z[i >> 3] >> (i & 0x07)) & 1)


def coeff_from_three_bytes(b: Sequence[int]) -> Optional[Elem]:
    """CoeffFromThreeBytes: a value below q from 23 bits, or None if rejected."""
    raw = bytes(b)
    if len(raw) != 3:
        raise ValueError(f"expected 3 bytes, got {len(raw)}")
    b0, b1, b2 = raw
    z = ((b2 & 0x7F) << 16) | (b1 << 8) | b0
    return Elem(z) if z < Q else None


def coeff_from_half_byte(b: int, eta: Eta) -> Optional[Elem]:
    """CoeffFromHalfByte: a value in ``[-eta, eta]`` from 4 bits, or None."""
    if not 0 <= b <= 0x0F:
        raise ValueError(f"half byte must be in [0, 15], got {b}")
    eta = Eta(eta)
    if eta is Eta.TWO and b < 15:
        b %= 5
        return Elem(2 - b) if b <= 2 else -Elem(b - 2)
    if eta is Eta.FOUR and b < 9:
        return Elem(4 - b) if b <= 4 else -Elem(b - 4)
    return None


def sample_in_ball(rho: bytes, tau: int) -> Polynomial:
    """SampleInBall: a polynomial with exactly ``tau`` coefficients in {-1, 1}."""
    if not 0 <= tau <= _MAX_TAU:
        raise ValueError(f"tau must be in [0, {_MAX_TAU}], got {tau}")
    ctx = h().absorb(rho)
    signs = ctx.squeeze(8)

    coeffs = [Elem(0)] * DEGREE
    for i in range(DEGREE - tau, DEGREE):
        j = ctx.squeeze(1)[0]
        while j > i:
            j = ctx.squeeze(1)[0]
        coeffs[i] = coeffs[j]
        coeffs[j] = _MINUS_ONE if _bit_set(signs, i + tau - DEGREE) else _ONE
    return Polynomial(tuple(coeffs))


def rej_ntt_poly(rho: bytes, r: int, s: int) -> NttPolynomial:
    """RejNTTPoly: a uniformly random NTT polynomial from a seed and two indices."""
    ctx = g().absorb(rho).absorb(bytes([s])).absorb(bytes([r]))
    coeffs: list[Elem] = []
    while len(coeffs) < DEGREE:
        x = coeff_from_three_bytes(ctx.squeeze(3))
        if x is not None:
            coeffs.append(x)
    return NttPolynomial(tuple(coeffs))


def rej_bounded_poly(rho: bytes, eta: Eta, r: int) -> Polynomial:
    """RejBoundedPoly: a polynomial with coefficients in ``[-eta, eta]``."""
    if not 0 <= r <= _MAX_NONCE:
        raise ValueError(f"nonce must be in [0, {_MAX_NONCE}], got {r}")
    eta = Eta(eta)
    ctx = h().absorb(rho).absorb(r.to_bytes(2, "little"))
    coeffs: list[Elem] = []
    while len(coeffs) < DEGREE:
        z = ctx.squeeze(1)[0]
        for half in (z & 0x0F, z >> 4):
            if len(coeffs) == DEGREE:
                break
            x = coeff_from_half_byte(half, eta)
            if x is not None:
                coeffs.append(x)
    return Polynomial(tuple(coeffs))


def expand_a(rho: bytes, k: int, l: int) -> NttMatrix:
    """ExpandA: the K x L public matrix in the NTT domain."""
    return NttMatrix(tuple(
        NttVector(tuple(
            rej_ntt_poly(rho, truncate(r, 8), truncate(s, 8)) for s in range(l)
        ))
        for r in range(k)
    ))


def expand_s(rho: bytes, eta: Eta, base: int, count: int) -> Vector:
    """ExpandS for one secret vector: ``count`` polynomials with nonces from ``base``.

    s1 is ``expand_s(rho, eta, 0, l)`` and s2 is ``expand_s(rho, eta, l, k)``.
    """
    return Vector(tuple(
        rej_bounded_poly(rho, eta, truncate(r + base, 16)) for r in range(count)
    ))


def expand_mask(rho: bytes, mu: int, params: ParameterSet) -> Vector:
    """ExpandMask: the mask vector y of ``params.l`` polynomials."""
    polys = []
    for r in range(params.l):
        nonce = mu + r
        if not 0 <= nonce <= _MAX_NONCE:
            raise ValueError(f"mask nonce {nonce} does not fit in 16 bits")
        sample = h().absorb(rho).absorb(nonce.to_bytes(2, "little")).squeeze(
            params.mask_sample_size
        )
        polys.append(params.unpack_mask(sample))
    return Vector(tuple(polys))