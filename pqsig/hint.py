"""Hints that let a verifier recover the high bits of ``w`` from public data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .lattice import BASE_FIELD, DEGREE, Elem, Polynomial, Vector
from .param import ParameterSet
from .rounding import decompose, high_bits

Q = BASE_FIELD.q


def make_hint(z: Elem, r: Elem, two_gamma2: int) -> bool:
    """MakeHint: whether adding ``z`` to ``r`` changes its high bits."""
    return high_bits(r, two_gamma2) != high_bits(r + z, two_gamma2)


def use_hint(h: bool, r: Elem, two_gamma2: int) -> Elem:
    """UseHint: the high bits of ``r``, adjusted by one step if ``h`` is set."""
    m = (Q - 1) // two_gamma2
    r1, r0 = decompose(r, two_gamma2)
    if not h:
        return r1
    gamma2 = two_gamma2 // 2
    if r0.value <= gamma2:
        return Elem((r1.value + 1) % m)
    if r0.value >= Q - gamma2:
        return Elem((r1.value + m - 1) % m)
    raise ValueError(f"low bits {r0.value} outside [-gamma2, gamma2]")


def _monotonic(values: Sequence[int]) -> bool:
    return all(a <= b for a, b in zip(values, values[1:]))


@dataclass(frozen=True)
class Hint:
    """One boolean per coefficient of a vector of ``params.k`` polynomials."""

    rows: tuple[tuple[bool, ...], ...]
    params: ParameterSet

    def __post_init__(self) -> None:
        rows = tuple(tuple(bool(bit) for bit in row) for row in self.rows)
        if len(rows) != self.params.k:
            raise ValueError(f"expected {self.params.k} rows, got {len(rows)}")
        for row in rows:
            if len(row) != DEGREE:
                raise ValueError(f"expected {DEGREE} bits per row, got {len(row)}")
        object.__setattr__(self, "rows", rows)

    @classmethod
    def new(cls, z: Vector, r: Vector, params: ParameterSet) -> Hint:
        """Compute the hint for every coefficient pair of ``z`` and ``r``."""
        two_gamma2 = params.two_gamma2
        return cls(
            tuple(
                tuple(make_hint(zc, rc, two_gamma2) for zc, rc in zip(zp, rp, strict=True))
                for zp, rp in zip(z, r, strict=True)
            ),
            params,
        )

    def hamming_weight(self) -> int:
        """Number of set bits."""
        return sum(sum(row) for row in self.rows)

    def use_hint(self, r: Vector) -> Vector:
        """Apply the hint to every coefficient of ``r``."""
        two_gamma2 = self.params.two_gamma2
        return Vector(tuple(
            Polynomial(tuple(
                use_hint(bit, rc, two_gamma2) for bit, rc in zip(row, rp, strict=True)
            ))
            for row, rp in zip(self.rows, r, strict=True)
        ))

    def bit_pack(self) -> bytes:
        """HintBitPack: set positions, zero padded to omega, then k cut points."""
        omega = self.params.omega
        if self.hamming_weight() > omega:
            raise ValueError(f"hint has more than {omega} set bits")
        indices = bytearray()
        cuts = bytearray()
        for row in self.rows:
            indices.extend(j for j, bit in enumerate(row) if bit)
            cuts.append(len(indices))
        return bytes(indices.ljust(omega, b"\x00")) + bytes(cuts)

    @classmethod
    def bit_unpack(cls, data: bytes, params: ParameterSet) -> Optional[Hint]:
        """HintBitUnpack; None when the encoding is malformed."""
        indices, cuts = params.split_hint(data)
        max_cut = max(cuts)
        if not _monotonic(cuts) or max_cut > len(indices) or any(indices[max_cut:]):
            return None

        rows = []
        start = 0
        for end in cuts:
            segment = indices[start:end]
            if not _monotonic(segment):
                return None
            row = [False] * DEGREE
            for j in segment:
                row[j] = True
            rows.append(tuple(row))
            start = end
        return cls(tuple(rows), params)