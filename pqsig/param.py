"""Parameter sets of ML-DSA and the encodings whose sizes depend on them.

A :class:`ParameterSet` holds the values that describe one instance of the
scheme. From them it derives the sizes of encoded keys and signatures. It
also packs and unpacks their components, checking every length on the way.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from .lattice import Polynomial, Vector
from .packing import (
    B32_SIZE,
    B64_SIZE,
    bit_pack_vector,
    bit_unpack,
    bit_unpack_vector,
    decode_vector,
    encode_vector,
    encoded_polynomial_size,
    range_bits,
)

SPEC_D = 13
SPEC_Q = (1 << 23) - (1 << SPEC_D) + 1
Q_MINUS_1 = SPEC_Q - 1
BITLEN_Q_MINUS_D = SPEC_Q.bit_length() - SPEC_D
POW2_D_MINUS_1 = 1 << (SPEC_D - 1)
POW2_D_MINUS_1_MINUS_1 = POW2_D_MINUS_1 - 1


class Eta(IntEnum):
    """Bound on the coefficients of the secret vectors."""

    TWO = 2
    FOUR = 4


def _require_len(name: str, data: bytes, expected: int) -> bytes:
    data = bytes(data)
    if len(data) != expected:
        raise ValueError(f"{name}: expected {expected} bytes, got {len(data)}")
    return data


def _require_count(name: str, vector: Sequence, expected: int) -> None:
    if len(vector) != expected:
        raise ValueError(f"{name}: expected {expected} polynomials, got {len(vector)}")


@dataclass(frozen=True)
class ParameterSet:
    """The parameters that describe one instance of ML-DSA.

    ``two_gamma2`` is the low-order rounding range ``2 * gamma2``.
    ``w1_bits`` is the encoding width of w1, and ``c_tilde_size`` is the
    length of ``c_tilde`` in bytes.
    """

    k: int
    l: int
    eta: Eta
    gamma1: int
    gamma2: int
    two_gamma2: int
    w1_bits: int
    c_tilde_size: int
    omega: int
    tau: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "eta", Eta(self.eta))
        for name in ("k", "l", "gamma1", "gamma2", "two_gamma2", "w1_bits",
                     "c_tilde_size", "omega", "tau"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.two_gamma2 != 2 * self.gamma2:
            raise ValueError("two_gamma2 must equal 2 * gamma2")

    # Derived scalars

    @property
    def beta(self) -> int:
        """tau * eta."""
        return self.tau * int(self.eta)

    @property
    def gamma1_minus_beta(self) -> int:
        return self.gamma1 - self.beta

    @property
    def gamma2_minus_beta(self) -> int:
        return self.gamma2 - self.beta

    # Encoding sizes

    @property
    def mask_sample_size(self) -> int:
        """Bytes of one polynomial of the mask vector y."""
        return encoded_polynomial_size(range_bits(self.gamma1 - 1, self.gamma1))

    @property
    def _eta_poly_size(self) -> int:
        return encoded_polynomial_size(range_bits(int(self.eta), int(self.eta)))

    @property
    def s1_size(self) -> int:
        return self._eta_poly_size * self.l

    @property
    def s2_size(self) -> int:
        return self._eta_poly_size * self.k

    @property
    def t0_size(self) -> int:
        bits = range_bits(POW2_D_MINUS_1_MINUS_1, POW2_D_MINUS_1)
        return encoded_polynomial_size(bits) * self.k

    @property
    def signing_key_size(self) -> int:
        return 2 * B32_SIZE + B64_SIZE + self.s1_size + self.s2_size + self.t0_size

    @property
    def t1_size(self) -> int:
        return encoded_polynomial_size(BITLEN_Q_MINUS_D) * self.k

    @property
    def verifying_key_size(self) -> int:
        return B32_SIZE + self.t1_size

    @property
    def w1_size(self) -> int:
        return encoded_polynomial_size(self.w1_bits) * self.k

    @property
    def z_size(self) -> int:
        return self.mask_sample_size * self.l

    @property
    def hint_size(self) -> int:
        return self.omega + self.k

    @property
    def signature_size(self) -> int:
        return self.c_tilde_size + self.z_size + self.hint_size

    # Mask sampling

    def unpack_mask(self, data: bytes) -> Polynomial:
        """BitUnpack of one mask polynomial with range ``[-(gamma1 - 1), gamma1]``."""
        data = _require_len("mask sample", data, self.mask_sample_size)
        return bit_unpack(data, self.gamma1 - 1, self.gamma1)

    # Signing key components

    def encode_s1(self, s1: Vector) -> bytes:
        _require_count("s1", s1, self.l)
        return bit_pack_vector(s1, int(self.eta), int(self.eta))

    def decode_s1(self, data: bytes) -> Vector:
        data = _require_len("s1", data, self.s1_size)
        return bit_unpack_vector(data, int(self.eta), int(self.eta), self.l)

    def encode_s2(self, s2: Vector) -> bytes:
        _require_count("s2", s2, self.k)
        return bit_pack_vector(s2, int(self.eta), int(self.eta))

    def decode_s2(self, data: bytes) -> Vector:
        data = _require_len("s2", data, self.s2_size)
        return bit_unpack_vector(data, int(self.eta), int(self.eta), self.k)

    def encode_t0(self, t0: Vector) -> bytes:
        _require_count("t0", t0, self.k)
        return bit_pack_vector(t0, POW2_D_MINUS_1_MINUS_1, POW2_D_MINUS_1)

    def decode_t0(self, data: bytes) -> Vector:
        data = _require_len("t0", data, self.t0_size)
        return bit_unpack_vector(data, POW2_D_MINUS_1_MINUS_1, POW2_D_MINUS_1, self.k)

    def concat_sk(self, rho: bytes, key: bytes, tr: bytes, s1: bytes, s2: bytes,
                  t0: bytes) -> bytes:
        """Join the encoded parts of a signing key."""
        return b"".join((
            _require_len("rho", rho, B32_SIZE),
            _require_len("key", key, B32_SIZE),
            _require_len("tr", tr, B64_SIZE),
            _require_len("s1", s1, self.s1_size),
            _require_len("s2", s2, self.s2_size),
            _require_len("t0", t0, self.t0_size),
        ))

    def split_sk(self, data: bytes) -> tuple[bytes, bytes, bytes, bytes, bytes, bytes]:
        """Split an encoded signing key into (rho, key, tr, s1, s2, t0)."""
        data = _require_len("signing key", data, self.signing_key_size)
        sizes = (B32_SIZE, B32_SIZE, B64_SIZE, self.s1_size, self.s2_size, self.t0_size)
        parts = []
        offset = 0
        for size in sizes:
            parts.append(data[offset:offset + size])
            offset += size
        return tuple(parts)  # type: ignore[return-value]

    # Verifying key components

    def encode_t1(self, t1: Vector) -> bytes:
        _require_count("t1", t1, self.k)
        return encode_vector(t1, BITLEN_Q_MINUS_D)

    def decode_t1(self, data: bytes) -> Vector:
        data = _require_len("t1", data, self.t1_size)
        return decode_vector(data, BITLEN_Q_MINUS_D, self.k)

    def concat_vk(self, rho: bytes, t1: bytes) -> bytes:
        """Join the encoded parts of a verifying key."""
        return _require_len("rho", rho, B32_SIZE) + _require_len("t1", t1, self.t1_size)

    def split_vk(self, data: bytes) -> tuple[bytes, bytes]:
        """Split an encoded verifying key into (rho, t1)."""
        data = _require_len("verifying key", data, self.verifying_key_size)
        return data[:B32_SIZE], data[B32_SIZE:]

    # Signature components

    def split_hint(self, data: bytes) -> tuple[bytes, bytes]:
        """Split an encoded hint into its index bytes and its k cut points."""
        data = _require_len("hint", data, self.hint_size)
        return data[:self.omega], data[self.omega:]

    def encode_w1(self, w1: Vector) -> bytes:
        _require_count("w1", w1, self.k)
        return encode_vector(w1, self.w1_bits)

    def decode_w1(self, data: bytes) -> Vector:
        data = _require_len("w1", data, self.w1_size)
        return decode_vector(data, self.w1_bits, self.k)

    def encode_z(self, z: Vector) -> bytes:
        _require_count("z", z, self.l)
        return bit_pack_vector(z, self.gamma1 - 1, self.gamma1)

    def decode_z(self, data: bytes) -> Vector:
        data = _require_len("z", data, self.z_size)
        return bit_unpack_vector(data, self.gamma1 - 1, self.gamma1, self.l)

    def concat_sig(self, c_tilde: bytes, z: bytes, h: bytes) -> bytes:
        """Join the encoded parts of a signature."""
        return b"".join((
            _require_len("c_tilde", c_tilde, self.c_tilde_size),
            _require_len("z", z, self.z_size),
            _require_len("hint", h, self.hint_size),
        ))

    def split_sig(self, data: bytes) -> tuple[bytes, bytes, bytes]:
        """Split an encoded signature into (c_tilde, z, h)."""
        data = _require_len("signature", data, self.signature_size)
        first = self.c_tilde_size
        second = first + self.z_size
        return data[:first], data[first:second], data[second:]