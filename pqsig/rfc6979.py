"""Deterministic generation of the ephemeral scalar ``k`` for (EC)DSA.

The generator is HMAC_DRBG as described in NIST SP 800-90A and used by
RFC 6979 section 3.2.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Callable, Union

from . import consttime

Digest = Union[str, Callable[..., "hashlib._Hash"]]


def _digest_size(digest: Digest) -> int:
    if isinstance(digest, str):
        return hashlib.new(digest).digest_size
    return digest().digest_size


class HmacDrbg:
    """HMAC_DRBG seeded from a secret key, a nonce and a personalization string."""

    def __init__(self, digest: Digest, entropy_input: bytes, nonce: bytes,
                 personalization_string: bytes = b"") -> None:
        self._digest = digest
        size = _digest_size(digest)
        self._k = bytes(size)
        self._v = b"\x01" * size

        for i in (0, 1):
            self._k = self._mac(
                self._k,
                self._v + bytes([i]) + bytes(entropy_input) + bytes(nonce)
                + bytes(personalization_string),
            )
            self._v = self._mac(self._k, self._v)

    def _mac(self, key: bytes, message: bytes) -> bytes:
        return hmac.new(key, message, self._digest).digest()

    def fill_bytes(self, n: int) -> bytes:
        """Return the next ``n`` output bytes, then update the internal state."""
        if n < 0:
            raise ValueError(f"cannot generate a negative number of bytes: {n}")
        out = bytearray()
        while len(out) < n:
            self._v = self._mac(self._k, self._v)
            out += self._v[: n - len(out)]

        self._k = self._mac(self._k, self._v + b"\x00")
        self._v = self._mac(self._k, self._v)
        return bytes(out)


def generate_k(digest: Digest, x: bytes, q: bytes, h: bytes, data: bytes = b"") -> bytes:
    """Deterministically generate the ephemeral scalar ``k``.

    ``x`` is the secret key, ``q`` the field modulus and ``h`` the message
    digest, already reduced modulo ``q``; all three are big-endian and of
    equal length. ``data`` is optional additional input such as extra entropy.
    """
    x, q, h = bytes(x), bytes(q), bytes(h)
    size = len(x)
    if len(q) != size or len(h) != size:
        raise ValueError("x, q and h must have the same length")
    if size == 0:
        raise ValueError("inputs must not be empty")
    if not consttime.lt(h, q):
        raise ValueError("h must be reduced modulo q")

    q_leading_zeros = consttime.leading_zeros(q)
    drbg = HmacDrbg(digest, x, h, data)

    while True:
        k = drbg.fill_bytes(size)
        if q_leading_zeros:
            k = consttime.rshift(k, q_leading_zeros)
        if not consttime.is_zero(k) and consttime.lt(k, q):
            return k