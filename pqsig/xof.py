"""SHAKE extendable-output functions with an absorb-then-squeeze interface."""

from __future__ import annotations

import hashlib
from typing import Callable


class ShakeStream:
    """A SHAKE sponge: absorb input, then squeeze output in successive pieces.

    Once squeezing has begun, further input is rejected.
    """

    def __init__(self, factory: Callable[[], "hashlib._Hash"]) -> None:
        self._hash = factory()
        self._squeezing = False
        self._buffer = b""
        self._offset = 0

    def absorb(self, data: bytes) -> ShakeStream:
        """Feed more input; returns the stream for chaining."""
        if self._squeezing:
            raise RuntimeError("cannot absorb after squeezing has started")
        self._hash.update(bytes(data))
        return self

    def squeeze(self, n: int) -> bytes:
        """Return the next ``n`` bytes of output."""
        if n < 0:
            raise ValueError(f"cannot squeeze a negative number of bytes: {n}")
        self._squeezing = True
        end = self._offset + n
        if end > len(self._buffer):
            size = max(end, 2 * len(self._buffer), 168)
            self._buffer = self._hash.digest(size)
        out = self._buffer[self._offset:end]
        self._offset = end
        return out


def g() -> ShakeStream:
    """A fresh SHAKE128 stream."""
    return ShakeStream(hashlib.shake_128)


def h() -> ShakeStream:
    """A fresh SHAKE256 stream."""
    return ShakeStream(hashlib.shake_256)