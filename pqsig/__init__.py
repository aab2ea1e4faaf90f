"""Building blocks for ML-DSA lattice signatures and RFC 6979 deterministic nonces."""

__version__ = "0.1.0"

__all__ = [
    "consttime",
    "hint",
    "lattice",
    "ntt",
    "packing",
    "param",
    "rfc6979",
    "rounding",
    "sampling",
    "xof",
]