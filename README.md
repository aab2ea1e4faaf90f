# pqsig

Pure-Python building blocks for the ML-DSA lattice signature scheme
(FIPS 204), plus deterministic nonce generation for DSA and ECDSA in the
manner of RFC 6979 (HMAC_DRBG).

The package uses only the standard library.

## Modules

- `pqsig.lattice`: arithmetic in a prime field (`Field`, with
  `small_reduce` and `barrett_reduce`; the base field has q = 8380417)
  and its elements (`Elem`, supporting `+`, `-`, `*` and negation);
  256-coefficient polynomials (`Polynomial`, `NttPolynomial`), vectors of
  them (`Vector`, `NttVector`) and `NttMatrix`. `NttPolynomial * NttPolynomial`
  multiplies coefficient-wise, `NttVector * NttVector` is a dot product,
  `NttMatrix * NttVector` multiplies a matrix by a vector, and an `Elem`
  on the left scales a polynomial or vector. Helpers: `truncate`,
  `flatten` and `unflatten`.
- `pqsig.packing`: SimpleBitPack/SimpleBitUnpack (`byte_encode`,
  `byte_decode`, `encode_polynomial`, `decode_polynomial`,
  `encode_vector`, `decode_vector`) and BitPack/BitUnpack for coefficients
  in a range `[-a, b]` (`range_bits`, `bit_pack`, `bit_unpack`,
  `bit_pack_vector`, `bit_unpack_vector`), plus `encoded_polynomial_size`.
  Wrong lengths and out-of-range coefficients raise `ValueError`.
- `pqsig.rounding`: `barrett_reduce`, `mod_plus_minus`, `infinity_norm`,
  `power2round`, `decompose`, `high_bits` and `low_bits`. Each accepts an
  `Elem`, a `Polynomial` or a `Vector`; negative results are stored
  modulo q.
- `pqsig.ntt`: `ntt` and `ntt_inverse` for polynomials and vectors.
- `pqsig.xof`: `ShakeStream`, an absorb-then-squeeze wrapper around
  SHAKE128 (`g()`) and SHAKE256 (`h()`). Absorbing after squeezing has
  begun raises `RuntimeError`.
- `pqsig.param`: the `Eta` enumeration and `ParameterSet`, which derives
  encoded sizes (`signing_key_size`, `verifying_key_size`,
  `signature_size` and the sizes of their parts) and encodes, decodes,
  joins and splits key and signature components.
- `pqsig.sampling`: `coeff_from_three_bytes`, `coeff_from_half_byte`,
  `sample_in_ball`, `rej_ntt_poly`, `rej_bounded_poly`, `expand_a`,
  `expand_s` and `expand_mask`.
- `pqsig.hint`: `make_hint`, `use_hint` and `Hint` (`new`,
  `hamming_weight`, `use_hint`, `bit_pack`, `bit_unpack`; `bit_unpack`
  returns `None` for a malformed encoding).
- `pqsig.consttime`: `leading_zeros`, `rshift`, `is_zero` and `lt` on
  big-endian byte strings.
- `pqsig.rfc6979`: `HmacDrbg` and `generate_k`.

## Examples

A parameter set with the ML-DSA-65 values and its derived sizes:

```python
from pqsig.param import Eta, ParameterSet

q = 8_380_417
params = ParameterSet(
    k=6, l=5, eta=Eta.FOUR,
    gamma1=1 << 19, gamma2=(q - 1) // 32, two_gamma2=(q - 1) // 16,
    w1_bits=4, c_tilde_size=48, omega=55, tau=49,
)
assert params.verifying_key_size == 1952
assert params.signing_key_size == 4032
assert params.signature_size == 3309
```

Squeezing a SHAKE128 stream in pieces:

```python
from pqsig.xof import g

stream = g().absorb(b"hello world")
first = stream.squeeze(32)
second = stream.squeeze(32)
```

NTT round trip:

```python
from pqsig.lattice import Elem, Polynomial
from pqsig.ntt import ntt, ntt_inverse

f = Polynomial([Elem(i) for i in range(256)])
assert ntt_inverse(ntt(f)) == f
```

A deterministic nonce for the NIST P-256 group order with SHA-256:

```python
import hashlib
from pqsig.rfc6979 import generate_k

q = bytes.fromhex("FFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551")
x = bytes(31) + b"\x01"  # a toy secret key
h = hashlib.sha256(b"sample").digest()

k = generate_k(hashlib.sha256, x, q, h)
assert 0 < int.from_bytes(k, "big") < int.from_bytes(q, "big")
```

`x`, `q` and `h` must be of equal length and `h` must already be below
`q`; otherwise `generate_k` raises `ValueError`. The digest may be a
hashlib constructor or a name such as `"sha512"`.

## What this package does not do

It holds the pieces that ML-DSA is built from, not the scheme itself:
there is no key generation, signing or verification, no key or signature
objects, and no predefined ML-DSA-44/65/87 parameter sets (build a
`ParameterSet` as shown above). There is no PKCS#8 or other key-file
support and no command-line tool.

The helpers in `pqsig.consttime` avoid early exits, but Python gives no
timing guarantees; treat this code as a reference implementation.

## Running the tests

```
pip install -e .[test]
pytest
```