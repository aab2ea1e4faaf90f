import pytest

from pqsig.lattice import Elem, Polynomial, Vector
from pqsig.rounding import (
    Q,
    barrett_reduce,
    decompose,
    high_bits,
    infinity_norm,
    low_bits,
    mod_plus_minus,
    power2round,
)

# 2 * gamma2 for the ML-DSA-65 parameter set
MOD = (Q - 1) // 16
MOD_ELEM = Elem(MOD)


def _sample(limit):
    return list(range(0, limit, 5)) + [limit - 2, limit - 1]


def test_mod_plus_minus():
    for x in _sample(MOD):
        e = Elem(x)
        x0 = mod_plus_minus(e, MOD)
        positive_bound = x0.value <= MOD // 2
        negative_bound = x0.value > Q - MOD // 2
        assert positive_bound or negative_bound

        xn = e + MOD_ELEM
        x0n = x0 + MOD_ELEM
        assert xn.value % MOD == x0n.value % MOD


def test_decompose():
    for x in _sample(MOD):
        e = Elem(x)
        x1, x0 = decompose(e, MOD)
        positive_bound = x0.value <= MOD // 2
        negative_bound = x0.value >= Q - MOD // 2
        assert positive_bound or negative_bound

        assert (MOD * x1.value + x0.value) % Q == x


def test_decompose_top_value_wraps():
    x1, x0 = decompose(Elem(Q - 1), MOD)
    assert x1 == Elem(0)
    assert x0 == Elem(Q - 1)


@pytest.mark.parametrize("m", [Q, 1 << 13, MOD, 2 * 95232])
@pytest.mark.parametrize("x", [0, 1, 4095, 4096, 8191, 8192, 123456, Q - 1])
def test_barrett_reduce_matches_modulo(m, x):
    assert barrett_reduce(x, m) == x % m


def test_barrett_reduce_rejects_non_positive_modulus():
    with pytest.raises(ValueError):
        barrett_reduce(5, 0)


def test_infinity_norm_elem():
    assert infinity_norm(Elem(7)) == 7
    assert infinity_norm(Elem(Q - 5)) == 5
    assert infinity_norm(Elem(Q >> 1)) == Q >> 1


def test_infinity_norm_polynomial_and_vector():
    coeffs = [Elem(0)] * 256
    coeffs[3] = Elem(10)
    coeffs[100] = Elem(Q - 42)
    p = Polynomial(tuple(coeffs))
    assert infinity_norm(p) == 42
    v = Vector((Polynomial.zero(), p))
    assert infinity_norm(v) == 42


def test_power2round_values():
    assert power2round(Elem(8192)) == (Elem(1), Elem(0))
    assert power2round(Elem(4096)) == (Elem(0), Elem(4096))
    assert power2round(Elem(4097)) == (Elem(1), Elem(Q - 4095))


def test_power2round_polynomial_recombines():
    p = Polynomial(tuple(Elem((i * 32749) % Q) for i in range(256)))
    r1, r0 = power2round(p)
    assert isinstance(r1, Polynomial)
    for orig, hi, lo in zip(p, r1, r0):
        assert ((hi.value << 13) + lo.value) % Q == orig.value
        assert infinity_norm(lo) <= 1 << 12


def test_high_low_bits_on_vector():
    p = Polynomial(tuple(Elem((i * 99991) % Q) for i in range(256)))
    v = Vector((p, p))
    hi = high_bits(v, MOD)
    lo = low_bits(v, MOD)
    for hp, lp in zip(hi, lo):
        for orig, h, lo_c in zip(p, hp, lp):
            assert (MOD * h.value + lo_c.value) % Q == orig.value


def test_wrong_type_raises():
    with pytest.raises(TypeError):
        mod_plus_minus(5, MOD)
    with pytest.raises(TypeError):
        infinity_norm("x")