import pytest

from pqsig.lattice import Elem, NttMatrix, NttPolynomial, NttVector, Polynomial, Vector
from pqsig.ntt import INVERSE_256, Q, ZETA_POW_BITREV, ntt, ntt_inverse


def _naive_mul(f, g):
    """Multiplication in R_q, modulo X^256 + 1."""
    out = [0] * 256
    for i, x in enumerate(f):
        for j, y in enumerate(g):
            product = x.value * y.value
            if i + j < 256:
                out[i + j] = (out[i + j] + product) % Q
            else:
                out[i + j - 256] = (out[i + j - 256] - product) % Q
    return Polynomial(tuple(Elem(v) for v in out))


def _const_ntt(x):
    coeffs = [Elem(0)] * 256
    coeffs[0] = Elem(x)
    return ntt(Polynomial(tuple(coeffs)))


def test_ntt():
    f = Polynomial(tuple(Elem(i) for i in range(256)))
    g = Polynomial(tuple(Elem(2 * i) for i in range(256)))
    f_hat = ntt(f)
    g_hat = ntt(g)

    assert ntt_inverse(f_hat) == f

    assert ntt_inverse(f_hat + g_hat) == f + g

    assert ntt_inverse(f_hat * g_hat) == _naive_mul(f, g)


def test_ntt_vector():
    v1 = NttVector((_const_ntt(1),) * 3)
    v2 = NttVector((_const_ntt(2),) * 3)
    v3 = NttVector((_const_ntt(3),) * 3)
    assert v1 + v2 == v3

    assert v1 * v2 == _const_ntt(6)
    assert v1 * v3 == _const_ntt(9)
    assert v2 * v3 == _const_ntt(18)


def test_ntt_matrix():
    a = NttMatrix((
        NttVector((_const_ntt(1), _const_ntt(2))),
        NttVector((_const_ntt(3), _const_ntt(4))),
        NttVector((_const_ntt(5), _const_ntt(6))),
    ))
    v_in = NttVector((_const_ntt(1), _const_ntt(2)))
    v_out = NttVector((_const_ntt(5), _const_ntt(11), _const_ntt(17)))
    assert a * v_in == v_out


def test_vector_round_trip():
    p = Polynomial(tuple(Elem((i * 7919) % Q) for i in range(256)))
    v = Vector((p, Polynomial.zero()))
    v_hat = ntt(v)
    assert isinstance(v_hat, NttVector)
    assert ntt_inverse(v_hat) == v


def test_zeta_table_properties():
    assert len(ZETA_POW_BITREV) == 256
    assert ZETA_POW_BITREV[0] == 0
    # zeta^128 is a square root of -1 modulo q
    assert ZETA_POW_BITREV[1] * ZETA_POW_BITREV[1] % Q == Q - 1
    assert INVERSE_256 * 256 % Q == 1

    # A constant polynomial maps to the constant tuple and back.
    assert _const_ntt(1) == NttPolynomial((Elem(1),) * 256)
    one = Polynomial((Elem(1),) + (Elem(0),) * 255)
    assert ntt_inverse(NttPolynomial((Elem(1),) * 256)) == one


def test_wrong_types_raise():
    with pytest.raises(TypeError):
        ntt(NttPolynomial.zero())
    with pytest.raises(TypeError):
        ntt_inverse(Polynomial.zero())