import pytest

from pqsig.lattice import (
    BASE_FIELD,
    Elem,
    Field,
    NttMatrix,
    NttPolynomial,
    NttVector,
    Polynomial,
    Vector,
    flatten,
    truncate,
    unflatten,
)

Q = 8_380_417


def const(x):
    return NttPolynomial(tuple(Elem(x) for _ in range(256)))


def ramp(scale):
    return Polynomial(tuple(Elem((scale * i) % Q) for i in range(256)))


def test_flatten_unflatten_lists():
    flat = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
    unflat2 = [[1, 2], [3, 4], [5, 6], [7, 8], [9, 10]]
    unflat5 = [[1, 2, 3, 4, 5], [6, 7, 8, 9, 10]]

    assert flatten(unflat2) == flat
    assert flatten(unflat5) == flat
    assert unflatten(flat, 5) == unflat2
    assert unflatten(flat, 2) == unflat5


def test_flatten_unflatten_bytes():
    flat = bytes(range(1, 11))
    parts = unflatten(flat, 5)
    assert parts == [b"\x01\x02", b"\x03\x04", b"\x05\x06", b"\x07\x08", b"\x09\x0a"]
    assert flatten(parts) == flat


def test_unflatten_rejects_uneven_split():
    with pytest.raises(ValueError):
        unflatten(list(range(10)), 3)
    with pytest.raises(ValueError):
        unflatten(list(range(10)), 0)


@pytest.mark.parametrize(
    "x, bits, expected",
    [(0x1_0000_0001, 32, 1), (300, 8, 44), (0xFFFF_FFFF, 16, 0xFFFF), (5, 0, 0)],
)
def test_truncate(x, bits, expected):
    assert truncate(x, bits) == expected


def test_elem_arithmetic_wraps():
    assert Elem(Q - 1) + Elem(1) == Elem(0)
    assert Elem(0) - Elem(1) == Elem(Q - 1)
    assert -Elem(0) == Elem(0)
    assert -Elem(1) == Elem(Q - 1)
    assert Elem(Q - 1) * Elem(Q - 1) == Elem(1)
    assert Elem(3) * Elem(4) == Elem(12)


def test_elem_field_mismatch():
    with pytest.raises(ValueError):
        Elem(1, Field(17)) + Elem(1)


@pytest.mark.parametrize("x", [0, 1, Q - 1, Q, 2 * Q - 1, (Q - 1) ** 2, 123_456_789_012])
def test_barrett_reduce_matches_modulo(x):
    assert BASE_FIELD.barrett_reduce(x) == x % Q


def test_small_reduce():
    assert BASE_FIELD.small_reduce(Q + 5) == 5
    assert BASE_FIELD.small_reduce(5) == 5


def test_field_rejects_tiny_modulus():
    with pytest.raises(ValueError):
        Field(1)


def test_polynomial_add_sub_neg():
    f, g = ramp(1), ramp(2)
    assert (f + g) - g == f
    assert -f + f == Polynomial.zero()
    assert (f + g)[10] == Elem(30)


def test_polynomial_scalar_multiplication():
    f = ramp(1)
    assert (Elem(3) * f)[7] == Elem(21)
    assert Elem(0) * f == Polynomial.zero()


def test_polynomial_length_checked():
    with pytest.raises(ValueError):
        Polynomial((Elem(0),) * 255)


def test_vector_operations():
    v = Vector((ramp(1), ramp(2)))
    w = Vector((ramp(3), ramp(4)))
    assert (v + w) - w == v
    assert -v + v == Vector.zero(2)
    assert (Elem(2) * v)[1][5] == Elem(20)
    assert len(Vector.zero(4)) == 4


def test_vector_length_mismatch():
    with pytest.raises(ValueError):
        Vector((ramp(1),)) + Vector((ramp(1), ramp(2)))


def test_ntt_polynomial_pointwise_product():
    assert const(2) * const(3) == const(6)
    assert const(5) - const(2) == const(3)
    assert -const(1) == const(Q - 1)
    assert Elem(4) * const(2) == const(8)


def test_ntt_vector_add_and_dot():
    v1 = NttVector((const(1), const(1), const(1)))
    v2 = NttVector((const(2), const(2), const(2)))
    v3 = NttVector((const(3), const(3), const(3)))
    assert v1 + v2 == v3
    assert v3 - v2 == v1

    assert v1 * v2 == const(6)
    assert v1 * v3 == const(9)
    assert v2 * v3 == const(18)


def test_ntt_vector_scaled_by_polynomial():
    v = NttVector((const(1), const(2)))
    assert const(3) * v == NttVector((const(3), const(6)))


def test_ntt_matrix_times_vector():
    a = NttMatrix(
        (
            NttVector((const(1), const(2))),
            NttVector((const(3), const(4))),
            NttVector((const(5), const(6))),
        )
    )
    v_in = NttVector((const(1), const(2)))
    v_out = NttVector((const(5), const(11), const(17)))
    assert a * v_in == v_out


def test_ntt_vector_zero():
    z = NttVector.zero(3)
    assert z * NttVector((const(7), const(8), const(9))) == NttPolynomial.zero()