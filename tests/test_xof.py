import pytest

from pqsig.xof import g, h


def test_g():
    stream = g().absorb(b"hello world")
    assert stream.squeeze(32) == bytes.fromhex(
        "3a9159f071e4dd1c8c4f968607c30942e120d8156b8b1e72e0d376e8871cb8b8"
    )
    assert stream.squeeze(32) == bytes.fromhex(
        "99072665674f26cc494a4bcf027c58267e8ee2da60e942759de86d2670bba1aa"
    )


def test_h():
    stream = h().absorb(b"hello world")
    assert stream.squeeze(32) == bytes.fromhex(
        "369771bb2cb9d2b04c1d54cca487e372d9f187f73f7ba3f65b95c8ee7798c527"
    )
    assert stream.squeeze(32) == bytes.fromhex(
        "f4f3c2d55c2d46a29f2e945d469c3df27853a8735271f5cc2d9e889544357116"
    )


def test_absorb_in_pieces_matches_single_absorb():
    whole = g().absorb(b"hello world").squeeze(64)
    pieces = g().absorb(b"hello ").absorb(b"world").squeeze(64)
    assert whole == pieces


def test_small_squeezes_match_one_large():
    big = h().absorb(b"seed").squeeze(500)
    stream = h().absorb(b"seed")
    small = b"".join(stream.squeeze(n) for n in [1, 3, 0, 96, 200, 200])
    assert small == big


def test_absorb_after_squeeze_raises():
    stream = g().absorb(b"abc")
    stream.squeeze(1)
    with pytest.raises(RuntimeError):
        stream.absorb(b"more")


def test_negative_squeeze_raises():
    with pytest.raises(ValueError):
        h().squeeze(-1)