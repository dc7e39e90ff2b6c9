"""Tests for share tokens and the Share value object."""

import sys
from pathlib import Path

import pytest
from hypothesis import given, strategies as st

sys.path.insert(0, str(Path(__file__).parent.parent))

from keysplit.codec import DecodeResult, ShareCodec
from keysplit.errors import MalformedShare
from keysplit.shamir import Shamir
from keysplit.share import Share


def test_hex_format():
    share = Share(x=1, y=b"\xab\xcd")
    assert ShareCodec().encode(share) == "01abcd"
    assert share.to_hex() == "01abcd"
    assert Share.from_hex("01abcd") == share


def test_base64_format():
    share = Share(x=1, y=b"\xab\xcd")
    codec = ShareCodec("base64")
    assert codec.encode(share) == "AavN"
    assert codec.decode("AavN") == share


def test_unknown_encoding():
    with pytest.raises(ValueError):
        ShareCodec("base32")


def test_split_shares_survive_codec():
    """Test share serialization round-trip."""
    shares = Shamir().split(b"top secret material", total_shares=6, threshold=3)
    for encoding in ("hex", "base64"):
        codec = ShareCodec(encoding)
        tokens = codec.encode_all(shares)
        assert codec.decode_all(tokens) == shares


@given(x=st.integers(min_value=1, max_value=255), y=st.binary(min_size=1, max_size=128))
def test_decode_inverts_encode(x, y):
    share = Share(x=x, y=y)
    for encoding in ("hex", "base64"):
        codec = ShareCodec(encoding)
        assert codec.decode(codec.encode(share)) == share


def test_whitespace_ignored():
    assert ShareCodec().decode("  01abcd\n") == Share(x=1, y=b"\xab\xcd")


@pytest.mark.parametrize("token", ["", "   ", "01", "00abcd", "zz11", "0ab", "01 ab cd", "01ab\tcd"])
def test_malformed_hex_tokens(token):
    with pytest.raises(MalformedShare):
        ShareCodec().decode(token)


@pytest.mark.parametrize(
    "token",
    ["", "AQ==", "AKvN", "!!!!", "A!a@v#N", "Aa vN", "AavN$$$$", "A*avN", "Aa/N", "Aa+N"],
)
def test_malformed_base64_tokens(token):
    with pytest.raises(MalformedShare):
        ShareCodec("base64").decode(token)


def test_non_string_token():
    with pytest.raises(MalformedShare):
        ShareCodec().decode(b"01abcd")


def test_try_decode():
    codec = ShareCodec()
    good = codec.try_decode("02ff")
    assert isinstance(good, DecodeResult)
    assert good.ok
    assert good.share == Share(x=2, y=b"\xff")
    assert good.error is None

    bad = codec.try_decode("00ff")
    assert not bad.ok
    assert bad.share is None
    assert isinstance(bad.error, MalformedShare)


def test_share_validation():
    with pytest.raises(MalformedShare):
        Share(x=0, y=b"a")
    with pytest.raises(MalformedShare):
        Share(x=256, y=b"a")
    with pytest.raises(MalformedShare):
        Share(x=1, y=b"")
    with pytest.raises(MalformedShare):
        Share(x=1, y="text")
    with pytest.raises(MalformedShare):
        Share.from_hex("not hex")
    assert Share(x=3, y=bytearray(b"ab")).y == b"ab"


def test_share_repr_hides_y():
    share = Share(x=4, y=b"\xde\xad\xbe\xef")
    assert repr(share) == "Share(x=4, length=4)"
    assert "dead" not in repr(share)
    assert len(share) == 4
