import logging

import pytest

from lfsr_keygen.config import GeneratorConfig
from lfsr_keygen.errors import EmptyKeystream, InvalidConfig
from lfsr_keygen.search.taps import find_primitive_taps, is_primitive_polynomial
from lfsr_keygen.session import KeyGenSession


def test_session_searches_taps_when_none_given():
    s = KeyGenSession(GeneratorConfig(seed="1011001"))
    taps = s.resolve_taps()
    assert taps == find_primitive_taps(7)
    assert s.taps_verified is True
    assert is_primitive_polynomial(7, taps)
    assert s.recommended_taps() == taps


def test_session_generates_maximum_length_stream():
    s = KeyGenSession(GeneratorConfig(seed="1011001"))
    res = s.generate()
    assert len(res) == 127
    assert not s.short
    assert s.keystream() == res.to_str()


def test_session_uses_configured_taps_and_flags_short_stream(caplog):
    # a single tap at the top just rotates the register: period 7
    s = KeyGenSession(GeneratorConfig(seed="1011001", taps=(6,)))
    with caplog.at_level(logging.WARNING, logger="lfsr_keygen.session"):
        res = s.generate()
    assert s.taps == (6,)
    assert s.taps_verified is None
    assert len(res) == 7
    assert s.short
    assert "less than 100" in caplog.text


def test_session_encrypt_decrypt_roundtrip():
    s = KeyGenSession(GeneratorConfig(seed="1100101"))
    s.generate()
    enc = s.encrypt("attack at dawn")
    assert s.decrypt(enc) == b"attack at dawn"

    enc_bits = s.encrypt("1010011100", mode="binary")
    assert s.decrypt(enc_bits, mode="binary") == "1010011100"


def test_session_requires_generated_keystream():
    s = KeyGenSession(GeneratorConfig(seed="1100101"))
    with pytest.raises(EmptyKeystream):
        s.encrypt("hello")


def test_session_rejects_invalid_config():
    with pytest.raises(InvalidConfig):
        KeyGenSession(GeneratorConfig(seed="10"))
    with pytest.raises(InvalidConfig):
        KeyGenSession(GeneratorConfig(seed="1011001", taps=(7,)))


def test_sessions_do_not_share_state():
    a = KeyGenSession(GeneratorConfig(seed="1011001"))
    b = KeyGenSession(GeneratorConfig(seed="1011001", taps=(6, 5)))
    a.generate()
    ks_a = a.keystream()
    assert b.result is None and b.taps is None
    b.generate()
    assert a.keystream() == ks_a
    assert b.taps == (6, 5)
