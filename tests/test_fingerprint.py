from __future__ import annotations

import hashlib

import pytest

from pqconform import DigestFingerprinter, Fingerprint, fingerprint


def test_empty_input_has_known_fingerprint():
    # First 16 bytes of SHAKE256("")
    assert fingerprint(b"").hex == "46b9dd2b0ba88d13233b3feb743eeb24"
    # First 16 bytes of SHAKE256("abc")
    assert fingerprint(b"abc").hex == "483366601360a8771c6863080cc4114d"


def test_fingerprint_is_pure_and_fixed_length():
    fp = DigestFingerprinter()
    for data in (b"", b"\x00", bytes(range(256)), b"x" * 100_000):
        a = fp.fingerprint(data)
        b = fp.fingerprint(bytearray(data))
        assert a == b
        assert len(a.hex) == 32
        assert a.hex == hashlib.shake_256(data).digest(16).hex()


def test_distinct_inputs_differ():
    assert fingerprint(b"public") != fingerprint(b"secret")


def test_compares_against_literals_case_insensitively():
    fp = fingerprint(b"")
    assert fp == "46B9DD2B0BA88D13233B3FEB743EEB24"
    assert fp == " 46b9dd2b0ba88d13233b3feb743eeb24 "
    assert str(fp) == "46b9dd2b0ba88d13233b3feb743eeb24"


@pytest.mark.parametrize(
    "bad", ["", "abc", "zz" * 16, "00" * 17, "00 11 22 33 44 55 66 77 88 99 aa"]
)
def test_fingerprint_value_validates_shape(bad):
    with pytest.raises(ValueError):
        Fingerprint(bad)
