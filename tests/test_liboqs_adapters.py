from __future__ import annotations

import hashlib
import os
from types import SimpleNamespace

import pytest

from pqconform import KemRoundTripRunner, RandomKeyGenerator, SchemeRegistry, SignatureRoundTripRunner
from pqconform_liboqs._util import detail_length, pick_kem_algorithm
from pqconform_liboqs.kem_adapters import HQC, Kyber
from pqconform_liboqs.sig_adapters import Falcon


class MechanismNotSupportedError(Exception):
    pass


def _h(*parts: bytes, n: int) -> bytes:
    return hashlib.shake_256(b"".join(parts)).digest(n)


class _Mechanism:
    enabled: dict = {}

    def __init__(self, name, secret_key=None):
        if name not in self.enabled:
            raise MechanismNotSupportedError(name)
        self.name = name
        self.details = dict(self.enabled[name])
        self._sk = secret_key

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def generate_keypair(self):
        self._sk = os.urandom(self.details["length_secret_key"])
        return self._public()

    def export_secret_key(self):
        return self._sk

    def _public(self):
        return _h(b"pk", self._sk, n=self.details["length_public_key"])


class FakeKEM(_Mechanism):
    enabled = {
        "ML-KEM-768": {
            "length_public_key": 1184,
            "length_secret_key": 2400,
            "length_ciphertext": 1088,
            "length_shared_secret": 32,
        }
    }

    def encap_secret(self, public_key):
        ct = os.urandom(self.details["length_ciphertext"])
        return ct, _h(b"ss", public_key, ct, n=32)

    def decap_secret(self, ciphertext):
        return _h(b"ss", self._public(), ciphertext, n=32)


class FakeSignature(_Mechanism):
    enabled = {
        "Falcon-1024": {"length_public_key": 1793, "length_secret_key": 2305, "length_signature": 1462}
    }

    def sign(self, message):
        return _h(b"sig", self._public(), message, n=666)

    def verify(self, message, signature, public_key):
        return _h(b"sig", public_key, message, n=666) == signature


fake_oqs = SimpleNamespace(KeyEncapsulation=FakeKEM, Signature=FakeSignature)


def test_detail_length_ignores_missing_and_bad_values():
    assert detail_length({"length_ciphertext": 1088}, "ciphertext") == 1088
    assert detail_length({"length_ciphertext": 0}, "ciphertext") is None
    assert detail_length({}, "ciphertext") is None
    assert detail_length(None, "ciphertext") is None


def test_env_override_is_tried_first(monkeypatch):
    monkeypatch.setenv("PQCONFORM_KYBER_ALG", "Kyber512")
    assert pick_kem_algorithm(fake_oqs, "PQCONFORM_KYBER_ALG", ["ML-KEM-768"]) == "ML-KEM-768"
    monkeypatch.setenv("PQCONFORM_KYBER_ALG", "ML-KEM-768")
    assert pick_kem_algorithm(fake_oqs, "PQCONFORM_KYBER_ALG", ["Kyber512"]) == "ML-KEM-768"


def test_kyber_descriptor_comes_from_mechanism_details():
    kem = Kyber(oqs_mod=fake_oqs)
    assert kem.alg == "ML-KEM-768"
    d = kem.descriptor
    assert d.name == "kyber" and d.supports_kem and not d.supports_seeded_derivation
    assert (d.sizes.public_key, d.sizes.private_key) == (1184, 2400)
    assert (d.sizes.ciphertext, d.sizes.shared_secret) == (1088, 32)


def test_kyber_round_trip_through_runner():
    registry = SchemeRegistry.from_providers([Kyber(oqs_mod=fake_oqs)])
    outcome = KemRoundTripRunner(RandomKeyGenerator(registry)).round_trip(registry.resolve("kyber"))
    assert outcome.passed, outcome.failure
    assert outcome.ciphertext_length == 1088


def test_falcon_signature_below_maximum_length_passes():
    registry = SchemeRegistry.from_providers([Falcon(oqs_mod=fake_oqs)])
    outcome = SignatureRoundTripRunner(RandomKeyGenerator(registry)).round_trip(
        registry.resolve("falcon")
    )
    assert outcome.passed, outcome.failure
    assert outcome.signature_length == 666


def test_seeded_derivation_is_not_offered():
    with pytest.raises(NotImplementedError):
        Kyber(oqs_mod=fake_oqs).derive_keypair(bytes(32))


def test_no_enabled_mechanism_is_an_error():
    with pytest.raises(RuntimeError, match="hqc"):
        HQC(oqs_mod=fake_oqs)
