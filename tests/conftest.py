from __future__ import annotations

import hashlib
import os
import sys
from pathlib import Path
from typing import Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
for rel in (
    "libs/core/src",
    "libs/adapters/classic/src",
    "libs/adapters/fips/src",
    "libs/adapters/liboqs/src",
    "apps/cli/src",
):
    candidate = str(ROOT / rel)
    if candidate not in sys.path:
        sys.path.insert(0, candidate)

from pqconform import (  # noqa: E402
    RandomKeyGenerator,
    SchemeDescriptor,
    SchemeRegistry,
    SchemeSizes,
)

DEMO_PK = 1184
DEMO_SK = 2400
DEMO_CT = 1088


def _shake(*parts: bytes, n: int) -> bytes:
    return hashlib.shake_256(b"".join(parts)).digest(n)


class DemoKEM768:
    """Mock KEM with ML-KEM-768 sizes. Not secure; just size- and law-faithful."""

    descriptor = SchemeDescriptor(
        name="DemoKEM768",
        supports_kem=True,
        supports_seeded_derivation=True,
        sizes=SchemeSizes(
            seed=32,
            public_key=DEMO_PK,
            private_key=DEMO_SK,
            ciphertext=DEMO_CT,
            shared_secret=32,
        ),
    )

    def __init__(self) -> None:
        self.decapsulations = 0

    def keygen(self) -> Tuple[bytes, bytes]:
        return self.derive_keypair(os.urandom(32))

    def derive_keypair(self, seed: bytes) -> Tuple[bytes, bytes]:
        pk = _shake(b"demo-pk", seed, n=DEMO_PK)
        sk = _shake(b"demo-sk", seed, n=DEMO_SK - DEMO_PK) + pk
        return pk, sk

    def encapsulate(self, public_key: bytes) -> Tuple[bytes, bytes]:
        m = os.urandom(32)
        ct = m + _shake(b"demo-ct", public_key, m, n=DEMO_CT - 32)
        return _shake(b"demo-ss", public_key, m, n=32), ct

    def decapsulate(self, private_key: bytes, ciphertext: bytes) -> bytes:
        self.decapsulations += 1
        pk = private_key[-DEMO_PK:]
        return _shake(b"demo-ss", pk, ciphertext[:32], n=32)

    def marshal(self, key: bytes) -> bytes:
        return bytes(key)


class DemoSig:
    """Mock signature scheme: the 'signature' is a keyed hash checked via the public key."""

    descriptor = SchemeDescriptor(
        name="DemoSig",
        supports_signature=True,
        supports_seeded_derivation=True,
        sizes=SchemeSizes(seed=32, public_key=32, private_key=32, signature=32),
    )

    def keygen(self) -> Tuple[bytes, bytes]:
        return self.derive_keypair(os.urandom(32))

    def derive_keypair(self, seed: bytes) -> Tuple[bytes, bytes]:
        sk = _shake(b"demo-sig-sk", seed, n=32)
        return _shake(b"demo-sig-pk", sk, n=32), sk

    def sign(self, private_key: bytes, message: bytes) -> bytes:
        pk = _shake(b"demo-sig-pk", private_key, n=32)
        return _shake(b"demo-sig", pk, message, n=32)

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        return _shake(b"demo-sig", public_key, message, n=32) == signature

    def marshal(self, key: bytes) -> bytes:
        return bytes(key)


@pytest.fixture
def demo_kem() -> DemoKEM768:
    return DemoKEM768()


@pytest.fixture
def demo_sig() -> DemoSig:
    return DemoSig()


@pytest.fixture
def demo_registry(demo_kem: DemoKEM768, demo_sig: DemoSig) -> SchemeRegistry:
    return SchemeRegistry.from_providers([demo_kem, demo_sig])


@pytest.fixture
def generator(demo_registry: SchemeRegistry) -> RandomKeyGenerator:
    return RandomKeyGenerator(demo_registry)
