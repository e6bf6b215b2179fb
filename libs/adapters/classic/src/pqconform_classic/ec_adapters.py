"""Elliptic-curve providers built on ``cryptography``.

Both DHKEMs follow the usual ephemeral-static pattern: the "ciphertext" is
the sender's ephemeral public key and the shared secret is HKDF-SHA256 over
the DH output, the ephemeral key and the recipient key. All three schemes
accept a 32-byte seed as the private key material, which makes their keys
reproducible for known-answer checks.
"""
from __future__ import annotations
from typing import Any, Tuple
from pqconform.registry import catalog
from pqconform.types import SchemeDescriptor, SchemeSizes

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, x25519
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

SEED_BYTES = 32
SHARED_SECRET_BYTES = 32

# Order of the P-256 base point (FIPS 186-4, D.1.2.3)
P256_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551

_RAW = (serialization.Encoding.Raw, serialization.PublicFormat.Raw)


def _kdf(label: bytes, dh: bytes, enc: bytes, recipient: bytes) -> bytes:
    return HKDF(
        algorithm=hashes.SHA256(),
        length=SHARED_SECRET_BYTES,
        salt=None,
        info=b"pqconform " + label,
    ).derive(dh + enc + recipient)


def _raw_private(key: Any) -> bytes:
    return key.private_bytes(
        serialization.Encoding.Raw,
        serialization.PrivateFormat.Raw,
        serialization.NoEncryption(),
    )


class _DHKEM:
    name = ""
    public_size = 0

    def __init__(self) -> None:
        self.descriptor = SchemeDescriptor(
            name=self.name,
            supports_kem=True,
            supports_seeded_derivation=True,
            sizes=SchemeSizes(
                seed=SEED_BYTES,
                public_key=self.public_size,
                private_key=SEED_BYTES,
                ciphertext=self.public_size,
                shared_secret=SHARED_SECRET_BYTES,
            ),
        )

    # subclasses supply _generate, _from_seed, _encode, _decode, _exchange, _private_bytes
    _private_type: Any = None

    def keygen(self) -> Tuple[Any, Any]:
        sk = self._generate()
        return sk.public_key(), sk

    def derive_keypair(self, seed: bytes) -> Tuple[Any, Any]:
        if len(seed) != SEED_BYTES:
            raise ValueError(f"{self.name} needs a {SEED_BYTES}-byte seed")
        sk = self._from_seed(seed)
        return sk.public_key(), sk

    def encapsulate(self, public_key: Any) -> Tuple[bytes, bytes]:
        eph = self._generate()
        enc = self._encode(eph.public_key())
        dh = self._exchange(eph, public_key)
        return _kdf(self.name.encode(), dh, enc, self._encode(public_key)), enc

    def decapsulate(self, private_key: Any, ciphertext: bytes) -> bytes:
        dh = self._exchange(private_key, self._decode(ciphertext))
        recipient = self._encode(private_key.public_key())
        return _kdf(self.name.encode(), dh, ciphertext, recipient)

    def marshal(self, key: Any) -> bytes:
        if isinstance(key, self._private_type):
            return self._private_bytes(key)
        return self._encode(key)


@catalog.register("x25519-dhkem")
class X25519KEM(_DHKEM):
    name = "x25519-dhkem"
    public_size = 32
    _private_type = x25519.X25519PrivateKey

    def _generate(self) -> Any:
        return x25519.X25519PrivateKey.generate()

    def _from_seed(self, seed: bytes) -> Any:
        return x25519.X25519PrivateKey.from_private_bytes(seed)

    def _encode(self, public_key: Any) -> bytes:
        if not isinstance(public_key, x25519.X25519PublicKey):
            raise TypeError(f"not an X25519 public key: {type(public_key).__name__}")
        return public_key.public_bytes(*_RAW)

    def _decode(self, data: bytes) -> Any:
        return x25519.X25519PublicKey.from_public_bytes(data)

    def _exchange(self, private_key: Any, public_key: Any) -> bytes:
        return private_key.exchange(public_key)

    def _private_bytes(self, private_key: Any) -> bytes:
        return _raw_private(private_key)


@catalog.register("p256-dhkem")
class P256KEM(_DHKEM):
    name = "p256-dhkem"
    public_size = 65  # uncompressed SEC1 point
    _private_type = ec.EllipticCurvePrivateKey

    def _generate(self) -> Any:
        return ec.generate_private_key(ec.SECP256R1())

    def _from_seed(self, seed: bytes) -> Any:
        # Seeds at or above the group order are rejected, not reduced.
        value = int.from_bytes(seed, "big")
        if not 0 < value < P256_ORDER:
            raise ValueError("seed is not a valid P-256 scalar")
        return ec.derive_private_key(value, ec.SECP256R1())

    def _encode(self, public_key: Any) -> bytes:
        if not isinstance(public_key, ec.EllipticCurvePublicKey):
            raise TypeError(f"not an EC public key: {type(public_key).__name__}")
        return public_key.public_bytes(
            serialization.Encoding.X962,
            serialization.PublicFormat.UncompressedPoint,
        )

    def _decode(self, data: bytes) -> Any:
        return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), data)

    def _exchange(self, private_key: Any, public_key: Any) -> bytes:
        return private_key.exchange(ec.ECDH(), public_key)

    def _private_bytes(self, private_key: Any) -> bytes:
        return private_key.private_numbers().private_value.to_bytes(SEED_BYTES, "big")


@catalog.register("ed25519")
class Ed25519Signature:
    """Ed25519 signatures; the 32-byte seed is the RFC 8032 private key."""
    name = "ed25519"

    def __init__(self) -> None:
        self.descriptor = SchemeDescriptor(
            name=self.name,
            supports_signature=True,
            supports_seeded_derivation=True,
            sizes=SchemeSizes(seed=SEED_BYTES, public_key=32, private_key=32, signature=64),
        )

    def keygen(self) -> Tuple[Any, Any]:
        sk = ed25519.Ed25519PrivateKey.generate()
        return sk.public_key(), sk

    def derive_keypair(self, seed: bytes) -> Tuple[Any, Any]:
        sk = ed25519.Ed25519PrivateKey.from_private_bytes(seed)
        return sk.public_key(), sk

    def sign(self, private_key: Any, message: bytes) -> bytes:
        return private_key.sign(message)

    def verify(self, public_key: Any, message: bytes, signature: bytes) -> bool:
        try:
            public_key.verify(signature, message)
            return True
        except InvalidSignature:
            return False

    def marshal(self, key: Any) -> bytes:
        if isinstance(key, ed25519.Ed25519PrivateKey):
            return _raw_private(key)
        if isinstance(key, ed25519.Ed25519PublicKey):
            return key.public_bytes(*_RAW)
        raise TypeError(f"not an Ed25519 key: {type(key).__name__}")
