from __future__ import annotations
from typing import Any, Tuple
from pqconform.registry import catalog
from pqconform.types import SchemeDescriptor, SchemeSizes

from cryptography.hazmat.primitives.asymmetric import rsa, padding
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.exceptions import InvalidSignature
import os

SHARED_SECRET_BYTES = 32


def _rsa_bits() -> int:
    override = os.getenv("PQCONFORM_RSA_BITS")
    if override:
        try:
            return int(override)
        except ValueError as exc:
            raise ValueError("PQCONFORM_RSA_BITS must be an integer") from exc
    return 2048


def _gen_rsa_keypair(bits: int) -> Tuple[Any, Any]:
    sk = rsa.generate_private_key(public_exponent=65537, key_size=bits)
    return sk.public_key(), sk


def _marshal(key: Any) -> bytes:
    if isinstance(key, rsa.RSAPrivateKey):
        return key.private_bytes(
            serialization.Encoding.DER,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    if isinstance(key, rsa.RSAPublicKey):
        return key.public_bytes(
            serialization.Encoding.DER,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    raise TypeError(f"not an RSA key: {type(key).__name__}")


def _oaep() -> padding.OAEP:
    return padding.OAEP(mgf=padding.MGF1(algorithm=hashes.SHA256()),
                        algorithm=hashes.SHA256(),
                        label=None)


@catalog.register("rsa-oaep")
class RSAKEM:
    """KEM-style wrapper around RSA-OAEP.

    Not a real KEM; we sample a random 32-byte secret and encrypt it with
    RSA-OAEP so classical RSA can go through the same round trip. Keys are
    random only; there is no seeded derivation.
    """
    name = "rsa-oaep"

    def __init__(self) -> None:
        self._bits = _rsa_bits()
        self.mech = f"RSA-{self._bits}-OAEP"
        self.descriptor = SchemeDescriptor(
            name=self.name,
            supports_kem=True,
            sizes=SchemeSizes(ciphertext=(self._bits + 7) // 8, shared_secret=SHARED_SECRET_BYTES),
        )

    def keygen(self) -> Tuple[Any, Any]:
        return _gen_rsa_keypair(self._bits)

    def derive_keypair(self, seed: bytes) -> Tuple[Any, Any]:
        raise NotImplementedError("RSA keys cannot be derived from a seed here")

    def encapsulate(self, public_key: Any) -> Tuple[bytes, bytes]:
        ss = os.urandom(SHARED_SECRET_BYTES)
        ct = public_key.encrypt(ss, _oaep())
        return ss, ct

    def decapsulate(self, private_key: Any, ciphertext: bytes) -> bytes:
        return private_key.decrypt(ciphertext, _oaep())

    def marshal(self, key: Any) -> bytes:
        return _marshal(key)


@catalog.register("rsa-pss")
class RSASignature:
    """RSA-PSS signature adapter using cryptography (baseline)."""
    name = "rsa-pss"
    hash_algorithm = hashes.SHA256
    salt_length = hashes.SHA256().digest_size  # Recommended salt length: match hash size

    def __init__(self) -> None:
        self._bits = _rsa_bits()
        self.mech = f"RSA-{self._bits}-PSS"
        self.descriptor = SchemeDescriptor(
            name=self.name,
            supports_signature=True,
            sizes=SchemeSizes(signature=(self._bits + 7) // 8),
        )

    def _padding(self) -> padding.PSS:
        return padding.PSS(mgf=padding.MGF1(self.hash_algorithm()), salt_length=self.salt_length)

    def keygen(self) -> Tuple[Any, Any]:
        return _gen_rsa_keypair(self._bits)

    def derive_keypair(self, seed: bytes) -> Tuple[Any, Any]:
        raise NotImplementedError("RSA keys cannot be derived from a seed here")

    def sign(self, private_key: Any, message: bytes) -> bytes:
        return private_key.sign(message, self._padding(), self.hash_algorithm())

    def verify(self, public_key: Any, message: bytes, signature: bytes) -> bool:
        try:
            public_key.verify(signature, message, self._padding(), self.hash_algorithm())
            return True
        except InvalidSignature:
            return False

    def marshal(self, key: Any) -> bytes:
        return _marshal(key)
