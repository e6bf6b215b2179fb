from __future__ import annotations
from typing import Any, Tuple
from pqconform.registry import catalog
from pqconform.types import SchemeDescriptor, SchemeSizes

from kyber_py.ml_kem import ML_KEM_512, ML_KEM_768, ML_KEM_1024

SEED_BYTES = 64  # d || z
SHARED_SECRET_BYTES = 32


class MLKEM:
    """ML-KEM parameter set from kyber-py.

    Keys are the FIPS 203 byte encodings (ek, dk), so ``marshal`` is the
    identity. ``derive_keypair`` is ML-KEM.KeyGen_internal(d, z) on the two
    halves of the seed.
    """
    name = ""
    params: Any = None
    public_size = 0
    private_size = 0
    ciphertext_size = 0

    def __init__(self) -> None:
        self.descriptor = SchemeDescriptor(
            name=self.name,
            supports_kem=True,
            supports_seeded_derivation=True,
            sizes=SchemeSizes(
                seed=SEED_BYTES,
                public_key=self.public_size,
                private_key=self.private_size,
                ciphertext=self.ciphertext_size,
                shared_secret=SHARED_SECRET_BYTES,
            ),
        )

    def keygen(self) -> Tuple[bytes, bytes]:
        return self.params.keygen()

    def derive_keypair(self, seed: bytes) -> Tuple[bytes, bytes]:
        return self.params.key_derive(bytes(seed))

    def encapsulate(self, public_key: bytes) -> Tuple[bytes, bytes]:
        ss, ct = self.params.encaps(public_key)
        return ss, ct

    def decapsulate(self, private_key: bytes, ciphertext: bytes) -> bytes:
        return self.params.decaps(private_key, ciphertext)

    def marshal(self, key: bytes) -> bytes:
        return bytes(key)


@catalog.register("ml-kem-512")
class MLKEM512(MLKEM):
    name = "ml-kem-512"
    params = ML_KEM_512
    public_size, private_size, ciphertext_size = 800, 1632, 768


@catalog.register("ml-kem-768")
class MLKEM768(MLKEM):
    name = "ml-kem-768"
    params = ML_KEM_768
    public_size, private_size, ciphertext_size = 1184, 2400, 1088


@catalog.register("ml-kem-1024")
class MLKEM1024(MLKEM):
    name = "ml-kem-1024"
    params = ML_KEM_1024
    public_size, private_size, ciphertext_size = 1568, 3168, 1568
