from __future__ import annotations
from typing import Any, Tuple
from pqconform.registry import catalog
from pqconform.types import SchemeDescriptor, SchemeSizes

from dilithium_py.ml_dsa import ML_DSA_44, ML_DSA_65, ML_DSA_87

SEED_BYTES = 32  # xi


class MLDSA:
    """ML-DSA parameter set from dilithium-py; seeded via ML-DSA.KeyGen_internal(xi)."""
    name = ""
    params: Any = None
    public_size = 0
    private_size = 0
    signature_size = 0

    def __init__(self) -> None:
        self.descriptor = SchemeDescriptor(
            name=self.name,
            supports_signature=True,
            supports_seeded_derivation=True,
            sizes=SchemeSizes(
                seed=SEED_BYTES,
                public_key=self.public_size,
                private_key=self.private_size,
                signature=self.signature_size,
            ),
        )

    def keygen(self) -> Tuple[bytes, bytes]:
        return self.params.keygen()

    def derive_keypair(self, seed: bytes) -> Tuple[bytes, bytes]:
        return self.params.key_derive(bytes(seed))

    def sign(self, private_key: bytes, message: bytes) -> bytes:
        return self.params.sign(private_key, message)

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        return bool(self.params.verify(public_key, message, signature))

    def marshal(self, key: bytes) -> bytes:
        return bytes(key)


@catalog.register("ml-dsa-44")
class MLDSA44(MLDSA):
    name = "ml-dsa-44"
    params = ML_DSA_44
    public_size, private_size, signature_size = 1312, 2560, 2420


@catalog.register("ml-dsa-65")
class MLDSA65(MLDSA):
    name = "ml-dsa-65"
    params = ML_DSA_65
    public_size, private_size, signature_size = 1952, 4032, 3309


@catalog.register("ml-dsa-87")
class MLDSA87(MLDSA):
    name = "ml-dsa-87"
    params = ML_DSA_87
    public_size, private_size, signature_size = 2592, 4896, 4627
