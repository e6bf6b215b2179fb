from __future__ import annotations
from typing import Any, Sequence, Tuple
from pqconform.registry import catalog
from pqconform.types import SchemeDescriptor, SchemeSizes
from ._util import detail_length, pick_sig_algorithm, try_import_oqs

_oqs = try_import_oqs()


class OqsSignature:
    """liboqs-backed signature scheme; raw byte keys, random keygen only."""
    name = ""
    env_var = ""
    candidates: Sequence[str] = ()

    def __init__(self, oqs_mod: Any = None) -> None:
        self._oqs = oqs_mod if oqs_mod is not None else _oqs
        if self._oqs is None:
            raise RuntimeError("liboqs-python (oqs) is not installed")
        self.alg = pick_sig_algorithm(self._oqs, self.env_var, self.candidates)
        if not self.alg:
            raise RuntimeError(f"No supported {self.name} mechanism enabled in liboqs")
        with self._oqs.Signature(self.alg) as sig:
            details = sig.details
        self.descriptor = SchemeDescriptor(
            name=self.name,
            supports_signature=True,
            sizes=SchemeSizes(
                public_key=detail_length(details, "public_key"),
                private_key=detail_length(details, "secret_key"),
                # upper bound; Falcon signatures vary in length
                signature=detail_length(details, "signature"),
            ),
        )

    def keygen(self) -> Tuple[bytes, bytes]:
        with self._oqs.Signature(self.alg) as sig:
            pk = sig.generate_keypair()
            sk = sig.export_secret_key()
            return pk, sk

    def derive_keypair(self, seed: bytes) -> Tuple[bytes, bytes]:
        raise NotImplementedError(f"{self.alg} does not support seeded key generation")

    def sign(self, private_key: bytes, message: bytes) -> bytes:
        with self._oqs.Signature(self.alg, secret_key=private_key) as sig:
            return sig.sign(message)

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        with self._oqs.Signature(self.alg) as sig:
            return bool(sig.verify(message, signature, public_key))

    def marshal(self, key: bytes) -> bytes:
        return bytes(key)


class Dilithium(OqsSignature):
    name = "dilithium"
    env_var = "PQCONFORM_DILITHIUM_ALG"
    candidates = ("ML-DSA-65", "ML-DSA-87", "ML-DSA-44", "Dilithium3", "Dilithium5", "Dilithium2")


class Falcon(OqsSignature):
    name = "falcon"
    env_var = "PQCONFORM_FALCON_ALG"
    candidates = ("Falcon-512", "Falcon-1024")


class SphincsPlus(OqsSignature):
    name = "sphincs+"
    env_var = "PQCONFORM_SPHINCS_ALG"
    candidates = (
        "SPHINCS+-SHA2-128f-simple",
        "SPHINCS+-SHAKE-128f-simple",
        "SPHINCS+-SHA2-128s-simple",
    )


SIG_ADAPTERS = (Dilithium, Falcon, SphincsPlus)

if _oqs is not None:
    for _cls in SIG_ADAPTERS:
        catalog.register(_cls.name)(_cls)
