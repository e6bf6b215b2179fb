from __future__ import annotations
from typing import Any, Sequence, Tuple
from pqconform.registry import catalog
from pqconform.types import SchemeDescriptor, SchemeSizes
from ._util import detail_length, pick_kem_algorithm, try_import_oqs

_oqs = try_import_oqs()


class OqsKEM:
    """liboqs-backed KEM; the concrete mechanism is picked at construction.

    Keys are the raw byte strings liboqs exports, so ``marshal`` is the
    identity. liboqs-python has no seeded key generation, so these schemes
    only take part in round trips.
    """
    name = ""
    env_var = ""
    candidates: Sequence[str] = ()

    def __init__(self, oqs_mod: Any = None) -> None:
        self._oqs = oqs_mod if oqs_mod is not None else _oqs
        if self._oqs is None:
            raise RuntimeError("liboqs-python (oqs) is not installed")
        # Prefer NIST names, then legacy names; try instantiation to confirm availability
        self.alg = pick_kem_algorithm(self._oqs, self.env_var, self.candidates)
        if not self.alg:
            raise RuntimeError(f"No supported {self.name} mechanism enabled in liboqs")
        with self._oqs.KeyEncapsulation(self.alg) as kem:
            details = kem.details
        self.descriptor = SchemeDescriptor(
            name=self.name,
            supports_kem=True,
            sizes=SchemeSizes(
                public_key=detail_length(details, "public_key"),
                private_key=detail_length(details, "secret_key"),
                ciphertext=detail_length(details, "ciphertext"),
                shared_secret=detail_length(details, "shared_secret"),
            ),
        )

    def keygen(self) -> Tuple[bytes, bytes]:
        with self._oqs.KeyEncapsulation(self.alg) as kem:
            pk = kem.generate_keypair()
            sk = kem.export_secret_key()
            return pk, sk

    def derive_keypair(self, seed: bytes) -> Tuple[bytes, bytes]:
        raise NotImplementedError(f"{self.alg} does not support seeded key generation")

    def encapsulate(self, public_key: bytes) -> Tuple[bytes, bytes]:
        with self._oqs.KeyEncapsulation(self.alg) as kem:
            ct, ss = kem.encap_secret(public_key)
            return ss, ct

    def decapsulate(self, private_key: bytes, ciphertext: bytes) -> bytes:
        with self._oqs.KeyEncapsulation(self.alg, secret_key=private_key) as kem:
            return kem.decap_secret(ciphertext)

    def marshal(self, key: bytes) -> bytes:
        return bytes(key)


class Kyber(OqsKEM):
    name = "kyber"
    env_var = "PQCONFORM_KYBER_ALG"
    candidates = ("ML-KEM-768", "ML-KEM-1024", "Kyber768", "Kyber1024", "Kyber512")


class HQC(OqsKEM):
    # Names vary across liboqs versions
    name = "hqc"
    env_var = "PQCONFORM_HQC_ALG"
    candidates = ("HQC-128", "HQC-192", "HQC-256", "HQC-128-1-CCA2", "HQC-192-1-CCA2", "HQC-256-1-CCA2")


class FrodoKEM(OqsKEM):
    name = "frodokem"
    env_var = "PQCONFORM_FRODOKEM_ALG"
    candidates = (
        "FrodoKEM-976-AES",
        "FrodoKEM-976-SHAKE",
        "FrodoKEM-640-AES",
        "FrodoKEM-640-SHAKE",
        "FrodoKEM-1344-AES",
        "FrodoKEM-1344-SHAKE",
    )


class NTRUPrime(OqsKEM):
    name = "ntruprime"
    env_var = "PQCONFORM_NTRUPRIME_ALG"
    candidates = ("sntrup761", "sntrup653", "sntrup1277")


KEM_ADAPTERS = (Kyber, HQC, FrodoKEM, NTRUPrime)

if _oqs is not None:
    for _cls in KEM_ADAPTERS:
        catalog.register(_cls.name)(_cls)
