"""Value types shared by the harness components.

Byte roles (ciphertext, shared secret, signature) get their own wrapper types
so one can never be handed to a call expecting another. Key handles stay
opaque: the harness only passes them back to the provider that made them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import KeyPairingError


@dataclass(frozen=True)
class SchemeSizes:
    """Fixed byte lengths declared by a scheme; ``None`` means not fixed."""

    seed: Optional[int] = None
    public_key: Optional[int] = None
    private_key: Optional[int] = None
    ciphertext: Optional[int] = None
    shared_secret: Optional[int] = None
    signature: Optional[int] = None


@dataclass(frozen=True)
class SchemeDescriptor:
    name: str
    supports_kem: bool = False
    supports_signature: bool = False
    supports_seeded_derivation: bool = False
    sizes: SchemeSizes = field(default_factory=SchemeSizes)

    @property
    def kind(self) -> str:
        if self.supports_kem:
            return "KEM"
        if self.supports_signature:
            return "SIG"
        return "?"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "supports_kem": self.supports_kem,
            "supports_signature": self.supports_signature,
            "supports_seeded_derivation": self.supports_seeded_derivation,
            "sizes": {k: v for k, v in vars(self.sizes).items() if v is not None},
        }


@dataclass(frozen=True)
class PublicKey:
    descriptor: SchemeDescriptor
    handle: Any = field(repr=False)


@dataclass(frozen=True)
class PrivateKey:
    descriptor: SchemeDescriptor
    handle: Any = field(repr=False)


@dataclass(frozen=True)
class KeyPair:
    public: PublicKey
    private: PrivateKey

    def __post_init__(self) -> None:
        if not isinstance(self.public, PublicKey) or not isinstance(self.private, PrivateKey):
            raise KeyPairingError("KeyPair needs a PublicKey and a PrivateKey")
        ensure_same_scheme(self.public.descriptor, self.private.descriptor)

    @property
    def descriptor(self) -> SchemeDescriptor:
        return self.public.descriptor


@dataclass(frozen=True)
class Ciphertext:
    data: bytes = field(repr=False)

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"Ciphertext(<{len(self.data)} bytes>)"


@dataclass(frozen=True, eq=False)
class SharedSecret:
    """Compared only through ``hmac.compare_digest``; no ``==`` on content."""

    data: bytes = field(repr=False)

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"SharedSecret(<{len(self.data)} bytes, redacted>)"


@dataclass(frozen=True)
class Signature:
    data: bytes = field(repr=False)

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"Signature(<{len(self.data)} bytes>)"


@dataclass(frozen=True)
class EncapsulationResult:
    shared_secret: SharedSecret
    ciphertext: Ciphertext


def ensure_same_scheme(expected: SchemeDescriptor, actual: SchemeDescriptor) -> None:
    """Fail fast when two scheme-tagged values belong to different schemes."""
    if expected is not actual and expected != actual:
        raise KeyPairingError(
            f"cannot combine material from {expected.name!r} with {actual.name!r}"
        )
