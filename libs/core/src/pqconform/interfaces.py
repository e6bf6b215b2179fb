"""Primitive provider contracts.

Adapters implement these Protocols and register their classes into the
provider catalog. The harness talks only to these interfaces, never to vendor
libraries directly. Key handles are whatever the provider likes; the harness
hands them back unchanged and only ever looks at ``marshal`` output.
"""
from __future__ import annotations

from typing import Any, Protocol, Tuple

from .types import SchemeDescriptor


class KEMProvider(Protocol):
    """Key Encapsulation Mechanism contract."""
    descriptor: SchemeDescriptor
    def keygen(self) -> Tuple[Any, Any]: ...
    def derive_keypair(self, seed: bytes) -> Tuple[Any, Any]: ...
    def encapsulate(self, public_key: Any) -> Tuple[bytes, bytes]: ...  # (shared_secret, ciphertext)
    def decapsulate(self, private_key: Any, ciphertext: bytes) -> bytes: ...
    def marshal(self, key: Any) -> bytes: ...


class SignatureProvider(Protocol):
    """Digital Signature contract."""
    descriptor: SchemeDescriptor
    def keygen(self) -> Tuple[Any, Any]: ...
    def derive_keypair(self, seed: bytes) -> Tuple[Any, Any]: ...
    def sign(self, private_key: Any, message: bytes) -> bytes: ...
    def verify(self, public_key: Any, message: bytes, signature: bytes) -> bool: ...
    def marshal(self, key: Any) -> bytes: ...
