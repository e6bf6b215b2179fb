"""Signature round trip: sign, verify, and confirm a tampered message fails."""
from __future__ import annotations

import logging

from .errors import (
    HarnessError,
    SignatureRejected,
    SignatureSizeMismatch,
    TamperAccepted,
    UnsupportedCapability,
    provider_errors,
)
from .keys import RandomKeyGenerator
from .outcomes import Failure, SignatureOutcome
from .types import PrivateKey, PublicKey, SchemeDescriptor, Signature

log = logging.getLogger(__name__)

DEFAULT_MESSAGE = b"pqconform signature round trip"


def flip_first_bit(message: bytes) -> bytes:
    if not message:
        return b"\x01"
    return bytes([message[0] ^ 0x01]) + message[1:]


class SignatureRoundTripRunner:
    def __init__(self, generator: RandomKeyGenerator) -> None:
        self._generator = generator
        self._registry = generator.registry

    def sign(self, private_key: PrivateKey, message: bytes) -> Signature:
        descriptor = private_key.descriptor
        provider = self._registry.provider(descriptor)
        with provider_errors(descriptor.name, "sign"):
            sig = Signature(bytes(provider.sign(private_key.handle, message)))
        # Several schemes (Falcon, ECDSA-style) declare only a maximum length.
        limit = descriptor.sizes.signature
        if limit is not None and len(sig) > limit:
            raise SignatureSizeMismatch(descriptor.name, limit, len(sig))
        return sig

    def verify(self, public_key: PublicKey, message: bytes, signature: Signature) -> bool:
        descriptor = public_key.descriptor
        provider = self._registry.provider(descriptor)
        with provider_errors(descriptor.name, "verify"):
            return bool(provider.verify(public_key.handle, message, signature.data))

    def round_trip(
        self, descriptor: SchemeDescriptor, message: bytes = DEFAULT_MESSAGE
    ) -> SignatureOutcome:
        try:
            if not descriptor.supports_signature:
                raise UnsupportedCapability(descriptor.name, "signatures")
            pair = self._generator.generate(descriptor)
            sig = self.sign(pair.private, message)
            if not self.verify(pair.public, message, sig):
                raise SignatureRejected(descriptor.name)
            if self.verify(pair.public, flip_first_bit(message), sig):
                raise TamperAccepted(descriptor.name)
        except HarnessError as exc:
            log.info("%s: signature round trip failed: %s", descriptor.name, exc.reason)
            return SignatureOutcome(
                scheme=descriptor.name, passed=False, failure=Failure.from_error(exc)
            )
        log.debug("%s: signature %d bytes verified", descriptor.name, len(sig))
        return SignatureOutcome(
            scheme=descriptor.name,
            passed=True,
            signature_length=len(sig),
            tamper_rejected=True,
        )
