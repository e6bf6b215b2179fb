"""KEM round trip: encapsulate at a public key, decapsulate at its private key."""
from __future__ import annotations

import hmac
import logging
from typing import Tuple

from .errors import (
    CiphertextSizeMismatch,
    HarnessError,
    SharedSecretMismatch,
    SharedSecretSizeMismatch,
    UnsupportedCapability,
    provider_errors,
)
from .keys import RandomKeyGenerator
from .outcomes import Failure, RoundTripOutcome
from .types import (
    Ciphertext,
    EncapsulationResult,
    PrivateKey,
    PublicKey,
    SchemeDescriptor,
    SharedSecret,
    ensure_same_scheme,
)

log = logging.getLogger(__name__)


def secrets_equal(a: SharedSecret, b: SharedSecret) -> bool:
    """Constant-time comparison of two shared secrets."""
    return hmac.compare_digest(a.data, b.data)


class KemRoundTripRunner:
    def __init__(self, generator: RandomKeyGenerator) -> None:
        self._generator = generator
        self._registry = generator.registry

    def encapsulate(self, public_key: PublicKey) -> EncapsulationResult:
        descriptor = public_key.descriptor
        provider = self._registry.provider(descriptor)
        with provider_errors(descriptor.name, "encapsulate"):
            ss, ct = provider.encapsulate(public_key.handle)
            result = EncapsulationResult(SharedSecret(bytes(ss)), Ciphertext(bytes(ct)))
        expected = descriptor.sizes.ciphertext
        if expected is not None and len(result.ciphertext) != expected:
            raise CiphertextSizeMismatch(descriptor.name, expected, len(result.ciphertext))
        self._check_secret_size(descriptor, result.shared_secret)
        return result

    def decapsulate(self, private_key: PrivateKey, ciphertext: Ciphertext) -> SharedSecret:
        descriptor = private_key.descriptor
        if not isinstance(ciphertext, Ciphertext):
            raise TypeError("decapsulate expects a Ciphertext")
        expected = descriptor.sizes.ciphertext
        if expected is not None and len(ciphertext) != expected:
            raise CiphertextSizeMismatch(descriptor.name, expected, len(ciphertext))
        provider = self._registry.provider(descriptor)
        with provider_errors(descriptor.name, "decapsulate"):
            secret = SharedSecret(bytes(provider.decapsulate(private_key.handle, ciphertext.data)))
        self._check_secret_size(descriptor, secret)
        return secret

    def _exchange(self, descriptor: SchemeDescriptor) -> Tuple[EncapsulationResult, SharedSecret]:
        if not descriptor.supports_kem:
            raise UnsupportedCapability(descriptor.name, "key encapsulation")
        pair = self._generator.generate(descriptor)
        ensure_same_scheme(descriptor, pair.descriptor)
        sent = self.encapsulate(pair.public)
        log.debug("%s: ciphertext %d bytes", descriptor.name, len(sent.ciphertext))
        return sent, self.decapsulate(pair.private, sent.ciphertext)

    def run(self, descriptor: SchemeDescriptor) -> EncapsulationResult:
        """Raising variant of :meth:`round_trip`; returns the sender's result."""
        sent, received = self._exchange(descriptor)
        if not secrets_equal(sent.shared_secret, received):
            raise SharedSecretMismatch(descriptor.name)
        return sent

    def round_trip(self, descriptor: SchemeDescriptor) -> RoundTripOutcome:
        try:
            sent, received = self._exchange(descriptor)
        except HarnessError as exc:
            log.info("%s: round trip failed: %s", descriptor.name, exc.reason)
            return RoundTripOutcome(
                scheme=descriptor.name, passed=False, failure=Failure.from_error(exc)
            )
        if not secrets_equal(sent.shared_secret, received):
            mismatch = SharedSecretMismatch(descriptor.name)
            log.info("%s: round trip failed: %s", descriptor.name, mismatch.reason)
            return RoundTripOutcome(
                scheme=descriptor.name,
                passed=False,
                secrets_match=False,
                ciphertext_length=len(sent.ciphertext),
                failure=Failure.from_error(mismatch),
            )
        return RoundTripOutcome(
            scheme=descriptor.name,
            passed=True,
            secrets_match=True,
            ciphertext_length=len(sent.ciphertext),
        )

    @staticmethod
    def _check_secret_size(descriptor: SchemeDescriptor, secret: SharedSecret) -> None:
        expected = descriptor.sizes.shared_secret
        if expected is not None and len(secret) != expected:
            raise SharedSecretSizeMismatch(descriptor.name, expected, len(secret))
