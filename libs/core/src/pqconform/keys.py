"""Key pair production: seeded derivation and CSPRNG-backed generation."""
from __future__ import annotations

import logging
from typing import Any, Tuple

from .errors import (
    EntropyUnavailable,
    InvalidSeedLength,
    UnsupportedCapability,
    provider_errors,
)
from .registry import SchemeRegistry
from .types import KeyPair, PrivateKey, PublicKey, SchemeDescriptor

log = logging.getLogger(__name__)


def _wrap(descriptor: SchemeDescriptor, handles: Tuple[Any, Any]) -> KeyPair:
    pk, sk = handles
    return KeyPair(PublicKey(descriptor, pk), PrivateKey(descriptor, sk))


class DeterministicDeriver:
    """Reproducible key pairs from a fixed-length seed.

    The seed length is a hard precondition: providers tend to silently
    truncate or stretch a wrong-sized seed and hand back different keys.
    """

    def __init__(self, registry: SchemeRegistry) -> None:
        self._registry = registry

    def derive(self, descriptor: SchemeDescriptor, seed: bytes) -> KeyPair:
        provider = self._registry.provider(descriptor)
        if not descriptor.supports_seeded_derivation:
            raise UnsupportedCapability(descriptor.name, "seeded derivation")
        expected = descriptor.sizes.seed
        if expected is None or len(seed) != expected:
            raise InvalidSeedLength(descriptor.name, expected or 0, len(seed))
        with provider_errors(descriptor.name, "derive"):
            pair = _wrap(descriptor, provider.derive_keypair(bytes(seed)))
        log.debug("derived %s key pair from %d-byte seed", descriptor.name, len(seed))
        return pair


class RandomKeyGenerator:
    def __init__(self, registry: SchemeRegistry) -> None:
        self._registry = registry

    def generate(self, descriptor: SchemeDescriptor) -> KeyPair:
        provider = self._registry.provider(descriptor)
        # No retry: a failing entropy source has to be visible to the caller.
        try:
            with provider_errors(descriptor.name, "keygen"):
                try:
                    handles = provider.keygen()
                    pair = _wrap(descriptor, handles)
                except (OSError, NotImplementedError) as exc:
                    raise EntropyUnavailable(
                        f"entropy source failed: {exc}", scheme=descriptor.name
                    ) from exc
        except EntropyUnavailable:
            log.warning("entropy unavailable while generating %s keys", descriptor.name)
            raise
        log.debug("generated %s key pair", descriptor.name)
        return pair

    @property
    def registry(self) -> SchemeRegistry:
        return self._registry
