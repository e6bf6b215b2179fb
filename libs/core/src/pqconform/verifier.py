"""Known-answer conformance checks on seeded key derivation.

A run resolves the scheme, derives a key pair from the seed, marshals both
keys through the provider, fingerprints them and compares each fingerprint
with its expected literal. Public and secret key results are reported
separately so a failure can be traced to the key that differs.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from .errors import (
    FingerprintMismatch,
    HarnessError,
    KeySizeMismatch,
    MarshalFailure,
)
from .fingerprint import DigestFingerprinter, Fingerprint
from .keys import DeterministicDeriver
from .outcomes import (
    PUBLIC_KEY_FIELD,
    SECRET_KEY_FIELD,
    ConformanceOutcome,
    FieldMismatch,
    GenerationFailed,
    Mismatch,
    Pass,
)
from .registry import SchemeRegistry
from .types import SchemeDescriptor

log = logging.getLogger(__name__)

Expected = Optional[Union[str, Fingerprint]]


def canonical_seed(length: int) -> bytes:
    """The 0, 1, 2, ... seed used by published known-answer values."""
    return bytes(i & 0xFF for i in range(length))


class ConformanceVerifier:
    def __init__(
        self,
        registry: SchemeRegistry,
        deriver: Optional[DeterministicDeriver] = None,
        fingerprinter: Optional[DigestFingerprinter] = None,
    ) -> None:
        self._registry = registry
        self._deriver = deriver or DeterministicDeriver(registry)
        self._fingerprinter = fingerprinter or DigestFingerprinter()

    def verify(
        self,
        scheme_name: str,
        seed: Optional[bytes] = None,
        expected_public: Expected = None,
        expected_secret: Expected = None,
    ) -> ConformanceOutcome:
        try:
            descriptor = self._registry.resolve(scheme_name)
            if seed is None:
                seed = canonical_seed(descriptor.sizes.seed or 0)
            pair = self._deriver.derive(descriptor, seed)
            provider = self._registry.provider(descriptor)
            public_fp = self._fingerprint_key(
                provider, descriptor, PUBLIC_KEY_FIELD, pair.public.handle
            )
            secret_fp = self._fingerprint_key(
                provider, descriptor, SECRET_KEY_FIELD, pair.private.handle
            )
        except HarnessError as exc:
            log.info("%s: conformance run failed: %s", scheme_name, exc.reason)
            return GenerationFailed.from_error(scheme_name, exc)

        log.debug("%s: pk=%s sk=%s", scheme_name, public_fp, secret_fp)
        mismatches: List[FieldMismatch] = []
        for field, expected, actual in (
            (PUBLIC_KEY_FIELD, expected_public, public_fp),
            (SECRET_KEY_FIELD, expected_secret, secret_fp),
        ):
            if expected is None:
                continue
            literal = str(expected).strip().lower()
            if actual != literal:
                error = FingerprintMismatch(scheme_name, field, literal, actual.hex)
                log.info("%s: %s", scheme_name, error.reason)
                mismatches.append(FieldMismatch.from_error(error))
        if mismatches:
            return Mismatch(scheme_name, tuple(mismatches), public_fp.hex, secret_fp.hex)
        return Pass(scheme_name, public_fp.hex, secret_fp.hex)

    def _fingerprint_key(
        self, provider: Any, descriptor: SchemeDescriptor, field: str, handle: Any
    ) -> Fingerprint:
        try:
            raw = provider.marshal(handle)
        except Exception as exc:
            raise MarshalFailure(descriptor.name, field, f"{type(exc).__name__}: {exc}") from exc
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise MarshalFailure(descriptor.name, field, f"provider returned {type(raw).__name__}")
        raw = bytes(raw)
        declared = (
            descriptor.sizes.public_key if field == PUBLIC_KEY_FIELD else descriptor.sizes.private_key
        )
        if declared is not None and len(raw) != declared:
            raise KeySizeMismatch(descriptor.name, field, declared, len(raw))
        return self._fingerprinter.fingerprint(raw)
