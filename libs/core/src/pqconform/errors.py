"""Failure taxonomy for the conformance harness.

Every recoverable failure derives from :class:`HarnessError` and knows how to
describe itself through :meth:`HarnessError.details`, so runners can fold it
into an outcome instead of letting it escape. :class:`KeyPairingError` is the
one exception that is *not* a ``HarnessError``: combining keys from different
schemes is a programming error and must fail fast.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class HarnessError(Exception):
    """Base class for failures that are reported, never fatal."""

    kind = "HarnessError"

    def __init__(self, reason: str, scheme: Optional[str] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.scheme = scheme

    def details(self) -> Dict[str, Any]:
        return {}


class UnknownScheme(HarnessError):
    kind = "UnknownScheme"

    def __init__(self, name: str) -> None:
        super().__init__(f"no scheme registered under {name!r}", scheme=name)
        self.name = name


class UnsupportedCapability(HarnessError):
    kind = "UnsupportedCapability"

    def __init__(self, scheme: str, capability: str) -> None:
        super().__init__(f"{scheme} does not support {capability}", scheme=scheme)
        self.capability = capability

    def details(self) -> Dict[str, Any]:
        return {"capability": self.capability}


class _SizeError(HarnessError):
    """Shared shape for expected/actual length failures."""

    what = "value"

    def __init__(self, scheme: str, expected: int, actual: int) -> None:
        super().__init__(
            f"{self.what} length mismatch: expected {expected}, got {actual}",
            scheme=scheme,
        )
        self.expected = expected
        self.actual = actual

    def details(self) -> Dict[str, Any]:
        return {"expected": self.expected, "actual": self.actual}


class InvalidSeedLength(_SizeError):
    kind = "InvalidSeedLength"
    what = "seed"


class CiphertextSizeMismatch(_SizeError):
    kind = "CiphertextSizeMismatch"
    what = "ciphertext"


class SharedSecretSizeMismatch(_SizeError):
    kind = "SharedSecretSizeMismatch"
    what = "shared secret"


class SignatureSizeMismatch(_SizeError):
    kind = "SignatureSizeMismatch"
    what = "signature"


class KeySizeMismatch(_SizeError):
    kind = "KeySizeMismatch"

    def __init__(self, scheme: str, field: str, expected: int, actual: int) -> None:
        self.field = field
        self.what = f"marshaled {field}"
        super().__init__(scheme, expected, actual)

    def details(self) -> Dict[str, Any]:
        out = super().details()
        out["field"] = self.field
        return out


class EntropyUnavailable(HarnessError):
    kind = "EntropyUnavailable"


class SharedSecretMismatch(HarnessError):
    kind = "SharedSecretMismatch"

    def __init__(self, scheme: str) -> None:
        # Only the fact of the mismatch is reported; secret bytes stay local.
        super().__init__("sender and recipient shared secrets differ", scheme=scheme)


class MarshalFailure(HarnessError):
    kind = "MarshalFailure"

    def __init__(self, scheme: str, field: str, reason: str) -> None:
        super().__init__(f"could not marshal {field}: {reason}", scheme=scheme)
        self.field = field

    def details(self) -> Dict[str, Any]:
        return {"field": self.field}


class FingerprintMismatch(HarnessError):
    kind = "FingerprintMismatch"

    def __init__(self, scheme: str, field: str, expected: str, actual: str) -> None:
        super().__init__(
            f"{field} fingerprint mismatch: expected {expected}, got {actual}",
            scheme=scheme,
        )
        self.field = field
        self.expected = expected
        self.actual = actual

    def details(self) -> Dict[str, Any]:
        return {"field": self.field, "expected": self.expected, "actual": self.actual}


class SignatureRejected(HarnessError):
    kind = "SignatureRejected"

    def __init__(self, scheme: str) -> None:
        super().__init__("signature did not verify under the matching public key", scheme=scheme)


class TamperAccepted(HarnessError):
    kind = "TamperAccepted"

    def __init__(self, scheme: str) -> None:
        super().__init__("signature verified for a modified message", scheme=scheme)


class ProviderFailure(HarnessError):
    """An external primitive call raised something the harness does not model."""

    kind = "ProviderFailure"

    def __init__(self, scheme: str, stage: str, cause: BaseException) -> None:
        super().__init__(f"{stage} failed: {type(cause).__name__}: {cause}", scheme=scheme)
        self.stage = stage
        self.cause = cause

    def details(self) -> Dict[str, Any]:
        return {"stage": self.stage, "cause": type(self.cause).__name__}


class KeyPairingError(TypeError):
    """Keys, descriptors or providers from different schemes were combined."""


@contextmanager
def provider_errors(scheme: str, stage: str) -> Iterator[None]:
    """Convert anything a provider raises into a :class:`ProviderFailure`.

    Harness errors raised by the provider itself (e.g. ``EntropyUnavailable``)
    pass through untouched.
    """
    try:
        yield
    except HarnessError:
        raise
    except Exception as exc:
        raise ProviderFailure(scheme, stage, exc) from exc
