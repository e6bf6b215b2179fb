"""Structured results returned by the runners and the verifier.

Outcomes are terminal values: produced once per run, never mutated, and safe
to log or export. None of them carries secret material.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .errors import FingerprintMismatch, HarnessError

PUBLIC_KEY_FIELD = "public_key"
SECRET_KEY_FIELD = "secret_key"


@dataclass(frozen=True)
class Failure:
    error: str
    reason: str
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_error(cls, exc: HarnessError) -> "Failure":
        return cls(error=exc.kind, reason=exc.reason, details=exc.details())

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "reason": self.reason, "details": dict(self.details)}


@dataclass(frozen=True)
class RoundTripOutcome:
    scheme: str
    passed: bool
    secrets_match: Optional[bool] = None
    ciphertext_length: Optional[int] = None
    failure: Optional[Failure] = None

    @property
    def status(self) -> str:
        return "pass" if self.passed else "failed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "status": self.status,
            "secrets_match": self.secrets_match,
            "ciphertext_length": self.ciphertext_length,
            "failure": self.failure.to_dict() if self.failure else None,
        }


@dataclass(frozen=True)
class SignatureOutcome:
    scheme: str
    passed: bool
    signature_length: Optional[int] = None
    tamper_rejected: Optional[bool] = None
    failure: Optional[Failure] = None

    @property
    def status(self) -> str:
        return "pass" if self.passed else "failed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "status": self.status,
            "signature_length": self.signature_length,
            "tamper_rejected": self.tamper_rejected,
            "failure": self.failure.to_dict() if self.failure else None,
        }


# Conformance (known-answer) outcomes

@dataclass(frozen=True)
class Pass:
    scheme: str
    public_fingerprint: str
    secret_fingerprint: str

    passed = True
    status = "pass"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "status": self.status,
            "public_fingerprint": self.public_fingerprint,
            "secret_fingerprint": self.secret_fingerprint,
        }


@dataclass(frozen=True)
class FieldMismatch:
    field: str
    expected: str
    actual: str

    @classmethod
    def from_error(cls, exc: FingerprintMismatch) -> "FieldMismatch":
        return cls(field=exc.field, expected=exc.expected, actual=exc.actual)


@dataclass(frozen=True)
class Mismatch:
    """One or more fingerprints differed; every differing field is listed.

    Both computed fingerprints are kept, including the one that matched or
    was not checked.
    """

    scheme: str
    mismatches: Tuple[FieldMismatch, ...]
    public_fingerprint: str
    secret_fingerprint: str

    passed = False
    status = "mismatch"
    error = FingerprintMismatch.kind

    def __post_init__(self) -> None:
        if not self.mismatches:
            raise ValueError("Mismatch needs at least one differing field")

    @property
    def field(self) -> str:
        return self.mismatches[0].field

    @property
    def expected(self) -> str:
        return self.mismatches[0].expected

    @property
    def actual(self) -> str:
        return self.mismatches[0].actual

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(m.field for m in self.mismatches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "status": self.status,
            "error": self.error,
            "public_fingerprint": self.public_fingerprint,
            "secret_fingerprint": self.secret_fingerprint,
            "mismatches": [
                {"field": m.field, "expected": m.expected, "actual": m.actual}
                for m in self.mismatches
            ],
        }


@dataclass(frozen=True)
class GenerationFailed:
    scheme: str
    error: str
    reason: str
    details: Dict[str, Any] = field(default_factory=dict)

    passed = False
    status = "failed"

    @classmethod
    def from_error(cls, scheme: str, exc: HarnessError) -> "GenerationFailed":
        return cls(scheme=scheme, error=exc.kind, reason=exc.reason, details=exc.details())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "status": self.status,
            "error": self.error,
            "reason": self.reason,
            "details": dict(self.details),
        }


ConformanceOutcome = Union[Pass, Mismatch, GenerationFailed]
Outcome = Union[Pass, Mismatch, GenerationFailed, RoundTripOutcome, SignatureOutcome]
