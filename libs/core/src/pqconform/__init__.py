
from .errors import (
    CiphertextSizeMismatch,
    EntropyUnavailable,
    FingerprintMismatch,
    HarnessError,
    InvalidSeedLength,
    KeyPairingError,
    KeySizeMismatch,
    MarshalFailure,
    ProviderFailure,
    SharedSecretMismatch,
    SharedSecretSizeMismatch,
    SignatureRejected,
    SignatureSizeMismatch,
    TamperAccepted,
    UnknownScheme,
    UnsupportedCapability,
)
from .fingerprint import DigestFingerprinter, Fingerprint, fingerprint
from .interfaces import KEMProvider, SignatureProvider
from .kem import KemRoundTripRunner
from .keys import DeterministicDeriver, RandomKeyGenerator
from .outcomes import (
    ConformanceOutcome,
    Failure,
    FieldMismatch,
    GenerationFailed,
    Mismatch,
    Pass,
    RoundTripOutcome,
    SignatureOutcome,
)
from .registry import SchemeRegistry, catalog, default_registry, load_adapters
from .signature import SignatureRoundTripRunner
from .suite import ConformanceSuite, SuiteCase, SuiteResult, load_cases
from .types import (
    Ciphertext,
    EncapsulationResult,
    KeyPair,
    PrivateKey,
    PublicKey,
    SchemeDescriptor,
    SchemeSizes,
    SharedSecret,
    Signature,
)
from .verifier import ConformanceVerifier, canonical_seed

__all__ = [
    "KEMProvider",
    "SignatureProvider",
    "SchemeRegistry",
    "catalog",
    "default_registry",
    "load_adapters",
    "SchemeDescriptor",
    "SchemeSizes",
    "KeyPair",
    "PublicKey",
    "PrivateKey",
    "Ciphertext",
    "SharedSecret",
    "Signature",
    "EncapsulationResult",
    "DeterministicDeriver",
    "RandomKeyGenerator",
    "KemRoundTripRunner",
    "SignatureRoundTripRunner",
    "DigestFingerprinter",
    "Fingerprint",
    "fingerprint",
    "ConformanceVerifier",
    "canonical_seed",
    "ConformanceSuite",
    "SuiteCase",
    "SuiteResult",
    "load_cases",
    "ConformanceOutcome",
    "Pass",
    "Mismatch",
    "FieldMismatch",
    "GenerationFailed",
    "Failure",
    "RoundTripOutcome",
    "SignatureOutcome",
    "HarnessError",
    "UnknownScheme",
    "UnsupportedCapability",
    "InvalidSeedLength",
    "EntropyUnavailable",
    "CiphertextSizeMismatch",
    "SharedSecretMismatch",
    "SharedSecretSizeMismatch",
    "SignatureSizeMismatch",
    "KeySizeMismatch",
    "MarshalFailure",
    "FingerprintMismatch",
    "SignatureRejected",
    "TamperAccepted",
    "ProviderFailure",
    "KeyPairingError",
]
