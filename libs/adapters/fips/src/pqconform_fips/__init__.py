"""Seeded ML-KEM (FIPS 203) and ML-DSA (FIPS 204) providers.

Backed by the pure-Python kyber-py and dilithium-py packages, which expose
deterministic key derivation from a seed, so these schemes can go through
known-answer conformance checks as well as round trips.
"""

# Trigger registration side-effects
from . import kem_adapters as _kem_adapters  # noqa: F401
from . import sig_adapters as _sig_adapters  # noqa: F401

__all__: list[str] = []
