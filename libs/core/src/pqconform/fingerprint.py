"""Compact fingerprints of marshaled keys for known-answer comparison."""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Union

FINGERPRINT_BYTES = 16

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class Fingerprint:
    """SHAKE-256 digest squeezed to 16 bytes, kept as lowercase hex."""

    hex: str

    def __post_init__(self) -> None:
        if len(self.hex) != 2 * FINGERPRINT_BYTES:
            raise ValueError(f"fingerprint must be {2 * FINGERPRINT_BYTES} hex characters")
        if len(bytes.fromhex(self.hex)) != FINGERPRINT_BYTES:
            raise ValueError(f"fingerprint must encode exactly {FINGERPRINT_BYTES} bytes")
        object.__setattr__(self, "hex", self.hex.lower())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Fingerprint):
            return self.hex == other.hex
        if isinstance(other, str):
            return self.hex == other.strip().lower()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.hex)

    def __str__(self) -> str:
        return self.hex


class DigestFingerprinter:
    def fingerprint(self, data: BytesLike) -> Fingerprint:
        return Fingerprint(hashlib.shake_256(bytes(data)).hexdigest(FINGERPRINT_BYTES))


def fingerprint(data: BytesLike) -> Fingerprint:
    return DigestFingerprinter().fingerprint(data)
